"""Questwright data models.

This module exports the content, configuration, state and report records
shared by the engine and the analyzers.
"""

from .config import DiceMode, GMBehavior, PlayerBehavior, SimulationConfig
from .content import (
    ADVENTURE_END_FLAG,
    ADVENTURE_START_FLAG,
    Challenge,
    Exit,
    NPCReference,
    Scene,
    Trigger,
    parse_scenes,
)
from .report import (
    QUESTION_TYPES,
    ArchetypeFeedback,
    ArchetypeReport,
    CoherenceAnalysis,
    DiceStats,
    GMValidatedReport,
    GMValidatedSummary,
    GMValidation,
    InformationLookup,
    Issue,
    PlayerQuestion,
    QuestionContext,
    Recommendation,
    ReportMeta,
    ReportSummary,
    SceneAnalysis,
    SimulationEvent,
    SimulationReport,
    Termination,
    TerminationReason,
    ValidatedCritique,
)
from .state import (
    DEFAULT_SKILL_BONUSES,
    NPCRegistry,
    NPCTracker,
    PlayerState,
    PlayerStateTracker,
    classify_npc_transition,
)

__all__ = [
    # Configuration
    "DiceMode",
    "GMBehavior",
    "PlayerBehavior",
    "SimulationConfig",
    # Content
    "ADVENTURE_END_FLAG",
    "ADVENTURE_START_FLAG",
    "Challenge",
    "Exit",
    "NPCReference",
    "Scene",
    "Trigger",
    "parse_scenes",
    # State
    "DEFAULT_SKILL_BONUSES",
    "NPCRegistry",
    "NPCTracker",
    "PlayerState",
    "PlayerStateTracker",
    "classify_npc_transition",
    # Report records
    "QUESTION_TYPES",
    "ArchetypeFeedback",
    "ArchetypeReport",
    "CoherenceAnalysis",
    "DiceStats",
    "GMValidatedReport",
    "GMValidatedSummary",
    "GMValidation",
    "InformationLookup",
    "Issue",
    "PlayerQuestion",
    "QuestionContext",
    "Recommendation",
    "ReportMeta",
    "ReportSummary",
    "SceneAnalysis",
    "SimulationEvent",
    "SimulationReport",
    "Termination",
    "TerminationReason",
    "ValidatedCritique",
]
