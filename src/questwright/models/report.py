"""Report and trace records for Questwright.

These are the records a run accumulates (events, issues, scene analyses,
information lookups, archetype feedback) and the terminal SimulationReport
that aggregates them. Everything here serializes with ``model_dump(mode="json")``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from questwright.models.config import SimulationConfig
from questwright.models.state import NPCTracker, PlayerState

Severity = Literal["info", "warning", "critical"]
Actor = Literal["gm", "player", "system"]
FeedbackSeverity = Literal["high", "medium", "low"]

QuestionType = Literal[
    "npc_info",
    "location_detail",
    "item_info",
    "skill_check",
    "environment",
    "backstory",
    "next_steps",
    "npc_motivation",
]

QUESTION_TYPES: tuple[str, ...] = (
    "npc_info",
    "location_detail",
    "item_info",
    "skill_check",
    "environment",
    "backstory",
    "next_steps",
    "npc_motivation",
)

FeedbackType = Literal[
    "missing_content",
    "unclear_direction",
    "unhandled_action",
    "shallow_npc",
    "pacing_issue",
    "emotional_gap",
    "logic_gap",
    "immersion_break",
]

GMValidationStatus = Literal[
    "valid_issue",
    "intentional_mystery",
    "delayed_reveal",
    "red_herring",
    "player_choice",
    "gm_discretion",
    "out_of_scope",
    "false_positive",
]


class TerminationReason(str, Enum):
    """Terminal states of the runner state machine."""

    COMPLETED = "completed"
    PLAYER_DEATH = "player_death"
    NO_VALID_EXITS = "no_valid_exits"
    SOFT_LOCK = "soft_lock"
    MAX_TURNS_REACHED = "max_turns_reached"
    INFINITE_LOOP_DETECTED = "infinite_loop_detected"


# =============================================================================
# Trace records
# =============================================================================


class SimulationEvent(BaseModel):
    """One entry of the raw event log."""

    timestamp: float
    actor: Actor
    action: str
    details: dict[str, Any] | None = None
    result: str | None = None
    severity: Severity = "info"


class Issue(BaseModel):
    """A recoverable problem found during the run."""

    severity: Severity
    type: str
    scene: str
    message: str


class QuestionContext(BaseModel):
    scene_id: str
    npc_id: str | None = None
    item_id: str | None = None


class PlayerQuestion(BaseModel):
    """A question the player asks that the GM has to look up."""

    type: QuestionType
    query: str
    context: QuestionContext


class InformationLookup(BaseModel):
    """Outcome of resolving one PlayerQuestion through the probe.

    Created once per question and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    question: PlayerQuestion
    search_path: list[str] = Field(default_factory=list)
    found: bool = False
    found_in: str | None = None
    time_to_find_ms: float = 0.0
    interactions: int = 0
    diagnostic_path: str | None = None


class SceneAnalysis(BaseModel):
    """Per-scene metrics, one record per scene actually started."""

    scene_id: str
    title: str
    completed: bool = False
    wounds_taken: int = 0
    checks_attempted: int = 0
    checks_passed: int = 0
    triggers_available: int = 0
    triggers_fired: int = 0
    npcs_present: int = 0
    npcs_interacted: int = 0
    has_exit_path: bool = False
    exits_taken: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)

    @property
    def pass_rate(self) -> float | None:
        if self.checks_attempted == 0:
            return None
        return self.checks_passed / self.checks_attempted


class DiceStats(BaseModel):
    """Accumulated roll statistics.

    ``success_rate`` counts raw rolls >= 10 as successes. The engine does not
    keep each roll's target value, so this is an approximation of the true
    pass rate, kept as-is because report consumers rely on it.
    """

    total_rolls: int = 0
    rolls: list[int] = Field(default_factory=list)
    average: float = 0.0
    critical_successes: int = 0
    critical_failures: int = 0
    success_rate: float = 0.0


# =============================================================================
# Analyzer output
# =============================================================================


class CoherenceAnalysis(BaseModel):
    breadcrumb_strength: Literal["strong", "medium", "weak", "none"]
    forward_references: list[str] = Field(default_factory=list)
    backward_references: list[str] = Field(default_factory=list)
    npc_continuity_issues: list[str] = Field(default_factory=list)
    information_gaps: list[str] = Field(default_factory=list)
    pace_score: int = 50


class Recommendation(BaseModel):
    priority: Literal["high", "medium", "low"]
    type: Literal[
        "dead_end", "difficulty", "coherence", "pacing", "npc", "balance", "ui", "information"
    ]
    scene: str | None = None
    title: str
    description: str
    suggestion: str


class GMValidation(BaseModel):
    """The GM's verdict on one archetype critique."""

    status: GMValidationStatus
    reasoning: str
    reveal_scene: str | None = None
    gm_notes: str | None = None


class ArchetypeFeedback(BaseModel):
    """A critique raised by the archetype player.

    ``gm_validation`` is never set at creation time; the GM validator
    attaches it in a later pass.
    """

    scene: str
    type: FeedbackType
    description: str
    suggestion: str
    severity: FeedbackSeverity
    gm_validation: GMValidation | None = None


class ArchetypeReport(BaseModel):
    archetype: str
    successful_paths: list[str] = Field(default_factory=list)
    satisfying_moments: list[str] = Field(default_factory=list)
    unanswered_questions: list[PlayerQuestion] = Field(default_factory=list)
    failed_actions: list[str] = Field(default_factory=list)
    confusion_points: list[str] = Field(default_factory=list)
    feedback: list[ArchetypeFeedback] = Field(default_factory=list)


class ValidatedCritique(BaseModel):
    feedback: ArchetypeFeedback
    validation: GMValidation


class GMValidatedSummary(BaseModel):
    valid_issue_count: int = 0
    intentional_design_count: int = 0
    gm_discretion_count: int = 0
    false_positive_count: int = 0


class GMValidatedReport(BaseModel):
    archetype: str
    total_critiques: int = 0
    valid_issues: list[ValidatedCritique] = Field(default_factory=list)
    intentional_design: list[ValidatedCritique] = Field(default_factory=list)
    gm_discretion: list[ValidatedCritique] = Field(default_factory=list)
    summary: GMValidatedSummary = Field(default_factory=GMValidatedSummary)


# =============================================================================
# Terminal report
# =============================================================================


class ReportMeta(BaseModel):
    adventure_id: str
    start_time: datetime
    end_time: datetime
    duration_ms: float
    config: SimulationConfig
    random_seed: int | None = None


class Termination(BaseModel):
    reason: TerminationReason
    details: str = ""
    at_scene: str = ""
    diagnostic_path: str | None = None


DifficultyRating = Literal["trivial", "easy", "moderate", "hard", "deadly"]


class ReportSummary(BaseModel):
    total_scenes: int
    scenes_completed: int
    total_wounds: int
    near_death_count: int
    deaths: int
    triggers_activated: int
    skill_checks_made: int
    skill_checks_passed: int
    npcs_interacted: int
    dead_ends_found: int
    soft_locks_found: int
    difficulty_rating: DifficultyRating
    coherence_score: int
    information_lookups_attempted: int
    information_lookups_succeeded: int
    information_lookups_failed: int


class SimulationReport(BaseModel):
    """The single output of a simulation run. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    meta: ReportMeta
    termination: Termination
    player_state: PlayerState
    npc_states: list[NPCTracker]
    scene_analyses: list[SceneAnalysis]
    dice_stats: DiceStats
    coherence: CoherenceAnalysis
    recommendations: list[Recommendation]
    information_lookups: list[InformationLookup]
    events: list[SimulationEvent]
    issues: list[Issue]
    summary: ReportSummary
    archetype: str | None = None
    archetype_report: ArchetypeReport | None = None
    gm_validated_report: GMValidatedReport | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return self.model_dump(mode="json")
