"""Synthetic player archetypes and their question generators."""

from .catalog import PLAYER_ARCHETYPES, PlayerArchetype, get_archetype, list_archetype_ids
from .generator import (
    CREATIVE_ACTIONS,
    ArchetypeQuestionGenerator,
    generate_fallback_questions,
)

__all__ = [
    "PLAYER_ARCHETYPES",
    "PlayerArchetype",
    "get_archetype",
    "list_archetype_ids",
    "CREATIVE_ACTIONS",
    "ArchetypeQuestionGenerator",
    "generate_fallback_questions",
]
