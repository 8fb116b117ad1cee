"""Player archetype catalog.

An archetype is a synthetic player personality. Its trait scores and
question-type weights drive which questions the simulated player asks and
which off-script actions it attempts. The catalog is fixed and immutable
for the lifetime of the process.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from questwright.models.report import QUESTION_TYPES

CheckApproach = Literal["avoid", "calculate", "embrace", "creative"]
CombatApproach = Literal["avoid", "tactical", "aggressive", "negotiate"]
NPCApproach = Literal["friendly", "suspicious", "transactional", "deep"]

Trait = Annotated[int, Field(ge=0, le=100)]


class PlayerArchetype(BaseModel):
    """A player personality profile.

    Attributes:
        id: Catalog key, e.g. "chaos_agent"
        name: Display name
        description: What this player wants out of a session
        motivation: One-line motivation
        risk_tolerance: Willingness to take risks (0-100)
        curiosity: How much they explore (0-100)
        empathy: How much they care about NPCs (0-100)
        suspicion: How much they distrust (0-100)
        creativity: How often they try unexpected things (0-100)
        patience: Tolerance for dialogue and exploration (0-100)
        question_weights: (question type, likelihood of asking 0-100) pairs;
            a dict is accepted and frozen into pairs
        observation_focus: What they notice first
        check_approach: How they approach skill checks
        combat_approach: How they approach fights
        npc_approach: How they approach NPCs
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    motivation: str
    risk_tolerance: Trait
    curiosity: Trait
    empathy: Trait
    suspicion: Trait
    creativity: Trait
    patience: Trait
    question_weights: tuple[tuple[str, int], ...]
    observation_focus: tuple[str, ...] = ()
    check_approach: CheckApproach
    combat_approach: CombatApproach
    npc_approach: NPCApproach

    @field_validator("question_weights", mode="before")
    @classmethod
    def freeze_weights(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return tuple(v.items())
        return v

    @field_validator("question_weights")
    @classmethod
    def validate_weights(
        cls, v: tuple[tuple[str, int], ...]
    ) -> tuple[tuple[str, int], ...]:
        """Every question type needs a weight in 0-100."""
        missing = set(QUESTION_TYPES) - {key for key, _ in v}
        if missing:
            raise ValueError(f"Missing question weights: {sorted(missing)}")
        for key, weight in v:
            if not 0 <= weight <= 100:
                raise ValueError(f"Weight for {key} must be 0-100, got {weight}")
        return v

    def weight(self, question_type: str) -> int:
        for key, weight in self.question_weights:
            if key == question_type:
                return weight
        return 0


def _weights(
    npc_info: int,
    location_detail: int,
    item_info: int,
    skill_check: int,
    environment: int,
    backstory: int,
    next_steps: int,
    npc_motivation: int,
) -> dict[str, int]:
    return {
        "npc_info": npc_info,
        "location_detail": location_detail,
        "item_info": item_info,
        "skill_check": skill_check,
        "environment": environment,
        "backstory": backstory,
        "next_steps": next_steps,
        "npc_motivation": npc_motivation,
    }


PLAYER_ARCHETYPES: dict[str, PlayerArchetype] = {
    archetype.id: archetype
    for archetype in (
        PlayerArchetype(
            id="detective",
            name="The Detective",
            description=(
                "Wants to solve the mystery. Examines everything, asks probing "
                "questions, connects clues."
            ),
            motivation="Uncover the truth",
            risk_tolerance=40,
            curiosity=95,
            empathy=50,
            suspicion=80,
            creativity=60,
            patience=70,
            question_weights=_weights(90, 70, 85, 40, 80, 95, 30, 100),
            observation_focus=("clues", "inconsistencies", "hidden_details", "npc_behavior"),
            check_approach="calculate",
            combat_approach="avoid",
            npc_approach="suspicious",
        ),
        PlayerArchetype(
            id="chaos_agent",
            name="The Chaos Agent",
            description=(
                "Wants to see what happens. Makes unexpected choices, tests "
                'boundaries, does the "wrong" thing.'
            ),
            motivation="Test the limits",
            risk_tolerance=95,
            curiosity=80,
            empathy=20,
            suspicion=60,
            creativity=100,
            patience=30,
            question_weights=_weights(40, 50, 60, 70, 40, 30, 20, 50),
            observation_focus=("exploits", "boundaries", "unexpected_options", "consequences"),
            check_approach="creative",
            combat_approach="aggressive",
            npc_approach="transactional",
        ),
        PlayerArchetype(
            id="empath",
            name="The Empath",
            description=(
                "Wants to connect emotionally. Focuses on relationships, tries to "
                "help everyone, avoids violence."
            ),
            motivation="Help and connect",
            risk_tolerance=30,
            curiosity=60,
            empathy=100,
            suspicion=20,
            creativity=50,
            patience=90,
            question_weights=_weights(80, 40, 30, 30, 50, 70, 40, 100),
            observation_focus=("emotions", "relationships", "suffering", "redemption"),
            check_approach="avoid",
            combat_approach="negotiate",
            npc_approach="deep",
        ),
        PlayerArchetype(
            id="tactician",
            name="The Tactician",
            description=(
                "Wants to optimize outcomes. Plans ahead, assesses risks, looks "
                "for advantages."
            ),
            motivation="Win efficiently",
            risk_tolerance=50,
            curiosity=40,
            empathy=30,
            suspicion=70,
            creativity=40,
            patience=60,
            question_weights=_weights(60, 50, 80, 90, 70, 30, 80, 50),
            observation_focus=("resources", "threats", "advantages", "escape_routes"),
            check_approach="calculate",
            combat_approach="tactical",
            npc_approach="transactional",
        ),
        PlayerArchetype(
            id="explorer",
            name="The Explorer",
            description=(
                "Wants to see everything. Goes off the beaten path, checks every "
                "door, reads every sign."
            ),
            motivation="Discover all content",
            risk_tolerance=60,
            curiosity=100,
            empathy=50,
            suspicion=40,
            creativity=70,
            patience=80,
            question_weights=_weights(70, 100, 90, 50, 100, 60, 40, 50),
            observation_focus=("exits", "hidden_areas", "interactables", "lore"),
            check_approach="embrace",
            combat_approach="avoid",
            npc_approach="friendly",
        ),
        PlayerArchetype(
            id="speedrunner",
            name="The Speedrunner",
            description=(
                "Wants to finish efficiently. Skips dialogue, takes shortcuts, "
                "ignores side content."
            ),
            motivation="Complete quickly",
            risk_tolerance=70,
            curiosity=20,
            empathy=10,
            suspicion=30,
            creativity=30,
            patience=10,
            question_weights=_weights(20, 10, 30, 40, 10, 5, 100, 10),
            observation_focus=("critical_path", "shortcuts", "required_items"),
            check_approach="embrace",
            combat_approach="aggressive",
            npc_approach="transactional",
        ),
        PlayerArchetype(
            id="roleplayer",
            name="The Roleplayer",
            description=(
                "Wants to become the character. Deep NPC conversations, emotional "
                "investment, stays in character."
            ),
            motivation="Immersive experience",
            risk_tolerance=40,
            curiosity=70,
            empathy=80,
            suspicion=40,
            creativity=80,
            patience=100,
            question_weights=_weights(90, 70, 50, 40, 80, 100, 30, 95),
            observation_focus=("character_moments", "dialogue", "atmosphere", "immersion"),
            check_approach="creative",
            combat_approach="negotiate",
            npc_approach="deep",
        ),
        PlayerArchetype(
            id="skeptic",
            name="The Skeptic",
            description=(
                "Questions everything. Doubts NPC motives, looks for traps, "
                "assumes deception."
            ),
            motivation="Avoid being fooled",
            risk_tolerance=20,
            curiosity=60,
            empathy=30,
            suspicion=100,
            creativity=50,
            patience=50,
            question_weights=_weights(80, 60, 70, 50, 70, 60, 40, 100),
            observation_focus=("traps", "lies", "hidden_agendas", "escape_routes"),
            check_approach="calculate",
            combat_approach="tactical",
            npc_approach="suspicious",
        ),
    )
}


def get_archetype(archetype_id: str) -> PlayerArchetype:
    """Look up an archetype by id.

    Raises:
        ValueError: If the id is not in the catalog
    """
    try:
        return PLAYER_ARCHETYPES[archetype_id]
    except KeyError:
        valid = ", ".join(sorted(PLAYER_ARCHETYPES))
        raise ValueError(f"Unknown archetype: {archetype_id!r}. Valid: {valid}") from None


def list_archetype_ids() -> list[str]:
    """Archetype ids in catalog order."""
    return list(PLAYER_ARCHETYPES)
