"""Run-scoped mutable state for Questwright.

One PlayerStateTracker and one NPCRegistry are owned by each
SimulationRunner. Nothing here is global; all mutation goes through the
tracker methods.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from questwright.models.content import NPCReference, NPCState

# Level 1 reference build (a tech specialist): attribute + skill rank.
# Aliases are listed separately because authored content uses both spellings.
DEFAULT_SKILL_BONUSES: dict[str, int] = {
    "Tech": 6,
    "Netrunning": 5,
    "Perception": 4,
    "Investigation": 3,
    "Investigate": 3,
    "Empathy": 3,
    "Insight": 3,
    "Stealth": 2,
    "Persuasion": 2,
    "Streetwise": 3,
    "Medicine": 2,
    "Combat": 2,
    "Evasion": 3,
}

ContinuityVerdict = Literal["violation", "review"]


def classify_npc_transition(previous: str, current: str) -> ContinuityVerdict | None:
    """Classify an NPC lifecycle transition.

    Returns:
        "violation" for defeated -> active (resurrection without explanation),
        "review" for absent -> active (may be fine, flag it), None otherwise
    """
    if previous == "defeated" and current == "active":
        return "violation"
    if previous == "absent" and current == "active":
        return "review"
    return None


class PlayerState(BaseModel):
    """Player state for the run.

    Attributes:
        wounds: Wounds taken so far (never negative)
        max_wounds: Wound count at which the player dies
        inventory: Reserved, not used by current rules
        flags: Story flags set during play
        skill_bonuses: Skill name -> bonus added to d20 rolls
    """

    wounds: int = Field(default=0, ge=0)
    max_wounds: int = Field(default=6, ge=1)
    inventory: list[str] = Field(default_factory=list)
    flags: set[str] = Field(default_factory=set)
    skill_bonuses: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_SKILL_BONUSES))


class NPCTracker(BaseModel):
    """Run-wide record for one NPC.

    ``disposition`` is part of the model but no current rule changes it.
    """

    id: str
    name: str
    state: NPCState = "active"
    disposition: int = Field(default=0, ge=-100, le=100)
    last_seen_scene: str = ""
    interaction_count: int = Field(default=0, ge=0)


class PlayerStateTracker:
    """Owns the PlayerState and enforces its invariants."""

    def __init__(self, max_wounds: int, skill_bonuses: dict[str, int] | None = None):
        bonuses = DEFAULT_SKILL_BONUSES if skill_bonuses is None else skill_bonuses
        self._state = PlayerState(max_wounds=max_wounds, skill_bonuses=dict(bonuses))

    @property
    def wounds(self) -> int:
        return self._state.wounds

    @property
    def max_wounds(self) -> int:
        return self._state.max_wounds

    @property
    def flags(self) -> set[str]:
        return set(self._state.flags)

    @property
    def is_near_death(self) -> bool:
        """Exactly one wound away from death."""
        return self._state.wounds == self._state.max_wounds - 1

    @property
    def is_dead(self) -> bool:
        return self._state.wounds >= self._state.max_wounds

    def deal_wound(self, amount: int = 1) -> int:
        """Add wounds.

        Args:
            amount: Wounds to add, must be positive

        Returns:
            The new wound total

        Raises:
            ValueError: If amount is not positive
        """
        if amount <= 0:
            raise ValueError(f"Wound amount must be positive, got {amount}")
        self._state.wounds += amount
        return self._state.wounds

    def heal_wound(self, amount: int = 1) -> int:
        """Remove wounds, never going below zero.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Heal amount must be non-negative, got {amount}")
        self._state.wounds = max(0, self._state.wounds - amount)
        return self._state.wounds

    def skill_bonus(self, skill: str) -> int:
        """Bonus for a skill; case-sensitive, unknown skills give 0."""
        return self._state.skill_bonuses.get(skill, 0)

    def set_flag(self, flag: str) -> None:
        self._state.flags.add(flag)

    def has_flag(self, flag: str) -> bool:
        return flag in self._state.flags

    def snapshot(self) -> PlayerState:
        """Deep copy of the current state, safe to hand to a report."""
        return self._state.model_copy(deep=True)


class NPCRegistry:
    """One NPCTracker per NPC id across the whole run."""

    def __init__(self) -> None:
        self._trackers: dict[str, NPCTracker] = {}

    def __contains__(self, npc_id: object) -> bool:
        return npc_id in self._trackers

    def __len__(self) -> int:
        return len(self._trackers)

    def get(self, npc_id: str) -> NPCTracker | None:
        return self._trackers.get(npc_id)

    def track(self, npc: NPCReference, scene_id: str) -> NPCState | None:
        """Register an NPC sighting in a scene.

        Args:
            npc: The NPC as referenced by the scene
            scene_id: Scene where the NPC was seen

        Returns:
            The NPC's previous lifecycle state, or None on first sighting
        """
        existing = self._trackers.get(npc.id)
        if existing is None:
            self._trackers[npc.id] = NPCTracker(
                id=npc.id,
                name=npc.name,
                state=npc.state,
                last_seen_scene=scene_id,
            )
            return None

        previous = existing.state
        existing.last_seen_scene = scene_id
        existing.state = npc.state
        return previous

    def interact(self, npc_id: str) -> bool:
        """Record an interaction; returns False for untracked NPCs."""
        tracker = self._trackers.get(npc_id)
        if tracker is None:
            return False
        tracker.interaction_count += 1
        return True

    def snapshot(self) -> list[NPCTracker]:
        return [tracker.model_copy() for tracker in self._trackers.values()]
