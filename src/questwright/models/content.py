"""Adventure content models for Questwright.

Scenes arrive from the content source in a loose, hand-authored JSON shape:
the same concept may be spelled ``dc`` or ``difficulty``, ``nextScene`` or
``next_scene``, an NPC may be marked ``"state": "hostile"``. All of that is
canonicalized here, once, at ingestion. The simulation only ever sees the
normalized models below.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)

NPCState = Literal["active", "passive", "hidden", "defeated", "absent"]
ChallengeType = Literal["active", "passive", "hidden"]

NPC_STATES: tuple[str, ...] = ("active", "passive", "hidden", "defeated", "absent")
CHALLENGE_TYPES: tuple[str, ...] = ("active", "passive", "hidden")

ADVENTURE_START_FLAG = "adventure_start"
ADVENTURE_END_FLAG = "adventure_end"
ENDING_SCENE_TYPE = "ending"


def _drop_nulls(data: Any) -> Any:
    """Remove keys explicitly set to null so field defaults apply."""
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if v is not None}
    return data


def _whole_number(value: Any) -> Any:
    """Round fractional numbers (and numeric strings) to the nearest int."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return value
    if isinstance(value, float):
        return round(value)
    return value


def _wound_count(value: Any) -> Any:
    """Whole, non-negative wound amounts; negative damage reads as none."""
    value = _whole_number(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return max(value, 0)
    return value


class ContentModel(BaseModel):
    """Base for all content models.

    Unknown keys are kept (``extra="allow"``) so the probe can still look at
    authored detail fields such as ``motivation`` or ``secret``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def extra_field(self, name: str) -> Any:
        """Return an authored field that is not part of the canonical model."""
        return (self.model_extra or {}).get(name)


class NPCReference(ContentModel):
    """An NPC as referenced by a scene.

    Attributes:
        id: Stable NPC identifier
        name: Display name (defaults to the id)
        role: Free-text role, e.g. "The Companion" or "Combatants"
        state: Lifecycle state within this scene
        hostile: Whether the NPC is hostile to the player
        required: Whether interacting with the NPC is on the critical path
    """

    id: str
    name: str = ""
    role: str = ""
    state: NPCState = "active"
    hostile: bool = False
    required: bool = False

    @model_validator(mode="before")
    @classmethod
    def canonicalize(cls, data: Any) -> Any:
        data = _drop_nulls(data)
        if not isinstance(data, dict):
            return data
        data = dict(data)
        state = str(data.get("state", "active")).lower()
        # "hostile" is authored as a state but is really a disposition flag
        if state == "hostile":
            data["hostile"] = True
            state = "active"
        if state not in NPC_STATES:
            state = "active"
        data["state"] = state
        if not data.get("name"):
            data["name"] = str(data.get("id", ""))
        return data


class Challenge(ContentModel):
    """A skill check the GM may call for.

    Attributes:
        id: Challenge identifier
        name: Short label
        skill: Skill name, matched case-sensitively against skill bonuses
        difficulty: Target number for the d20 roll (``dc`` is accepted too)
        type: active, passive or hidden
        description: GM-facing description
        required: Whether the efficient GM must call it
        failure_damage: Wounds dealt on a failed roll
        critical_failure_damage: Extra wounds dealt on a natural 1
    """

    id: str = ""
    name: str = ""
    skill: str = ""
    difficulty: int = Field(default=10, validation_alias=AliasChoices("dc", "difficulty", "DC"))
    type: ChallengeType = "active"
    description: str = ""
    required: bool = False
    failure_damage: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("failure_damage", "failureDamage")
    )
    critical_failure: bool = Field(
        default=False, validation_alias=AliasChoices("critical_failure", "criticalFailure")
    )
    critical_failure_damage: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("critical_failure_damage", "criticalFailureDamage"),
    )

    @model_validator(mode="before")
    @classmethod
    def canonicalize(cls, data: Any) -> Any:
        data = _drop_nulls(data)
        if not isinstance(data, dict):
            return data
        data = dict(data)
        check_type = str(data.get("type", "active")).lower()
        data["type"] = check_type if check_type in CHALLENGE_TYPES else "active"
        if not data.get("name"):
            data["name"] = str(data.get("skill") or data.get("id") or "")
        return data

    @field_validator("difficulty", mode="before")
    @classmethod
    def round_difficulty(cls, v: Any) -> Any:
        return _whole_number(v)

    @field_validator("failure_damage", "critical_failure_damage", mode="before")
    @classmethod
    def clamp_damage(cls, v: Any) -> Any:
        return _wound_count(v)


class Trigger(ContentModel):
    """A GM-fired narrative trigger.

    The behavior flags (required, dramatic, harmful, helpful) are what the GM
    policies key on.
    """

    id: str = ""
    label: str = ""
    text: str = ""
    irreversible: bool = False
    damage: int = Field(default=0, ge=0)
    required: bool = False
    dramatic: bool = False
    harmful: bool = False
    helpful: bool = False

    @model_validator(mode="before")
    @classmethod
    def canonicalize(cls, data: Any) -> Any:
        data = _drop_nulls(data)
        if isinstance(data, dict) and not data.get("label"):
            data = dict(data)
            data["label"] = str(data.get("id", ""))
        return data

    @field_validator("damage", mode="before")
    @classmethod
    def clamp_damage(cls, v: Any) -> Any:
        return _wound_count(v)


class Exit(ContentModel):
    """A way out of a scene."""

    target: str = Field(
        default="", validation_alias=AliasChoices("target", "to", "scene", "sceneId", "next")
    )
    label: str = ""
    condition: str | None = None

    @model_validator(mode="before")
    @classmethod
    def canonicalize(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"target": data}
        return _drop_nulls(data)


class Scene(ContentModel):
    """A single scene of an adventure.

    Attributes:
        id: Stable scene identifier
        title: Display title (defaults to the id)
        location: Location name
        narrative: Read-aloud narrative text
        npcs: NPCs present, in authored order
        challenges: Skill checks available
        triggers: GM triggers available
        exits: Explicit exits
        transitions: Scene transitions / branches
        next_scene: Loose pointer to the following scene
        environment: Sensory details (visual, audio, smell, ...)
        conversation_guide: GM conversation guide payload
        flags: Marker flags such as ``adventure_start``
        scene_type: Authored scene type, e.g. "combat" or "ending"
    """

    id: str
    title: str = ""
    location: str = ""
    narrative: str = Field(default="", validation_alias=AliasChoices("narrative", "text"))
    npcs: list[NPCReference] = Field(default_factory=list)
    challenges: list[Challenge] = Field(
        default_factory=list, validation_alias=AliasChoices("challenges", "checks", "skillChecks")
    )
    triggers: list[Trigger] = Field(default_factory=list)
    exits: list[Exit] = Field(default_factory=list)
    transitions: list[Exit] = Field(default_factory=list)
    next_scene: str | None = Field(
        default=None, validation_alias=AliasChoices("next_scene", "nextScene")
    )
    environment: dict[str, Any] | None = None
    conversation_guide: Any = Field(
        default=None, validation_alias=AliasChoices("conversation_guide", "conversationGuide")
    )
    flags: list[str] = Field(default_factory=list)
    scene_type: str = Field(default="", validation_alias=AliasChoices("scene_type", "type"))

    @model_validator(mode="before")
    @classmethod
    def canonicalize(cls, data: Any) -> Any:
        data = _drop_nulls(data)
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if not data.get("title"):
            data["title"] = str(data.get("id", ""))
        branches = data.pop("branches", None)
        if branches:
            if isinstance(branches, dict):
                branches = list(branches.values())
            data["transitions"] = list(data.get("transitions") or []) + list(branches)
        flags = data.get("flags")
        if isinstance(flags, dict):
            data["flags"] = [name for name, on in flags.items() if on]
        return data

    @field_validator("environment", mode="before")
    @classmethod
    def wrap_environment(cls, v: Any) -> Any:
        # a bare description string is common in hand-authored scenes
        if v is None or isinstance(v, dict):
            return v
        return {"description": v}

    def has_flag(self, flag: str) -> bool:
        """Check whether the scene carries a marker flag."""
        return flag in self.flags

    @property
    def is_ending(self) -> bool:
        return self.scene_type.lower() == ENDING_SCENE_TYPE

    def get_npc(self, npc_id: str) -> NPCReference | None:
        for npc in self.npcs:
            if npc.id == npc_id:
                return npc
        return None


def parse_scenes(raw_scenes: list[Any]) -> list[Scene]:
    """Normalize raw scene payloads into Scene models.

    Malformed entries are skipped with a warning rather than failing the
    whole adventure.

    Args:
        raw_scenes: Scene dicts as served by the content source

    Returns:
        The scenes that validated, in their original order
    """
    scenes: list[Scene] = []
    for index, raw in enumerate(raw_scenes):
        if isinstance(raw, Scene):
            scenes.append(raw)
            continue
        try:
            scenes.append(Scene.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping malformed scene at index {index}: {e.error_count()} error(s)")
    return scenes
