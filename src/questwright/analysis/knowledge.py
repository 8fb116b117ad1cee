"""What the GM knows that the players don't.

AdventureKnowledge is built once per run from the content source's guide
payload and is read-only afterwards. Guides are hand-authored, so the
extractor accepts a few shapes and ignores anything it does not recognize:

- ``overview.themes`` / ``overview.tone``
- ``content.npc_manifest.{allies,enemies,neutrals}[]`` entries with a ``secret``
- ``mysteries[]`` and ``lore.mysteries[]``
- ``secrets[]``
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

NPC_MANIFEST_CATEGORIES = ("allies", "enemies", "neutrals")
DEFAULT_REVEAL_CONDITION = "Player discovery"


class KnowledgeModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Secret(KnowledgeModel):
    """A plot secret and the scene where it comes out."""

    id: str
    description: str = ""
    reveal_scene: str = Field(default="", validation_alias=AliasChoices("reveal_scene", "revealScene"))
    related_npcs: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("related_npcs", "relatedNPCs", "relatedNpcs")
    )
    related_questions: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("related_questions", "relatedQuestions")
    )


class Mystery(KnowledgeModel):
    """Something players are meant to wonder about until ``reveal_scene``."""

    question: str
    answer: str = ""
    reveal_scene: str = Field(default="", validation_alias=AliasChoices("reveal_scene", "revealScene"))
    is_red_herring: bool = Field(
        default=False, validation_alias=AliasChoices("is_red_herring", "isRedHerring", "red_herring")
    )


class NPCSecret(KnowledgeModel):
    public_info: str = ""
    secret: str
    reveal_condition: str = DEFAULT_REVEAL_CONDITION


class AdventureKnowledge(KnowledgeModel):
    secrets: tuple[Secret, ...] = ()
    mysteries: tuple[Mystery, ...] = ()
    npc_secrets: dict[str, NPCSecret] = Field(default_factory=dict)
    themes: tuple[str, ...] = ()
    tone: str = ""


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _parse_all(model: type[KnowledgeModel], entries: list[Any], label: str) -> list[Any]:
    parsed = []
    for entry in entries:
        try:
            parsed.append(model.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {label}: {e.error_count()} error(s)")
    return parsed


def extract_knowledge(guide: dict[str, Any] | None) -> AdventureKnowledge:
    """Build AdventureKnowledge from a guide payload.

    Args:
        guide: Guide dict from the content source, or None if there is none

    Returns:
        The extracted knowledge; empty when the guide is missing
    """
    if not guide:
        return AdventureKnowledge()

    overview = _as_dict(guide.get("overview"))
    themes = tuple(str(t) for t in _as_list(overview.get("themes")))
    tone = str(overview.get("tone") or "")

    npc_secrets: dict[str, NPCSecret] = {}
    manifest = _as_dict(_as_dict(guide.get("content")).get("npc_manifest"))
    for category in NPC_MANIFEST_CATEGORIES:
        for npc in _as_list(manifest.get(category)):
            if not isinstance(npc, dict) or not npc.get("secret") or not npc.get("id"):
                continue
            npc_secrets[str(npc["id"])] = NPCSecret(
                public_info=str(npc.get("description") or ""),
                secret=str(npc["secret"]),
                reveal_condition=str(
                    npc.get("revealCondition") or npc.get("reveal_condition") or DEFAULT_REVEAL_CONDITION
                ),
            )

    raw_mysteries = _as_list(guide.get("mysteries")) + _as_list(
        _as_dict(guide.get("lore")).get("mysteries")
    )
    mysteries = _parse_all(Mystery, raw_mysteries, "mystery")
    secrets = _parse_all(Secret, _as_list(guide.get("secrets")), "secret")

    knowledge = AdventureKnowledge(
        secrets=tuple(secrets),
        mysteries=tuple(mysteries),
        npc_secrets=npc_secrets,
        themes=themes,
        tone=tone,
    )
    logger.debug(
        f"Extracted knowledge: {len(mysteries)} mysteries, {len(secrets)} secrets, "
        f"{len(npc_secrets)} NPC secrets"
    )
    return knowledge
