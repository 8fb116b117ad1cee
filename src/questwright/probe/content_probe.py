"""Scene-data backed interface probe.

ContentIndexProbe answers lookups from the adventure content itself, the way
a GM would by scanning the scene's sections: NPC list, location, environment
notes, narrative, triggers, transitions, conversation guide and exits. Each
question type has an ordered list of strategies; every strategy is bounded
by its own timeout and the first one that finds something wins.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import time
from collections.abc import Awaitable, Callable
from pathlib import Path

from questwright.models.content import NPCReference, Scene
from questwright.models.report import PlayerQuestion
from questwright.probe.base import InterfaceProbe, ProbeResult

logger = logging.getLogger(__name__)

DEFAULT_STRATEGY_TIMEOUT = 2.0

ENVIRONMENT_KEYS = ("Visual", "Audio", "Smell", "Atmosphere")
MOTIVATION_FIELDS = ("motivation", "goal", "wants", "personality", "drive", "role", "secret")

_NAME_PATTERNS = (
    re.compile(r"Who is ([^?]+)\??"),
    re.compile(r"What does ([^?]+) want"),
    re.compile(r"Why is ([^?]+) here"),
)

Strategy = Callable[[PlayerQuestion, Scene], Awaitable[str | None]]


def extract_npc_name(query: str) -> str:
    """Pull the NPC name out of a templated question, or return the query."""
    for pattern in _NAME_PATTERNS:
        match = pattern.search(query)
        if match:
            return match.group(1).strip()
    return query.strip()


def first_name(name: str) -> str:
    parts = name.split()
    return parts[0].strip("\"'") if parts else ""


class ContentIndexProbe(InterfaceProbe):
    """Probe that looks answers up in the scene data.

    Args:
        scenes: Scenes to index; more can be supplied later through prepare()
        strategy_timeout: Seconds each strategy may take before it is abandoned
        diagnostics_dir: Where diagnostic snapshots are written; None keeps
            them in memory only
    """

    def __init__(
        self,
        scenes: list[Scene] | None = None,
        strategy_timeout: float = DEFAULT_STRATEGY_TIMEOUT,
        diagnostics_dir: str | Path | None = None,
    ):
        self.strategy_timeout = strategy_timeout
        self.diagnostics_dir = Path(diagnostics_dir) if diagnostics_dir else None
        self.diagnostics: list[str] = []
        self._scenes: dict[str, Scene] = {}
        self._last_scene: Scene | None = None
        if scenes:
            self._index(scenes)

        self.strategies: dict[str, list[tuple[str, Strategy]]] = {
            "npc_info": [
                ("Checking current scene for NPC", self._scene_npc_list),
                ("Trying global search", self._global_npc_search),
            ],
            "location_detail": [
                ("Checking Location section", self._location_section),
                ("Checking for environment details", self._environment_section),
            ],
            "environment": [
                ("Checking Location section", self._location_section),
                ("Checking environment details", self._environment_keys),
                ("Checking Narrative for sensory details", self._narrative_section),
            ],
            "npc_motivation": [
                ("Looking for NPC motivation/goals", self._npc_detail),
                ("Checking NPC section", self._npc_listed),
            ],
            "next_steps": [
                ("Checking Triggers section", self._triggers_section),
                ("Checking Scene Transitions", self._transitions_section),
                ("Checking Conversation Guide", self._conversation_guide),
                ("Checking Exits", self._exits_section),
            ],
        }

    def _index(self, scenes: list[Scene]) -> None:
        for scene in scenes:
            self._scenes[scene.id] = scene

    async def prepare(self, scenes: list[Scene]) -> None:
        self._index(scenes)

    async def lookup(self, question: PlayerQuestion) -> ProbeResult:
        result = ProbeResult()
        scene = self._scenes.get(question.context.scene_id)
        if scene is None:
            result.search_path.append(f"Scene not indexed: {question.context.scene_id}")
            return result
        self._last_scene = scene

        strategies = self.strategies.get(question.type)
        if not strategies:
            result.search_path.append("Unknown question type")
            return result

        for label, strategy in strategies:
            result.search_path.append(label)
            result.interactions += 1
            try:
                found_in = await asyncio.wait_for(
                    strategy(question, scene), timeout=self.strategy_timeout
                )
            except asyncio.TimeoutError:
                result.search_path.append(f"{label}: timed out after {self.strategy_timeout}s")
                continue
            if found_in:
                result.found = True
                result.found_in = found_in
                break

        logger.debug(f"Probe {question.type} in {scene.id}: found_in={result.found_in}")
        return result

    async def capture_diagnostic(self, label: str) -> str | None:
        """Snapshot the scene of the last lookup.

        Written as JSON under diagnostics_dir when one is configured.
        """
        timestamp = int(time.time() * 1000)
        name = f"{label}-{timestamp}"
        self.diagnostics.append(name)
        if self.diagnostics_dir is None:
            return None

        self.diagnostics_dir.mkdir(parents=True, exist_ok=True)
        path = self.diagnostics_dir / f"{name}.json"
        snapshot = {
            "label": label,
            "timestamp": timestamp,
            "scene": self._last_scene.model_dump(mode="json") if self._last_scene else None,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(snapshot, f, indent=2)
        logger.debug(f"Diagnostic captured: {path}")
        return str(path)

    # -------------------------------------------------------------------------
    # NPC strategies
    # -------------------------------------------------------------------------

    def _match_npc(self, question: PlayerQuestion, npcs: list[NPCReference]) -> NPCReference | None:
        npc_id = question.context.npc_id
        if npc_id:
            for npc in npcs:
                if npc.id == npc_id:
                    return npc
        name = extract_npc_name(question.query).lower()
        for npc in npcs:
            if npc.name.lower() == name:
                return npc
        return None

    async def _scene_npc_list(self, question: PlayerQuestion, scene: Scene) -> str | None:
        if not scene.npcs:
            return None
        if self._match_npc(question, scene.npcs):
            return "Scene NPC list"
        partial = first_name(extract_npc_name(question.query)).lower()
        if partial and any(partial in npc.name.lower() for npc in scene.npcs):
            return "Scene NPC list (partial match)"
        # The GM can at least see who is present
        return "NPCs in Scene (generic)"

    async def _global_npc_search(self, question: PlayerQuestion, scene: Scene) -> str | None:
        for other in self._scenes.values():
            if self._match_npc(question, other.npcs):
                return "Global search"
        return None

    async def _npc_detail(self, question: PlayerQuestion, scene: Scene) -> str | None:
        npc = self._match_npc(question, scene.npcs)
        if npc is None:
            return None
        for field_name in MOTIVATION_FIELDS:
            value = npc.role if field_name == "role" else npc.extra_field(field_name)
            if value:
                return f"NPC detail ({field_name})"
        return None

    async def _npc_listed(self, question: PlayerQuestion, scene: Scene) -> str | None:
        return "NPC listed (no detail)" if scene.npcs else None

    # -------------------------------------------------------------------------
    # Location and environment strategies
    # -------------------------------------------------------------------------

    async def _location_section(self, question: PlayerQuestion, scene: Scene) -> str | None:
        return "Location section" if scene.location else None

    async def _environment_section(self, question: PlayerQuestion, scene: Scene) -> str | None:
        return "Environment section" if scene.environment else None

    async def _environment_keys(self, question: PlayerQuestion, scene: Scene) -> str | None:
        if not scene.environment:
            return None
        present = {key.lower() for key, value in scene.environment.items() if value}
        for key in ENVIRONMENT_KEYS:
            if key.lower() in present:
                return f"Environment ({key})"
        return None

    async def _narrative_section(self, question: PlayerQuestion, scene: Scene) -> str | None:
        return "Narrative section" if scene.narrative else None

    # -------------------------------------------------------------------------
    # Next-step strategies
    # -------------------------------------------------------------------------

    async def _triggers_section(self, question: PlayerQuestion, scene: Scene) -> str | None:
        return "Triggers section" if scene.triggers else None

    async def _transitions_section(self, question: PlayerQuestion, scene: Scene) -> str | None:
        return "Scene Transitions" if scene.transitions else None

    async def _conversation_guide(self, question: PlayerQuestion, scene: Scene) -> str | None:
        return "Conversation Guide" if scene.conversation_guide else None

    async def _exits_section(self, question: PlayerQuestion, scene: Scene) -> str | None:
        return "Exits section" if scene.exits else None
