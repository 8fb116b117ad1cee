"""In-memory content source, for tests and embedding."""

import copy
from typing import Any, Optional

from questwright.models.content import Scene, parse_scenes

from .repository import ContentSource


class InMemoryContentSource(ContentSource):
    """Content source backed by a dict of raw adventure payloads.

    Example:
        >>> source = InMemoryContentSource()
        >>> source.add_adventure("demo", [{"id": "s1", "title": "Start"}])
        >>> [s.id for s in source.fetch_scenes("demo")]
        ['s1']
    """

    def __init__(self, adventures: Optional[dict[str, dict[str, Any]]] = None):
        self._adventures: dict[str, dict[str, Any]] = {}
        for adventure_id, payload in (adventures or {}).items():
            self.add_adventure(adventure_id, payload.get("scenes", []), payload.get("guide"))

    def add_adventure(
        self,
        adventure_id: str,
        scenes: list[Any],
        guide: Optional[dict[str, Any]] = None,
    ) -> None:
        """Register an adventure. Payloads are deep-copied on the way in."""
        self._adventures[adventure_id] = {
            "scenes": copy.deepcopy(scenes),
            "guide": copy.deepcopy(guide),
        }

    def list_adventures(self) -> list[str]:
        return sorted(self._adventures)

    def fetch_scenes(self, adventure_id: str) -> list[Scene]:
        adventure = self._adventures.get(adventure_id)
        if adventure is None:
            return []
        return parse_scenes(copy.deepcopy(adventure["scenes"]))

    def fetch_guide(self, adventure_id: str) -> Optional[dict[str, Any]]:
        adventure = self._adventures.get(adventure_id)
        if adventure is None or adventure["guide"] is None:
            return None
        return copy.deepcopy(adventure["guide"])
