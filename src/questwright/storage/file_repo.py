"""File-based content source reading JSON adventures from disk.

Layout, one directory per adventure::

    adventures/
        <adventure_id>/
            scenes.json   # list of scenes, or {"scenes": [...]}
            guide.json    # optional GM guide
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from questwright.models.content import Scene, parse_scenes

from .repository import ContentSource

logger = logging.getLogger(__name__)

SCENES_FILE = "scenes.json"
GUIDE_FILE = "guide.json"


class FileContentSource(ContentSource):
    """JSON file-based content source."""

    def __init__(self, content_path: str | Path = "adventures"):
        """Initialize the source.

        Args:
            content_path: Directory holding one sub-directory per adventure
        """
        self.content_path = Path(content_path)

    def _adventure_dir(self, adventure_id: str) -> Path:
        return self.content_path / adventure_id

    def _read_json(self, path: Path) -> Any:
        """Read a JSON file, returning None on any read or parse failure."""
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            return None

    def list_adventures(self) -> list[str]:
        if not self.content_path.is_dir():
            return []
        return sorted(
            path.name
            for path in self.content_path.iterdir()
            if path.is_dir() and (path / SCENES_FILE).exists()
        )

    def fetch_scenes(self, adventure_id: str) -> list[Scene]:
        data = self._read_json(self._adventure_dir(adventure_id) / SCENES_FILE)
        if isinstance(data, dict):
            data = data.get("scenes")
        if not isinstance(data, list):
            if data is not None:
                logger.error(f"Scenes for {adventure_id} are not a list")
            return []
        scenes = parse_scenes(data)
        logger.info(f"Loaded {len(scenes)} scenes for {adventure_id}")
        return scenes

    def fetch_guide(self, adventure_id: str) -> Optional[dict[str, Any]]:
        data = self._read_json(self._adventure_dir(adventure_id) / GUIDE_FILE)
        return data if isinstance(data, dict) else None
