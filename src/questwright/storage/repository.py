"""Abstract content source interface for Questwright.

A content source serves the scenes and the GM guide of an adventure. Both
the file-based and in-memory backends implement this interface, so the
runner and the CLI never need to know which one is active.

Implementations must be idempotent and side-effect free from the caller's
point of view. Transport or parse failures surface as an empty scene list or
a missing guide, never as an exception.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from questwright.models.content import Scene


class ContentSource(ABC):
    """Abstract base class for adventure content."""

    @abstractmethod
    def list_adventures(self) -> list[str]:
        """Return the ids of all available adventures, sorted."""
        pass

    @abstractmethod
    def fetch_scenes(self, adventure_id: str) -> list[Scene]:
        """Load the scenes of an adventure in content order.

        Args:
            adventure_id: Unique identifier for the adventure

        Returns:
            Normalized scenes, or an empty list if the adventure cannot be read
        """
        pass

    @abstractmethod
    def fetch_guide(self, adventure_id: str) -> Optional[dict[str, Any]]:
        """Load the GM guide payload of an adventure.

        Args:
            adventure_id: Unique identifier for the adventure

        Returns:
            Raw guide dict, or None if there is no readable guide
        """
        pass
