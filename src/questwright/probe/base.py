"""Interface probe abstraction.

The probe answers "could a GM find this at the table?" for a single player
question. It is the only bridge between the simulation and whatever surface
the GM actually reads from, so the runner treats it as opaque, fallible and
possibly slow.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from questwright.models.content import Scene
from questwright.models.report import PlayerQuestion


@dataclass
class ProbeResult:
    """Outcome of one probe lookup.

    Attributes:
        found: Whether any strategy located the information
        found_in: Where it was located
        search_path: Ordered log of the strategies tried
        interactions: Number of probe interactions spent
    """

    found: bool = False
    found_in: str | None = None
    search_path: list[str] = field(default_factory=list)
    interactions: int = 0


class InterfaceProbe(ABC):
    """Abstract base class for interface probes."""

    async def prepare(self, scenes: list[Scene]) -> None:
        """Hook called once with the run's scene list before the first lookup."""
        return None

    @abstractmethod
    async def lookup(self, question: PlayerQuestion) -> ProbeResult:
        """Try to locate the answer to a player question.

        Args:
            question: The question, with its scene context

        Returns:
            ProbeResult describing what was tried and whether it worked
        """
        pass

    @abstractmethod
    async def capture_diagnostic(self, label: str) -> str | None:
        """Capture an evidentiary artifact for a failure.

        Args:
            label: Short label describing the failure

        Returns:
            Path or identifier of the captured artifact, or None if nothing
            was persisted
        """
        pass
