"""Interface probes used to resolve player questions."""

from .base import InterfaceProbe, ProbeResult
from .content_probe import ContentIndexProbe

__all__ = ["InterfaceProbe", "ProbeResult", "ContentIndexProbe"]
