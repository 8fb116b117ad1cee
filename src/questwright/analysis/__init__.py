"""Post-run analyzers: structural coherence and GM critique validation."""

from .coherence import CoherenceAnalyzer
from .gm_validator import GMValidator
from .knowledge import AdventureKnowledge, Mystery, NPCSecret, Secret, extract_knowledge

__all__ = [
    "CoherenceAnalyzer",
    "GMValidator",
    "AdventureKnowledge",
    "Mystery",
    "NPCSecret",
    "Secret",
    "extract_knowledge",
]
