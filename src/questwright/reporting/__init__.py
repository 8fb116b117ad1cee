"""Report assembly, rendering and output."""

from .generator import (
    ReportGenerator,
    build_summary,
    coherence_score,
    difficulty_rating,
    lookup_recommendation,
    render_text,
)
from .writer import ReportWriter

__all__ = [
    "ReportGenerator",
    "ReportWriter",
    "build_summary",
    "coherence_score",
    "difficulty_rating",
    "lookup_recommendation",
    "render_text",
]
