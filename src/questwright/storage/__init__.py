"""Storage module for Questwright.

This module provides the content source interface and its implementations
for reading adventure scenes and GM guides.

Usage:
    from questwright.storage import get_content_source

    # Get source using configured backend (from environment)
    source = get_content_source()
    scenes = source.fetch_scenes("a-change-of-heart")

Configuration via environment variables:
    QUESTWRIGHT_CONTENT_BACKEND: "file" or "memory" (default: "file")
    QUESTWRIGHT_CONTENT_PATH: Path to adventures directory (default: "adventures")
    QUESTWRIGHT_REPORTS_PATH: Path for written reports (default: "simulation-results")
    QUESTWRIGHT_DIAGNOSTICS_PATH: Path for diagnostics (default: "<reports>/diagnostics")
"""

from .config import (
    ContentBackend,
    get_content_backend,
    get_content_path,
    get_content_source,
    get_diagnostics_path,
    get_reports_path,
)
from .file_repo import FileContentSource
from .memory import InMemoryContentSource
from .repository import ContentSource

__all__ = [
    # Abstract interface
    "ContentSource",
    # Implementations
    "FileContentSource",
    "InMemoryContentSource",
    # Configuration
    "ContentBackend",
    "get_content_backend",
    "get_content_path",
    "get_reports_path",
    "get_diagnostics_path",
    # Factory
    "get_content_source",
]
