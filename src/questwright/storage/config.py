"""Storage configuration for Questwright.

This module provides configuration for content backends and output paths,
plus a factory that builds the configured content source.
"""

import os
from enum import Enum
from pathlib import Path

from .file_repo import FileContentSource
from .memory import InMemoryContentSource
from .repository import ContentSource


class ContentBackend(Enum):
    """Available content backends."""

    FILE = "file"
    MEMORY = "memory"


# Default configuration (can be overridden via environment variables)
DEFAULT_CONTENT_BACKEND = ContentBackend.FILE
DEFAULT_CONTENT_PATH = "adventures"
DEFAULT_REPORTS_PATH = "simulation-results"
DIAGNOSTICS_SUBDIR = "diagnostics"


def get_content_backend() -> ContentBackend:
    """Get configured content backend from environment.

    Returns:
        ContentBackend enum value
    """
    backend_str = os.environ.get("QUESTWRIGHT_CONTENT_BACKEND", "file").lower()
    if backend_str == "memory":
        return ContentBackend.MEMORY
    return ContentBackend.FILE


def get_content_path() -> str:
    """Get configured adventures directory from environment."""
    return os.environ.get("QUESTWRIGHT_CONTENT_PATH", DEFAULT_CONTENT_PATH)


def get_reports_path() -> str:
    """Get configured report output directory from environment."""
    return os.environ.get("QUESTWRIGHT_REPORTS_PATH", DEFAULT_REPORTS_PATH)


def get_diagnostics_path() -> str:
    """Get configured diagnostics directory; defaults under the reports path."""
    default = str(Path(get_reports_path()) / DIAGNOSTICS_SUBDIR)
    return os.environ.get("QUESTWRIGHT_DIAGNOSTICS_PATH", default)


def get_content_source(
    backend: ContentBackend | None = None,
    content_path: str | None = None,
) -> ContentSource:
    """Factory function to create a content source.

    Args:
        backend: Content backend to use. If None, uses environment config.
        content_path: Adventures directory for the file backend. If None,
            uses environment config.

    Returns:
        ContentSource instance
    """
    if backend is None:
        backend = get_content_backend()

    if backend == ContentBackend.MEMORY:
        return InMemoryContentSource()
    return FileContentSource(content_path or get_content_path())
