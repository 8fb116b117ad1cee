"""Questwright CLI module.

Usage:
    questwright --adventure <id> [--archetype <id>] [--seed N]

Or directly:
    python -m questwright.cli.app --adventure <id>
"""

from questwright.cli.app import build_config, build_parser, main

__all__ = ["build_config", "build_parser", "main"]
