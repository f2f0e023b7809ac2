"""Build orchestration module.

This module handles:
- Running external commands with streamed output
- Checking pi-gen checkouts and running pi-gen builds
"""

from pigen_action.builds.runner import BuildDirectoryError, PiGen

__all__ = ["BuildDirectoryError", "PiGen"]
