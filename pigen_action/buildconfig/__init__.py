"""Build configuration module.

This module handles:
- The user-facing build options and their pi-gen config keys
- Validation against static rules and the host environment
- Resolving stage list entries to absolute directories
- Reading option files and writing the pi-gen config file
"""

from pigen_action.buildconfig.errors import (
    ConfigValidationError,
    EnvironmentQueryError,
)
from pigen_action.buildconfig.schema import DEFAULT_CONFIG, PiGenConfig

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigValidationError",
    "EnvironmentQueryError",
    "PiGenConfig",
]
