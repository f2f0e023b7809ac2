"""Shared type definitions for pigen_action.

This module contains enums and dataclasses shared across subpackages to
avoid circular imports.
"""

from dataclasses import dataclass
from enum import Enum


class PiGenStage(str, Enum):
    """Built-in pi-gen stages, valued by their directory name."""

    STAGE0 = "stage0"
    STAGE1 = "stage1"
    STAGE2 = "stage2"
    STAGE3 = "stage3"
    STAGE4 = "stage4"
    STAGE5 = "stage5"

    @property
    def directory_name(self) -> str:
        """Name of the stage directory inside the pi-gen checkout."""
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "PiGenStage | None":
        """Return the stage whose directory is called ``name``, if any."""
        for stage in cls:
            if stage.directory_name == name:
                return stage
        return None


class Release(str, Enum):
    """Debian releases pi-gen can build."""

    BULLSEYE = "bullseye"
    JESSIE = "jessie"
    STRETCH = "stretch"
    BUSTER = "buster"
    TESTING = "testing"


class DeployCompression(str, Enum):
    """Compression applied to the exported image."""

    NONE = "none"
    ZIP = "zip"
    GZ = "gz"
    XZ = "xz"


@dataclass
class ExecOutput:
    """Result of running an external command.

    Attributes:
        exit_code: Process exit code.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0


__all__ = [
    "DeployCompression",
    "ExecOutput",
    "PiGenStage",
    "Release",
]
