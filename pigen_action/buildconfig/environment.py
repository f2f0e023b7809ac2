"""Host environment queries used by configuration validation.

Locale and timezone checks depend on what the build host supports. They are
expressed through the ``EnvironmentProvider`` protocol so validation can run
against the real host or against fixed lists.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from pigen_action.buildconfig.errors import EnvironmentQueryError

logger = logging.getLogger(__name__)

SUPPORTED_LOCALES_FILE = Path("/usr/share/i18n/SUPPORTED")
LIST_TIMEZONES_COMMAND = ["timedatectl", "list-timezones"]


class EnvironmentProvider(Protocol):
    """Source of host-dependent value lists."""

    def supported_locales(self) -> list[str]: ...

    def supported_timezones(self) -> list[str]: ...


def parse_supported_locales(content: str) -> list[str]:
    """Extract locale identifiers from SUPPORTED file content.

    Each line looks like ``en_GB.UTF-8 UTF-8``; the identifier is the first
    whitespace-delimited token.
    """
    locales = []
    for line in content.splitlines():
        parts = line.split()
        if parts:
            locales.append(parts[0])
    return locales


class HostEnvironment:
    """Queries the build host for supported locales and timezones."""

    def __init__(
        self,
        locales_file: Path = SUPPORTED_LOCALES_FILE,
        timezones_command: list[str] | None = None,
        timeout: int = 60,
    ) -> None:
        self.locales_file = locales_file
        self.timezones_command = timezones_command or list(LIST_TIMEZONES_COMMAND)
        self.timeout = timeout

    def supported_locales(self) -> list[str]:
        """Read locale identifiers from the system locale database.

        Raises:
            EnvironmentQueryError: If the locale database cannot be read.
        """
        logger.debug("Reading supported locales from %s", self.locales_file)
        try:
            content = self.locales_file.read_text(encoding="utf-8")
        except OSError as e:
            raise EnvironmentQueryError(
                f"Could not read supported locales from {self.locales_file}: {e}"
            ) from e
        return parse_supported_locales(content)

    def supported_timezones(self) -> list[str]:
        """List timezone identifiers known to the host.

        Raises:
            EnvironmentQueryError: If the listing command fails.
        """
        command = " ".join(self.timezones_command)
        logger.debug("Listing timezones with %s", command)
        try:
            result = subprocess.run(
                self.timezones_command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except subprocess.TimeoutExpired as e:
            raise EnvironmentQueryError(
                f'"{command}" timed out after {self.timeout}s'
            ) from e
        except subprocess.CalledProcessError as e:
            raise EnvironmentQueryError(
                f'"{command}" failed with exit code {e.returncode}: {e.stderr}'
            ) from e
        except OSError as e:
            raise EnvironmentQueryError(f'Failed to run "{command}": {e}') from e
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]


@dataclass
class StaticEnvironment:
    """Environment backed by fixed lists."""

    locales: list[str] = field(default_factory=list)
    timezones: list[str] = field(default_factory=list)

    def supported_locales(self) -> list[str]:
        return list(self.locales)

    def supported_timezones(self) -> list[str]:
        return list(self.timezones)


__all__ = [
    "LIST_TIMEZONES_COMMAND",
    "SUPPORTED_LOCALES_FILE",
    "EnvironmentProvider",
    "HostEnvironment",
    "StaticEnvironment",
    "parse_supported_locales",
]
