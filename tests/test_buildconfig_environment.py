"""Tests for buildconfig/environment.py module."""

from pathlib import Path

import pytest

from pigen_action.buildconfig.environment import (
    HostEnvironment,
    StaticEnvironment,
    parse_supported_locales,
)
from pigen_action.buildconfig.errors import (
    ConfigValidationError,
    EnvironmentQueryError,
)


class TestParseSupportedLocales:
    """Tests for parse_supported_locales function."""

    def test_first_token_of_each_line(self) -> None:
        content = "en_GB.UTF-8 UTF-8\nen_GB ISO-8859-1\n\nde_DE.UTF-8 UTF-8\n"
        assert parse_supported_locales(content) == [
            "en_GB.UTF-8",
            "en_GB",
            "de_DE.UTF-8",
        ]


class TestHostEnvironment:
    """Tests for HostEnvironment queries."""

    def test_locales_from_file(self, tmp_path: Path) -> None:
        supported = tmp_path / "SUPPORTED"
        supported.write_text("en_US.UTF-8 UTF-8\nfr_FR.UTF-8 UTF-8\n")
        env = HostEnvironment(locales_file=supported)
        assert env.supported_locales() == ["en_US.UTF-8", "fr_FR.UTF-8"]

    def test_missing_locales_file(self, tmp_path: Path) -> None:
        env = HostEnvironment(locales_file=tmp_path / "missing")
        with pytest.raises(EnvironmentQueryError):
            env.supported_locales()

    def test_timezones_from_command(self) -> None:
        env = HostEnvironment(
            timezones_command=["printf", "Europe/London\\nUTC\\n"]
        )
        assert env.supported_timezones() == ["Europe/London", "UTC"]

    def test_timezone_command_not_found(self) -> None:
        env = HostEnvironment(timezones_command=["definitely-not-a-command-xyz"])
        with pytest.raises(EnvironmentQueryError):
            env.supported_timezones()

    def test_timezone_command_fails(self) -> None:
        env = HostEnvironment(timezones_command=["false"])
        with pytest.raises(EnvironmentQueryError) as exc_info:
            env.supported_timezones()
        assert "exit code" in str(exc_info.value)

    def test_query_error_is_validation_error(self) -> None:
        """Environment failures should surface like any validation failure."""
        assert issubclass(EnvironmentQueryError, ConfigValidationError)
        assert EnvironmentQueryError("x").code == "environment_query"


class TestStaticEnvironment:
    """Tests for StaticEnvironment."""

    def test_returns_copies(self) -> None:
        env = StaticEnvironment(locales=["C.UTF-8"], timezones=["UTC"])
        env.supported_locales().append("xx")
        assert env.supported_locales() == ["C.UTF-8"]
        assert env.supported_timezones() == ["UTC"]
