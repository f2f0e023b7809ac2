"""Shared fixtures for pigen_action tests."""

from pathlib import Path

import pytest

from pigen_action.buildconfig.environment import StaticEnvironment
from pigen_action.types import PiGenStage

FAKE_BUILD_SCRIPT = """#!/bin/sh
echo "[10:00:00] Begin $PWD"
echo "plain stdout line"
echo "config=$2"
echo "opts=$PIGEN_DOCKER_OPTS"
echo "[10:00:01] progress on stderr" >&2
echo "plain stderr line" >&2
exit ${FAKE_BUILD_EXIT:-0}
"""


@pytest.fixture
def pigen_dir(tmp_path: Path) -> Path:
    """Create a minimal pi-gen checkout with a fake build script."""
    root = tmp_path / "pi-gen"
    root.mkdir()
    script = root / "build-docker.sh"
    script.write_text(FAKE_BUILD_SCRIPT)
    script.chmod(0o755)
    (root / "Dockerfile").write_text("FROM debian:bullseye\n")
    for stage in PiGenStage:
        (root / stage.directory_name).mkdir()
    return root


@pytest.fixture
def environment() -> StaticEnvironment:
    """Environment with a small fixed set of locales and timezones."""
    return StaticEnvironment(
        locales=["en_GB.UTF-8", "en_US.UTF-8", "de_DE.UTF-8"],
        timezones=["Europe/London", "Europe/Berlin", "UTC"],
    )
