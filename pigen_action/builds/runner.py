"""Build runner for executing pi-gen Docker builds.

This module handles:
- Checking that a directory is a usable pi-gen checkout
- Writing the pi-gen config file
- Preparing stage directories for image export
- Running build-docker.sh and filtering its output
"""

from __future__ import annotations

import logging
import os
import re
import threading
from pathlib import Path
from typing import IO

from pigen_action.buildconfig.io import write_config_file
from pigen_action.buildconfig.schema import PiGenConfig
from pigen_action.buildconfig.validation import resolve_stage
from pigen_action.builds.process import exec_output
from pigen_action.types import ExecOutput, PiGenStage

logger = logging.getLogger(__name__)
build_logger = logging.getLogger("pigen_action.build")

BUILD_SCRIPT = "build-docker.sh"
REQUIRED_FILES = (BUILD_SCRIPT, "Dockerfile")
CONFIG_FILE_NAME = "config"
EXPORT_MARKER = "EXPORT_IMAGE"
DOCKER_OPTS_ENV = "PIGEN_DOCKER_OPTS"

# pi-gen progress lines start with a bracketed timestamp, e.g. "[12:34:56]".
BUILD_LOG_PATTERN = re.compile(r"^\s*\[(?:\d{2}:?){3}\].*")


class BuildDirectoryError(Exception):
    """Raised when a directory is not a valid pi-gen checkout."""

    def __init__(self, message: str, code: str = "invalid_pigen_dir") -> None:
        super().__init__(message)
        self.code = code


def check_pigen_directory(pigen_dir: Path) -> str | None:
    """Check that a directory has the layout of a pi-gen checkout.

    Args:
        pigen_dir: Directory to check.

    Returns:
        None if the layout is valid, otherwise a description of the problem.
    """
    if not pigen_dir.is_dir():
        return f"Not a directory: {pigen_dir}"

    entries = list(pigen_dir.iterdir())
    existing_files = sorted(e.name for e in entries if e.is_file())
    existing_dirs = sorted(e.name for e in entries if e.is_dir())
    required_dirs = [stage.directory_name for stage in PiGenStage]

    if not all(name in existing_files for name in REQUIRED_FILES):
        return (
            f"Not all required files in pi-gen dir. Required: "
            f"{', '.join(REQUIRED_FILES)} but found {', '.join(existing_files)}"
        )

    if not all(name in existing_dirs for name in required_dirs):
        return (
            f"Not all required directories in pi-gen dir. Required: "
            f"{', '.join(required_dirs)} but found {', '.join(existing_dirs)}"
        )

    return None


def should_surface(line: str, verbose: bool) -> bool:
    """Decide whether a build output line is shown to the user."""
    return verbose or BUILD_LOG_PATTERN.match(line) is not None


class PiGen:
    """A pi-gen checkout bound to one build configuration.

    Args:
        pigen_dir: Root of the pi-gen checkout.
        config: Build configuration.

    Raises:
        BuildDirectoryError: If ``pigen_dir`` is not a valid pi-gen checkout.
    """

    def __init__(self, pigen_dir: Path, config: PiGenConfig) -> None:
        problem = check_pigen_directory(pigen_dir)
        if problem is not None:
            logger.debug(problem)
            raise BuildDirectoryError(f"pi-gen directory at {pigen_dir} is invalid")

        self.pigen_dir = pigen_dir
        self.config = config
        self.config_path = pigen_dir.resolve() / CONFIG_FILE_NAME

    def stage_directories(self) -> list[Path]:
        """Return the absolute directories of the configured stages."""
        return [resolve_stage(entry, self.pigen_dir) for entry in self.config.stages()]

    def docker_mounts(self) -> str:
        """Return Docker bind-mount options exposing every stage directory."""
        return " ".join(f"-v {path}:{path}" for path in self.stage_directories())

    def configure_stage_exports(self) -> None:
        """Prepare stage directories for image export.

        Built-in stages lose their export marker so only the final image is
        produced. Custom stages keep whatever they ship; one without a marker
        is reported but left untouched.
        """
        for stage_dir in self.stage_directories():
            marker = stage_dir / EXPORT_MARKER
            if PiGenStage.from_name(stage_dir.name) is not None:
                marker.unlink(missing_ok=True)
            elif not marker.exists():
                logger.warning(
                    "Custom stage directory %s does not contain an %s file, "
                    "no image will be exported for it",
                    stage_dir,
                    EXPORT_MARKER,
                )

    def build(self, verbose: bool = False, log_path: Path | None = None) -> ExecOutput:
        """Run the pi-gen build.

        Args:
            verbose: Surface every output line, not only timestamped progress.
            log_path: Optional file receiving every output line unfiltered.

        Returns:
            The build script's ExecOutput, whatever its exit code.
        """
        logger.debug("Writing user config to %s", self.config_path)
        self.config = write_config_file(self.config, self.pigen_dir, self.config_path)

        self.configure_stage_exports()

        docker_opts = self.docker_mounts()
        logger.debug(
            'Running pi-gen build with %s="%s" and config: %s',
            DOCKER_OPTS_ENV,
            docker_opts,
            self.config.model_dump_json(exclude_none=True),
        )

        env = dict(os.environ)
        env[DOCKER_OPTS_ENV] = docker_opts
        cmd = [f"./{BUILD_SCRIPT}", "-c", str(self.config_path)]

        if log_path is None:
            return self._run(cmd, env, verbose, None)
        with log_path.open("w", encoding="utf-8") as log_file:
            return self._run(cmd, env, verbose, log_file)

    def _run(
        self,
        cmd: list[str],
        env: dict[str, str],
        verbose: bool,
        log_file: IO[str] | None,
    ) -> ExecOutput:
        lock = threading.Lock()

        def record(line: str) -> None:
            if log_file is not None:
                with lock:
                    log_file.write(line + "\n")

        def on_stdout(line: str) -> None:
            record(line)
            if should_surface(line, verbose):
                build_logger.info(line)

        def on_stderr(line: str) -> None:
            record(line)
            if should_surface(line, verbose):
                build_logger.error(line)

        result = exec_output(
            cmd,
            cwd=self.pigen_dir,
            env=env,
            on_stdout=on_stdout,
            on_stderr=on_stderr,
        )
        if not result.success:
            logger.debug("pi-gen build exited with code %d", result.exit_code)
        return result


__all__ = [
    "BUILD_LOG_PATTERN",
    "BuildDirectoryError",
    "PiGen",
    "check_pigen_directory",
    "should_surface",
]
