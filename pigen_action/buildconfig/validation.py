"""Validation of pi-gen build configurations.

Checks run in a fixed order and stop at the first violated constraint.
Static rules (non-empty fields, closed value sets) are checked directly;
locale and timezone membership is checked against an EnvironmentProvider.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pigen_action.buildconfig.environment import EnvironmentProvider
from pigen_action.buildconfig.errors import ConfigValidationError
from pigen_action.buildconfig.schema import PiGenConfig
from pigen_action.types import DeployCompression, PiGenStage, Release

logger = logging.getLogger(__name__)

COMPRESSION_LEVEL_PATTERN = re.compile(r"[0-9]")
WPA_PASSWORD_MIN_LENGTH = 8
WPA_PASSWORD_MAX_LENGTH = 63


def _choices(enum_type: type[Release] | type[DeployCompression]) -> str:
    return "[" + ", ".join(f'"{member.value}"' for member in enum_type) + "]"


def _is_member(value: str, enum_type: type[Release] | type[DeployCompression]) -> bool:
    return value.lower() in {member.value for member in enum_type}


def is_valid_stage(entry: str) -> bool:
    """Check whether a stage list entry names a stage or an existing directory."""
    if PiGenStage.from_name(entry) is not None:
        return True
    return Path(entry).is_dir()


def validate_config(config: PiGenConfig, environment: EnvironmentProvider) -> None:
    """Validate a configuration before it is handed to pi-gen.

    Args:
        config: Configuration to validate.
        environment: Source of supported locales and timezones.

    Raises:
        ConfigValidationError: On the first violated constraint.
        EnvironmentQueryError: If locales or timezones cannot be listed.
    """
    if not config.img_name:
        raise ConfigValidationError("image-name must not be empty")

    if not _is_member(config.release, Release):
        raise ConfigValidationError(f"release must be one of {_choices(Release)}")

    if not _is_member(config.deploy_compression, DeployCompression):
        raise ConfigValidationError(
            f"compression must be one of {_choices(DeployCompression)}"
        )

    if not COMPRESSION_LEVEL_PATTERN.fullmatch(config.compression_level):
        raise ConfigValidationError("compression-level must be between 0 and 9")

    if config.locale_default not in environment.supported_locales():
        raise ConfigValidationError(
            "locale is not included in the list of supported locales "
            "(retrieved from /usr/share/i18n/SUPPORTED)"
        )

    if not config.target_hostname:
        raise ConfigValidationError("hostname must not be empty")

    if not config.keyboard_keymap:
        raise ConfigValidationError("keyboard-keymap must not be empty")

    if not config.keyboard_layout:
        raise ConfigValidationError("keyboard-layout must not be empty")

    if config.timezone_default not in environment.supported_timezones():
        raise ConfigValidationError(
            'timezone is not included in output of "timedatectl list-timezones"'
        )

    if not config.first_user_name:
        raise ConfigValidationError("username must not be empty")

    if config.wpa_password and not (
        WPA_PASSWORD_MIN_LENGTH <= len(config.wpa_password) <= WPA_PASSWORD_MAX_LENGTH
    ):
        raise ConfigValidationError(
            f"wpa-password must be between {WPA_PASSWORD_MIN_LENGTH} and "
            f"{WPA_PASSWORD_MAX_LENGTH} characters (or unset)"
        )

    stages = config.stages()
    if not stages:
        raise ConfigValidationError("stage-list must not be empty")

    for entry in stages:
        if not is_valid_stage(entry):
            logger.debug("Stage list entry %s is neither a stage nor a directory", entry)
            raise ConfigValidationError(
                'stage-list must contain valid pi-gen stage names "stage[0-5]" '
                "and/or valid directories"
            )


def resolve_stage(entry: str, pigen_dir: Path) -> Path:
    """Resolve a stage list entry to a canonical absolute path.

    Known stage names resolve inside ``pigen_dir``; anything else is taken as
    a path. Symlinks are followed.

    Raises:
        FileNotFoundError: If the resolved path does not exist.
    """
    stage = PiGenStage.from_name(entry)
    path = pigen_dir / stage.directory_name if stage is not None else Path(entry)
    return path.resolve(strict=True)


def absolutize_stages(config: PiGenConfig, pigen_dir: Path) -> PiGenConfig:
    """Return the configuration with every stage list entry made absolute.

    Args:
        config: Configuration whose stage list to resolve.
        pigen_dir: Root of the pi-gen checkout holding the built-in stages.

    Returns:
        Copy of ``config`` whose stage_list holds space-joined absolute paths.
    """
    stages = config.stages()
    logger.debug(
        "Resolving directories to absolute paths: %s using pi-gen base dir %s",
        stages,
        pigen_dir,
    )
    resolved = [str(resolve_stage(entry, pigen_dir)) for entry in stages]
    return config.model_copy(update={"stage_list": " ".join(resolved)})


__all__ = [
    "absolutize_stages",
    "is_valid_stage",
    "resolve_stage",
    "validate_config",
]
