"""Build configuration file input/output.

This module loads user options from YAML/JSON files, applies command-line
overrides, and writes the pi-gen ``config`` file.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from pigen_action.buildconfig.errors import ConfigValidationError
from pigen_action.buildconfig.schema import PiGenConfig, to_config_text
from pigen_action.buildconfig.validation import absolutize_stages

logger = logging.getLogger(__name__)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping, got {type(data).__name__}")
    return data


def load_json(path: Path) -> dict[str, Any]:
    """Load a JSON file and return its contents as a dict.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed JSON content as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def load_config(path: Path) -> PiGenConfig:
    """Load build options from a file (YAML or JSON).

    Options missing from the file keep their defaults. File format is
    determined by extension (.yaml, .yml for YAML, .json for JSON).

    Args:
        path: Path to the options file.

    Returns:
        Parsed PiGenConfig instance.

    Raises:
        ValueError: If file extension is not supported.
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the file holds unknown or non-string options.
    """
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = load_yaml(path)
    elif suffix == ".json":
        data = load_json(path)
    else:
        raise ValueError(
            f"Unsupported file extension '{suffix}'. Use .yaml, .yml, or .json"
        )
    return PiGenConfig.model_validate(data)


def _field_names() -> dict[str, str]:
    names: dict[str, str] = {}
    for name, info in PiGenConfig.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    return names


def apply_overrides(config: PiGenConfig, overrides: list[str] | None) -> PiGenConfig:
    """Apply ``field=value`` overrides to a configuration.

    Fields may be given by snake_case or camelCase name.

    Args:
        config: Base configuration.
        overrides: Assignments such as ``img_name=custom``.

    Returns:
        Updated copy of the configuration.

    Raises:
        ConfigValidationError: If an override is malformed or names an
            unknown field.
    """
    if not overrides:
        return config

    names = _field_names()
    update: dict[str, str] = {}
    for item in overrides:
        key, sep, value = item.partition("=")
        if not sep:
            raise ConfigValidationError(
                f"override must have the form field=value, got '{item}'"
            )
        field_name = names.get(key.strip())
        if field_name is None:
            raise ConfigValidationError(f"unknown configuration field '{key}'")
        update[field_name] = value
    return PiGenConfig.model_validate({**config.model_dump(), **update})


def write_config_file(config: PiGenConfig, pigen_dir: Path, path: Path) -> PiGenConfig:
    """Write the pi-gen config file.

    Stage list entries are made absolute before serialization.

    Args:
        config: Configuration to write.
        pigen_dir: Root of the pi-gen checkout.
        path: Destination of the config file.

    Returns:
        The configuration as written, with absolute stage paths.
    """
    config = absolutize_stages(config, pigen_dir)
    path.write_text(to_config_text(config), encoding="utf-8")
    logger.debug("Wrote pi-gen config to %s", path)
    return config


__all__ = [
    "apply_overrides",
    "load_config",
    "load_json",
    "load_yaml",
    "write_config_file",
]
