"""YAML configuration loading.

Example file:

    javadoc_method:
      allowNarrativeParamTags: true
      unusedParamFormat: "^unused.*"
      minLineCount: 3

    suppressions:
      - files: "*/generated/*"
      - files: "*Test.java"
        kinds: [MissingJavadoc]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from jdcheck.base import ConfigError
from jdcheck.config.settings import CheckSettings
from jdcheck.config.suppressions import Suppression

log = logging.getLogger(__name__)

SETTINGS_SECTION = "javadoc_method"
SUPPRESSIONS_SECTION = "suppressions"


def read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping; an empty file is an empty mapping."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}", str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}", str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping", str(path))
    return data


def _settings_section(data: dict[str, Any]) -> dict[str, Any]:
    if SETTINGS_SECTION in data:
        section = data[SETTINGS_SECTION] or {}
        if not isinstance(section, dict):
            raise ConfigError(f"'{SETTINGS_SECTION}' must be a mapping")
        return section
    # Flat layout: every key except the suppressions is a setting
    return {k: v for k, v in data.items() if k != SUPPRESSIONS_SECTION}


def parse_settings(data: dict[str, Any]) -> CheckSettings:
    """Validate a settings mapping (already parsed from YAML)."""
    try:
        return CheckSettings.model_validate(_settings_section(data))
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


def parse_suppressions(data: dict[str, Any]) -> list[Suppression]:
    entries = data.get(SUPPRESSIONS_SECTION) or []
    if not isinstance(entries, list):
        raise ConfigError(f"'{SUPPRESSIONS_SECTION}' must be a list")
    try:
        return [Suppression.model_validate(entry) for entry in entries]
    except ValidationError as e:
        raise ConfigError(f"Invalid suppression: {e}") from e


def load_config(path: str | Path | None) -> tuple[CheckSettings, list[Suppression]]:
    """Load settings and suppressions from a YAML file.

    Args:
        path: Config file, or None for defaults

    Returns:
        (settings, suppressions)

    Raises:
        ConfigError: If the file is unreadable, not YAML, or has bad values.
    """
    if path is None:
        return CheckSettings(), []

    path = Path(path)
    data = read_yaml(path)
    try:
        settings = parse_settings(data)
        suppressions = parse_suppressions(data)
    except ConfigError as e:
        e.path = str(path)
        raise
    log.debug("Loaded %s (%d suppressions)", path, len(suppressions))
    return settings, suppressions


def load_settings(path: str | Path | None) -> CheckSettings:
    """Load only the settings from a YAML file."""
    return load_config(path)[0]
