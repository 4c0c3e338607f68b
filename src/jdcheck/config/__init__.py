"""jdcheck.config - Settings model and YAML configuration loading."""

from jdcheck.config.loader import load_config, load_settings
from jdcheck.config.settings import CheckSettings
from jdcheck.config.suppressions import Suppression, is_suppressed

__all__ = [
    "CheckSettings",
    "Suppression",
    "is_suppressed",
    "load_config",
    "load_settings",
]
