"""YAML-based configuration and per-user directories.

Two locations are managed:
1. Config: ~/.config/theme-switcher/config.yaml (plus themes/*.yaml palettes)
2. Data:   ~/.local/share/theme-switcher (holds the preference file)
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .types import PickerConfig

logger = logging.getLogger(__name__)

# Default config file contents
DEFAULT_CONFIG: dict[str, Any] = {
    "picker": {
        "width": 40,
        "height": 20,
        "border": "rounded",
        "title": " theme-switcher ",
        "startup_delay_ms": 100,
    },
    "debug": False,
}


def get_config_dir() -> Path:
    """Get the theme-switcher config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "theme-switcher"


def get_config_path() -> Path:
    """Get the path to the YAML config file."""
    return get_config_dir() / "config.yaml"


def get_themes_dir() -> Path:
    """Get the directory scanned for user palette files."""
    return get_config_dir() / "themes"


def get_data_dir() -> Path:
    """Get the per-user data directory (THEME_SWITCHER_DATA_DIR wins)."""
    override = (os.environ.get("THEME_SWITCHER_DATA_DIR") or "").strip()
    if override:
        return Path(os.path.expanduser(override))
    xdg_data = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
    return Path(xdg_data) / "theme-switcher"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config() -> dict[str, Any]:
    """Load config.yaml merged over the defaults.

    Missing or corrupt files yield the defaults.
    """
    config_path = get_config_path()
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            return copy.deepcopy(DEFAULT_CONFIG)
        return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), data)
    except FileNotFoundError:
        return copy.deepcopy(DEFAULT_CONFIG)
    except (yaml.YAMLError, OSError):
        return copy.deepcopy(DEFAULT_CONFIG)


def picker_config_from(cfg: dict[str, Any], **overrides: Any) -> PickerConfig:
    """Build a PickerConfig from a loaded config dict.

    Keyword overrides that are None are ignored, so argparse namespaces can
    be passed through directly. Invalid values from the file are logged and
    replaced by the defaults; invalid overrides raise ValueError.
    """
    flags = {k: v for k, v in overrides.items() if v is not None}
    section = cfg.get("picker", {})
    if not isinstance(section, dict):
        section = {}
    try:
        return _build_picker_config({**_deep_merge(DEFAULT_CONFIG["picker"], section), **flags})
    except (TypeError, ValueError) as e:
        logger.warning("Ignoring invalid picker settings in %s: %s", get_config_path(), e)
    return _build_picker_config({**DEFAULT_CONFIG["picker"], **flags})


def _build_picker_config(values: dict[str, Any]) -> PickerConfig:
    return PickerConfig(
        width=int(values["width"]),
        height=int(values["height"]),
        border=values["border"],
        title=str(values["title"]),
        startup_delay_ms=int(values["startup_delay_ms"]),
    )
