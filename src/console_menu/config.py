"""YAML configuration for console-menu.

The config file lives at ~/.config/console-menu/config.yaml (honoring
XDG_CONFIG_HOME); the CONSOLE_MENU_CONFIG environment variable points
at another file. Values in the file are deep-merged over DEFAULT_CONFIG.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import readchar
import yaml

from .errors import ConfigError
from .keys import BACKSPACE_KEYS, DELETE_KEYS, ENTER_KEYS, Key, KeyAction, default_keybinds
from .menu import DEFAULT_CLEAR_SCREEN_LINES
from .scroll import ScrollIcon, ScrollSettings
from .themes import CursorIcon

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CONSOLE_MENU_CONFIG"

# Default config
DEFAULT_CONFIG: dict[str, Any] = {
    "debug": False,
    "clear_screen_lines": DEFAULT_CLEAR_SCREEN_LINES,
    "escape_codes": True,
    "cursor_icon": {
        "selected": ">",
        "selected_right": "",
        "unselected": " ",
        "unselected_right": "",
    },
    "scroll": {
        "max_visible": -1,
        "up_margin": 0,
        "down_margin": 0,
        "top_continue": None,
        "bottom_continue": None,
        "top_end": None,
        "bottom_end": None,
    },
    "keybinds": {
        "escape": ["escape"],
        "up": ["up"],
        "down": ["down"],
        "left": ["left"],
        "right": ["right"],
        "enter": ["enter"],
    },
}

KEY_NAMES: dict[str, frozenset[str]] = {
    "esc": frozenset({readchar.key.ESC}),
    "escape": frozenset({readchar.key.ESC}),
    "up": frozenset({readchar.key.UP}),
    "down": frozenset({readchar.key.DOWN}),
    "left": frozenset({readchar.key.LEFT}),
    "right": frozenset({readchar.key.RIGHT}),
    "enter": ENTER_KEYS,
    "tab": frozenset({readchar.key.TAB}),
    "space": frozenset({readchar.key.SPACE}),
    "backspace": BACKSPACE_KEYS,
    "delete": DELETE_KEYS,
}


def get_config_dir() -> Path:
    """Get the console-menu config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "console-menu"


def get_config_path() -> Path:
    """Get the path to the config file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(os.path.expanduser(override))
    return get_config_dir() / "config.yaml"


def get_log_path() -> Path:
    """Get the path to the debug log file."""
    return get_config_dir() / "debug.log"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load the config file merged over the defaults.

    A missing, unreadable or malformed file yields the defaults.
    """
    config_path = path or get_config_path()
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return copy.deepcopy(DEFAULT_CONFIG)
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(data, dict):
        if data is not None:
            logger.warning("Ignoring config %s: top level is not a mapping", config_path)
        return copy.deepcopy(DEFAULT_CONFIG)
    return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), data)


def _section(cfg: dict[str, Any], name: str) -> dict[str, Any]:
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def _int(section: dict[str, Any], name: str, default: int) -> int:
    value = section.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{name}' must be an integer, got {value!r}")
    return value


def _optional_str(section: dict[str, Any], name: str) -> str | None:
    value = section.get(name)
    if value is None:
        return None
    return str(value)


def parse_key_name(name: str) -> frozenset[str]:
    """Turn a key name from the config into the keys it stands for.

    Raises:
        ConfigError: If name is neither a known key name nor a single character.
    """
    if not isinstance(name, str):
        raise ConfigError(f"Key name must be a string, got {name!r}")
    keys = KEY_NAMES.get(name.lower())
    if keys is not None:
        return keys
    if len(name) == 1:
        return frozenset({name})
    raise ConfigError(f"Unknown key name: {name!r}")


def keybinds_from_config(cfg: dict[str, Any]) -> list[KeyAction]:
    """Build a binding table from the 'keybinds' section."""
    section = _section(cfg, "keybinds")
    keybinds = default_keybinds()
    for key in Key:
        names = section.get(key.name.lower())
        if names is None:
            continue
        if isinstance(names, str):
            names = [names]
        physical: frozenset[str] = frozenset()
        for name in names:
            physical |= parse_key_name(name)
        default = keybinds[key]
        keybinds[key] = KeyAction(default.response, physical, default.ignore_modes)
    return keybinds


def cursor_icon_from_config(cfg: dict[str, Any]) -> CursorIcon:
    section = _section(cfg, "cursor_icon")
    defaults = CursorIcon()
    return CursorIcon(
        selected=str(section.get("selected", defaults.selected)),
        selected_right=str(section.get("selected_right", defaults.selected_right)),
        unselected=str(section.get("unselected", defaults.unselected)),
        unselected_right=str(section.get("unselected_right", defaults.unselected_right)),
    )


def scroll_settings_from_config(cfg: dict[str, Any]) -> ScrollSettings:
    section = _section(cfg, "scroll")
    return ScrollSettings(
        max_visible=_int(section, "max_visible", -1),
        up_margin=_int(section, "up_margin", 0),
        down_margin=_int(section, "down_margin", 0),
        icon=ScrollIcon(
            top_continue=_optional_str(section, "top_continue"),
            bottom_continue=_optional_str(section, "bottom_continue"),
            top_end=_optional_str(section, "top_end"),
            bottom_end=_optional_str(section, "bottom_end"),
        ),
    )


def clear_screen_text_from_config(cfg: dict[str, Any]) -> str:
    lines = _int(cfg, "clear_screen_lines", DEFAULT_CLEAR_SCREEN_LINES)
    return "\n" * max(lines, 0)


def menu_kwargs_from_config(cfg: dict[str, Any]) -> dict[str, Any]:
    """Build the OptionsMenu keyword arguments the config controls."""
    return {
        "cursor_icon": cursor_icon_from_config(cfg),
        "scroll_settings": scroll_settings_from_config(cfg),
        "clear_screen_text": clear_screen_text_from_config(cfg),
    }
