"""Persistent JSON preferences for the foldscroll command line.

Stores the highlight style, the default memoization switch, and log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "foldscroll"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_STYLE = "monokai"
DEFAULT_LOG_LEVEL = "warning"
_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so an unwritable config directory never
    breaks a query.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_style() -> str:
    """Return the persisted Pygments style name, or the default."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE


def save_style(style: str) -> None:
    stripped = str(style).strip()
    if not stripped:
        return
    config = load_config()
    config["style"] = stripped
    save_config(config)


def load_memoize() -> bool:
    """Only explicit booleans count; anything else means ``False``."""
    value = load_config().get("memoize")
    return value if isinstance(value, bool) else False


def load_log_level() -> int:
    """Return the configured ``logging`` level number."""
    value = load_config().get("log_level")
    name = value.strip().lower() if isinstance(value, str) else DEFAULT_LOG_LEVEL
    if name not in _LOG_LEVELS:
        name = DEFAULT_LOG_LEVEL
    return getattr(logging, name.upper())
