"""Persistent JSON config helpers.

Stores the CLI path, request timeout, UI theme, per-entity page sizes, and
log level. All access is defensive: malformed or missing config falls back
to the built-in defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .data.adapter import DEFAULT_EXECUTABLE

APP_NAME = "multiflexi-tui"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


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

    Filesystem errors are ignored; a read-only config directory is not fatal.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_cli_path() -> str:
    return _load_string("cli_path") or DEFAULT_EXECUTABLE


def load_timeout_seconds() -> float | None:
    """Configured per-request timeout, or ``None`` when unset or not a positive number."""
    value = load_config().get("timeout_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return None
    return float(value)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_page_sizes() -> dict[str, int]:
    """Per-entity page size overrides; invalid entries are dropped."""
    value = load_config().get("page_sizes")
    if not isinstance(value, dict):
        return {}
    sizes: dict[str, int] = {}
    for tag, size in value.items():
        if not isinstance(tag, str) or isinstance(size, bool) or not isinstance(size, int):
            continue
        if size > 0:
            sizes[tag] = size
    return sizes


def load_log_level() -> str | None:
    return _load_string("log_level")