"""Persistent JSON preferences.

Stores hidden-file visibility, the hidden-name prefix and the UI theme.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir

from .model import DEFAULT_HIDDEN_PREFIX

APP_NAME = "sea"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LAST_DIR_ENV_VAR = "SEA_LAST_DIR_FILE"


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

    Filesystem errors are ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_show_hidden() -> bool:
    """Return persisted hidden-file visibility; non-booleans read as ``False``."""
    value = load_config().get("show_hidden")
    return bool(value) if isinstance(value, bool) else False


def save_show_hidden(show_hidden: bool) -> None:
    config = load_config()
    config["show_hidden"] = bool(show_hidden)
    save_config(config)


def load_hidden_prefix() -> str:
    value = load_config().get("hidden_prefix")
    if not isinstance(value, str) or not value:
        return DEFAULT_HIDDEN_PREFIX
    return value


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def last_dir_marker_path() -> Path | None:
    """Return the file named by ``SEA_LAST_DIR_FILE``, if set."""
    value = os.environ.get(LAST_DIR_ENV_VAR, "").strip()
    return Path(value).expanduser() if value else None


def write_last_dir(directory: Path) -> bool:
    """Write ``directory`` to the last-directory marker file when configured."""
    marker = last_dir_marker_path()
    if marker is None:
        return False
    marker.write_text(os.fspath(directory), encoding="utf-8", errors="surrogateescape")
    return True
