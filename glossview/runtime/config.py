"""Read-only JSON preferences.

Stores the UI theme, pygments style, search fields, and type-ahead timeout.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..tree_model import DEFAULT_SEARCH_FIELDS, SEARCH_FIELDS
from .type_ahead import TYPE_AHEAD_TIMEOUT_MS

logger = logging.getLogger(__name__)

APP_NAME = "glossview"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_STYLE = "monokai"


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", CONFIG_PATH)
        return {}
    return data


def _load_name(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    return _load_name("theme")


def load_style_name() -> str:
    """Load configured pygments style name for pre-formatted definitions."""
    return _load_name("style") or DEFAULT_STYLE


def load_search_fields() -> tuple[str, ...]:
    """Return configured search fields, dropping unknown names.

    A missing, empty, or entirely invalid list yields term-only matching.
    """
    value = load_config().get("search_fields")
    if not isinstance(value, list):
        return DEFAULT_SEARCH_FIELDS
    fields = tuple(name for name in value if isinstance(name, str) and name in SEARCH_FIELDS)
    if len(fields) != len(value):
        logger.warning("ignoring unknown search_fields entries in %s", CONFIG_PATH)
    return fields or DEFAULT_SEARCH_FIELDS


def load_type_ahead_timeout_ms() -> int:
    """Return the type-ahead inactivity window in milliseconds.

    Booleans, non-integers, and non-positive values fall back to the default.
    """
    value = load_config().get("type_ahead_timeout_ms")
    if value is None:
        return TYPE_AHEAD_TIMEOUT_MS
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        logger.warning("ignoring invalid type_ahead_timeout_ms %r", value)
        return TYPE_AHEAD_TIMEOUT_MS
    return value
