"""Persistent JSON config helpers.

Stores default listing switches (format, sort, thread cap, theme).
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .file_model import TIME_FIELD_LETTERS, parse_sort_spec
from .theme import normalize_theme_name

logger = logging.getLogger(__name__)

APP_NAME = "streamdir"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class ListingDefaults:
    """Config-file defaults; command-line switches override each field."""

    threads: int | None = None
    recurse: bool = False
    wide: bool = False
    bare: bool = False
    sort: str | None = None
    time_field: str = "w"
    theme: str | None = None
    no_color: bool = False


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _load_bool(data: dict[str, object], key: str) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else False


def _load_threads(data: dict[str, object]) -> int | None:
    value = data.get("threads")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _load_sort(data: dict[str, object]) -> str | None:
    value = data.get("sort")
    if not isinstance(value, str):
        return None
    try:
        parse_sort_spec(value)
    except ValueError:
        return None
    return value.strip().lower()


def _load_time_field(data: dict[str, object]) -> str:
    value = data.get("time_field")
    if isinstance(value, str) and value.strip().lower() in TIME_FIELD_LETTERS:
        return value.strip().lower()
    return "w"


def _load_theme(data: dict[str, object]) -> str | None:
    value = data.get("theme")
    if not isinstance(value, str) or not value.strip():
        return None
    return normalize_theme_name(value)


def load_listing_defaults() -> ListingDefaults:
    """Return validated listing defaults; bad values fall back field by field."""
    data = load_config()
    return ListingDefaults(
        threads=_load_threads(data),
        recurse=_load_bool(data, "recurse"),
        wide=_load_bool(data, "wide"),
        bare=_load_bool(data, "bare"),
        sort=_load_sort(data),
        time_field=_load_time_field(data),
        theme=_load_theme(data),
        no_color=_load_bool(data, "no_color"),
    )


def save_listing_defaults(defaults: ListingDefaults) -> None:
    """Persist ``defaults``, keeping unrelated keys already in the file."""
    config = load_config()
    for key, value in asdict(defaults).items():
        if value is None:
            config.pop(key, None)
        else:
            config[key] = value
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_FILENAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "ListingDefaults",
    "load_config",
    "load_listing_defaults",
    "save_config",
    "save_listing_defaults",
]
