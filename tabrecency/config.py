"""Persistent JSON config helpers.

Stores the debounce override and the default log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .constants import DEBOUNCE_MS

APP_NAME = "tabrecency"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    debounce_ms: int = DEBOUNCE_MS
    log_level: str = DEFAULT_LOG_LEVEL


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object], path: Path | None = None) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", config_path, exc)


def _coerce_debounce_ms(value: object) -> int | None:
    """Accept non-negative integers only; booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


def _coerce_log_level(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    name = value.strip().upper()
    return name if name in LOG_LEVEL_NAMES else None


def load_settings(path: Path | None = None) -> Settings:
    """Build ``Settings`` from config, dropping invalid values individually."""
    data = load_config(path)
    debounce_ms = _coerce_debounce_ms(data.get("debounce_ms"))
    log_level = _coerce_log_level(data.get("log_level"))
    return Settings(
        debounce_ms=DEBOUNCE_MS if debounce_ms is None else debounce_ms,
        log_level=DEFAULT_LOG_LEVEL if log_level is None else log_level,
    )
