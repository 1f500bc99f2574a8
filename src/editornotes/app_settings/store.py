from __future__ import annotations

import json
from pathlib import Path

from ..logging_utils import get_logger
from .coercion import migrate_settings
from .defaults import build_default_settings
from .paths import get_settings_file_path

_LOGGER = get_logger(__name__)


def load_settings(path: Path | None = None) -> dict:
    path = path or get_settings_file_path()
    if not path.exists():
        _LOGGER.debug("No settings file at %s; using defaults", path)
        return build_default_settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        _LOGGER.exception("Failed to read settings file %s; using defaults", path)
        return build_default_settings()
    if not isinstance(data, dict):
        _LOGGER.warning("Settings file %s does not hold an object; using defaults", path)
        return build_default_settings()
    return migrate_settings(data)


def save_settings(settings: dict, path: Path | None = None) -> None:
    path = path or get_settings_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2, ensure_ascii=False), encoding="utf-8")
    _LOGGER.debug("Settings written to %s", path)
