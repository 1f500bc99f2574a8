from __future__ import annotations

from ..logging_utils import normalize_log_level_name
from .defaults import SETTINGS_SCHEMA_VERSION, build_default_settings


def coerce_bool(value, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off", ""}:
            return False
    return default


def _coerce_int_clamped(value: object, default: int, min_value: int, max_value: int) -> int:
    try:
        num = int(value)  # type: ignore[arg-type]
    except Exception:
        num = default
    return max(min_value, min(max_value, num))


def _coerce_plain_name(value: object, default: str) -> str:
    # A single path component; anything that would escape the project root falls back.
    text = str(value or "").strip()
    if not text or text in {".", ".."} or "/" in text or "\\" in text:
        return default
    return text


def migrate_settings(settings: dict) -> dict:
    current = dict(settings)
    defaults = build_default_settings()
    for key, value in defaults.items():
        current.setdefault(key, value)

    current["documentation_folder_name"] = _coerce_plain_name(
        current.get("documentation_folder_name"), defaults["documentation_folder_name"]
    )
    current["note_file_name"] = _coerce_plain_name(current.get("note_file_name"), defaults["note_file_name"])
    current["autosave_on_close"] = coerce_bool(current.get("autosave_on_close"), True)
    current["restore_session"] = coerce_bool(current.get("restore_session"), True)
    current["scroll_sync_interval_ms"] = _coerce_int_clamped(current.get("scroll_sync_interval_ms"), 100, 20, 2000)
    current["assumed_line_height_px"] = _coerce_int_clamped(current.get("assumed_line_height_px"), 15, 8, 64)
    current["min_visible_lines"] = _coerce_int_clamped(current.get("min_visible_lines"), 20, 1, 200)
    current["log_level"] = normalize_log_level_name(current.get("log_level"))
    current["save_debug_logs_to_appdata"] = coerce_bool(current.get("save_debug_logs_to_appdata"), False)
    current["settings_schema_version"] = SETTINGS_SCHEMA_VERSION
    return current
