from __future__ import annotations

SETTINGS_SCHEMA_VERSION = 1


def build_default_settings() -> dict:
    return {
        "settings_schema_version": SETTINGS_SCHEMA_VERSION,
        "documentation_folder_name": "Documentation",
        "note_file_name": "note.txt",
        "autosave_on_close": True,
        "restore_session": True,
        "scroll_sync_interval_ms": 100,
        "assumed_line_height_px": 15,
        "min_visible_lines": 20,
        "log_level": "INFO",
        "save_debug_logs_to_appdata": False,
    }
