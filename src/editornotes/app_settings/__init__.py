"""Shared application settings helpers."""

from .coercion import coerce_bool, migrate_settings
from .defaults import build_default_settings
from .paths import (
    get_crash_logs_file_path,
    get_debug_logs_file_path,
    get_session_dir_path,
    get_settings_file_path,
)
from .store import load_settings, save_settings

__all__ = [
    "build_default_settings",
    "coerce_bool",
    "migrate_settings",
    "load_settings",
    "save_settings",
    "get_crash_logs_file_path",
    "get_debug_logs_file_path",
    "get_session_dir_path",
    "get_settings_file_path",
]
