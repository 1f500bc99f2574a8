from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

LOG_LEVEL_OPTIONS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "INFO"


class _EditorNotesLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created)
        time_text = timestamp.strftime("%H:%M:%S.%f")[:-3]
        date_text = f"{timestamp.month}/{timestamp.day}/{timestamp.year}"
        level_text = str(record.levelname or "INFO").capitalize()
        message = record.getMessage()
        name = str(record.name or "").strip()
        if name:
            message = f"[{name}] {message}"
        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            if exc_text:
                message = f"{message}\n{exc_text}"
        return f"[{level_text}] [{time_text} {date_text}] {message}"


def normalize_log_level_name(value: object, default: str = DEFAULT_LOG_LEVEL) -> str:
    text = str(value or "").strip().upper()
    return text if text in LOG_LEVEL_OPTIONS else str(default).strip().upper()


def get_level_number(value: object, default: str = DEFAULT_LOG_LEVEL) -> int:
    return int(getattr(logging, normalize_log_level_name(value, default), logging.INFO))


def _find_tagged_handler(root_logger: logging.Logger, tag: str) -> logging.Handler | None:
    for existing in root_logger.handlers:
        if getattr(existing, tag, False):
            return existing
    return None


def configure_app_logging(level: object = DEFAULT_LOG_LEVEL, log_file: Path | None = None) -> str:
    """Install the console handler once and (re)apply the root level.

    When ``log_file`` is given a file handler is attached as well; calling again
    with a different file swaps it.
    """
    level_name = normalize_log_level_name(level)
    root_logger = logging.getLogger()
    handler = _find_tagged_handler(root_logger, "_editornotes_console_handler")
    if handler is None:
        handler = logging.StreamHandler(sys.__stdout__)
        handler._editornotes_console_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(_EditorNotesLogFormatter())
        root_logger.addHandler(handler)

    file_handler = _find_tagged_handler(root_logger, "_editornotes_file_handler")
    if file_handler is not None and (log_file is None or Path(file_handler.baseFilename) != log_file.resolve()):  # type: ignore[attr-defined]
        root_logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
    if log_file is not None and file_handler is None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError:
            root_logger.warning("Could not open debug log file %s", log_file, exc_info=True)
        else:
            file_handler._editornotes_file_handler = True  # type: ignore[attr-defined]
            file_handler.setFormatter(_EditorNotesLogFormatter())
            root_logger.addHandler(file_handler)

    root_logger.setLevel(get_level_number(level_name))
    logging.captureWarnings(True)
    return level_name


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
