from __future__ import annotations

import argparse
import sys
import traceback
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QtMsgType, qInstallMessageHandler
from PySide6.QtWidgets import QApplication

from .app_settings import get_crash_logs_file_path, get_debug_logs_file_path, load_settings
from .logging_utils import configure_app_logging, get_logger
from .services.folders import documentation_dir, open_folder
from .ui.main_window import EditorNotesWindow

LOGGER = get_logger(__name__)


def _save_crash_traceback(traceback_text: str) -> None:
    try:
        path = get_crash_logs_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as handle:
            handle.write(traceback_text.rstrip("\n"))
            handle.write("\n\n")
    except OSError:
        LOGGER.warning("Could not append to crash log", exc_info=True)


def _install_exception_hooks() -> None:
    def _handle_exception(exc_type, exc_value, exc_tb) -> None:
        error_text = "".join(traceback.format_exception(exc_type, exc_value, exc_tb)).strip()
        LOGGER.error("Unhandled exception routed to global hook", exc_info=(exc_type, exc_value, exc_tb))
        _save_crash_traceback(error_text)

    sys.excepthook = _handle_exception

    def _qt_message_handler(mode, context, message) -> None:
        if mode in (QtMsgType.QtCriticalMsg, QtMsgType.QtFatalMsg):
            LOGGER.error("[Qt] %s", message)
        elif mode == QtMsgType.QtWarningMsg:
            LOGGER.warning("[Qt] %s", message)
        else:
            LOGGER.debug("[Qt] %s", message)

    qInstallMessageHandler(_qt_message_handler)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="editornotes", add_help=True)
    parser.add_argument(
        "--project-root",
        default=".",
        help="Project directory whose Documentation folder holds the note (default: current directory).",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level.")
    parser.add_argument(
        "--open-docs",
        action="store_true",
        help="Open the project's Documentation folder in the file manager and exit.",
    )
    parser.add_argument(
        "--open-project",
        action="store_true",
        help="Open the project folder in the file manager and exit.",
    )
    return parser


def main(project_root: str | Path = ".", existing_app: Optional[QApplication] = None, settings: dict | None = None) -> EditorNotesWindow:
    owns_app = existing_app is None
    app = existing_app or QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Editor Notes")
    settings = settings if settings is not None else load_settings()
    LOGGER.info("App main() starting (owns_app=%s, project_root=%s)", owns_app, project_root)

    window = EditorNotesWindow(project_root, settings)
    app.aboutToQuit.connect(window.notes_panel.handle_close)
    window.show()
    return window


def parse_startup_args(argv: list[str] | None = None) -> tuple[argparse.Namespace, list[str]]:
    """Split our own options from the ones left for Qt (e.g. ``-style``)."""
    parser = build_arg_parser()
    args, qt_args = parser.parse_known_args(sys.argv[1:] if argv is None else argv)
    project_root = Path(args.project_root).expanduser()
    if not project_root.is_dir():
        parser.error(f"project root {project_root} is not a directory")
    args.project_root = project_root
    return args, qt_args


def run(argv: list[str] | None = None) -> int:
    args, qt_args = parse_startup_args(argv)
    project_root = args.project_root

    settings = load_settings()
    log_file = get_debug_logs_file_path() if settings.get("save_debug_logs_to_appdata") else None
    configure_app_logging(args.log_level or settings.get("log_level", "INFO"), log_file)
    LOGGER.debug("Parsed startup args: parsed=%s qt=%s", args, qt_args)

    if args.open_docs or args.open_project:
        ok = True
        if args.open_docs:
            ok = open_folder(documentation_dir(project_root, settings["documentation_folder_name"])) and ok
        if args.open_project:
            ok = open_folder(project_root) and ok
        return 0 if ok else 1

    _install_exception_hooks()
    app = QApplication([sys.argv[0], *qt_args])
    app.setQuitOnLastWindowClosed(True)
    window = main(project_root, app, settings)
    LOGGER.debug("Entering Qt event loop for %s", window.windowTitle())
    return app.exec()
