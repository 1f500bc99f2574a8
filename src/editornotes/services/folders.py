from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from editornotes.logging_utils import get_logger

_LOGGER = get_logger(__name__)

DEFAULT_DOCUMENTATION_FOLDER = "Documentation"
DEFAULT_NOTE_FILE = "note.txt"


def documentation_dir(project_root: str | Path, folder_name: str = DEFAULT_DOCUMENTATION_FOLDER) -> Path:
    return Path(project_root) / folder_name


def default_note_path(
    project_root: str | Path,
    folder_name: str = DEFAULT_DOCUMENTATION_FOLDER,
    file_name: str = DEFAULT_NOTE_FILE,
) -> Path:
    return documentation_dir(project_root, folder_name) / file_name


def folder_open_command(folder: str | Path, platform: str | None = None) -> list[str]:
    platform = platform or sys.platform
    target = str(folder)
    if platform.startswith("win"):
        return ["explorer", target]
    if platform == "darwin":
        return ["open", target]
    return ["xdg-open", target]


def open_folder(folder: str | Path) -> bool:
    """Hand ``folder`` to the OS file manager. A missing folder is only a warning."""
    path = Path(folder)
    if not path.is_dir():
        _LOGGER.warning("Folder %s does not exist; trying to open it anyway", path)
    command = folder_open_command(path)
    try:
        subprocess.Popen(command)
    except OSError:
        _LOGGER.exception("Could not launch file manager: %s", " ".join(command))
        return False
    _LOGGER.info("Opened folder %s", path)
    return True
