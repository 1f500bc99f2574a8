from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from editornotes.logging_utils import get_logger

_LOGGER = get_logger(__name__)

NOTE_ENCODING = "utf-8"


@dataclass
class NoteSessionState:
    text: str = ""
    path: str = ""
    has_path: bool = False
    saved_text: str = ""
    saved_at: str = ""


def read_note_text(path: str | Path) -> str:
    # newline="" keeps the buffer byte-for-byte; no CRLF translation.
    with open(path, "r", encoding=NOTE_ENCODING, newline="") as handle:
        return handle.read()


def write_note_text(path: str | Path, text: str) -> None:
    with open(path, "w", encoding=NOTE_ENCODING, newline="") as handle:
        handle.write(text)


def line_endings(text: str) -> list[str]:
    """Terminator of every line in ``text``, in order (CRLF or LF)."""
    endings = []
    for index, char in enumerate(text):
        if char == "\n":
            endings.append("\r\n" if index and text[index - 1] == "\r" else "\n")
    return endings


def to_editor_text(text: str) -> str:
    return text.replace("\r\n", "\n")


def from_editor_text(editor_text: str, endings: list[str]) -> str:
    """Re-apply the file's line endings, line by line, to LF-only editor text.

    Lines past the known endings get the file's majority style.
    """
    if not endings:
        return editor_text
    default = "\r\n" if endings.count("\r\n") > len(endings) // 2 else "\n"
    lines = editor_text.split("\n")
    parts = [lines[0]]
    for index, line in enumerate(lines[1:]):
        parts.append(endings[index] if index < len(endings) else default)
        parts.append(line)
    return "".join(parts)


class NoteDocument:
    """A single free-text note and the file it was last saved to or loaded from.

    The buffer is mutated in place by the editor; ``saved_text`` mirrors what is
    on disk so the panel can show a dirty marker and offer Revert.
    """

    def __init__(self) -> None:
        self.text = ""
        self.path: str | None = None
        self.has_path = False
        self.saved_text = ""

    @property
    def can_save(self) -> bool:
        return self.has_path and bool(self.path)

    @property
    def is_dirty(self) -> bool:
        return self.text != self.saved_text

    def display_name(self) -> str:
        if not self.can_save:
            return "Unsaved note"
        return Path(self.path or "").name

    def new(self) -> None:
        self.text = ""
        self.path = None
        self.has_path = False
        self.saved_text = ""
        _LOGGER.debug("New blank note")

    def load(self, path: str | Path) -> bool:
        """Read ``path`` into the buffer. Falls back to a blank note when missing."""
        file_path = Path(path)
        if not file_path.exists():
            _LOGGER.warning("Note file %s does not exist; starting a new note", file_path)
            self.new()
            return False
        text = read_note_text(file_path)
        self.text = text
        self.saved_text = text
        self.path = str(file_path)
        self.has_path = True
        _LOGGER.info("Loaded note %s (%d chars)", file_path, len(text))
        return True

    def save(self) -> bool:
        if not self.can_save:
            _LOGGER.debug("Save skipped; note has no known path")
            return False
        write_note_text(self.path or "", self.text)
        self.saved_text = self.text
        _LOGGER.info("Saved note %s (%d chars)", self.path, len(self.text))
        return True

    def save_as(self, path: str | Path) -> None:
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        write_note_text(file_path, self.text)
        self.path = str(file_path)
        self.has_path = True
        self.saved_text = self.text
        _LOGGER.info("Saved note as %s (%d chars)", file_path, len(self.text))

    def close(self) -> bool:
        """Write the buffer to the known path one last time; failures are only logged."""
        if not self.can_save:
            return False
        try:
            self.save()
        except OSError:
            _LOGGER.exception("Autosave on close failed for %s", self.path)
            return False
        return True

    def revert(self) -> None:
        self.text = self.saved_text

    def editor_text(self) -> str:
        return to_editor_text(self.text)

    def set_editor_text(self, editor_text: str) -> None:
        """Take LF-only text from the editor, keeping the line endings the file had."""
        self.text = from_editor_text(editor_text, line_endings(self.saved_text))

    def snapshot(self) -> NoteSessionState:
        return NoteSessionState(
            text=self.text,
            path=self.path or "",
            has_path=self.has_path,
            saved_text=self.saved_text,
            saved_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        )

    def restore(self, state: NoteSessionState) -> None:
        """Adopt a session snapshot, letting newer file content on disk win.

        When the file changed since the snapshot, a clean snapshot is replaced by
        the disk content; a dirty one keeps its edits but is now dirty against disk.
        """
        self.text = state.text
        self.path = state.path or None
        self.has_path = bool(state.has_path and state.path)
        self.saved_text = state.saved_text
        if not self.can_save or not Path(self.path or "").is_file():
            return
        disk_text = read_note_text(self.path or "")
        if disk_text == state.saved_text:
            return
        self.saved_text = disk_text
        if state.text == state.saved_text:
            self.text = disk_text
            _LOGGER.info("Note %s changed on disk; reloaded it over the session snapshot", self.path)
        else:
            _LOGGER.warning("Note %s changed on disk; keeping unsaved session edits", self.path)
