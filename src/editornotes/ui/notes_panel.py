from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QTimer, Signal
from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import (
    QDockWidget,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from editornotes.app_settings import build_default_settings
from editornotes.logging_utils import get_logger
from editornotes.services.folders import default_note_path, documentation_dir
from editornotes.services.note_document import NoteDocument
from editornotes.services.scroll_sync import cursor_line_index, scroll_offset_for_span
from editornotes.services.session_state import SessionStateStore, window_state_key

_LOGGER = get_logger(__name__)

NOTE_FILE_FILTER = "Text Files (*.txt);;All Files (*)"


class NotesPanel(QWidget):
    """Note editor with New / Load / Save As / Save / Revert over one text file."""

    state_changed = Signal()

    def __init__(
        self,
        project_root: str | Path,
        settings: dict | None = None,
        session_store: SessionStateStore | None = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.project_root = Path(project_root)
        self.settings = settings if settings is not None else build_default_settings()
        self.session_store = session_store
        self.session_key = window_state_key(self.project_root, "notes")
        self.document = NoteDocument()
        self._applying_document = False
        self._last_synced_cursor: tuple[int, int] | None = None

        self.new_button = QPushButton("New", self)
        self.load_button = QPushButton("Load", self)
        self.save_as_button = QPushButton("Save As", self)
        self.save_button = QPushButton("Save", self)
        self.revert_button = QPushButton("Revert", self)
        self.new_button.clicked.connect(self.new_note)
        self.load_button.clicked.connect(lambda: self.load_note())
        self.save_as_button.clicked.connect(lambda: self.save_note_as())
        self.save_button.clicked.connect(self.save_note)
        self.revert_button.clicked.connect(self.revert_note)

        self.text_edit = QTextEdit(self)
        self.text_edit.setAcceptRichText(False)
        self.text_edit.setPlaceholderText("Type your notes here...")
        self.text_edit.textChanged.connect(self._on_text_changed)
        self._apply_min_visible_lines()

        self.path_label = QLabel(self)
        self.cursor_label = QLabel(self)

        buttons = QHBoxLayout()
        buttons.setContentsMargins(0, 0, 0, 0)
        for button in (self.new_button, self.load_button, self.save_as_button, self.save_button, self.revert_button):
            buttons.addWidget(button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addLayout(buttons)
        layout.addWidget(self.text_edit, 1)
        status = QHBoxLayout()
        status.setContentsMargins(0, 0, 0, 0)
        status.addWidget(self.path_label, 1)
        status.addWidget(self.cursor_label)
        layout.addLayout(status)

        self.scroll_timer = QTimer(self)
        self.scroll_timer.setInterval(int(self.settings.get("scroll_sync_interval_ms", 100)))
        self.scroll_timer.timeout.connect(self.sync_scroll_to_cursor)
        self.scroll_timer.start()

        self.restore_initial_state()

    # ---------- Startup ----------
    def default_note_path(self) -> Path:
        return default_note_path(
            self.project_root,
            self.settings.get("documentation_folder_name", "Documentation"),
            self.settings.get("note_file_name", "note.txt"),
        )

    def documentation_dir(self) -> Path:
        return documentation_dir(self.project_root, self.settings.get("documentation_folder_name", "Documentation"))

    def restore_initial_state(self) -> str:
        """Session snapshot first, then the default note file, then a blank note."""
        state = None
        if self.session_store is not None and self.settings.get("restore_session", True):
            state = self.session_store.load(self.session_key)
        if state is not None:
            self.document.restore(state)
            self._apply_document_to_editor()
            _LOGGER.info("Restored note session (has_path=%s)", self.document.has_path)
            return "session"
        path = self.default_note_path()
        if path.exists():
            self.document.load(path)
            self._apply_document_to_editor()
            return "default"
        _LOGGER.info("No default note at %s; starting blank", path)
        self.new_note()
        return "new"

    # ---------- Actions ----------
    def new_note(self) -> None:
        self.document.new()
        if self.session_store is not None:
            self.session_store.clear(self.session_key)
        self._apply_document_to_editor()
        self._apply_min_visible_lines()
        self.text_edit.setFocus()
        self.text_edit.selectAll()

    def load_note(self, path: str | Path | None = None) -> bool:
        if path is None:
            path = self._prompt_open_path()
            if not path:
                return False
        loaded = self.document.load(path)
        self._apply_document_to_editor()
        if not loaded:
            self.text_edit.setFocus()
        return loaded

    def save_note(self) -> bool:
        saved = self.document.save()
        self._update_state()
        return saved

    def save_note_as(self, path: str | Path | None = None) -> bool:
        if path is None:
            path = self._prompt_save_path()
            if not path:
                return False
        target = Path(path)
        if not target.suffix:
            target = target.with_suffix(".txt")
        self.document.save_as(target)
        self._update_state()
        return True

    def revert_note(self) -> None:
        self.document.revert()
        self._apply_document_to_editor()

    def handle_close(self) -> None:
        if self.settings.get("autosave_on_close", True):
            self.document.close()
        if self.session_store is not None and self.settings.get("restore_session", True):
            try:
                self.session_store.save(self.session_key, self.document.snapshot())
            except OSError:
                _LOGGER.exception("Could not persist note session state")
        self._update_state()

    # ---------- Dialogs ----------
    def _prompt_open_path(self) -> str:
        start_dir = self.documentation_dir()
        if not start_dir.is_dir():
            start_dir = self.project_root
        path, _ = QFileDialog.getOpenFileName(self, "Load Note", str(start_dir), NOTE_FILE_FILTER)
        return path

    def _prompt_save_path(self) -> str:
        suggested = Path(self.document.path) if self.document.can_save else self.default_note_path()
        path, _ = QFileDialog.getSaveFileName(self, "Save Note As", str(suggested), NOTE_FILE_FILTER)
        return path

    # ---------- Editor plumbing ----------
    def _apply_min_visible_lines(self) -> None:
        line_height = int(self.settings.get("assumed_line_height_px", 15))
        lines = int(self.settings.get("min_visible_lines", 20))
        self.text_edit.setMinimumHeight(lines * line_height + 2 * self.text_edit.frameWidth())

    def _apply_document_to_editor(self) -> None:
        self._applying_document = True
        try:
            self.text_edit.setPlainText(self.document.editor_text())
        finally:
            self._applying_document = False
        self._last_synced_cursor = None
        self._update_state()

    def _on_text_changed(self) -> None:
        if self._applying_document:
            return
        self.document.set_editor_text(self._editor_raw_text())
        self._update_state()

    def _update_state(self) -> None:
        self.save_button.setEnabled(self.document.can_save)
        self.revert_button.setEnabled(self.document.is_dirty)
        label = self.document.display_name()
        if self.document.is_dirty:
            label += " *"
        self.path_label.setText(label)
        self.path_label.setToolTip(self.document.path or "")
        self.state_changed.emit()

    def _editor_raw_text(self) -> str:
        # toPlainText() would turn NBSP into a space.
        raw = self.text_edit.document().toRawText()
        return raw.replace("\u2029", "\n").replace("\u2028", "\n")

    def _update_cursor_label(self, text: str, position: int) -> None:
        line = cursor_line_index(text, position)
        line_start = text.rfind("\n", 0, max(0, position)) + 1
        self.cursor_label.setText(f"Ln {line + 1}, Col {position - line_start + 1}")

    def sync_scroll_to_cursor(self, force: bool = False) -> int:
        """Keep the cursor's line inside the viewport; only acts once the cursor moved."""
        cursor = self.text_edit.textCursor()
        marker = (cursor.position(), len(self.document.text))
        bar = self.text_edit.verticalScrollBar()
        if not force and marker == self._last_synced_cursor:
            return bar.value()
        self._last_synced_cursor = marker
        self._update_cursor_label(self._editor_raw_text(), cursor.position())
        # cursorRect is in viewport coordinates.
        rect = self.text_edit.cursorRect(cursor)
        offset = scroll_offset_for_span(
            bar.value() + rect.top(),
            rect.height(),
            bar.value(),
            self.text_edit.viewport().height(),
        )
        if offset != bar.value():
            bar.setValue(offset)
        return bar.value()

    def move_cursor_to(self, position: int) -> None:
        cursor = self.text_edit.textCursor()
        cursor.setPosition(max(0, min(position, len(self._editor_raw_text()))), QTextCursor.MoveMode.MoveAnchor)
        self.text_edit.setTextCursor(cursor)


class NotesDock(QDockWidget):
    def __init__(self, panel: NotesPanel, parent=None) -> None:
        super().__init__("Notes", parent)
        self.setObjectName("NotesDock")
        self.panel = panel
        self.setWidget(panel)
        panel.state_changed.connect(self._refresh_title)
        self._refresh_title()

    def _refresh_title(self) -> None:
        self.setWindowTitle("Notes *" if self.panel.document.is_dirty else "Notes")

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.panel.handle_close()
        super().closeEvent(event)
