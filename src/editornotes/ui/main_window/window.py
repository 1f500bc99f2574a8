from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QLabel, QMainWindow

from editornotes.app_settings import get_session_dir_path, save_settings
from editornotes.logging_utils import get_logger
from editornotes.services.folders import open_folder
from editornotes.services.session_state import SessionStateStore
from editornotes.ui.notes_panel import NotesDock, NotesPanel

_LOGGER = get_logger(__name__)


class EditorNotesWindow(QMainWindow):
    def __init__(
        self,
        project_root: str | Path,
        settings: dict,
        session_store: SessionStateStore | None = None,
        settings_path: Path | None = None,
    ) -> None:
        super().__init__()
        self.project_root = Path(project_root)
        self.settings = settings
        self.settings_path = settings_path
        self.session_store = session_store or SessionStateStore(get_session_dir_path())
        self.setWindowTitle(f"Editor Notes - {self.project_root.name or self.project_root}")
        self.resize(900, 640)

        project_label = QLabel(str(self.project_root.resolve()), self)
        project_label.setAlignment(Qt.AlignCenter)
        self.setCentralWidget(project_label)

        self.notes_panel = NotesPanel(self.project_root, self.settings, self.session_store, self)
        self.notes_dock = NotesDock(self.notes_panel, self)
        self.addDockWidget(Qt.RightDockWidgetArea, self.notes_dock)

        self._build_menus()
        _LOGGER.info("Editor Notes window ready for %s", self.project_root)

    def _build_menus(self) -> None:
        docs_menu = self.menuBar().addMenu("&Documentation")
        self.open_docs_action = QAction("Open Documentation Folder", self)
        self.open_docs_action.triggered.connect(self.open_documentation_folder)
        self.open_project_action = QAction("Open Project Folder", self)
        self.open_project_action.triggered.connect(self.open_project_folder)
        self.show_notes_action = QAction("Notes", self)
        self.show_notes_action.setShortcut("Ctrl+Shift+N")
        self.show_notes_action.triggered.connect(self.show_notes)
        docs_menu.addAction(self.open_docs_action)
        docs_menu.addAction(self.open_project_action)
        docs_menu.addSeparator()
        docs_menu.addAction(self.show_notes_action)

    def open_documentation_folder(self) -> bool:
        return open_folder(self.notes_panel.documentation_dir())

    def open_project_folder(self) -> bool:
        return open_folder(self.project_root)

    def show_notes(self) -> None:
        self.notes_dock.show()
        self.notes_dock.raise_()
        self.notes_panel.text_edit.setFocus()

    def save_settings_to_disk(self) -> None:
        try:
            save_settings(self.settings, self.settings_path)
        except OSError:
            _LOGGER.exception("Failed to save settings")

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.notes_panel.handle_close()
        self.save_settings_to_disk()
        _LOGGER.info("Editor Notes window closed")
        super().closeEvent(event)
