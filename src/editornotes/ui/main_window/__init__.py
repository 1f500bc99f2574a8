from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .window import EditorNotesWindow as EditorNotesWindow

__all__ = ["EditorNotesWindow"]


def __getattr__(name: str):
    if name == "EditorNotesWindow":
        from .window import EditorNotesWindow as _EditorNotesWindow

        return _EditorNotesWindow
    raise AttributeError(name)
