from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from pathlib import Path

from editornotes.logging_utils import get_logger
from editornotes.services.note_document import NoteSessionState

_LOGGER = get_logger(__name__)


def _atomic_write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    tmp.replace(path)


def window_state_key(project_root: str | Path, window_name: str = "notes") -> str:
    resolved = str(Path(project_root).resolve())
    digest = hashlib.sha1(f"{resolved}|{window_name}".encode("utf-8")).hexdigest()
    return digest[:16]


class SessionStateStore:
    """Keeps the note panel's scalars across restarts, one JSON file per window."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def state_path(self, key: str) -> Path:
        return self.base_dir / f"session_{key}.json"

    def save(self, key: str, state: NoteSessionState) -> None:
        _atomic_write_json(self.state_path(key), asdict(state))
        _LOGGER.debug("Session state saved key=%s has_path=%s", key, state.has_path)

    def load(self, key: str) -> NoteSessionState | None:
        path = self.state_path(key)
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            _LOGGER.warning("Discarding unreadable session state %s", path)
            return None
        if not isinstance(payload, dict):
            return None
        text = payload.get("text", "")
        if not isinstance(text, str):
            return None
        return NoteSessionState(
            text=text,
            path=str(payload.get("path", "") or ""),
            has_path=bool(payload.get("has_path", False)),
            saved_text=str(payload.get("saved_text", "") or ""),
            saved_at=str(payload.get("saved_at", "") or ""),
        )

    def clear(self, key: str) -> None:
        try:
            self.state_path(key).unlink()
        except FileNotFoundError:
            pass
