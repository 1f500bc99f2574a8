import shutil
import sys
import time
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from editornotes.services.note_document import NoteDocument, NoteSessionState, from_editor_text, line_endings


class NoteDocumentTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = ROOT / "tests_tmp" / f"note_document_{time.time_ns()}"
        self.tmp.mkdir(parents=True, exist_ok=True)

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_new_note_is_blank_without_path(self) -> None:
        doc = NoteDocument()
        doc.text = "scratch"
        doc.new()
        self.assertEqual(doc.text, "")
        self.assertIsNone(doc.path)
        self.assertFalse(doc.has_path)
        self.assertFalse(doc.can_save)
        self.assertEqual(doc.display_name(), "Unsaved note")

    def test_save_then_load_round_trips_buffer(self) -> None:
        path = self.tmp / "note.txt"
        text = "first line\r\nsecond line\n\tünïcödé ✓\n"
        doc = NoteDocument()
        doc.text = text
        doc.save_as(path)

        other = NoteDocument()
        self.assertTrue(other.load(path))
        self.assertEqual(other.text, text)
        self.assertEqual(path.read_bytes(), text.encode("utf-8"))

    def test_save_without_path_is_noop(self) -> None:
        doc = NoteDocument()
        doc.text = "nothing to write"
        self.assertFalse(doc.save())
        self.assertEqual(list(self.tmp.iterdir()), [])

    def test_save_as_adopts_path_for_later_saves(self) -> None:
        path = self.tmp / "nested" / "todo.txt"
        doc = NoteDocument()
        doc.text = "v1"
        doc.save_as(path)
        self.assertTrue(doc.can_save)
        self.assertEqual(doc.path, str(path))

        doc.text = "v2"
        self.assertTrue(doc.save())
        self.assertEqual(path.read_text(encoding="utf-8"), "v2")
        self.assertFalse(doc.is_dirty)

    def test_load_missing_file_falls_back_to_new_note(self) -> None:
        doc = NoteDocument()
        doc.text = "left over"
        with self.assertLogs("editornotes.services.note_document", level="WARNING"):
            loaded = doc.load(self.tmp / "missing.txt")
        self.assertFalse(loaded)
        self.assertEqual(doc.text, "")
        self.assertFalse(doc.has_path)

    def test_close_persists_latest_buffer(self) -> None:
        path = self.tmp / "note.txt"
        doc = NoteDocument()
        doc.save_as(path)
        doc.text = "typed after saving"
        self.assertTrue(doc.close())
        self.assertEqual(path.read_text(encoding="utf-8"), "typed after saving")

    def test_close_without_path_writes_nothing(self) -> None:
        doc = NoteDocument()
        doc.text = "unsaved"
        self.assertFalse(doc.close())

    def test_close_swallows_write_errors(self) -> None:
        doc = NoteDocument()
        doc.save_as(self.tmp / "note.txt")
        doc.text = "changed"
        with patch("editornotes.services.note_document.write_note_text", side_effect=PermissionError("denied")):
            with self.assertLogs("editornotes.services.note_document", level="ERROR"):
                self.assertFalse(doc.close())

    def test_save_errors_propagate(self) -> None:
        doc = NoteDocument()
        doc.save_as(self.tmp / "note.txt")
        with patch("editornotes.services.note_document.write_note_text", side_effect=PermissionError("denied")):
            with self.assertRaises(PermissionError):
                doc.save()

    def test_revert_restores_last_saved_text(self) -> None:
        path = self.tmp / "note.txt"
        path.write_text("on disk", encoding="utf-8")
        doc = NoteDocument()
        doc.load(path)
        doc.text = "edited"
        self.assertTrue(doc.is_dirty)
        doc.revert()
        self.assertEqual(doc.text, "on disk")
        self.assertFalse(doc.is_dirty)

    def test_snapshot_and_restore(self) -> None:
        doc = NoteDocument()
        doc.save_as(self.tmp / "note.txt")
        doc.text = "unsaved edit"
        state = doc.snapshot()
        self.assertTrue(state.has_path)
        self.assertTrue(state.saved_at)

        restored = NoteDocument()
        restored.restore(state)
        self.assertEqual(restored.text, "unsaved edit")
        self.assertEqual(restored.path, str(self.tmp / "note.txt"))
        self.assertTrue(restored.is_dirty)

    def test_restore_ignores_flag_without_path(self) -> None:
        doc = NoteDocument()
        doc.restore(NoteSessionState(text="x", path="", has_path=True))
        self.assertFalse(doc.has_path)
        self.assertFalse(doc.can_save)

    def test_editor_text_keeps_file_line_endings(self) -> None:
        path = self.tmp / "note.txt"
        path.write_bytes(b"a\xc2\xa0b\r\nc\n")
        doc = NoteDocument()
        doc.load(path)
        self.assertEqual(doc.editor_text(), "a\u00a0b\nc\n")

        doc.set_editor_text("a\u00a0b\nc\nx")
        doc.save()
        self.assertEqual(path.read_bytes(), b"a\xc2\xa0b\r\nc\nx")

    def test_unchanged_editor_text_is_not_dirty(self) -> None:
        path = self.tmp / "note.txt"
        path.write_bytes(b"one\r\ntwo\r\n")
        doc = NoteDocument()
        doc.load(path)
        doc.set_editor_text(doc.editor_text())
        self.assertFalse(doc.is_dirty)

    def test_new_lines_take_majority_ending(self) -> None:
        endings = line_endings("a\r\nb\r\nc\n")
        self.assertEqual(endings, ["\r\n", "\r\n", "\n"])
        self.assertEqual(from_editor_text("a\nb\nc\nd\ne", endings), "a\r\nb\r\nc\nd\r\ne")
        self.assertEqual(from_editor_text("x\ny", []), "x\ny")

    def test_restore_prefers_newer_file_when_snapshot_clean(self) -> None:
        path = self.tmp / "note.txt"
        path.write_text("edited externally", encoding="utf-8")
        doc = NoteDocument()
        doc.restore(NoteSessionState(text="old", path=str(path), has_path=True, saved_text="old"))
        self.assertEqual(doc.text, "edited externally")
        self.assertFalse(doc.is_dirty)

    def test_restore_keeps_unsaved_edits_but_marks_dirty_against_disk(self) -> None:
        path = self.tmp / "note.txt"
        path.write_text("edited externally", encoding="utf-8")
        doc = NoteDocument()
        doc.restore(NoteSessionState(text="my draft", path=str(path), has_path=True, saved_text="old"))
        self.assertEqual(doc.text, "my draft")
        self.assertTrue(doc.is_dirty)
        doc.revert()
        self.assertEqual(doc.text, "edited externally")


if __name__ == "__main__":
    unittest.main()
