import json
import shutil
import sys
import time
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from editornotes.app_settings import build_default_settings, coerce_bool, load_settings, migrate_settings, save_settings


class SettingsMigrationTests(unittest.TestCase):
    def test_missing_keys_get_defaults(self) -> None:
        migrated = migrate_settings({})
        self.assertEqual(migrated, build_default_settings())

    def test_invalid_values_are_clamped_or_defaulted(self) -> None:
        source = {
            "scroll_sync_interval_ms": 1,
            "assumed_line_height_px": "huge",
            "min_visible_lines": 9999,
            "log_level": "chatty",
            "autosave_on_close": "off",
            "documentation_folder_name": "../outside",
            "note_file_name": "  ",
        }
        migrated = migrate_settings(source)
        self.assertEqual(migrated["scroll_sync_interval_ms"], 20)
        self.assertEqual(migrated["assumed_line_height_px"], 15)
        self.assertEqual(migrated["min_visible_lines"], 200)
        self.assertEqual(migrated["log_level"], "INFO")
        self.assertFalse(migrated["autosave_on_close"])
        self.assertEqual(migrated["documentation_folder_name"], "Documentation")
        self.assertEqual(migrated["note_file_name"], "note.txt")

    def test_unknown_keys_preserved(self) -> None:
        migrated = migrate_settings({"my_custom_flag": "x"})
        self.assertEqual(migrated["my_custom_flag"], "x")

    def test_coerce_bool(self) -> None:
        self.assertTrue(coerce_bool("Yes"))
        self.assertFalse(coerce_bool("0", default=True))
        self.assertTrue(coerce_bool("maybe", default=True))
        self.assertTrue(coerce_bool(1))


class SettingsStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = ROOT / "tests_tmp" / f"settings_store_{time.time_ns()}"
        self.tmp.mkdir(parents=True, exist_ok=True)

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_missing_file_returns_defaults(self) -> None:
        self.assertEqual(load_settings(self.tmp / "settings.json"), build_default_settings())

    def test_unreadable_file_returns_defaults(self) -> None:
        path = self.tmp / "settings.json"
        path.write_text("{oops", encoding="utf-8")
        with self.assertLogs("editornotes.app_settings.store", level="ERROR"):
            self.assertEqual(load_settings(path), build_default_settings())

    def test_save_then_load(self) -> None:
        path = self.tmp / "nested" / "settings.json"
        settings = build_default_settings()
        settings["min_visible_lines"] = 7
        save_settings(settings, path)
        self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["min_visible_lines"], 7)
        self.assertEqual(load_settings(path)["min_visible_lines"], 7)


if __name__ == "__main__":
    unittest.main()
