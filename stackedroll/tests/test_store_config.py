import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from stackedroll.core.config import (
    DEFAULT_RESERVE_THRESHOLD,
    AppConfig,
    load_config,
    save_config,
)
from stackedroll.core.sheets import rows_to_import_text
from stackedroll.core.store import StackedRollStore


def _write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class StoreTests(unittest.TestCase):
    def test_missing_file_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = StackedRollStore(Path(tmpdir) / "missing" / "stacked_roll.json")
            self.assertEqual(store.points(), {})
            self.assertEqual(store.aliases(), {})
            self.assertEqual(store.imported_at(), 0)
            self.assertEqual(store.import_string(), "")

    def test_replace_writes_schema(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "stacked_roll.json"
            store = StackedRollStore(path)
            store.replace({"foo": 10}, {"twink": "foo"}, 123, "Foo,10,Twink")

            data = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(
                data,
                {
                    "StackedRoll": {
                        "Points": {"foo": 10},
                        "Aliases": {"twink": "foo"},
                        "MetaData": {"importedAt": 123, "importString": "Foo,10,Twink"},
                    }
                },
            )
            self.assertFalse(path.with_suffix(".json.tmp").exists())

            reloaded = StackedRollStore(path)
            self.assertEqual(reloaded.points(), {"foo": 10})
            self.assertEqual(reloaded.imported_at(), 123)

    def test_set_points_and_clear(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "stacked_roll.json"
            store = StackedRollStore(path)
            store.replace({"foo": 10}, {}, 123, "Foo,10")
            store.set_points("foo", 20)
            self.assertEqual(StackedRollStore(path).points(), {"foo": 20})

            store.clear()
            reloaded = StackedRollStore(path)
            self.assertEqual(reloaded.points(), {})
            self.assertEqual(reloaded.imported_at(), 0)

    def test_returned_mappings_are_copies(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = StackedRollStore(Path(tmpdir) / "stacked_roll.json")
            store.replace({"foo": 10}, {}, 1, "Foo,10")
            store.points()["bar"] = 5
            self.assertEqual(store.points(), {"foo": 10})

    def test_stored_names_are_normalized_on_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "stacked_roll.json"
            _write_json(
                path,
                {
                    "StackedRoll": {
                        "Points": {" Foo": 10, "foo": 99, "": 3},
                        "Aliases": {"TWINK": "Foo"},
                        "MetaData": {"importedAt": 5, "importString": "Foo,10,Twink"},
                    }
                },
            )
            store = StackedRollStore(path)
            self.assertEqual(store.points(), {"foo": 10})
            self.assertEqual(store.aliases(), {"twink": "Foo"})

            store.set_points("foo", 20)
            self.assertEqual(StackedRollStore(path).points(), {"foo": 20})

    def test_failed_write_keeps_previous_data(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "stacked_roll.json"
            store = StackedRollStore(path)
            store.replace({"foo": 10}, {"twink": "foo"}, 1, "Foo,10,Twink")

            with patch("stackedroll.core.store.os.replace", side_effect=OSError("disk full")):
                with self.assertRaises(OSError):
                    store.set_points("foo", 20)
                with self.assertRaises(OSError):
                    store.replace({"bar": 5}, {}, 2, "Bar,5")
                with self.assertRaises(OSError):
                    store.clear()

            self.assertEqual(store.points(), {"foo": 10})
            self.assertEqual(store.aliases(), {"twink": "foo"})
            self.assertEqual(store.imported_at(), 1)
            self.assertEqual(StackedRollStore(path).points(), {"foo": 10})

    def test_corrupt_file_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "stacked_roll.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertLogs(level="WARNING"):
                store = StackedRollStore(path)
            self.assertEqual(store.points(), {})

    def test_unexpected_shapes_fall_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "stacked_roll.json"
            _write_json(
                path,
                {"StackedRoll": {"Points": [], "Aliases": {"a": "b"}, "MetaData": {"importedAt": "x"}}},
            )
            store = StackedRollStore(path)
            self.assertEqual(store.points(), {})
            self.assertEqual(store.aliases(), {"a": "b"})
            self.assertEqual(store.imported_at(), 0)


class ConfigTests(unittest.TestCase):
    def test_defaults_when_missing_or_corrupt(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "settings.json"
            self.assertEqual(load_config(path), AppConfig())
            path.write_text("not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())
            self.assertEqual(AppConfig().reserve_threshold, DEFAULT_RESERVE_THRESHOLD)

    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config" / "settings.json"
            cfg = AppConfig(enabled=False, reserve_threshold=250, spreadsheet_id="abc")
            save_config(cfg, path)
            self.assertEqual(load_config(path), cfg)

    def test_reserve_threshold_is_sanitised(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "settings.json"
            _write_json(path, {"reserve_threshold": -20})
            self.assertEqual(load_config(path).reserve_threshold, 0)
            _write_json(path, {"reserve_threshold": "lots"})
            self.assertEqual(load_config(path).reserve_threshold, DEFAULT_RESERVE_THRESHOLD)


class SheetTextTests(unittest.TestCase):
    def test_rows_to_import_text(self) -> None:
        rows = [["Foo", "10", "Twink"], ["", ""], ["Bar\tBaz", " 5 "]]
        self.assertEqual(rows_to_import_text(rows), "Foo\t10\tTwink\nBar Baz\t5")


if __name__ == "__main__":
    unittest.main()
