import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_data_dir

from .names import normalize

ROOT_KEY = "StackedRoll"


def default_store_path() -> Path:
    base = Path(user_data_dir("stacked_roll_manager"))
    return base / "stacked_roll.json"


def _empty_document() -> Dict[str, Any]:
    return {
        "Points": {},
        "Aliases": {},
        "MetaData": {"importedAt": 0, "importString": ""},
    }


def _normalized_keys(values: Dict[str, Any]) -> Dict[str, Any]:
    # First spelling of a name wins, matching materialize()
    normalized: Dict[str, Any] = {}
    for key, value in values.items():
        name = normalize(key)
        if name and name not in normalized:
            normalized[name] = value
    return normalized


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


class StackedRollStore:
    """JSON backed storage for imported stacked roll data.

    The document is rewritten through a temp file on every change, so a
    reader never sees half an import.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or default_store_path()
        self._data: Dict[str, Any] = _empty_document()
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logging.warning("Ignoring unreadable stacked roll data at %s", self.path)
            return

        section = raw.get(ROOT_KEY, {}) if isinstance(raw, dict) else {}
        if not isinstance(section, dict):
            section = {}
        data = _empty_document()
        if isinstance(section.get("Points"), dict):
            data["Points"] = _normalized_keys(section["Points"])
        if isinstance(section.get("Aliases"), dict):
            data["Aliases"] = _normalized_keys(section["Aliases"])
        if isinstance(section.get("MetaData"), dict):
            data["MetaData"].update(section["MetaData"])
        self._data = data

    def _save(self, data: Dict[str, Any]) -> None:
        _ensure_parent(self.path)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps({ROOT_KEY: data}, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)
        self._data = data

    def points(self) -> Dict[str, Any]:
        return dict(self._data["Points"])

    def aliases(self) -> Dict[str, Any]:
        return dict(self._data["Aliases"])

    def imported_at(self) -> int:
        value = self._data["MetaData"].get("importedAt", 0)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        return int(value)

    def import_string(self) -> str:
        return str(self._data["MetaData"].get("importString", ""))

    def replace(
        self,
        points: Dict[str, int],
        aliases: Dict[str, str],
        imported_at: int,
        import_string: str,
    ) -> None:
        self._save(
            {
                "Points": dict(points),
                "Aliases": dict(aliases),
                "MetaData": {"importedAt": int(imported_at), "importString": import_string},
            }
        )

    def set_points(self, name: str, points: int) -> None:
        data = dict(self._data)
        data["Points"] = dict(self._data["Points"])
        data["Points"][name] = int(points)
        self._save(data)

    def clear(self) -> None:
        self._save(_empty_document())
