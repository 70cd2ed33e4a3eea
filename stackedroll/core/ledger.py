import logging
from typing import Any, List, Optional

from .autocorrect import NameSuggester
from .materialize import MaterializedView, PlayerRecord, materialize
from .names import normalize
from .store import StackedRollStore
from .thresholds import parse_points


class PointsLedger:
    """Alias aware point lookups and updates on top of the stored data.

    Holds the materialized view of the store. Names are resolved through the
    alias index built alongside the per-player alias lists, so lookups and
    the overview always agree on who an alias belongs to.
    """

    def __init__(self, store: StackedRollStore) -> None:
        self.store = store
        self.view = MaterializedView()

    def rebuild(self) -> None:
        logging.debug("Materializing stacked roll data")
        self.view = materialize(self.store.points(), self.store.aliases())

    def reset(self) -> None:
        self.view = MaterializedView()

    def resolve(self, name: Any) -> str:
        normalized = normalize(name)
        return self.view.alias_index.get(normalized, normalized)

    def player(self, name: Any) -> Optional[PlayerRecord]:
        return self.view.details.get(self.resolve(name))

    def players(self) -> List[PlayerRecord]:
        return [self.view.details[name] for name in sorted(self.view.details)]

    def get_points(self, name: Any, default: Any = None) -> Any:
        record = self.player(name)
        if record is None:
            return default
        return record.points

    def set_points(self, name: Any, points: Any) -> None:
        parsed = parse_points(points)
        if not parsed.ok:
            raise ValueError(parsed.reason)

        record = self.player(name)
        if record is None:
            return
        record.points = parsed.value
        self.store.set_points(record.name, parsed.value)

    def modify_points(self, name: Any, change: int) -> None:
        record = self.player(name)
        if record is None:
            return
        self.set_points(record.name, record.points + change)

    def suggest(self, name: Any) -> List[str]:
        """Close player or alias names, aliases labelled with their player."""
        suggester = NameSuggester(
            [(record.name, record.name) for record in self.players()]
            + list(self.view.alias_index.items())
        )
        suggestions = []
        for candidate in suggester.suggest(name):
            main = suggester.main_for(candidate)
            suggestions.append(candidate if main == candidate else f"{candidate} ({main})")
        return suggestions
