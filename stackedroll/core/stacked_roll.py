import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional

from .config import AppConfig
from .events import StackedRollEvents
from .importer import StackedRollImportError, parse_import
from .ledger import PointsLedger
from .sheets import get_rows_from_sheets, rows_to_import_text
from .store import StackedRollStore
from .thresholds import ThresholdCalculator


class StackedRoll:
    """Owns the stacked roll data and routes between the importer and overview.

    Views are attached after construction because they read back from the
    controller. The importer view needs ``draw()``, ``close()`` and
    ``set_status_message(text)``; the overview view ``draw()`` and ``close()``.
    """

    def __init__(
        self,
        store: StackedRollStore,
        config: AppConfig,
        events: Optional[StackedRollEvents] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.config = config
        self.events = events or StackedRollEvents()
        self.clock = clock
        self.ledger = PointsLedger(store)
        self.importer_view = None
        self.overview_view = None

        self.ledger.rebuild()

    def attach_views(self, importer_view, overview_view) -> None:
        self.importer_view = importer_view
        self.overview_view = overview_view

    @property
    def thresholds(self) -> ThresholdCalculator:
        return ThresholdCalculator(self.config.reserve_threshold)

    def enabled(self) -> bool:
        return bool(self.config.enabled)

    def available(self) -> bool:
        return self.store.imported_at() > 0

    def draw(self) -> None:
        if not self.available():
            if self.importer_view is not None:
                self.importer_view.draw()
            return

        if self.overview_view is not None:
            self.overview_view.draw()

    def materialize_data(self) -> None:
        self.ledger.rebuild()

    def import_data(self, raw_text: str, open_overview: bool = False) -> bool:
        try:
            result = parse_import(raw_text, now=int(self.clock()))
        except StackedRollImportError as exc:
            logging.info("Stacked roll import rejected: %s", exc)
            self._set_status(str(exc))
            return False

        self.store.replace(
            points=result.points,
            aliases=result.aliases,
            imported_at=result.metadata.imported_at,
            import_string=result.metadata.import_string,
        )
        self.ledger.rebuild()

        logging.info(
            "Import of stacked roll data successful: %s players, %s aliases, %s lines skipped",
            len(result.points),
            len(result.aliases),
            len(result.skipped_lines),
        )
        self.events.imported.emit()

        # Draw before closing, one view stays visible throughout
        if open_overview:
            self.draw()
        if self.importer_view is not None:
            self.importer_view.close()
        return True

    def import_from_sheet(
        self,
        spreadsheet_id: str,
        range_name: str,
        credentials_path: Path,
        token_path: Path,
        open_overview: bool = False,
    ) -> bool:
        try:
            rows = get_rows_from_sheets(
                spreadsheet_id=spreadsheet_id,
                range_name=range_name,
                credentials_path=credentials_path,
                token_path=token_path,
            )
        except Exception as exc:
            logging.exception("Loading stacked roll data from the sheet failed")
            self._set_status(f"Could not load the sheet: {exc}")
            return False
        return self.import_data(rows_to_import_text(rows), open_overview=open_overview)

    def _wipe(self) -> None:
        self.store.clear()
        self.ledger.reset()
        logging.info("Stacked roll data cleared")

    def clear(self) -> None:
        self._wipe()
        if self.overview_view is not None:
            self.overview_view.close()

    def start_over(self) -> None:
        """Clear all data and bring the importer back up in place of the overview."""
        self._wipe()
        self.draw()
        if self.overview_view is not None:
            self.overview_view.close()

    def get_points(self, name: Any, default: Any = None) -> Any:
        return self.ledger.get_points(name, default)

    def set_points(self, name: Any, points: Any) -> None:
        self.ledger.set_points(name, points)

    def modify_points(self, name: Any, change: int) -> None:
        self.ledger.modify_points(name, change)

    def _set_status(self, message: str) -> None:
        if self.importer_view is not None:
            self.importer_view.set_status_message(message)
