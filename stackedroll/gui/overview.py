from datetime import datetime

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QDialog,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)

from ..core.config import save_config
from ..core.stacked_roll import StackedRoll

COLUMNS = ["Player", "Points", "Roll points", "Roll", "Reserve", "Aliases"]
MAX_POINTS = 2**31 - 1


class OverviewDialog(QDialog):
    def __init__(self, stacked_roll: StackedRoll, parent=None) -> None:
        super().__init__(parent)
        self.stacked_roll = stacked_roll
        self.setWindowTitle("Stacked Roll Overview")
        self.resize(720, 560)

        layout = QVBoxLayout(self)
        self.summary_label = QLabel("")
        self.summary_label.setObjectName("SectionTitle")
        layout.addWidget(self.summary_label)

        options_row = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search player or alias")
        self.search_input.textChanged.connect(lambda _text: self._render())
        options_row.addWidget(self.search_input)
        self.enabled_checkbox = QCheckBox("Stacked rolls enabled")
        self.enabled_checkbox.setChecked(stacked_roll.enabled())
        self.enabled_checkbox.toggled.connect(self._on_enabled_toggled)
        options_row.addWidget(self.enabled_checkbox)
        options_row.addWidget(QLabel("Reserve threshold"))
        self.threshold_input = QSpinBox()
        self.threshold_input.setRange(0, MAX_POINTS)
        self.threshold_input.setValue(min(stacked_roll.config.reserve_threshold, MAX_POINTS))
        self.threshold_input.editingFinished.connect(self._on_threshold_committed)
        options_row.addWidget(self.threshold_input)
        layout.addLayout(options_row)

        self.hint_label = QLabel("")
        self.hint_label.setObjectName("ProgressLabel")
        layout.addWidget(self.hint_label)

        self.table = QTableWidget()
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.cellDoubleClicked.connect(self._edit_points)
        layout.addWidget(self.table)

        buttons = QHBoxLayout()
        copy_button = QPushButton("Copy")
        copy_button.clicked.connect(self._copy_clipboard)
        buttons.addWidget(copy_button)
        buttons.addStretch(1)
        clear_button = QPushButton("Clear data")
        clear_button.clicked.connect(self._clear)
        buttons.addWidget(clear_button)
        layout.addLayout(buttons)

        stacked_roll.events.imported.connect(self._render)

    def draw(self) -> None:
        self._render()
        self.show()
        self.raise_()
        self.activateWindow()

    def _render(self) -> None:
        thresholds = self.stacked_roll.thresholds
        imported_at = self.stacked_roll.store.imported_at()
        records = self.stacked_roll.ledger.players()
        search = self.search_input.text().strip().lower()
        if search:
            records = [
                record
                for record in records
                if search in record.name or any(search in alias for alias in record.aliases)
            ]

        if imported_at:
            stamp = datetime.fromtimestamp(imported_at).strftime("%Y-%m-%d %H:%M")
            total = len(self.stacked_roll.ledger.players())
            self.summary_label.setText(f"{total} players, imported {stamp}")
        else:
            self.summary_label.setText("No stacked roll data imported")

        if search and not records:
            suggestions = self.stacked_roll.ledger.suggest(search)
            self.hint_label.setText(
                f"Did you mean: {', '.join(suggestions)}" if suggestions else "No matching players."
            )
        else:
            self.hint_label.setText("")

        self.table.setSortingEnabled(False)
        self.table.setRowCount(len(records))
        self.table.setColumnCount(len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)

        for row_idx, record in enumerate(records):
            low = thresholds.min_stacked_roll(record.points)
            high = thresholds.max_stacked_roll(record.points)
            roll = thresholds.roll_points(record.points)
            reserve = thresholds.reserve(record.points)

            self.table.setItem(row_idx, 0, QTableWidgetItem(record.name))
            points_item = QTableWidgetItem()
            points_item.setData(Qt.DisplayRole, int(record.points))
            self.table.setItem(row_idx, 1, points_item)
            roll_item = QTableWidgetItem()
            roll_item.setData(Qt.DisplayRole, int(roll))
            self.table.setItem(row_idx, 2, roll_item)
            self.table.setItem(row_idx, 3, QTableWidgetItem(f"{low}-{high}"))
            reserve_item = QTableWidgetItem()
            reserve_item.setData(Qt.DisplayRole, int(reserve))
            if reserve:
                reserve_item.setForeground(QColor("#f0c36d"))
            self.table.setItem(row_idx, 4, reserve_item)
            self.table.setItem(row_idx, 5, QTableWidgetItem(", ".join(record.aliases)))

        self.table.resizeColumnsToContents()
        self.table.resizeRowsToContents()
        self.table.setSortingEnabled(True)

    def _on_enabled_toggled(self, checked: bool) -> None:
        self.stacked_roll.config.enabled = checked
        save_config(self.stacked_roll.config)

    def _on_threshold_committed(self) -> None:
        config = self.stacked_roll.config
        value = int(self.threshold_input.value())
        if value == config.reserve_threshold:
            return
        config.reserve_threshold = value
        save_config(config)
        self._render()

    def _edit_points(self, row: int, _column: int) -> None:
        name_item = self.table.item(row, 0)
        if name_item is None:
            return
        name = name_item.text()
        current = self.stacked_roll.get_points(name, 0)
        if current > MAX_POINTS:
            # Beyond what a spin box holds
            value, ok = QInputDialog.getText(
                self, "Set points", f"Points for {name}", QLineEdit.Normal, str(current)
            )
        else:
            value, ok = QInputDialog.getInt(
                self, "Set points", f"Points for {name}", current, 0, MAX_POINTS
            )
        if not ok:
            return
        try:
            self.stacked_roll.set_points(name, value)
        except ValueError as exc:
            QMessageBox.warning(self, "Set points", str(exc))
            return
        self._render()

    def _copy_clipboard(self) -> None:
        lines = []
        for record in self.stacked_roll.ledger.players():
            lines.append(",".join([record.name, str(record.points)] + record.aliases))
        QApplication.clipboard().setText("\n".join(lines))

    def _clear(self) -> None:
        answer = QMessageBox.question(
            self,
            "Clear data",
            "Remove all imported stacked roll data?",
        )
        if answer == QMessageBox.Yes:
            self.stacked_roll.start_over()
