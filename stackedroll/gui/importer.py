import logging
from pathlib import Path

from PySide6.QtWidgets import (
    QDialog,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
)

from ..core.config import AppConfig, save_config, token_path
from ..core.stacked_roll import StackedRoll

FORMAT_HINT = (
    "One player per line: PlayerName,Points,Alias1,Alias2...\n"
    "Fields may be separated by commas, tabs or spaces. Do not include a header row."
)


class ImporterDialog(QDialog):
    def __init__(self, stacked_roll: StackedRoll, config: AppConfig, parent=None) -> None:
        super().__init__(parent)
        self.stacked_roll = stacked_roll
        self.config = config
        self.setWindowTitle("Stacked Roll Import")
        self.resize(640, 520)

        layout = QVBoxLayout(self)
        title = QLabel("Import stacked roll data")
        title.setObjectName("SectionTitle")
        layout.addWidget(title)
        layout.addWidget(QLabel(FORMAT_HINT))

        self.data_input = QPlainTextEdit()
        self.data_input.setObjectName("LineView")
        self.data_input.setPlaceholderText("Foobar,240,Barfoo")
        layout.addWidget(self.data_input)

        form = QFormLayout()
        self.sheet_input = QLineEdit()
        self.sheet_input.setText(config.spreadsheet_id)
        form.addRow("Spreadsheet ID", self.sheet_input)
        self.range_input = QLineEdit()
        self.range_input.setText(config.range_name)
        form.addRow("Range", self.range_input)

        self.credentials_input = QLineEdit()
        self.credentials_input.setText(config.last_credentials_path)
        cred_button = QPushButton("Browse")
        cred_button.clicked.connect(self._browse_credentials)
        cred_row = QHBoxLayout()
        cred_row.addWidget(self.credentials_input)
        cred_row.addWidget(cred_button)
        form.addRow("credentials.json", cred_row)
        layout.addLayout(form)

        self.status_label = QLabel("")
        self.status_label.setObjectName("ErrorHeader")
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        buttons = QHBoxLayout()
        self.sheet_button = QPushButton("Load from Google Sheet")
        self.sheet_button.clicked.connect(self._import_from_sheet)
        buttons.addWidget(self.sheet_button)
        buttons.addStretch(1)
        self.import_button = QPushButton("Import")
        self.import_button.clicked.connect(self._import)
        buttons.addWidget(self.import_button)
        layout.addLayout(buttons)

    def draw(self) -> None:
        self.status_label.setText("")
        self.data_input.setPlainText(self.stacked_roll.store.import_string())
        self.show()
        self.raise_()
        self.activateWindow()

    def set_status_message(self, message: str) -> None:
        self.status_label.setText(message)

    def _remember_options(self) -> None:
        self.config.spreadsheet_id = self.sheet_input.text().strip()
        self.config.range_name = self.range_input.text().strip()
        self.config.last_credentials_path = self.credentials_input.text().strip()
        save_config(self.config)

    def _import(self) -> None:
        self._remember_options()
        self.stacked_roll.import_data(
            self.data_input.toPlainText(),
            open_overview=True,
        )

    def _import_from_sheet(self) -> None:
        spreadsheet_id = self.sheet_input.text().strip()
        range_name = self.range_input.text().strip()
        credentials_path = Path(self.credentials_input.text().strip())
        if not spreadsheet_id or not range_name or not credentials_path.is_file():
            self.set_status_message("Spreadsheet ID, range, and credentials.json are required.")
            return

        self._remember_options()
        self.stacked_roll.import_from_sheet(
            spreadsheet_id=spreadsheet_id,
            range_name=range_name,
            credentials_path=credentials_path,
            token_path=token_path(),
            open_overview=True,
        )

    def _browse_credentials(self) -> None:
        try:
            start_dir = (
                str(Path(self.credentials_input.text()).parent)
                if self.credentials_input.text()
                else str(Path.cwd())
            )
            logging.info("Browse credentials start dir: %s", start_dir)
            path, _ = QFileDialog.getOpenFileName(
                self,
                "Select credentials.json",
                start_dir,
                "JSON Files (*.json);;All Files (*)",
            )
            if path:
                self.credentials_input.setText(path)
        except Exception as exc:
            QMessageBox.critical(self, "Browse failed", str(exc))
