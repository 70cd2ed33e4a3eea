import logging
import sys

from PySide6.QtCore import QtMsgType, qInstallMessageHandler
from PySide6.QtWidgets import QApplication

from .core.config import load_config
from .core.stacked_roll import StackedRoll
from .core.store import StackedRollStore
from .gui.importer import ImporterDialog
from .gui.overview import OverviewDialog

STYLE_SHEET = """
QWidget {
    font-family: "Georgia", "Times New Roman", serif;
    color: #f0e6d2;
    background-color: #1d1a18;
}
QLabel#SectionTitle {
    font-size: 16px;
    font-weight: bold;
    color: #e8d9b5;
}
QLabel#ErrorHeader {
    font-size: 14px;
    font-weight: bold;
    color: #f0c36d;
}
QLabel#ProgressLabel {
    color: #d7c49a;
}
QLineEdit, QPlainTextEdit, QSpinBox {
    background-color: #2a2521;
    border: 1px solid #4a4036;
    border-radius: 6px;
    padding: 6px;
    color: #f5efdf;
}
QPlainTextEdit#LineView {
    font-family: "Consolas", "Courier New", monospace;
}
QTableWidget {
    background-color: #2a2521;
    gridline-color: #4a4036;
    color: #f5efdf;
    border: 1px solid #4a4036;
}
QTableWidget::item:selected {
    background-color: #8a6a3f;
    color: #1d1a18;
}
QHeaderView::section {
    background-color: #26211d;
    color: #e8d9b5;
    padding: 4px 6px;
    border: 1px solid #3a322b;
}
QPushButton {
    background-color: #3b2e23;
    border: 1px solid #7a5c3a;
    border-radius: 6px;
    padding: 6px 10px;
    color: #f0e4c8;
}
QPushButton:hover {
    background-color: #4a3a2b;
}
"""


def _setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    def qt_message_handler(mode, context, message):
        level = logging.INFO
        if mode == QtMsgType.QtWarningMsg:
            level = logging.WARNING
        elif mode == QtMsgType.QtCriticalMsg:
            level = logging.ERROR
        elif mode == QtMsgType.QtFatalMsg:
            level = logging.CRITICAL
        logging.log(level, "Qt: %s", message)

    qInstallMessageHandler(qt_message_handler)


def main() -> int:
    _setup_logging()

    app = QApplication(sys.argv)
    app.setStyleSheet(STYLE_SHEET)

    config = load_config()
    store = StackedRollStore()
    logging.info("Python: %s", sys.version.replace("\n", " "))
    logging.info("Stacked roll data: %s", store.path)
    if not config.enabled:
        logging.info("Stacked rolls are disabled in the settings")

    stacked_roll = StackedRoll(store, config)
    importer = ImporterDialog(stacked_roll, config)
    overview = OverviewDialog(stacked_roll)
    stacked_roll.attach_views(importer, overview)

    stacked_roll.draw()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
