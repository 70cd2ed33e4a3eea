from PySide6.QtCore import QObject, Signal


class StackedRollEvents(QObject):
    # Fired after every successful import, without payload
    imported = Signal()
