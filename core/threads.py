# core/threads.py
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal


class CheckpointWorkerSignals(QObject):
    saved = Signal(int)
    failed = Signal(str)


class CheckpointWriteWorker(QRunnable):
    def __init__(self, store, text_id: str, mode: str, cursor: int):
        super().__init__()
        self.store = store
        self.text_id = text_id
        self.mode = mode
        self.cursor = cursor
        self.signals = CheckpointWorkerSignals()

    def run(self):
        try:
            self.store.save_cursor(self.text_id, self.mode, self.cursor)
            self.signals.saved.emit(self.cursor)
        except Exception as e:
            self.signals.failed.emit(str(e))


class Workers:
    pool = QThreadPool.globalInstance()
