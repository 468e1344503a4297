# core/checkpoint.py
import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from app.config import CHECKPOINT_INTERVAL_MS
from core.threads import CheckpointWriteWorker, Workers

log = logging.getLogger(__name__)


class CheckpointBridge(QObject):
    """
    Persists the cursor of one (text, mode) progress track.

    Writes are fire-and-forget: a failed write is logged and reported through
    `saveFailed`, never raised and never retried. While running, a timer saves
    whatever cursor is current at fire time; unchanged cursors are skipped.
    """
    saved = Signal(int)
    saveFailed = Signal(str)

    def __init__(self, store, text_id: str, mode: str,
                 interval_ms: int = CHECKPOINT_INTERVAL_MS,
                 background: bool = True, parent=None):
        super().__init__(parent)
        self.store = store
        self.text_id = text_id
        self.mode = mode
        self.background = background
        self._cursor_fn: Optional[Callable[[], int]] = None
        self._last_saved: Optional[int] = None

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_tick)

    @property
    def running(self) -> bool:
        return self._timer.isActive()

    @property
    def last_saved(self) -> Optional[int]:
        return self._last_saved

    def load_cursor(self) -> int:
        try:
            cursor = max(0, int(self.store.load_cursor(self.text_id, self.mode)))
        except Exception as e:
            log.warning("Could not load progress for %s/%s: %s", self.text_id, self.mode, e)
            return 0
        self._last_saved = cursor
        return cursor

    def save_cursor(self, cursor: int, force: bool = False):
        if not force and cursor == self._last_saved:
            return
        self._last_saved = cursor
        if self.background:
            worker = CheckpointWriteWorker(self.store, self.text_id, self.mode, cursor)
            worker.signals.saved.connect(self._on_saved)
            worker.signals.failed.connect(self._on_failed)
            Workers.pool.start(worker)
            return
        try:
            self.store.save_cursor(self.text_id, self.mode, cursor)
        except Exception as e:
            self._on_failed(str(e))
        else:
            self._on_saved(cursor)

    def start(self, cursor_fn: Callable[[], int]):
        self._cursor_fn = cursor_fn
        self._timer.start()

    def stop(self):
        self._timer.stop()

    def _on_tick(self):
        if self._cursor_fn is not None:
            self.save_cursor(self._cursor_fn())

    def _on_saved(self, cursor: int):
        log.debug("Saved progress %s/%s at %d", self.text_id, self.mode, cursor)
        self.saved.emit(cursor)

    def _on_failed(self, msg: str):
        log.warning("Progress not saved for %s/%s: %s", self.text_id, self.mode, msg)
        self.saveFailed.emit(msg)
