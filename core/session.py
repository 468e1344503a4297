# core/session.py
from __future__ import annotations
import logging

from PySide6.QtCore import QObject, Signal

from app.config import CHECKPOINT_INTERVAL_MS, DEFAULT_MODE, HISTORY_CAP
from app.errors import SessionStartError
from app.state import Ledger
from app.validation import validate_mode
from core.checkpoint import CheckpointBridge
from services import input_classifier as ic
from services.completion import CompletionDetector
from services.reducer import SessionState, reduce

log = logging.getLogger(__name__)


class PracticeSession(QObject):
    """
    One live practice run over a reference text.

    This object is the only owner of the ledger and its history. Input events
    go through `handle`, which classifies them and feeds the resulting
    action to the reducer. Every call finishes its mutation before returning.
    """
    changed = Signal(int)     # cursor after any state change
    completed = Signal(int)   # cursor when the end of the text is reached

    def __init__(self, text_id: str, reference: str, mode: str = DEFAULT_MODE,
                 cursor: int = 0, bridge: CheckpointBridge | None = None,
                 history_cap: int = HISTORY_CAP, parent=None):
        super().__init__(parent)
        self.text_id = text_id
        self.mode = validate_mode(mode)
        self.history_cap = history_cap
        self.bridge = bridge
        self._state = SessionState.initial(reference, cursor, history_cap)
        self._classifier = ic.InputClassifier()
        self._detector = CompletionDetector(self._state.ledger)
        self._closed = False

    @classmethod
    def open(cls, store, text_id: str, mode: str = DEFAULT_MODE,
             interval_ms: int = CHECKPOINT_INTERVAL_MS, background: bool = True,
             history_cap: int = HISTORY_CAP, parent=None) -> "PracticeSession":
        """
        Start a session for a stored text, resuming from its saved cursor.

        Raises SessionStartError when the text cannot be fetched; nothing is
        created in that case.
        """
        validate_mode(mode)
        try:
            reference = store.get_reference_text(text_id)
        except Exception as e:
            raise SessionStartError(text_id, str(e)) from e
        if reference is None:
            raise SessionStartError(text_id)

        bridge = CheckpointBridge(store, text_id, mode, interval_ms, background)
        cursor = bridge.load_cursor()
        session = cls(text_id, reference, mode, cursor, bridge, history_cap, parent)
        bridge.setParent(session)
        bridge.start(lambda: session.cursor)
        log.info("Opened %s session for %s at %d/%d",
                 mode, text_id, session.cursor, len(session.ledger))
        return session

    # ---------- read side ----------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def ledger(self) -> Ledger:
        return self._state.ledger

    @property
    def cursor(self) -> int:
        return self._state.cursor

    @property
    def reference(self) -> str:
        return self.ledger.reference

    @property
    def progress_percent(self) -> float:
        return self.ledger.progress_percent

    @property
    def is_complete(self) -> bool:
        return self._detector.complete

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def composing(self) -> bool:
        return self._classifier.composing

    # ---------- write side ----------
    def handle(self, event: ic.InputEvent) -> ic.Action:
        if self._closed:
            return ic.IGNORE
        action = self._classifier.classify(event)
        self.dispatch(action)
        return action

    def dispatch(self, action: ic.Action) -> bool:
        if self._closed:
            return False
        new = reduce(self._state, action)
        if new is self._state:
            return False
        self._state = new
        self.changed.emit(self.cursor)
        if self._detector.check(self.ledger):
            self._on_complete()
        return True

    def backspace(self) -> bool:
        return self.dispatch(ic.BACKSPACE)

    def undo(self) -> bool:
        return self.dispatch(ic.UNDO)

    def redo(self) -> bool:
        return self.dispatch(ic.REDO)

    def restart(self):
        """Drop all typing and history, and record cursor 0 right away."""
        if self._closed:
            return
        self._state = SessionState.initial(self.reference, 0, self.history_cap)
        self._classifier.reset()
        self._detector = CompletionDetector(self.ledger)
        self.changed.emit(0)
        if self.bridge is not None:
            self.bridge.save_cursor(0, force=True)

    def close(self, save: bool = True):
        """Stop checkpointing; with `save` the final cursor is written once."""
        if self._closed:
            return
        self._closed = True
        if self.bridge is not None:
            self.bridge.stop()
            if save:
                self.bridge.save_cursor(self.cursor)
        log.info("Closed %s session for %s at %d", self.mode, self.text_id, self.cursor)

    def _on_complete(self):
        log.info("Completed %s session for %s", self.mode, self.text_id)
        if self.bridge is not None:
            self.bridge.save_cursor(self.cursor)
        self.completed.emit(self.cursor)
