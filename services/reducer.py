# services/reducer.py
from dataclasses import dataclass

from app.config import HISTORY_CAP
from app.state import Ledger
from services import matcher
from services.history import History
from services.input_classifier import Action, ActionKind


@dataclass(frozen=True)
class SessionState:
    history: History

    @classmethod
    def initial(cls, reference: str, cursor: int = 0, cap: int = HISTORY_CAP) -> "SessionState":
        return cls(History.start(Ledger.from_text(reference, cursor), cap))

    @property
    def ledger(self) -> Ledger:
        return self.history.current

    @property
    def cursor(self) -> int:
        return self.ledger.cursor


def _forward(state: SessionState, new: Ledger) -> SessionState:
    # no-op edits (end of text, backspace at 0) must not clear redo
    if new.cursor == state.ledger.cursor:
        return state
    return SessionState(state.history.commit(new))


def reduce(state: SessionState, action: Action) -> SessionState:
    """Apply one classified action. Returns `state` itself when nothing changed."""
    kind = action.kind
    if kind == ActionKind.TEXT:
        return _forward(state, matcher.apply_chunk(state.ledger, action.text))
    if kind == ActionKind.NEWLINE:
        return _forward(state, matcher.apply_newline(state.ledger))
    if kind == ActionKind.BACKSPACE:
        return _forward(state, matcher.backspace(state.ledger))
    if kind == ActionKind.UNDO:
        history = state.history.undo()
        return state if history is state.history else SessionState(history)
    if kind == ActionKind.REDO:
        history = state.history.redo()
        return state if history is state.history else SessionState(history)
    return state
