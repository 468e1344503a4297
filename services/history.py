# services/history.py
from dataclasses import dataclass
from typing import Tuple

from app.config import HISTORY_CAP
from app.state import Ledger, Snapshot


@dataclass(frozen=True)
class History:
    """
    Undo/redo stacks of ledger snapshots, most recent last.

    `entries` is never empty; its top is the live ledger. Only `cap` entries
    are kept, so very old states cannot be undone back to.
    """
    entries: Tuple[Snapshot, ...]
    redo_entries: Tuple[Snapshot, ...] = ()
    cap: int = HISTORY_CAP

    @classmethod
    def start(cls, ledger: Ledger, cap: int = HISTORY_CAP) -> "History":
        return cls((Snapshot.of(ledger),), (), max(1, cap))

    @property
    def current(self) -> Ledger:
        return self.entries[-1].ledger

    @property
    def depth(self) -> int:
        return len(self.entries)

    @property
    def can_undo(self) -> bool:
        return len(self.entries) > 1

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_entries)

    def commit(self, ledger: Ledger) -> "History":
        entries = (self.entries + (Snapshot.of(ledger),))[-self.cap:]
        return History(entries, (), self.cap)

    def undo(self) -> "History":
        if not self.can_undo:
            return self
        top = self.entries[-1]
        return History(self.entries[:-1], self.redo_entries + (top,), self.cap)

    def redo(self) -> "History":
        if not self.can_redo:
            return self
        top = self.redo_entries[-1]
        return History(self.entries + (top,), self.redo_entries[:-1], self.cap)
