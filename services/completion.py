# services/completion.py
from typing import Optional

from app.state import Ledger


class CompletionDetector:
    """Edge-triggered: reports True only when a ledger first reaches its end."""

    def __init__(self, ledger: Optional[Ledger] = None):
        self.complete = self._done(ledger) if ledger is not None else False

    @staticmethod
    def _done(ledger: Ledger) -> bool:
        return len(ledger) > 0 and ledger.is_complete

    def check(self, ledger: Ledger) -> bool:
        done = self._done(ledger)
        fired = done and not self.complete
        self.complete = done
        return fired
