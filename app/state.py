from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellStatus(str, Enum):
    UNTYPED = "untyped"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class Cell:
    expected: str
    status: CellStatus = CellStatus.UNTYPED

    def judged(self, typed: str) -> "Cell":
        ok = typed == self.expected
        return Cell(self.expected, CellStatus.CORRECT if ok else CellStatus.INCORRECT)

    def cleared(self) -> "Cell":
        return Cell(self.expected, CellStatus.UNTYPED)


@dataclass(frozen=True)
class Ledger:
    """
    Per-character correctness record for one reference text.

    Cells before `cursor` have been judged, cells from `cursor` on are untyped.
    Ledgers are immutable; the matcher and history hand out new ones.
    """
    cells: Tuple[Cell, ...] = ()
    cursor: int = 0

    @classmethod
    def from_text(cls, text: str, cursor: int = 0) -> "Ledger":
        text = text or ""
        cursor = max(0, min(int(cursor or 0), len(text)))
        cells = tuple(
            Cell(ch, CellStatus.CORRECT if i < cursor else CellStatus.UNTYPED)
            for i, ch in enumerate(text)
        )
        return cls(cells, cursor)

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def reference(self) -> str:
        return "".join(c.expected for c in self.cells)

    @property
    def is_complete(self) -> bool:
        return self.cursor >= len(self.cells)

    @property
    def progress_percent(self) -> float:
        if not self.cells:
            return 0.0
        return 100.0 * self.cursor / len(self.cells)

    def statuses(self) -> Tuple[CellStatus, ...]:
        return tuple(c.status for c in self.cells)


@dataclass(frozen=True)
class Snapshot:
    ledger: Ledger

    @property
    def cursor(self) -> int:
        return self.ledger.cursor

    @classmethod
    def of(cls, ledger: Ledger) -> "Snapshot":
        # ledgers never change in place, so holding the same one is safe
        return cls(ledger)
