# services/matcher.py
from app.state import Ledger

NEWLINE = "\n"


def apply_chunk(ledger: Ledger, chunk: str) -> Ledger:
    """
    Judge `chunk` against the ledger starting at the cursor.

    Every character consumes one cell whether it matches or not. Characters
    past the end of the reference are dropped. The whole chunk is one
    transition: the caller commits the returned ledger once.
    Returns `ledger` itself when nothing was consumed.
    """
    if not chunk or ledger.cursor >= len(ledger):
        return ledger
    cells = list(ledger.cells)
    cursor = ledger.cursor
    for ch in chunk:
        if cursor >= len(cells):
            break
        cells[cursor] = cells[cursor].judged(ch)
        cursor += 1
    return Ledger(tuple(cells), cursor)


def apply_newline(ledger: Ledger) -> Ledger:
    # Enter always takes one cell; it is only correct on a line-break cell
    return apply_chunk(ledger, NEWLINE)


def backspace(ledger: Ledger) -> Ledger:
    if ledger.cursor <= 0:
        return ledger
    cells = list(ledger.cells)
    cursor = ledger.cursor - 1
    cells[cursor] = cells[cursor].cleared()
    return Ledger(tuple(cells), cursor)
