from app.state import Cell, CellStatus, Ledger, Snapshot
from services import matcher


def test_from_text_one_cell_per_character():
    ledger = Ledger.from_text("ab\ncd")
    assert len(ledger) == 5
    assert ledger.reference == "ab\ncd"
    assert ledger.cells[2].expected == "\n"
    assert ledger.cursor == 0
    assert set(ledger.statuses()) == {CellStatus.UNTYPED}


def test_resumed_cursor_marks_prefix_correct():
    ledger = Ledger.from_text("hello", cursor=3)
    assert ledger.cursor == 3
    assert ledger.statuses() == (
        CellStatus.CORRECT, CellStatus.CORRECT, CellStatus.CORRECT,
        CellStatus.UNTYPED, CellStatus.UNTYPED,
    )


def test_resumed_cursor_is_clamped():
    assert Ledger.from_text("abc", cursor=99).cursor == 3
    assert Ledger.from_text("abc", cursor=-4).cursor == 0
    assert Ledger.from_text("abc", cursor=None).cursor == 0


def test_progress_percent():
    assert Ledger.from_text("abcd", cursor=1).progress_percent == 25.0
    assert Ledger.from_text("abcd", cursor=4).progress_percent == 100.0
    assert Ledger.from_text("").progress_percent == 0.0


def test_is_complete():
    assert not Ledger.from_text("ab", cursor=1).is_complete
    assert Ledger.from_text("ab", cursor=2).is_complete


def test_cell_judging_keeps_expected_character():
    cell = Cell("a")
    assert cell.judged("a").status == CellStatus.CORRECT
    wrong = cell.judged("b")
    assert wrong.status == CellStatus.INCORRECT
    assert wrong.expected == "a"
    assert wrong.cleared() == Cell("a", CellStatus.UNTYPED)


def test_snapshot_unaffected_by_later_edits():
    ledger = Ledger.from_text("abc", cursor=1)
    snap = Snapshot.of(ledger)
    edited = matcher.backspace(matcher.apply_chunk(ledger, "bx"))
    assert edited != ledger
    assert snap.ledger == Ledger.from_text("abc", cursor=1)
    assert snap.cursor == 1
