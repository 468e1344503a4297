from app.state import CellStatus, Ledger
from services import matcher

C, I, U = CellStatus.CORRECT, CellStatus.INCORRECT, CellStatus.UNTYPED


def test_correct_and_incorrect_characters_both_advance():
    ledger = matcher.apply_chunk(Ledger.from_text("abc"), "axc")
    assert ledger.statuses() == (C, I, C)
    assert ledger.cursor == 3


def test_input_is_not_mutated():
    start = Ledger.from_text("abc")
    matcher.apply_chunk(start, "ab")
    assert start.cursor == 0
    assert start.statuses() == (U, U, U)


def test_overrun_is_discarded():
    ledger = matcher.apply_chunk(Ledger.from_text("ab"), "abcdef")
    assert ledger.cursor == 2
    assert ledger.statuses() == (C, C)


def test_typing_after_completion_returns_same_ledger():
    done = Ledger.from_text("ab", cursor=2)
    assert matcher.apply_chunk(done, "x") is done
    assert matcher.apply_newline(done) is done


def test_empty_chunk_is_noop():
    start = Ledger.from_text("ab")
    assert matcher.apply_chunk(start, "") is start


def test_chunk_equals_sequential_characters():
    text = "你好，世界 abc"
    typed = "你好,世界 abd"
    chunked = matcher.apply_chunk(Ledger.from_text(text), typed)
    stepped = Ledger.from_text(text)
    for ch in typed:
        stepped = matcher.apply_chunk(stepped, ch)
    assert chunked == stepped


def test_newline_matches_line_break_cell():
    ledger = matcher.apply_chunk(Ledger.from_text("ab\ncd"), "ab")
    ledger = matcher.apply_newline(ledger)
    assert ledger.cursor == 3
    assert ledger.cells[2].status == C


def test_newline_on_printable_cell_is_incorrect_and_advances():
    ledger = matcher.apply_newline(Ledger.from_text("ab"))
    assert ledger.cursor == 1
    assert ledger.statuses() == (I, U)


def test_backspace_clears_one_cell():
    ledger = matcher.apply_chunk(Ledger.from_text("abc"), "ax")
    back = matcher.backspace(ledger)
    assert back.cursor == 1
    assert back.statuses() == (C, U, U)
    assert back.cells[1].expected == "b"


def test_backspace_at_start_is_noop():
    start = Ledger.from_text("abc")
    assert matcher.backspace(start) is start


def test_repeated_backspace_returns_to_initial():
    start = Ledger.from_text("hello")
    ledger = matcher.apply_chunk(start, "hxllo")
    for _ in range(ledger.cursor):
        ledger = matcher.backspace(ledger)
    assert ledger == start
