from app.state import Ledger
from services import matcher
from services.completion import CompletionDetector


def test_fires_once_on_reaching_end():
    det = CompletionDetector(Ledger.from_text("ab"))
    ledger = matcher.apply_chunk(Ledger.from_text("ab"), "a")
    assert det.check(ledger) is False
    ledger = matcher.apply_chunk(ledger, "b")
    assert det.check(ledger) is True
    assert det.check(ledger) is False
    assert det.complete


def test_leaving_completion_rearms():
    det = CompletionDetector()
    done = Ledger.from_text("ab", cursor=2)
    assert det.check(done)
    assert not det.check(matcher.backspace(done))
    assert det.check(done)


def test_resumed_complete_ledger_does_not_fire():
    done = Ledger.from_text("ab", cursor=2)
    det = CompletionDetector(done)
    assert det.complete
    assert det.check(done) is False


def test_empty_reference_never_completes():
    det = CompletionDetector()
    assert det.check(Ledger.from_text("")) is False
