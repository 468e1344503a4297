import pytest

from services.input_classifier import (
    Action, ActionKind, InputClassifier, InputEvent,
    BACKSPACE, IGNORE, NEWLINE, REDO, UNDO,
)


@pytest.fixture
def clf():
    return InputClassifier()


@pytest.mark.parametrize(
    "event, expected",
    [
        (InputEvent.key_down("a"), Action(ActionKind.TEXT, "a")),
        (InputEvent.key_down("A", shift=True), Action(ActionKind.TEXT, "A")),
        (InputEvent.key_down(" "), Action(ActionKind.TEXT, " ")),
        (InputEvent.key_down("\t"), Action(ActionKind.TEXT, "\t")),
        (InputEvent.key_down("Backspace"), BACKSPACE),
        (InputEvent.key_down("Enter"), NEWLINE),
        (InputEvent.key_down("Return"), NEWLINE),
        (InputEvent.key_down("z", ctrl=True), UNDO),
        (InputEvent.key_down("Z", meta=True), UNDO),
        (InputEvent.key_down("Z", ctrl=True, shift=True), REDO),
        (InputEvent.key_down("z", meta=True, shift=True), REDO),
        (InputEvent.key_down("z", ctrl=True, alt=True), IGNORE),
        (InputEvent.key_down("c", ctrl=True), IGNORE),
        (InputEvent.key_down("a", alt=True), IGNORE),
        (InputEvent.key_down("Shift", shift=True), IGNORE),
        (InputEvent.key_down("ArrowLeft"), IGNORE),
        (InputEvent.key_down("Process"), IGNORE),
        (InputEvent.key_down(""), IGNORE),
    ],
)
def test_key_down(clf, event, expected):
    assert clf.classify(event) == expected


def test_composition_yields_only_final_payload(clf):
    assert clf.classify(InputEvent.composition_start()) == IGNORE
    assert clf.composing
    assert clf.classify(InputEvent.composition_update("n")) == IGNORE
    assert clf.classify(InputEvent.composition_update("ni")) == IGNORE
    assert clf.classify(InputEvent.composition_end("你")) == Action(ActionKind.TEXT, "你")
    assert not clf.composing


def test_keys_are_ignored_while_composing(clf):
    clf.classify(InputEvent.composition_start())
    assert clf.classify(InputEvent.key_down("n")) == IGNORE
    assert clf.classify(InputEvent.key_down("Backspace")) == IGNORE
    assert clf.classify(InputEvent.key_down("Enter")) == IGNORE
    assert clf.classify(InputEvent.key_down("z", ctrl=True)) == IGNORE
    assert clf.classify(InputEvent.text_input("n")) == IGNORE


def test_empty_composition_end_is_ignored(clf):
    clf.classify(InputEvent.composition_start())
    assert clf.classify(InputEvent.composition_end("")) == IGNORE
    assert not clf.composing


def test_update_outside_composition_is_ignored(clf):
    assert clf.classify(InputEvent.composition_update("x")) == IGNORE


def test_echo_after_composition_is_dropped(clf):
    clf.classify(InputEvent.composition_start())
    clf.classify(InputEvent.composition_end("你好"))
    assert clf.classify(InputEvent.text_input("你好")) == IGNORE
    # the echo is consumed only once
    assert clf.classify(InputEvent.text_input("你好")) == Action(ActionKind.TEXT, "你好")


def test_echo_after_key_is_dropped(clf):
    assert clf.classify(InputEvent.key_down("a")) == Action(ActionKind.TEXT, "a")
    assert clf.classify(InputEvent.text_input("a")) == IGNORE


def test_text_input_extending_echo_yields_remainder(clf):
    clf.classify(InputEvent.key_down("a"))
    assert clf.classify(InputEvent.text_input("ab")) == Action(ActionKind.TEXT, "b")


def test_control_key_clears_echo(clf):
    clf.classify(InputEvent.key_down("a"))
    clf.classify(InputEvent.key_down("Backspace"))
    assert clf.classify(InputEvent.text_input("a")) == Action(ActionKind.TEXT, "a")


def test_plain_text_input_is_a_chunk(clf):
    assert clf.classify(InputEvent.text_input("pasted")) == Action(ActionKind.TEXT, "pasted")
    assert clf.classify(InputEvent.text_input("")) == IGNORE


def test_reset(clf):
    clf.classify(InputEvent.composition_start())
    clf.reset()
    assert not clf.composing
    assert clf.classify(InputEvent.key_down("a")) == Action(ActionKind.TEXT, "a")
