# services/input_classifier.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EventKind(str, Enum):
    COMPOSITION_START = "composition_start"
    COMPOSITION_UPDATE = "composition_update"
    COMPOSITION_END = "composition_end"
    KEY_DOWN = "key_down"
    TEXT_INPUT = "text_input"


@dataclass(frozen=True)
class InputEvent:
    kind: EventKind
    key: str = ""
    text: str = ""
    ctrl: bool = False
    meta: bool = False
    alt: bool = False
    shift: bool = False

    @classmethod
    def key_down(cls, key: str, ctrl=False, meta=False, alt=False, shift=False):
        return cls(EventKind.KEY_DOWN, key=key, ctrl=ctrl, meta=meta, alt=alt, shift=shift)

    @classmethod
    def composition_start(cls):
        return cls(EventKind.COMPOSITION_START)

    @classmethod
    def composition_update(cls, text: str = ""):
        return cls(EventKind.COMPOSITION_UPDATE, text=text)

    @classmethod
    def composition_end(cls, text: str):
        return cls(EventKind.COMPOSITION_END, text=text)

    @classmethod
    def text_input(cls, text: str):
        return cls(EventKind.TEXT_INPUT, text=text)


class ActionKind(str, Enum):
    UNDO = "undo"
    REDO = "redo"
    BACKSPACE = "backspace"
    NEWLINE = "newline"
    TEXT = "text"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    text: str = ""

    @classmethod
    def chunk(cls, text: str) -> "Action":
        return cls(ActionKind.TEXT, text) if text else IGNORE


UNDO = Action(ActionKind.UNDO)
REDO = Action(ActionKind.REDO)
BACKSPACE = Action(ActionKind.BACKSPACE)
NEWLINE = Action(ActionKind.NEWLINE)
IGNORE = Action(ActionKind.IGNORE)

_ENTER_KEYS = ("Enter", "Return")


def _is_printable(key: str) -> bool:
    return len(key) == 1 and (key.isprintable() or key == "\t")


class InputClassifier:
    """
    Turns raw surface events into exactly one Action each.

    While an IME composition is open only its end payload counts. The
    classifier remembers the text it last emitted so that a text-input event
    echoing the same characters right after is dropped.
    """

    def __init__(self):
        self.composing = False
        self._last_text: Optional[str] = None

    def reset(self):
        self.composing = False
        self._last_text = None

    def classify(self, ev: InputEvent) -> Action:
        if ev.kind == EventKind.COMPOSITION_START:
            self.composing = True
            return IGNORE
        if ev.kind == EventKind.COMPOSITION_END:
            self.composing = False
            return self._emit_text(ev.text)
        if self.composing or ev.kind == EventKind.COMPOSITION_UPDATE:
            return IGNORE
        if ev.kind == EventKind.TEXT_INPUT:
            return self._classify_text_input(ev.text)
        if ev.kind == EventKind.KEY_DOWN:
            return self._classify_key(ev)
        return IGNORE

    def _emit_text(self, text: str) -> Action:
        action = Action.chunk(text)
        self._last_text = text if action.kind == ActionKind.TEXT else None
        return action

    def _classify_text_input(self, text: str) -> Action:
        echo, self._last_text = self._last_text, None
        if not text or text == echo:
            return IGNORE
        if echo and text.startswith(echo):
            return Action.chunk(text[len(echo):])
        return Action.chunk(text)

    def _classify_key(self, ev: InputEvent) -> Action:
        action = self._key_action(ev)
        if action.kind == ActionKind.TEXT:
            self._last_text = action.text
        elif action.kind != ActionKind.IGNORE:
            self._last_text = None
        return action

    @staticmethod
    def _key_action(ev: InputEvent) -> Action:
        key = ev.key or ""
        if ev.ctrl or ev.meta:
            if ev.alt or key.lower() != "z":
                return IGNORE
            return REDO if ev.shift else UNDO
        if ev.alt:
            return IGNORE
        if key == "Backspace":
            return BACKSPACE
        if key in _ENTER_KEYS:
            return NEWLINE
        if _is_printable(key):
            return Action(ActionKind.TEXT, key)
        return IGNORE
