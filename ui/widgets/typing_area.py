# ui/widgets/typing_area.py
from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QFont, QColor, QPen, QPaintEvent, QFontMetricsF
from PySide6.QtCore import Qt, QTimer, QPointF

from app.state import CellStatus
from services.input_classifier import InputEvent

NEWLINE_GLYPH = "↲"

COLORS = {
    "background": "#0f1115",
    "correct": "#22c55e",
    "error": "#ef4444",
    "muted": "#6b7280",
    "caret": "#eab308",
    "preedit": "#93c5fd",
}

_NAMED_KEYS = {
    Qt.Key_Backspace: "Backspace",
    Qt.Key_Return: "Enter",
    Qt.Key_Enter: "Enter",
}


def key_event_to_input(ev) -> InputEvent:
    """Translate a QKeyEvent into a surface-neutral key_down event."""
    mods = ev.modifiers()
    ctrl = bool(mods & Qt.ControlModifier)
    meta = bool(mods & Qt.MetaModifier)
    alt = bool(mods & Qt.AltModifier)
    shift = bool(mods & Qt.ShiftModifier)
    key = ev.key()
    if key in _NAMED_KEYS:
        name = _NAMED_KEYS[key]
    elif key == Qt.Key_Z and (ctrl or meta):
        # text() is a control character here
        name = "z"
    else:
        t = ev.text()
        name = t if t and (t >= " " or t == "\t") else ""
    return InputEvent.key_down(name, ctrl=ctrl, meta=meta, alt=alt, shift=shift)


class TypingArea(QWidget):
    """
    Draws a session's ledger and feeds it keyboard and input-method events.

    Line breaks in the reference are shown as a glyph at the end of their line.
    The view scrolls smoothly so the line holding the cursor stays centered.
    With `show_untyped` off, only the typed prefix and the caret are drawn.
    """

    def __init__(self, parent=None, show_untyped: bool = True):
        super().__init__(parent)
        self.session = None
        self.show_untyped = show_untyped
        self.setFocusPolicy(Qt.StrongFocus)
        self.setAttribute(Qt.WA_InputMethodEnabled, True)

        self._font = QFont("Inter, Segoe UI, Roboto, Arial", 22)
        self._line_wrap_px = 1000
        self._line_height = 40
        self._pad_x = 32
        self._pad_y = 32
        self._preedit = ""

        self._blink = True
        self._blink_timer = QTimer(self)
        self._blink_timer.timeout.connect(self._toggle_blink)
        self._blink_timer.start(500)

        self._anim_timer = QTimer(self)
        self._anim_timer.setInterval(16)
        self._anim_timer.timeout.connect(self._anim_tick)
        self._anim_timer.start()

        # layout caches
        self._char_pos: list[QPointF] = []
        self._line_of_char: list[int] = []
        self._line_count = 0
        self._last_text = None
        self._last_wrap = None

        self._offset_y = 0.0
        self._target_offset_y = 0.0

    def set_session(self, session):
        if self.session is not None:
            self.session.changed.disconnect(self._on_changed)
        self.session = session
        self._preedit = ""
        self._last_text = None
        if session is not None:
            session.changed.connect(self._on_changed)
        self._reflow()
        self._update_target_offset()
        self.update()

    # ---------- input ----------
    def keyPressEvent(self, ev):
        if self.session is None:
            return super().keyPressEvent(ev)
        self.session.handle(key_event_to_input(ev))
        ev.accept()

    def focusNextPrevChild(self, next):
        # Tab is a typed character here
        if self.session is not None:
            return False
        return super().focusNextPrevChild(next)

    def inputMethodEvent(self, ev):
        if self.session is None:
            return super().inputMethodEvent(ev)
        preedit = ev.preeditString()
        commit = ev.commitString()
        if commit:
            if not self.session.composing:
                self.session.handle(InputEvent.composition_start())
            self.session.handle(InputEvent.composition_end(commit))
        elif preedit:
            if self.session.composing:
                self.session.handle(InputEvent.composition_update(preedit))
            else:
                self.session.handle(InputEvent.composition_start())
        elif self.session.composing:
            # composition cancelled
            self.session.handle(InputEvent.composition_end(""))
        self._preedit = preedit
        ev.accept()
        self.update()

    def _on_changed(self, cursor: int):
        self._update_target_offset()
        self.update()

    # ---------- layout ----------
    def _toggle_blink(self):
        self._blink = not self._blink
        self.update()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._reflow()
        self._update_target_offset()

    def _reflow(self):
        """Place each character, wrapping at spaces and after line breaks."""
        text = self.session.reference if self.session is not None else ""
        panel = self.rect().adjusted(self._pad_x, self._pad_y, -self._pad_x, -self._pad_y)
        wrap_w = min(self._line_wrap_px, max(10, panel.width()))
        if text == self._last_text and wrap_w == self._last_wrap:
            return
        self._last_text = text
        self._last_wrap = wrap_w

        fm = QFontMetricsF(self._font)
        self._line_height = max(self._line_height, fm.height())
        left = panel.center().x() - wrap_w / 2

        self._char_pos = []
        self._line_of_char = []
        x, line = left, 0
        i, n = 0, len(text)
        while i < n:
            # measure up to the next space or line break so words stay whole
            j = i
            while j < n and text[j] not in " \n":
                j += 1
            word_w = fm.horizontalAdvance(text[i:j])
            if j > i and x > left and x + word_w > left + wrap_w:
                x, line = left, line + 1
            for k in range(i, j):
                self._char_pos.append(QPointF(x, line * self._line_height))
                self._line_of_char.append(line)
                x += fm.horizontalAdvance(text[k])
            if j < n:
                self._char_pos.append(QPointF(x, line * self._line_height))
                self._line_of_char.append(line)
                if text[j] == "\n":
                    x, line = left, line + 1
                else:
                    x += fm.horizontalAdvance(" ")
            i = j + 1
        self._line_count = line + 1

    def _update_target_offset(self):
        if not self._line_of_char or self.session is None:
            self._target_offset_y = 0.0
            return
        cursor = min(self.session.cursor, len(self._line_of_char) - 1)
        line_idx = self._line_of_char[cursor]
        self._target_offset_y = self.height() / 2.0 - self._pad_y - (line_idx + 0.5) * self._line_height

    def _anim_tick(self):
        if abs(self._offset_y - self._target_offset_y) < 0.25:
            self._offset_y = self._target_offset_y
            return
        self._offset_y += (self._target_offset_y - self._offset_y) * 0.22
        self.update()

    # ---------- painting ----------
    def paintEvent(self, e: QPaintEvent):
        self._reflow()
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing)
        p.fillRect(self.rect(), QColor(COLORS["background"]))
        if self.session is None:
            return
        p.setFont(self._font)
        fm = QFontMetricsF(self._font)
        top = self._pad_y + self._offset_y
        baseline_pad = fm.ascent() + (self._line_height - fm.height()) / 2.0
        ledger = self.session.ledger
        cursor = ledger.cursor

        for i, cell in enumerate(ledger.cells):
            pos = self._char_pos[i]
            y_top = top + pos.y()
            if y_top + self._line_height < -200 or y_top > self.height() + 200:
                continue
            if i >= cursor and not self.show_untyped:
                if i == cursor and self._blink:
                    self._draw_caret(p, QPointF(pos.x(), y_top))
                continue
            glyph = NEWLINE_GLYPH if cell.expected == "\n" else cell.expected
            if cell.status == CellStatus.CORRECT:
                color = COLORS["correct"]
            elif cell.status == CellStatus.INCORRECT:
                color = COLORS["error"]
            elif i == cursor and self._blink:
                color = COLORS["caret"]
            else:
                color = COLORS["muted"]
            baseline = y_top + baseline_pad
            p.setPen(QColor(color))
            p.drawText(QPointF(pos.x(), baseline), glyph)
            if cell.status == CellStatus.INCORRECT:
                pen = QPen(QColor(COLORS["error"]))
                pen.setWidth(2)
                p.setPen(pen)
                w = fm.horizontalAdvance(glyph)
                p.drawLine(QPointF(pos.x(), baseline + 6), QPointF(pos.x() + w - 2, baseline + 6))

        if self._preedit and cursor < len(self._char_pos):
            pos = self._char_pos[cursor]
            p.setPen(QColor(COLORS["preedit"]))
            p.drawText(QPointF(pos.x(), top + pos.y() - self._line_height * 0.6), self._preedit)

    def _draw_caret(self, p: QPainter, top_left: QPointF):
        pen = QPen(QColor(COLORS["caret"]))
        pen.setWidth(2)
        p.setPen(pen)
        x = top_left.x()
        p.drawLine(QPointF(x, top_left.y() + 6), QPointF(x, top_left.y() + self._line_height - 6))
