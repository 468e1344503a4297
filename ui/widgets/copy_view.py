# ui/widgets/copy_view.py
from PySide6.QtWidgets import QWidget, QHBoxLayout, QPlainTextEdit, QSplitter
from PySide6.QtGui import QFont
from PySide6.QtCore import Qt

from ui.widgets.typing_area import TypingArea


class CopyView(QWidget):
    """
    Copy-mode surface: the reference sits read-only on the left and the user
    retypes it in a separate area on the right.

    Both panes show the same session. Only `entry` takes keyboard input.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.session = None

        self.source = QPlainTextEdit(self)
        self.source.setReadOnly(True)
        self.source.setFocusPolicy(Qt.NoFocus)
        self.source.setFont(QFont("Inter, Segoe UI, Roboto, Arial", 16))
        self.source.setObjectName("copySource")

        self.entry = TypingArea(self, show_untyped=False)

        split = QSplitter(Qt.Horizontal, self)
        split.addWidget(self.source)
        split.addWidget(self.entry)
        split.setStretchFactor(0, 1)
        split.setStretchFactor(1, 1)

        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(split)

    def set_session(self, session):
        self.session = session
        self.source.setPlainText(session.reference if session is not None else "")
        self.entry.set_session(session)

    def focus_entry(self):
        self.entry.setFocus()
