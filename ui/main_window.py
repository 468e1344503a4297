# ui/main_window.py
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QListWidget, QListWidgetItem, QPushButton, QComboBox,
    QFileDialog, QMessageBox, QStackedWidget,
)
from PySide6.QtCore import Qt

from app.config import MODES, DEFAULT_MODE
from app.errors import SessionStartError, DatabaseError
from core.session import PracticeSession
from core.threads import Workers
from ui.widgets import CopyView, TypingArea
from utils import db_helper
from utils.file_handler import import_text_file

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, store=db_helper):
        super().__init__()
        self.setWindowTitle("Tracetype")
        self.resize(1200, 720)
        self.store = store
        self.session = None

        root = QWidget(self)
        root_h = QHBoxLayout(root)
        root_h.setContentsMargins(16, 16, 16, 16)
        root_h.setSpacing(16)

        # --- library ---
        side = QVBoxLayout()
        self.library = QListWidget(root)
        self.library.setFocusPolicy(Qt.NoFocus)
        self.library.itemActivated.connect(self._on_text_chosen)
        self.library.itemClicked.connect(self._on_text_chosen)
        side.addWidget(self.library, 1)

        btn_load = QPushButton("Load text…", root)
        btn_load.clicked.connect(self._on_load)
        btn_delete = QPushButton("Delete", root)
        btn_delete.clicked.connect(self._on_delete)
        for b in (btn_load, btn_delete):
            b.setFocusPolicy(Qt.NoFocus)
            side.addWidget(b)
        root_h.addLayout(side, 0)

        # --- practice ---
        main = QVBoxLayout()
        bar = QHBoxLayout()
        self.modeBox = QComboBox(root)
        self.modeBox.addItems(list(MODES))
        self.modeBox.setCurrentText(DEFAULT_MODE)
        self.modeBox.setFocusPolicy(Qt.NoFocus)
        self.modeBox.currentTextChanged.connect(self._on_mode_changed)
        bar.addWidget(self.modeBox)

        self.btnRestart = QPushButton("Restart", root)
        self.btnRestart.setFocusPolicy(Qt.NoFocus)
        self.btnRestart.clicked.connect(self._on_restart)
        bar.addWidget(self.btnRestart)
        bar.addStretch(1)

        self.lblProgress = QLabel("", root)
        self.lblProgress.setObjectName("lblProgress")
        bar.addWidget(self.lblProgress)
        main.addLayout(bar)

        # trace types over the text, copy retypes it beside a read-only source
        self.views = QStackedWidget(root)
        self.typing = TypingArea(self.views)
        self.copy = CopyView(self.views)
        self.views.addWidget(self.typing)
        self.views.addWidget(self.copy)
        main.addWidget(self.views, 1)

        hint = QLabel("Backspace steps back · Ctrl+Z undo · Ctrl+Shift+Z redo · ↲ means press Enter", root)
        hint.setAlignment(Qt.AlignCenter)
        main.addWidget(hint)
        root_h.addLayout(main, 1)

        self.setCentralWidget(root)
        self.refresh_library()
        if self.library.count():
            self.library.setCurrentRow(0)
            self._on_text_chosen(self.library.item(0))

    # ---------------- Library ----------------
    def refresh_library(self):
        self.library.clear()
        try:
            texts = self.store.list_texts()
        except DatabaseError as e:
            log.warning("Could not list texts: %s", e)
            texts = []
        for t in texts:
            item = QListWidgetItem(t.name)
            item.setData(Qt.UserRole, t.id)
            self.library.addItem(item)

    def _on_load(self):
        path, _ = QFileDialog.getOpenFileName(self, "Load text", "", "Text files (*.txt)")
        if not path:
            return
        try:
            text_id = import_text_file(path)
        except (OSError, ValueError, DatabaseError) as e:
            QMessageBox.warning(self, "Load text", str(e))
            return
        self.refresh_library()
        self.open_text(text_id)

    def _on_delete(self):
        item = self.library.currentItem()
        if item is None:
            return
        text_id = item.data(Qt.UserRole)
        ok = QMessageBox.question(
            self, "Delete text",
            "This permanently deletes the text and its practice progress.",
        )
        if ok != QMessageBox.Yes:
            return
        try:
            self.delete_text(text_id)
        except DatabaseError as e:
            QMessageBox.warning(self, "Delete text", str(e))
        self.refresh_library()

    def delete_text(self, text_id: str):
        """Delete a text and its progress; an open session on it is dropped unsaved."""
        if self.session is not None and self.session.text_id == text_id:
            self._close_session(save=False)
        # a checkpoint still in flight would recreate the progress row
        Workers.pool.waitForDone()
        self.store.delete_text(text_id)
        log.info("Deleted text %s", text_id)

    def _on_text_chosen(self, item):
        if item is not None:
            self.open_text(item.data(Qt.UserRole))

    def _on_mode_changed(self, mode: str):
        if self.session is not None:
            self.open_text(self.session.text_id)

    # ---------------- Session ----------------
    def open_text(self, text_id: str):
        mode = self.modeBox.currentText()
        if self.session is not None and self.session.text_id == text_id and self.session.mode == mode:
            return
        self._close_session()
        try:
            session = PracticeSession.open(self.store, text_id, mode, parent=self)
        except SessionStartError as e:
            log.warning("%s", e)
            QMessageBox.warning(self, "Cannot start", str(e))
            return
        self.session = session
        session.changed.connect(self._update_progress)
        session.completed.connect(self._on_completed)
        if mode == "copy":
            self.copy.set_session(session)
            self.views.setCurrentWidget(self.copy)
        else:
            self.typing.set_session(session)
            self.views.setCurrentWidget(self.typing)
        self._focus_input()
        self._update_progress()

    def _focus_input(self):
        if self.views.currentWidget() is self.copy:
            self.copy.focus_entry()
        else:
            self.typing.setFocus()

    def _close_session(self, save: bool = True):
        if self.session is None:
            return
        self.typing.set_session(None)
        self.copy.set_session(None)
        self.session.close(save=save)
        self.session.deleteLater()
        self.session = None
        self.lblProgress.setText("")

    def _on_restart(self):
        if self.session is not None:
            self.session.restart()
            self._focus_input()

    def _update_progress(self, *_):
        s = self.session
        if s is None:
            return
        self.lblProgress.setText(f"{s.cursor} / {len(s.ledger)} ({s.progress_percent:0.1f}%)")
        self.setWindowTitle("Tracetype")

    def _on_completed(self, cursor: int):
        self.setWindowTitle("Tracetype: complete!")

    def closeEvent(self, ev):
        self._close_session()
        super().closeEvent(ev)
