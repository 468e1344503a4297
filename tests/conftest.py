"""Shared fixtures. Qt runs headless."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from app.errors import DatabaseError
from utils import db_helper


class MemoryStore:
    """In-memory stand-in for utils.db_helper's store functions."""

    def __init__(self, texts=None):
        self.texts = dict(texts or {})
        self.progress = {}
        self.saves = []
        self.fail_loads = False
        self.fail_saves = False

    def get_reference_text(self, text_id):
        return self.texts.get(text_id)

    def load_cursor(self, text_id, mode):
        if self.fail_loads:
            raise DatabaseError("database is locked")
        return self.progress.get((text_id, mode), 0)

    def save_cursor(self, text_id, mode, cursor):
        if self.fail_saves:
            raise DatabaseError("disk I/O error")
        self.progress[(text_id, mode)] = cursor
        self.saves.append((text_id, mode, cursor))


@pytest.fixture
def memory_store():
    return MemoryStore({
        "t1": "ab\ncd", "hello": "hello world", "zh": "你好世界", "tab": "a\tb",
    })


@pytest.fixture
def db(tmp_path, monkeypatch):
    """utils.db_helper pointed at a fresh sqlite file."""
    monkeypatch.setattr(db_helper, "DB_PATH", str(tmp_path / "data" / "test.db"))
    return db_helper
