import sqlite3, os, uuid
from dataclasses import dataclass
from typing import List, Optional

from app.config import DB_PATH
from app.errors import DatabaseError
from app.validation import validate_mode, sanitize_name


@dataclass
class SavedText:
    id: str
    name: str
    content: str
    created_at: str


def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS texts(
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        content TEXT NOT NULL,
        created_at DATETIME DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
    );
    """)
    conn.execute("""
    CREATE TABLE IF NOT EXISTS progress(
        text_id TEXT NOT NULL,
        mode TEXT NOT NULL,
        position INTEGER NOT NULL DEFAULT 0,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY(text_id, mode)
    );
    """)


def get_conn():
    folder = os.path.dirname(DB_PATH)
    if folder:
        os.makedirs(folder, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    _ensure_schema(conn)
    return conn


def save_text(name: str, content: str) -> str:
    text_id = uuid.uuid4().hex
    conn = None
    try:
        conn = get_conn()
        conn.execute(
            "INSERT INTO texts(id, name, content) VALUES (?,?,?)",
            (text_id, sanitize_name(name), content),
        )
        conn.commit()
        return text_id
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()


def get_text(text_id: str) -> Optional[SavedText]:
    conn = None
    try:
        conn = get_conn()
        row = conn.execute(
            "SELECT id, name, content, created_at FROM texts WHERE id=?", (text_id,)
        ).fetchone()
        return SavedText(*row) if row else None
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()


def get_reference_text(text_id: str) -> Optional[str]:
    saved = get_text(text_id)
    return saved.content if saved else None


def list_texts() -> List[SavedText]:
    """Saved texts, newest first."""
    conn = None
    try:
        conn = get_conn()
        rows = conn.execute(
            "SELECT id, name, content, created_at FROM texts ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
        return [SavedText(*r) for r in rows]
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()


def delete_text(text_id: str):
    # progress for every mode goes with the text
    conn = None
    try:
        conn = get_conn()
        conn.execute("DELETE FROM progress WHERE text_id=?", (text_id,))
        conn.execute("DELETE FROM texts WHERE id=?", (text_id,))
        conn.commit()
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()


def load_cursor(text_id: str, mode: str) -> int:
    validate_mode(mode)
    conn = None
    try:
        conn = get_conn()
        row = conn.execute(
            "SELECT position FROM progress WHERE text_id=? AND mode=?", (text_id, mode)
        ).fetchone()
        return int(row[0]) if row else 0
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()


def save_cursor(text_id: str, mode: str, cursor: int):
    validate_mode(mode)
    conn = None
    try:
        conn = get_conn()
        conn.execute(
            """
            INSERT INTO progress(text_id, mode, position, updated_at)
            VALUES (?,?,?,CURRENT_TIMESTAMP)
            ON CONFLICT(text_id, mode)
            DO UPDATE SET position=excluded.position, updated_at=excluded.updated_at
            """,
            (text_id, mode, max(0, int(cursor))),
        )
        conn.commit()
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()
