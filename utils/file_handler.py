import logging
import os
from pathlib import Path

from app.config import DATA_DIR
from app.validation import normalize_text
from utils import db_helper

log = logging.getLogger(__name__)

DEFAULT_TITLE = "Welcome to Tracetype"

_DEFAULT_FILE = Path("assets/texts/default.txt")

_FALLBACK = (
    "Welcome to Tracetype!\n"
    "Type over this text. Correct characters turn green, mistakes turn red.\n"
    "Backspace steps back one character, Ctrl+Z undoes and Ctrl+Shift+Z redoes."
)


def ensure_app_files():
    os.makedirs(DATA_DIR, exist_ok=True)


def read_text_file(path) -> str:
    """Read a UTF-8 text file with line breaks normalized to "\\n"."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return normalize_text(f.read())


def import_text_file(path) -> str:
    """Add a .txt file to the library; returns the new text id."""
    content = read_text_file(path)
    if not content:
        raise ValueError(f"{path} contains no text")
    return db_helper.save_text(Path(path).stem, content)


def load_default_text() -> str:
    try:
        if _DEFAULT_FILE.exists():
            return read_text_file(_DEFAULT_FILE)
    except OSError as e:
        log.warning("Failed to read default text: %s", e)
    return _FALLBACK


def seed_library() -> None:
    """Put the default text into an empty library."""
    if not db_helper.list_texts():
        db_helper.save_text(DEFAULT_TITLE, load_default_text())
