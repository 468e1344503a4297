from app.config import MODES
from app.errors import InvalidModeError


def sanitize_name(name: str) -> str:
    name = " ".join((name or "").split())
    return "".join(ch for ch in name if ch.isprintable())[:80] or "Untitled"


def normalize_text(text: str) -> str:
    """Line breaks become plain "\\n" characters; surrounding whitespace is dropped."""
    return (text or "").replace("\r\n", "\n").replace("\r", "\n").strip()


def validate_mode(mode: str) -> str:
    if mode not in MODES:
        raise InvalidModeError(mode)
    return mode
