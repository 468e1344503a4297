# app/errors.py


class TracetypeError(Exception):
    """Base class for errors raised by the app."""


class DatabaseError(TracetypeError):
    pass


class InvalidModeError(TracetypeError):
    def __init__(self, mode: str):
        super().__init__(f"Unknown practice mode: {mode!r}")
        self.mode = mode


class SessionStartError(TracetypeError):
    """The session could not be opened (missing or unreadable reference text)."""

    def __init__(self, text_id: str, reason: str = "text not found"):
        super().__init__(f"Cannot start session for {text_id!r}: {reason}")
        self.text_id = text_id
        self.reason = reason
