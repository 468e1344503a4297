from ui.widgets.typing_area import TypingArea, key_event_to_input
from ui.widgets.copy_view import CopyView

__all__ = ["TypingArea", "CopyView", "key_event_to_input"]
