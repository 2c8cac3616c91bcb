"""
Displays module - display model, enumeration and target resolution.
"""

from screen_capture.displays.models import Display
from screen_capture.displays.resolver import (
    DEFAULT_PRIMARY_DISPLAY_ID,
    NoDisplaysError,
    find_display,
    resolve_entire_screen,
    visible_rect,
)
from screen_capture.displays.provider import (
    DisplayProvider,
    MssDisplayProvider,
    StaticDisplayProvider,
)

__all__ = [
    "Display",
    "DEFAULT_PRIMARY_DISPLAY_ID",
    "NoDisplaysError",
    "find_display",
    "resolve_entire_screen",
    "visible_rect",
    "DisplayProvider",
    "MssDisplayProvider",
    "StaticDisplayProvider",
]
