"""
Display resolution: which display should constrain a capture.
"""

from typing import Optional, Sequence

from screen_capture.displays.models import Display
from screen_capture.geometry import Rect
from screen_capture.logging import get_logger

logger = get_logger(__name__)

# Display id the enumeration service reports for the primary monitor
DEFAULT_PRIMARY_DISPLAY_ID = "1"


class NoDisplaysError(LookupError):
    """Raised when display enumeration returned nothing."""


def find_display(displays: Sequence[Display], display_id: str) -> Optional[Display]:
    """Return the display with the given id, or None."""
    for display in displays:
        if display.id == display_id:
            return display
    return None


def resolve_entire_screen(
    displays: Sequence[Display],
    requested_id: Optional[str] = None,
    primary_id: str = DEFAULT_PRIMARY_DISPLAY_ID,
) -> Display:
    """
    Pick the display an entire-screen capture should target.

    Without requested_id the primary display is preferred; with one, the
    matching display is. Either way the first enumerated display is the
    fallback.

    Args:
        displays: Displays in enumeration order
        requested_id: Explicit display id (optional)
        primary_id: Id treated as the primary display

    Returns:
        The resolved display

    Raises:
        NoDisplaysError: If displays is empty
    """
    if not displays:
        raise NoDisplaysError("No displays available")

    wanted = primary_id if requested_id is None else requested_id
    display = find_display(displays, wanted)
    if display is None:
        if requested_id is not None:
            logger.warning(
                "Requested display not found, using first",
                requested=requested_id,
                fallback=displays[0].id,
            )
        display = displays[0]

    return display


def visible_rect(display: Display) -> Rect:
    """Usable area of a display, falling back to its full bounds."""
    origin = display.visible_position or display.position
    size = display.visible_size or display.size
    return Rect.from_origin_size(origin, size)
