"""
Rect sanitization: clip a requested capture rect to a display.
"""

from typing import Optional, Sequence

from screen_capture.displays.models import Display
from screen_capture.displays.resolver import visible_rect
from screen_capture.geometry import Rect, intersect, overlaps
from screen_capture.logging import get_logger

logger = get_logger(__name__)


def sanitize(
    requested: Rect,
    displays: Sequence[Display],
    target: Optional[Display] = None,
) -> Rect:
    """
    Clip requested to the visible bounds of a display.

    With a target the rect is clipped strictly against that display and
    may come back empty. Without one, the first display (enumeration
    order) that overlaps the rect is used; if none does, the rect is
    returned unchanged and the backend is left to reject it.
    """
    if target is None:
        target = next(
            (d for d in displays if overlaps(requested, visible_rect(d))),
            None,
        )
        if target is None:
            logger.debug("No display overlaps rect, not clipping", requested=requested)
            return requested

    return intersect(requested, visible_rect(target))
