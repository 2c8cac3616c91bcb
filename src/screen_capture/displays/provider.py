"""
Display enumeration.

MssDisplayProvider lists monitors through mss. mss index 0 is the
virtual screen spanning all monitors and is skipped; the remaining
monitors keep their mss index as id, so the primary monitor is "1".
On Windows the work area (rcWork) of each monitor is reported as its
visible bounds.
"""

import asyncio
import sys
import ctypes
from typing import Dict, List, Optional, Protocol, Tuple

from screen_capture.displays.models import Display
from screen_capture.geometry import Point, Size
from screen_capture.logging import get_logger

logger = get_logger(__name__)

IS_WINDOWS = sys.platform == "win32"

try:
    import mss
    import mss.exception
    HAS_MSS = True
except ImportError:
    HAS_MSS = False
    logger.warning("mss not available, display enumeration disabled")

# (left, top, right, bottom)
_LTRB = Tuple[int, int, int, int]


class DisplayProvider(Protocol):
    """Enumerates connected displays in a stable order."""

    async def get_all_displays(self) -> List[Display]:
        ...


class StaticDisplayProvider:
    """Provider returning a fixed display list."""

    def __init__(self, displays: List[Display]):
        self._displays = list(displays)

    async def get_all_displays(self) -> List[Display]:
        return list(self._displays)


def get_work_areas() -> Dict[_LTRB, Tuple[_LTRB, float]]:
    """
    Map each monitor rect to its work area and DPI scale (Windows only).

    Returns an empty dict on other platforms or on failure.
    """
    if not IS_WINDOWS:
        return {}

    areas: Dict[_LTRB, Tuple[_LTRB, float]] = {}

    try:
        import ctypes.wintypes

        MONITORENUMPROC = ctypes.WINFUNCTYPE(
            ctypes.c_bool,
            ctypes.c_void_p,  # hMonitor
            ctypes.c_void_p,  # hdcMonitor
            ctypes.POINTER(ctypes.wintypes.RECT),  # lprcMonitor
            ctypes.c_void_p,  # dwData
        )

        class MONITORINFO(ctypes.Structure):
            _fields_ = [
                ("cbSize", ctypes.wintypes.DWORD),
                ("rcMonitor", ctypes.wintypes.RECT),
                ("rcWork", ctypes.wintypes.RECT),
                ("dwFlags", ctypes.wintypes.DWORD),
            ]

        handles = []

        def callback(hMonitor, hdcMonitor, lprcMonitor, dwData):
            handles.append(hMonitor)
            return True

        ctypes.windll.user32.EnumDisplayMonitors(
            None, None, MONITORENUMPROC(callback), 0
        )

        for hMonitor in handles:
            mi = MONITORINFO()
            mi.cbSize = ctypes.sizeof(MONITORINFO)
            ctypes.windll.user32.GetMonitorInfoW(hMonitor, ctypes.byref(mi))

            try:
                dpi_x = ctypes.c_uint()
                dpi_y = ctypes.c_uint()
                ctypes.windll.shcore.GetDpiForMonitor(
                    hMonitor, 0, ctypes.byref(dpi_x), ctypes.byref(dpi_y)
                )
                scale = dpi_x.value / 96.0
            except (AttributeError, OSError):
                scale = 1.0

            monitor = mi.rcMonitor
            work = mi.rcWork
            areas[(monitor.left, monitor.top, monitor.right, monitor.bottom)] = (
                (work.left, work.top, work.right, work.bottom),
                scale,
            )

    except (AttributeError, OSError) as e:
        logger.error("Error reading monitor work areas", error=str(e))

    return areas


def display_from_monitor(
    index: int,
    monitor: dict,
    work_area: Optional[_LTRB] = None,
    scale_factor: float = 1.0,
) -> Display:
    """Build a Display from an mss monitor dict and optional work area."""
    visible_position = None
    visible_size = None
    if work_area is not None:
        left, top, right, bottom = work_area
        visible_position = Point(float(left), float(top))
        visible_size = Size(float(right - left), float(bottom - top))

    return Display(
        id=str(index),
        position=Point(float(monitor["left"]), float(monitor["top"])),
        size=Size(float(monitor["width"]), float(monitor["height"])),
        visible_position=visible_position,
        visible_size=visible_size,
        scale_factor=scale_factor,
        name=f"Monitor {index}",
    )


class MssDisplayProvider:
    """Enumerates displays with mss, re-reading the layout on every call."""

    def _enumerate(self) -> List[Display]:
        if not HAS_MSS:
            return []

        work_areas = get_work_areas()
        displays = []

        try:
            with mss.mss() as sct:
                monitors = list(sct.monitors[1:])
        except mss.exception.ScreenShotError as e:
            logger.error("Display enumeration failed", error=str(e))
            return []

        for index, monitor in enumerate(monitors, start=1):
            key = (
                monitor["left"],
                monitor["top"],
                monitor["left"] + monitor["width"],
                monitor["top"] + monitor["height"],
            )
            work_area, scale = work_areas.get(key, (None, 1.0))
            displays.append(
                display_from_monitor(index, monitor, work_area, scale)
            )

        logger.debug("Displays enumerated", count=len(displays))
        return displays

    async def get_all_displays(self) -> List[Display]:
        return await asyncio.to_thread(self._enumerate)
