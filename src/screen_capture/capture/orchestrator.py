"""
Capture orchestration.

Drives one backend call per request: resolve the constraining display,
sanitize the rect, capture, then pad or stitch the result. Every "nothing
to capture" outcome is returned as None; only contract violations raise.
Displays are re-enumerated on every call so results always reflect the
current monitor layout.
"""

import asyncio
from typing import List, Optional, Tuple

from screen_capture.capture.backend import CaptureBackend, create_backend
from screen_capture.capture.sanitizer import sanitize
from screen_capture.compositor.canvas import pad_to_original, stitch
from screen_capture.compositor.pixels import Color, PixelBuffer
from screen_capture.config import CaptureConfig
from screen_capture.displays.models import Display
from screen_capture.displays.provider import DisplayProvider, MssDisplayProvider
from screen_capture.displays.resolver import (
    NoDisplaysError,
    resolve_entire_screen,
    visible_rect,
)
from screen_capture.geometry import GeometryError, Rect
from screen_capture.logging import get_logger

logger = get_logger(__name__)


class ScreenCapture:
    """
    Coordinate-correct screen capture across displays.

    Supports single display, arbitrary area, single pixel and combined
    virtual desktop captures.
    """

    def __init__(
        self,
        backend: Optional[CaptureBackend] = None,
        provider: Optional[DisplayProvider] = None,
        config: Optional[CaptureConfig] = None,
    ):
        """
        Initialize screen capture.

        Args:
            backend: Native capture backend (defaults to config.backend.name)
            provider: Display enumeration service (defaults to mss)
            config: Capture configuration (defaults to built-in defaults)
        """
        self.config = config or CaptureConfig()
        self.backend = backend or create_backend(
            self.config.backend.name,
            with_cursor=self.config.backend.with_cursor,
        )
        self.provider = provider or MssDisplayProvider()

    async def get_all_displays(self) -> List[Display]:
        return await self.provider.get_all_displays()

    async def capture_entire_screen(
        self,
        display_id: Optional[str] = None,
    ) -> Optional[PixelBuffer]:
        """
        Capture the visible area of one display.

        Args:
            display_id: Display to capture; defaults to the primary display,
                falling back to the first enumerated one

        Returns:
            PixelBuffer, or None if nothing could be captured
        """
        displays = await self.get_all_displays()
        try:
            display = resolve_entire_screen(
                displays,
                display_id,
                primary_id=self.config.displays.primary_display_id,
            )
        except NoDisplaysError:
            logger.warning("No displays, cannot capture entire screen")
            return None

        rect = visible_rect(display)
        logger.info("Capturing entire screen", display=display.id, rect=rect)

        return await self.capture_screen_area(rect, target_display=display)

    async def capture_screen_area(
        self,
        rect: Rect,
        target_display: Optional[Display] = None,
    ) -> Optional[PixelBuffer]:
        """
        Capture a screen rect, clipped to a display and padded back.

        Pass target_display to clip strictly against that display;
        otherwise the first display overlapping rect is used.

        Returns:
            PixelBuffer sized to rect (truncated), or None

        Raises:
            GeometryError: If the sanitized rect truncates to a negative extent
        """
        if rect.is_empty:
            return None

        displays = await self.get_all_displays()
        if not displays:
            logger.warning("No displays, nothing to capture", requested=rect)
            return None

        corrected = sanitize(rect, displays, target_display)
        if corrected.is_empty:
            logger.debug("Rect outside display bounds", requested=rect)
            return None

        region = corrected.truncated()
        if region.width < 0 or region.height < 0:
            raise GeometryError(f"Negative capture region after truncation: {region}")
        if region.width == 0 or region.height == 0:
            logger.debug("Rect truncates to zero pixels", corrected=corrected)
            return None

        logger.debug("Capturing screen area", requested=rect, corrected=corrected)

        captured = await self.backend.capture(region)
        if captured is None:
            logger.debug("Backend returned no data", region=region)
            return None

        if captured.size != (region.width, region.height):
            logger.warning(
                "Backend size differs from request",
                region=region,
                returned=captured.size,
            )

        return pad_to_original(captured, rect, corrected)

    async def capture_screen_color(self, x: float, y: float) -> Optional[Color]:
        """Capture the color of a single screen pixel."""
        area = await self.capture_screen_area(Rect(x, y, 1, 1))
        if area is None:
            return None
        return area.get_pixel_color(0, 0)

    async def _capture_display(
        self,
        display: Display,
    ) -> Tuple[Rect, Optional[PixelBuffer]]:
        rect = visible_rect(display)
        logger.debug("Capturing display", display=display.id, rect=rect)

        area = await self.capture_screen_area(rect, target_display=display)
        if area is None:
            logger.warning("Display returned no capture, skipping", display=display.id)
        return rect, area

    async def capture_all_displays_combined(self) -> Optional[PixelBuffer]:
        """
        Capture every display and combine them into one RGBA image.

        A display that fails to capture is skipped and left transparent.

        Returns:
            Combined 32-bit RGBA buffer, or None if no display was captured
        """
        displays = await self.get_all_displays()
        if not displays:
            logger.warning("No displays, cannot capture combined image")
            return None

        if self.config.composite.concurrent_captures:
            placements = list(await asyncio.gather(
                *(self._capture_display(d) for d in displays)
            ))
        else:
            placements = [await self._capture_display(d) for d in displays]

        combined = stitch(placements, self.config.composite.stitch_policy)
        if combined is None:
            logger.warning("No display could be captured", displays=len(displays))
            return None

        logger.info(
            "Combined capture complete",
            displays=len(displays),
            size=combined.size,
        )
        return combined

    # Short aliases
    capture_area = capture_screen_area
    capture_pixel_color = capture_screen_color
