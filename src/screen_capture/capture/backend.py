"""
Native capture backends.

A backend captures exactly the integer region it is given and returns
raw pixels, or None when the region could not be captured.
"""

import asyncio
import time
from typing import Optional, Protocol

from screen_capture.compositor.pixels import PixelBuffer
from screen_capture.geometry import Region
from screen_capture.logging import get_logger

logger = get_logger(__name__)

# Try to import mss
try:
    import mss
    import mss.exception
    HAS_MSS = True
except ImportError:
    HAS_MSS = False
    logger.warning("mss not available, screen capture disabled")


class CaptureBackend(Protocol):
    """Captures a device-pixel region."""

    async def capture(self, region: Region) -> Optional[PixelBuffer]:
        ...


class MssBackend:
    """
    Captures screen regions using mss.

    Grabs run in a worker thread so the event loop is never blocked.
    """

    def __init__(self, with_cursor: bool = False):
        """
        Initialize mss backend.

        Args:
            with_cursor: Include the mouse cursor where mss supports it
        """
        self.with_cursor = with_cursor
        logger.info("MssBackend initialized", available=HAS_MSS, with_cursor=with_cursor)

    @property
    def available(self) -> bool:
        return HAS_MSS

    def _grab(self, region: Region) -> Optional[PixelBuffer]:
        start = time.time()

        try:
            with mss.mss(with_cursor=self.with_cursor) as sct:
                shot = sct.grab(region.to_mss_dict())
        except mss.exception.ScreenShotError as e:
            logger.error("Region capture failed", region=region, error=str(e))
            return None

        buffer = PixelBuffer.from_mss(shot)
        logger.debug(
            "Region captured",
            region=region,
            duration_ms=int((time.time() - start) * 1000),
        )
        return buffer

    async def capture(self, region: Region) -> Optional[PixelBuffer]:
        if not HAS_MSS:
            logger.warning("Capture skipped, mss not available", region=region)
            return None
        return await asyncio.to_thread(self._grab, region)


BACKENDS = {
    "mss": MssBackend,
}


def create_backend(name: str = "mss", **options) -> CaptureBackend:
    """
    Build a capture backend by name.

    Raises:
        ValueError: If no backend is registered under name
    """
    try:
        backend_cls = BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown capture backend: {name!r} (available: {', '.join(sorted(BACKENDS))})"
        ) from None
    return backend_cls(**options)
