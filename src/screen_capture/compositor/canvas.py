"""
Canvas compositing.

Pads edge-clipped captures back to their requested size and stitches
per-display captures into one virtual desktop image. The canvas is
always RGBA and starts fully transparent black.
"""

from enum import Enum, auto
from typing import Optional, Sequence, Tuple

import numpy as np

from screen_capture.compositor.pixels import ChannelOrder, PixelBuffer
from screen_capture.geometry import GeometryError, Rect, bounding_box, truncate
from screen_capture.logging import get_logger

logger = get_logger(__name__)


class BlendPolicy(Enum):
    """How source pixels are written into a canvas."""

    OVERWRITE = auto()             # Replace destination pixels, no alpha blending
    ZERO_FILL_BACKGROUND = auto()  # Clear the whole canvas, then overwrite


class StitchPolicy(str, Enum):
    """How per-display captures are combined."""

    OFFSET = "offset"          # True virtual desktop offsets within the bounding box
    HORIZONTAL = "horizontal"  # Left-to-right, vertically centered, positions ignored


class Canvas:
    """Mutable RGBA pixel canvas."""

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise GeometryError(f"Negative canvas size: {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)

    def blit(
        self,
        source: PixelBuffer,
        dst_x: int,
        dst_y: int,
        policy: BlendPolicy = BlendPolicy.OVERWRITE,
    ) -> None:
        """
        Copy source into the canvas with its top-left at (dst_x, dst_y).

        Source pixels that land outside the canvas are dropped. Each pixel
        is converted from the source channel order to RGBA.
        """
        if policy is BlendPolicy.ZERO_FILL_BACKGROUND:
            self.pixels.fill(0)

        x0 = max(dst_x, 0)
        y0 = max(dst_y, 0)
        x1 = min(dst_x + source.width, self.width)
        y1 = min(dst_y + source.height, self.height)
        if x1 <= x0 or y1 <= y0:
            logger.debug(
                "Blit fully clipped",
                source=source.size,
                dst=(dst_x, dst_y),
                canvas=(self.width, self.height),
            )
            return

        visible = source.to_array()[y0 - dst_y:y1 - dst_y, x0 - dst_x:x1 - dst_x]
        self.pixels[y0:y1, x0:x1] = source.channel_order.to_rgba(visible)

    def to_buffer(
        self,
        channel_order: ChannelOrder = ChannelOrder.RGBA,
        bits_per_pixel: Optional[int] = None,
    ) -> PixelBuffer:
        """Convert the canvas into a PixelBuffer in the given channel order."""
        return PixelBuffer.from_rgba_array(self.pixels, channel_order, bits_per_pixel)


def blit(
    canvas: Canvas,
    source: PixelBuffer,
    dst_x: int,
    dst_y: int,
    policy: BlendPolicy = BlendPolicy.OVERWRITE,
) -> None:
    canvas.blit(source, dst_x, dst_y, policy)


def pad_to_original(
    captured: PixelBuffer,
    requested: Rect,
    corrected: Rect,
) -> PixelBuffer:
    """
    Restore a clipped capture to the size that was originally requested.

    When corrected == requested the capture is returned as-is. Otherwise
    the capture is placed at its offset inside a zero-filled canvas of the
    requested size, and the result keeps the capture's channel order and
    bit depth.
    """
    if corrected == requested:
        return captured

    canvas = Canvas(truncate(requested.width), truncate(requested.height))
    dst_x = truncate(corrected.x - requested.x)
    dst_y = truncate(corrected.y - requested.y)
    canvas.blit(captured, dst_x, dst_y, BlendPolicy.OVERWRITE)

    logger.debug(
        "Padded capture to requested size",
        requested=requested,
        corrected=corrected,
        offset=(dst_x, dst_y),
    )

    return canvas.to_buffer(captured.channel_order, captured.bits_per_pixel)


def _stitch_offset(
    placements: Sequence[Tuple[Rect, Optional[PixelBuffer]]],
) -> Canvas:
    bbox = bounding_box(rect for rect, _ in placements)
    canvas = Canvas(truncate(bbox.width), truncate(bbox.height))

    for rect, buffer in placements:
        if buffer is None:
            continue
        canvas.blit(
            buffer,
            truncate(rect.x - bbox.x),
            truncate(rect.y - bbox.y),
            BlendPolicy.OVERWRITE,
        )
    return canvas


def _stitch_horizontal(buffers: Sequence[PixelBuffer]) -> Canvas:
    width = sum(b.width for b in buffers)
    height = max(b.height for b in buffers)
    canvas = Canvas(width, height)

    x = 0
    for buffer in buffers:
        canvas.blit(buffer, x, (height - buffer.height) // 2, BlendPolicy.OVERWRITE)
        x += buffer.width
    return canvas


def stitch(
    placements: Sequence[Tuple[Rect, Optional[PixelBuffer]]],
    policy: StitchPolicy = StitchPolicy.OFFSET,
) -> Optional[PixelBuffer]:
    """
    Combine per-display captures into one RGBA buffer.

    Args:
        placements: (display rect, capture or None) in enumeration order
        policy: Stitching policy, as a StitchPolicy or its string value

    Returns:
        Combined 32-bit RGBA buffer, or None if no display was captured
    """
    policy = StitchPolicy(policy)
    captured = [buffer for _, buffer in placements if buffer is not None]
    if not captured:
        return None

    if policy is StitchPolicy.HORIZONTAL:
        canvas = _stitch_horizontal(captured)
    else:
        canvas = _stitch_offset(placements)

    logger.debug(
        "Stitched displays",
        policy=policy.value,
        captured=len(captured),
        total=len(placements),
        size=(canvas.width, canvas.height),
    )

    return canvas.to_buffer(ChannelOrder.RGBA, 32)
