"""
Compositor module - pixel buffers and canvas compositing.
"""

from screen_capture.compositor.pixels import (
    ChannelOrder,
    Color,
    MalformedBufferError,
    PixelBuffer,
)
from screen_capture.compositor.canvas import (
    BlendPolicy,
    Canvas,
    StitchPolicy,
    blit,
    pad_to_original,
    stitch,
)

__all__ = [
    "ChannelOrder",
    "Color",
    "MalformedBufferError",
    "PixelBuffer",
    "BlendPolicy",
    "Canvas",
    "StitchPolicy",
    "blit",
    "pad_to_original",
    "stitch",
]
