"""
Pixel buffers and channel orders.

A PixelBuffer is an immutable block of packed pixels. Its channel order
is plain data (ChannelOrder); converting between orders goes through the
explicit to_rgba/from_rgba reorder functions.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Tuple

import numpy as np

from screen_capture.logging import get_logger

logger = get_logger(__name__)

try:
    from PIL import Image
    HAS_PIL = True
except ImportError:
    HAS_PIL = False
    Image = None

_RGBA = "rgba"


class MalformedBufferError(ValueError):
    """Raised when pixel data does not match its declared geometry."""


class ChannelOrder(str, Enum):
    """Byte order of the channels within one pixel."""

    RGBA = "rgba"
    BGRA = "bgra"
    ARGB = "argb"
    ABGR = "abgr"
    RGB = "rgb"
    BGR = "bgr"

    @property
    def channels(self) -> int:
        return len(self.value)

    @property
    def has_alpha(self) -> bool:
        return "a" in self.value

    def to_rgba(self, pixels: np.ndarray) -> np.ndarray:
        """
        Reorder an H x W x channels array into a new H x W x 4 RGBA array.

        Orders without alpha get a fully opaque alpha channel.
        """
        out = np.empty(pixels.shape[:2] + (4,), dtype=np.uint8)
        for i, channel in enumerate(_RGBA):
            if channel in self.value:
                out[..., i] = pixels[..., self.value.index(channel)]
            else:
                out[..., i] = 255
        return out

    def from_rgba(self, pixels: np.ndarray) -> np.ndarray:
        """Reorder an H x W x 4 RGBA array into this order (drops alpha if absent)."""
        indices = [_RGBA.index(channel) for channel in self.value]
        return np.ascontiguousarray(pixels[..., indices])


@dataclass(frozen=True)
class Color:
    """An RGBA color."""

    r: int
    g: int
    b: int
    a: int = 255

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


@dataclass(frozen=True)
class PixelBuffer:
    """
    Captured screen area.

    Invariant: len(data) == width * height * bytes_per_pixel. Violations
    raise MalformedBufferError at construction, before any compositing
    can read out of bounds.
    """

    data: bytes
    width: int
    height: int
    bits_per_pixel: int = 32
    bytes_per_pixel: int = 4
    channel_order: ChannelOrder = ChannelOrder.RGBA

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise MalformedBufferError(
                f"Negative buffer size: {self.width}x{self.height}"
            )
        if self.bytes_per_pixel != self.channel_order.channels:
            raise MalformedBufferError(
                f"bytes_per_pixel={self.bytes_per_pixel} does not match "
                f"channel order {self.channel_order.value}"
            )
        expected = self.width * self.height * self.bytes_per_pixel
        if len(self.data) != expected:
            raise MalformedBufferError(
                f"Buffer holds {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height}x{self.bytes_per_pixel}"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def to_array(self) -> np.ndarray:
        """Read-only H x W x bytes_per_pixel view of the data."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, self.bytes_per_pixel
        )

    def to_rgba_array(self) -> np.ndarray:
        """New H x W x 4 RGBA array."""
        return self.channel_order.to_rgba(self.to_array())

    def get_pixel_color(self, x: int, y: int) -> Color:
        """
        Color of the pixel at (x, y).

        Raises:
            IndexError: If (x, y) lies outside the buffer
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer"
            )
        pixel = self.to_array()[y:y + 1, x:x + 1]
        r, g, b, a = (int(v) for v in self.channel_order.to_rgba(pixel)[0, 0])
        return Color(r, g, b, a)

    def to_image(self) -> Any:
        """Convert to a Pillow RGBA image."""
        if not HAS_PIL:
            raise RuntimeError("Pillow is required for to_image()")
        return Image.fromarray(self.to_rgba_array())

    def copy_with(self, **changes: Any) -> "PixelBuffer":
        return replace(self, **changes)

    @classmethod
    def from_rgba_array(
        cls,
        pixels: np.ndarray,
        channel_order: ChannelOrder = ChannelOrder.RGBA,
        bits_per_pixel: int | None = None,
    ) -> "PixelBuffer":
        """Build a buffer from an H x W x 4 RGBA array, converted to channel_order."""
        height, width = pixels.shape[:2]
        packed = channel_order.from_rgba(pixels)
        return cls(
            data=packed.tobytes(),
            width=width,
            height=height,
            bits_per_pixel=bits_per_pixel or channel_order.channels * 8,
            bytes_per_pixel=channel_order.channels,
            channel_order=channel_order,
        )

    @classmethod
    def from_mss(cls, shot: Any) -> "PixelBuffer":
        """Wrap an mss ScreenShot (BGRA)."""
        return cls(
            data=bytes(shot.bgra),
            width=shot.width,
            height=shot.height,
            bits_per_pixel=32,
            bytes_per_pixel=4,
            channel_order=ChannelOrder.BGRA,
        )
