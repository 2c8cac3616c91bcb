"""
Pytest configuration and fixtures.
"""

import asyncio
import tempfile
from pathlib import Path
from typing import List, Optional, Set, Tuple

import numpy as np
import pytest

from screen_capture.compositor.pixels import ChannelOrder, PixelBuffer
from screen_capture.displays.models import Display
from screen_capture.displays.provider import StaticDisplayProvider
from screen_capture.geometry import Point, Region, Size


def pattern_rgba(x: int, y: int, width: int, height: int) -> np.ndarray:
    """
    RGBA pattern keyed to absolute screen coordinates.

    R = X % 256, G = Y % 256, B = 7, A = 255 for the pixel at (X, Y).
    """
    xs = (np.arange(x, x + width) % 256).astype(np.uint8)
    ys = (np.arange(y, y + height) % 256).astype(np.uint8)
    out = np.empty((height, width, 4), dtype=np.uint8)
    out[..., 0] = xs[np.newaxis, :]
    out[..., 1] = ys[:, np.newaxis]
    out[..., 2] = 7
    out[..., 3] = 255
    return out


class FakeBackend:
    """Backend returning BGRA pattern pixels for any requested region."""

    def __init__(
        self,
        fail_origins: Optional[Set[Tuple[int, int]]] = None,
        size_override: Optional[Tuple[int, int]] = None,
        channel_order: ChannelOrder = ChannelOrder.BGRA,
    ):
        self.calls: List[Region] = []
        self.fail_origins = fail_origins or set()
        self.size_override = size_override
        self.channel_order = channel_order

    async def capture(self, region: Region) -> Optional[PixelBuffer]:
        self.calls.append(region)
        if (region.x, region.y) in self.fail_origins:
            return None
        width, height = self.size_override or (region.width, region.height)
        return PixelBuffer.from_rgba_array(
            pattern_rgba(region.x, region.y, width, height),
            self.channel_order,
        )


def make_display(
    display_id: str,
    x: float,
    y: float,
    width: float,
    height: float,
    visible: Optional[Tuple[float, float, float, float]] = None,
) -> Display:
    visible_position = visible_size = None
    if visible is not None:
        visible_position = Point(visible[0], visible[1])
        visible_size = Size(visible[2], visible[3])
    return Display(
        id=display_id,
        position=Point(x, y),
        size=Size(width, height),
        visible_position=visible_position,
        visible_size=visible_size,
    )


def run_async(coro):
    """Helper to run async functions in sync tests."""
    return asyncio.run(coro)


@pytest.fixture(scope="session")
def temp_dir():
    """Session-scoped temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_file(temp_dir):
    """Create a temporary file."""
    def _create(name: str, content: str = "") -> Path:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
    return _create


@pytest.fixture
def display_factory():
    return make_display


@pytest.fixture
def backend_factory():
    return FakeBackend


@pytest.fixture
def provider_factory():
    return StaticDisplayProvider


@pytest.fixture
def pattern():
    return pattern_rgba


@pytest.fixture
def run():
    return run_async


@pytest.fixture
def two_displays():
    """Side-by-side 1920x1080 primary and 1280x1024 secondary."""
    return [
        make_display("1", 0, 0, 1920, 1080, visible=(0, 0, 1920, 1080)),
        make_display("2", 1920, 0, 1280, 1024, visible=(1920, 0, 1280, 1024)),
    ]
