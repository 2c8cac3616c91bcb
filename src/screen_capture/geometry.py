"""
Rectangle geometry in virtual desktop coordinates.

Rect carries float coordinates as reported by display enumeration;
Region is the integer device-pixel rectangle handed to a capture backend.
Float to int conversion always truncates toward zero.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple


class GeometryError(ValueError):
    """Raised when geometry violates a contract (e.g. negative extent)."""


def truncate(value: float) -> int:
    """Truncate toward zero (never rounds)."""
    return int(value)


@dataclass(frozen=True)
class Point:
    """A position in virtual desktop space."""

    x: float
    y: float


@dataclass(frozen=True)
class Size:
    """A width/height pair."""

    width: float
    height: float


@dataclass(frozen=True)
class Region:
    """Integer screen region in device pixels."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Return as (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    def to_mss_dict(self) -> dict:
        """Return as mss monitor dict format."""
        return {
            "left": self.x,
            "top": self.y,
            "width": self.width,
            "height": self.height,
        }

    def to_log(self) -> str:
        return f"{self.x},{self.y} {self.width}x{self.height}"

    @classmethod
    def from_dict(cls, d: dict) -> "Region":
        """Create from dictionary (accepts x/y or mss left/top keys)."""
        return cls(
            x=d.get("x", d.get("left", 0)),
            y=d.get("y", d.get("top", 0)),
            width=d["width"],
            height=d["height"],
        )


@dataclass(frozen=True)
class Rect:
    """
    Rectangle in virtual desktop space.

    A rect with non-positive width or height is empty and means "no area".
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def truncated(self) -> Region:
        """Integer region with every component truncated toward zero."""
        return Region(
            x=truncate(self.x),
            y=truncate(self.y),
            width=truncate(self.width),
            height=truncate(self.height),
        )

    def to_log(self) -> str:
        return f"{self.x:g},{self.y:g} {self.width:g}x{self.height:g}"

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        return cls(left, top, right - left, bottom - top)

    @classmethod
    def from_origin_size(cls, origin: Point, size: Size) -> "Rect":
        return cls(origin.x, origin.y, size.width, size.height)


EMPTY_RECT = Rect(0.0, 0.0, 0.0, 0.0)


def intersect(a: Rect, b: Rect) -> Rect:
    """Intersection of two rects; EMPTY_RECT when they do not overlap."""
    left = max(a.left, b.left)
    top = max(a.top, b.top)
    right = min(a.right, b.right)
    bottom = min(a.bottom, b.bottom)
    if right <= left or bottom <= top:
        return EMPTY_RECT
    return Rect.from_ltrb(left, top, right, bottom)


def overlaps(a: Rect, b: Rect) -> bool:
    return not intersect(a, b).is_empty


def bounding_box(rects: Iterable[Rect]) -> Rect:
    """
    Minimal rect containing all inputs.

    Raises:
        ValueError: If rects is empty
    """
    rects = list(rects)
    if not rects:
        raise ValueError("bounding_box() requires at least one rect")
    return Rect.from_ltrb(
        min(r.left for r in rects),
        min(r.top for r in rects),
        max(r.right for r in rects),
        max(r.bottom for r in rects),
    )


def translate(r: Rect, dx: float, dy: float) -> Rect:
    return Rect(r.x + dx, r.y + dy, r.width, r.height)
