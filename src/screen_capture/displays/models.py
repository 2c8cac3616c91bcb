"""
Display model.
"""

from dataclasses import dataclass
from typing import Optional

from screen_capture.geometry import Point, Rect, Size


@dataclass(frozen=True)
class Display:
    """
    Snapshot of one connected display.

    position/size are the full bounds in virtual desktop space;
    visible_position/visible_size narrow them to the usable area
    (excluding taskbars, docks, menu bars) when the platform reports it.
    """

    id: str
    position: Point
    size: Size
    visible_position: Optional[Point] = None
    visible_size: Optional[Size] = None
    scale_factor: float = 1.0  # DPI scale (1.0 = 100%, 1.25 = 125%, etc.)
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.visible_size is not None and (
            self.visible_size.width > self.size.width
            or self.visible_size.height > self.size.height
        ):
            raise ValueError(
                f"Display {self.id}: visible size "
                f"{self.visible_size.width}x{self.visible_size.height} exceeds "
                f"full size {self.size.width}x{self.size.height}"
            )

    @property
    def bounds(self) -> Rect:
        """Full display bounds."""
        return Rect.from_origin_size(self.position, self.size)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "position": (self.position.x, self.position.y),
            "size": (self.size.width, self.size.height),
            "visible_position": (
                (self.visible_position.x, self.visible_position.y)
                if self.visible_position else None
            ),
            "visible_size": (
                (self.visible_size.width, self.visible_size.height)
                if self.visible_size else None
            ),
            "scale_factor": self.scale_factor,
        }
