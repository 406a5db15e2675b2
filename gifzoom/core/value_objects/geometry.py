"""Geometry value objects shared by the editing controllers and the compiler.

Two rectangle flavors exist side by side: ``DisplayRect`` lives in canvas
pixels (what the pointer sees) and ``SourceRect`` lives in source-video
pixels (what the frame engine crops). They are distinct types so one can
never be passed where the other is expected.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def aspect_ratio(self) -> float:
        if self.height <= 0:
            return 1.0
        return self.width / self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class DisplayRect:
    """Rectangle in canvas-render pixels. Coordinates may be fractional."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_degenerate(self) -> bool:
        return self.width < 1 or self.height < 1

    def contains(self, point: Point) -> bool:
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def translated(self, dx: float, dy: float) -> DisplayRect:
        return DisplayRect(self.x + dx, self.y + dy, self.width, self.height)

    def scaled(self, sx: float, sy: float) -> DisplayRect:
        return DisplayRect(self.x * sx, self.y * sy, self.width * sx, self.height * sy)


@dataclass(frozen=True)
class SourceRect:
    """Rectangle in source-video pixels, as handed to the crop stage."""

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

    def fits_within(self, frame: Size) -> bool:
        return (
            self.x >= 0
            and self.y >= 0
            and self.right <= frame.width
            and self.bottom <= frame.height
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
