"""
Interaction Geometry.

Value types for pointer coordinates and the trash-zone hit test.
All coordinates are viewport (client) pixels, origin top-left.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A client coordinate or a delta between two of them."""

    x: float
    y: float

    def minus(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Viewport:
    """Visible area size in pixels."""

    width: float
    height: float


@dataclass(frozen=True)
class TrashZone:
    """
    Fixed rectangle anchored to the viewport's bottom-left corner.

    Edges are inclusive: x in [0, width], y in [height_vp - height, height_vp].
    """

    width: float = 120.0
    height: float = 120.0

    def contains(self, pointer: Point, viewport: Viewport) -> bool:
        top = viewport.height - self.height
        return 0 <= pointer.x <= self.width and top <= pointer.y <= viewport.height
