"""Geometry value objects.

All coordinates used by the pipeline are normalized to the image size:
origin at the top-left corner, y growing downward, both axes in [0, 1].
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """2D point or vector."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared)

    @property
    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def heading(self) -> float:
        """Signed angle to the positive x axis, in radians."""
        return math.atan2(self.y, self.x)

    def angle_to(self, other: Point) -> float:
        """Signed angle from this vector to another, in radians."""
        return other.heading - self.heading

    def scaled(self, width: float, height: float) -> Point:
        """Scale each axis independently (normalized -> absolute)."""
        return Point(self.x * width, self.y * height)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    @property
    def top_left(self) -> Point:
        return Point(self.min_x, self.min_y)

    @property
    def bottom_right(self) -> Point:
        return Point(self.max_x, self.max_y)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def union(self, other: BoundingBox) -> BoundingBox:
        """Return bounding box containing both boxes."""
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y)
        )

    def intersection(self, other: BoundingBox) -> BoundingBox | None:
        """Return the overlapping region, or None if the boxes are disjoint."""
        box = BoundingBox(
            max(self.min_x, other.min_x),
            max(self.min_y, other.min_y),
            min(self.max_x, other.max_x),
            min(self.max_y, other.max_y)
        )
        return None if box.is_empty else box

    def expanded_to_contain(self, point: Point) -> BoundingBox:
        """Grow the box just enough to contain a point."""
        return BoundingBox(
            min(self.min_x, point.x),
            min(self.min_y, point.y),
            max(self.max_x, point.x),
            max(self.max_y, point.y)
        )

    def scaled_by(self, factor: float) -> BoundingBox:
        """Scale width and height by factor, keeping the center fixed."""
        dx = self.width * (factor - 1) / 2
        dy = self.height * (factor - 1) / 2
        return BoundingBox(
            self.min_x - dx,
            self.min_y - dy,
            self.max_x + dx,
            self.max_y + dy
        )

    def to_absolute(self, width: float, height: float) -> BoundingBox:
        """Convert normalized coordinates to pixel coordinates."""
        return BoundingBox(
            self.min_x * width,
            self.min_y * height,
            self.max_x * width,
            self.max_y * height
        )

    @classmethod
    def from_points(cls, points: list[Point]) -> BoundingBox:
        """Smallest box containing all points."""
        if not points:
            raise ValueError("Cannot build a bounding box from no points")
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))
