"""Vision engine observations and detection results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..value_objects.geometry import BoundingBox, Point
from ..value_objects.language import LabelLanguage

if TYPE_CHECKING:
    from .image import RawImage


class RecognitionLevel(str, Enum):
    """Text detection accuracy mode."""
    FAST = "fast"
    ACCURATE = "accurate"


@dataclass(frozen=True, slots=True)
class RectangleCandidate:
    """Quadrilateral reported by the rectangle detector.

    Corners are normalized and kept in the order the engine produced them.
    """
    top_left: Point
    top_right: Point
    bottom_left: Point
    bottom_right: Point

    @property
    def corners(self) -> tuple[Point, Point, Point, Point]:
        return (self.top_left, self.top_right, self.bottom_left, self.bottom_right)

    @property
    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points(list(self.corners))

    def absolute_corners(self, width: int, height: int) -> tuple[Point, Point, Point, Point]:
        """Corners in pixel coordinates of an image of the given size."""
        return tuple(p.scaled(width, height) for p in self.corners)

    @classmethod
    def from_bounding_box(cls, box: BoundingBox) -> RectangleCandidate:
        """Axis-aligned rectangle covering a box."""
        return cls(
            top_left=Point(box.min_x, box.min_y),
            top_right=Point(box.max_x, box.min_y),
            bottom_left=Point(box.min_x, box.max_y),
            bottom_right=Point(box.max_x, box.max_y),
        )


@dataclass(frozen=True, slots=True)
class TextBox:
    """A recognized line of text."""
    bounding_box: BoundingBox
    text: str = ""
    confidence: float = 1.0


@dataclass(frozen=True, slots=True)
class CharacterBox:
    """Bounding box of a single glyph."""
    bounding_box: BoundingBox

    @property
    def center(self) -> Point:
        return self.bounding_box.center


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """A located nutrition label."""
    image: RawImage
    rectangle: RectangleCandidate
    language: LabelLanguage
    strategy: str = ""
