"""Image transform port - geometric warps applied to pixel data."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ...domain.entities.image import RawImage
from ...domain.value_objects.geometry import Point

# top_left, top_right, bottom_left, bottom_right in pixels
Corners = tuple[Point, Point, Point, Point]


@runtime_checkable
class ImageTransform(Protocol):
    """Port for perspective correction and rotation.

    Both operations return None when the transform cannot be applied.
    """

    def perspective_correct(self, image: RawImage, corners: Corners) -> RawImage | None:
        """Warp the quadrilateral given by absolute corners into an upright rectangle."""
        ...

    def rotate(self, image: RawImage, radians: float) -> RawImage | None:
        """Rotate an image, growing the canvas to keep every pixel.

        Positive angles turn the content clockwise on screen, the same sense
        as headings measured with y growing downward.
        """
        ...
