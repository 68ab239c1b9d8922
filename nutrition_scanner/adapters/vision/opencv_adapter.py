"""OpenCV adapters - rectangle and character detection, image transforms."""

from __future__ import annotations

import asyncio
import logging
import math

import cv2
import numpy as np

from ...application.ports.image_transform import Corners
from ...config import OPENCV_DEFAULTS
from ...domain.entities.image import ImageOrientation, RawImage
from ...domain.entities.observations import CharacterBox, RectangleCandidate
from ...domain.value_objects.geometry import BoundingBox, Point
from ...exceptions import DetectionError
from ..arrays import oriented_array, to_gray, to_rgb_array

logger = logging.getLogger(__name__)


def order_corners(quad: np.ndarray) -> np.ndarray:
    """Order four points as top-left, top-right, bottom-left, bottom-right."""
    quad = np.asarray(quad, dtype=np.float32).reshape(4, 2)
    sums = quad.sum(axis=1)
    diffs = quad[:, 1] - quad[:, 0]
    return np.array([
        quad[np.argmin(sums)],
        quad[np.argmin(diffs)],
        quad[np.argmax(diffs)],
        quad[np.argmax(sums)],
    ], dtype=np.float32)


class OpenCVRectangleDetector:
    """Find convex quadrilaterals from image edges.

    Implements the RectangleDetector port.
    """

    name = "opencv-rectangles"

    def __init__(
        self,
        min_area: float = OPENCV_DEFAULTS.min_rectangle_area,
        max_candidates: int = OPENCV_DEFAULTS.max_rectangles,
        approx_epsilon: float = OPENCV_DEFAULTS.approx_epsilon
    ):
        self._min_area = min_area
        self._max_candidates = max_candidates
        self._epsilon = approx_epsilon

    async def detect(
        self,
        image: RawImage,
        orientation: ImageOrientation = ImageOrientation.UP
    ) -> list[RectangleCandidate]:
        return await asyncio.to_thread(self._detect, image, orientation)

    def _detect(self, image: RawImage, orientation: ImageOrientation) -> list[RectangleCandidate]:
        try:
            gray = to_gray(oriented_array(image, orientation))
            blurred = cv2.GaussianBlur(gray, (5, 5), 0)
            edges = cv2.Canny(blurred, OPENCV_DEFAULTS.canny_low, OPENCV_DEFAULTS.canny_high)
            edges = cv2.dilate(edges, np.ones((3, 3), np.uint8), iterations=1)
            contours, _ = cv2.findContours(edges, cv2.RETR_LIST, cv2.CHAIN_APPROX_SIMPLE)
        except cv2.error as e:
            raise DetectionError(f"Rectangle detection failed: {e}", engine=self.name) from e

        height, width = gray.shape[:2]
        min_area = self._min_area * width * height

        candidates: list[RectangleCandidate] = []
        for contour in sorted(contours, key=cv2.contourArea, reverse=True):
            if cv2.contourArea(contour) < min_area:
                break

            peri = cv2.arcLength(contour, True)
            approx = cv2.approxPolyDP(contour, self._epsilon * peri, True)
            if len(approx) != 4 or not cv2.isContourConvex(approx):
                continue

            candidate = self._to_candidate(order_corners(approx), width, height)
            if any(self._is_duplicate(candidate, c) for c in candidates):
                continue

            candidates.append(candidate)
            if len(candidates) >= self._max_candidates:
                break

        logger.debug(f"Found {len(candidates)} rectangles in {len(contours)} contours")
        return candidates

    @staticmethod
    def _to_candidate(corners: np.ndarray, width: int, height: int) -> RectangleCandidate:
        tl, tr, bl, br = (Point(float(x) / width, float(y) / height) for x, y in corners)
        return RectangleCandidate(top_left=tl, top_right=tr, bottom_left=bl, bottom_right=br)

    @staticmethod
    def _is_duplicate(a: RectangleCandidate, b: RectangleCandidate, tolerance: float = 0.02) -> bool:
        return all(p.distance_to(q) <= tolerance for p, q in zip(a.corners, b.corners))


class OpenCVCharacterDetector:
    """Find glyph-sized connected components of dark ink.

    Implements the CharacterDetector port.
    """

    name = "opencv-characters"

    def __init__(
        self,
        min_height: float = OPENCV_DEFAULTS.min_character_height,
        max_height: float = OPENCV_DEFAULTS.max_character_height,
        max_aspect: float = OPENCV_DEFAULTS.max_character_aspect
    ):
        self._min_height = min_height
        self._max_height = max_height
        self._max_aspect = max_aspect

    async def detect(
        self,
        image: RawImage,
        orientation: ImageOrientation = ImageOrientation.UP
    ) -> list[CharacterBox]:
        return await asyncio.to_thread(self._detect, image, orientation)

    def _detect(self, image: RawImage, orientation: ImageOrientation) -> list[CharacterBox]:
        try:
            gray = to_gray(oriented_array(image, orientation))
            _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY_INV + cv2.THRESH_OTSU)
            num, _, stats, _ = cv2.connectedComponentsWithStats(binary, connectivity=8)
        except cv2.error as e:
            raise DetectionError(f"Character detection failed: {e}", engine=self.name) from e

        height, width = gray.shape[:2]
        min_h = self._min_height * height
        max_h = self._max_height * height

        characters: list[CharacterBox] = []
        for i in range(1, num):  # Skip background (label 0)
            x, y, w, h, _ = (int(v) for v in stats[i])
            if not (min_h <= h <= max_h):
                continue
            if w > h * self._max_aspect:
                continue

            characters.append(CharacterBox(BoundingBox(
                x / width,
                y / height,
                (x + w) / width,
                (y + h) / height
            )))

        logger.debug(f"Found {len(characters)} characters in {num - 1} components")
        return characters


class OpenCVImageTransform:
    """Perspective correction and rotation with OpenCV.

    Implements the ImageTransform port.
    """

    def __init__(self, border_value: tuple[int, int, int] = (255, 255, 255)):
        self._border_value = border_value

    def perspective_correct(self, image: RawImage, corners: Corners) -> RawImage | None:
        """Warp the quadrilateral given by absolute corners into a rectangle."""
        tl, tr, bl, br = corners
        width = int(round(max(tl.distance_to(tr), bl.distance_to(br))))
        height = int(round(max(tl.distance_to(bl), tr.distance_to(br))))
        if width < 1 or height < 1:
            logger.debug(f"Degenerate quadrilateral ({width}x{height})")
            return None

        src = np.array([[p.x, p.y] for p in (tl, tr, br, bl)], dtype=np.float32)
        dst = np.array([
            [0, 0],
            [width - 1, 0],
            [width - 1, height - 1],
            [0, height - 1]
        ], dtype=np.float32)

        try:
            matrix = cv2.getPerspectiveTransform(src, dst)
            warped = cv2.warpPerspective(to_rgb_array(image), matrix, (width, height))
        except cv2.error as e:
            logger.debug(f"Perspective correction failed: {e}")
            return None

        return RawImage.from_array(warped, image.source_path)

    def rotate(self, image: RawImage, radians: float) -> RawImage | None:
        """Rotate clockwise (on screen) by radians, growing the canvas."""
        arr = to_rgb_array(image)
        h, w = arr.shape[:2]
        center = (w / 2, h / 2)

        # OpenCV angles turn counter-clockwise on screen
        matrix = cv2.getRotationMatrix2D(center, -math.degrees(radians), 1.0)

        cos = abs(matrix[0, 0])
        sin = abs(matrix[0, 1])
        new_w = int(round(h * sin + w * cos))
        new_h = int(round(h * cos + w * sin))
        if new_w < 1 or new_h < 1:
            return None

        matrix[0, 2] += new_w / 2 - center[0]
        matrix[1, 2] += new_h / 2 - center[1]

        border = self._border_value if arr.ndim == 3 else self._border_value[0]
        try:
            rotated = cv2.warpAffine(
                arr, matrix, (new_w, new_h),
                flags=cv2.INTER_CUBIC,
                borderMode=cv2.BORDER_CONSTANT,
                borderValue=border
            )
        except cv2.error as e:
            logger.debug(f"Rotation failed: {e}")
            return None

        return RawImage.from_array(rotated, image.source_path)
