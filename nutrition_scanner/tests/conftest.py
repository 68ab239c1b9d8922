"""Shared fakes for the vision engine ports."""

from __future__ import annotations

import asyncio
import math
from types import SimpleNamespace

import pytest
from PIL import Image as PILImage

from nutrition_scanner.application.ports.label_parser import ParsedLabel
from nutrition_scanner.domain.entities.image import ImageOrientation, RawImage
from nutrition_scanner.domain.entities.observations import (
    CharacterBox,
    RecognitionLevel,
    RectangleCandidate,
    TextBox,
)
from nutrition_scanner.domain.value_objects.geometry import BoundingBox


def make_image(width: int = 1000, height: int = 1000, color: str = "white") -> RawImage:
    return RawImage(_data=PILImage.new("RGB", (width, height), color))


def text_box(text: str, min_x=0.1, min_y=0.1, max_x=0.2, max_y=0.2) -> TextBox:
    return TextBox(BoundingBox(min_x, min_y, max_x, max_y), text)


def rectangle(min_x, min_y, max_x, max_y) -> RectangleCandidate:
    return RectangleCandidate.from_bounding_box(BoundingBox(min_x, min_y, max_x, max_y))


def character_line(
    start_x: float,
    start_y: float,
    angle_deg: float,
    count: int,
    spacing: float = 0.02,
    size: float = 0.006
) -> list[CharacterBox]:
    """Evenly spaced character boxes along a direction."""
    dx = spacing * math.cos(math.radians(angle_deg))
    dy = spacing * math.sin(math.radians(angle_deg))
    half = size / 2
    boxes = []
    for k in range(count):
        cx = start_x + k * dx
        cy = start_y + k * dy
        boxes.append(CharacterBox(BoundingBox(cx - half, cy - half, cx + half, cy + half)))
    return boxes


class FakeRectangleDetector:
    def __init__(self, rectangles=None, error: Exception | None = None):
        self.rectangles = list(rectangles or [])
        self.error = error
        self.calls = 0

    async def detect(self, image, orientation=ImageOrientation.UP):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.rectangles)


class FakeTextDetector:
    """Returns texts keyed by the size of the image it is given."""

    name = "fake"

    def __init__(self, texts_by_size=None, default=None, delay: float = 0.0):
        self.texts_by_size = texts_by_size or {}
        self.default = list(default or [])
        self.delay = delay
        self.calls: list[tuple[RawImage, RecognitionLevel]] = []
        self.unloaded = 0

    async def detect(self, image, orientation=ImageOrientation.UP, level=RecognitionLevel.FAST):
        self.calls.append((image, level))
        if self.delay:
            await asyncio.sleep(self.delay)
        return list(self.texts_by_size.get(image.size, self.default))

    def unload(self):
        self.unloaded += 1


class FakeCharacterDetector:
    def __init__(self, characters=None):
        self.characters = list(characters or [])
        self.calls = 0

    async def detect(self, image, orientation=ImageOrientation.UP):
        self.calls += 1
        return list(self.characters)


class FakeTransform:
    """Deskews to an image sized like the quadrilateral; rotation keeps the size."""

    def __init__(self, fail_rotate: bool = False):
        self.fail_rotate = fail_rotate
        self.rotations: list[float] = []
        self.rotated: list[RawImage] = []

    def perspective_correct(self, image, corners):
        tl, tr, bl, _ = corners
        width = int(round(tr.x - tl.x))
        height = int(round(bl.y - tl.y))
        if width < 1 or height < 1:
            return None
        return make_image(width, height)

    def rotate(self, image, radians):
        self.rotations.append(radians)
        if self.fail_rotate:
            return None
        rotated = make_image(image.width, image.height, color="gray")
        self.rotated.append(rotated)
        return rotated


class FakeParser:
    def __init__(self):
        self.calls = []

    def parse(self, text_boxes, language):
        self.calls.append((list(text_boxes), language))
        return ParsedLabel(language=language, rows=[[t.text] for t in text_boxes])


@pytest.fixture
def fake() -> SimpleNamespace:
    """Namespace of fake engines and builders."""
    return SimpleNamespace(
        RectangleDetector=FakeRectangleDetector,
        TextDetector=FakeTextDetector,
        CharacterDetector=FakeCharacterDetector,
        Transform=FakeTransform,
        Parser=FakeParser,
        image=make_image,
        text_box=text_box,
        rectangle=rectangle,
        character_line=character_line,
    )
