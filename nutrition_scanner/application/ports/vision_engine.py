"""Vision engine ports - interfaces for rectangle, text and character detection."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ...domain.entities.image import ImageOrientation, RawImage
from ...domain.entities.observations import (
    CharacterBox,
    RecognitionLevel,
    RectangleCandidate,
    TextBox,
)


@runtime_checkable
class RectangleDetector(Protocol):
    """Port for rectangle candidate detection.

    Implementations: OpenCV contours, platform vision frameworks, etc.
    """

    async def detect(
        self,
        image: RawImage,
        orientation: ImageOrientation = ImageOrientation.UP
    ) -> list[RectangleCandidate]:
        """Detect quadrilaterals that may be a label.

        Args:
            image: Image to process
            orientation: How the image must be turned to appear upright

        Returns:
            Candidates with normalized corners

        Raises:
            DetectionError: If the engine fails
        """
        ...


@runtime_checkable
class TextDetector(Protocol):
    """Port for OCR text detection.

    Implementations: PaddleOCR, etc.
    """

    @property
    def name(self) -> str:
        """Engine name."""
        ...

    async def detect(
        self,
        image: RawImage,
        orientation: ImageOrientation = ImageOrientation.UP,
        level: RecognitionLevel = RecognitionLevel.FAST
    ) -> list[TextBox]:
        """Detect and recognize text lines.

        Args:
            image: Image to process
            orientation: How the image must be turned to appear upright
            level: Speed / accuracy trade-off

        Returns:
            Text boxes with normalized coordinates

        Raises:
            DetectionError: If the engine fails
        """
        ...


@runtime_checkable
class CharacterDetector(Protocol):
    """Port for single-glyph box detection."""

    async def detect(
        self,
        image: RawImage,
        orientation: ImageOrientation = ImageOrientation.UP
    ) -> list[CharacterBox]:
        """Detect character boxes.

        Raises:
            DetectionError: If the engine fails
        """
        ...
