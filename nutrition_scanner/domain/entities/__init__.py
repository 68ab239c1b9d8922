"""Domain entities."""

from .image import RawImage, ImageOrientation
from .observations import (
    RecognitionLevel,
    RectangleCandidate,
    TextBox,
    CharacterBox,
    DetectionResult,
)

__all__ = [
    'RawImage',
    'ImageOrientation',
    'RecognitionLevel',
    'RectangleCandidate',
    'TextBox',
    'CharacterBox',
    'DetectionResult',
]
