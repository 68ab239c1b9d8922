"""Domain layer - pure business logic, no engine dependencies."""

from .entities.image import RawImage, ImageOrientation
from .entities.observations import (
    RecognitionLevel,
    RectangleCandidate,
    TextBox,
    CharacterBox,
    DetectionResult,
)
from .value_objects.config import DetectorConfig
from .value_objects.geometry import Point, BoundingBox
from .value_objects.language import LabelLanguage, KEYWORDS_BY_LANGUAGE

__all__ = [
    # Entities
    'RawImage',
    'ImageOrientation',
    'RecognitionLevel',
    'RectangleCandidate',
    'TextBox',
    'CharacterBox',
    'DetectionResult',
    # Value Objects
    'DetectorConfig',
    'Point',
    'BoundingBox',
    'LabelLanguage',
    'KEYWORDS_BY_LANGUAGE',
]
