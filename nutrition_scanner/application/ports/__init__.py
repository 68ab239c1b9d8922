"""Ports - interfaces for external dependencies (Dependency Inversion)."""

from .vision_engine import RectangleDetector, TextDetector, CharacterDetector
from .image_transform import ImageTransform, Corners
from .label_parser import LabelParser, ParsedLabel
from .event_publisher import EventPublisher, DetectionEvent, SimpleEventPublisher

__all__ = [
    'RectangleDetector',
    'TextDetector',
    'CharacterDetector',
    'ImageTransform',
    'Corners',
    'LabelParser',
    'ParsedLabel',
    'EventPublisher',
    'DetectionEvent',
    'SimpleEventPublisher',
]
