"""Value objects - immutable data with validation."""

from .geometry import Point, BoundingBox
from .language import LabelLanguage, KEYWORDS_BY_LANGUAGE, keywords_for
from .config import DetectorConfig

__all__ = [
    'Point',
    'BoundingBox',
    'LabelLanguage',
    'KEYWORDS_BY_LANGUAGE',
    'keywords_for',
    'DetectorConfig',
]
