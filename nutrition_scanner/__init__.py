"""Nutrition Scanner - locate and deskew nutrition-facts panels in product photos."""

__version__ = "1.0.0"

from .application.services.label_detector import NutritionLabelDetector, VisionEngines
from .domain.entities.image import RawImage
from .domain.entities.observations import DetectionResult
from .domain.value_objects.config import DetectorConfig
from .domain.value_objects.language import LabelLanguage
from .exceptions import (
    NutritionScannerError,
    ConfigurationError,
    ImageProcessingError,
    DetectionError,
    NoNutritionLabelError,
    DegenerateFitError,
)
from .utils.env import setup_logging

__all__ = [
    '__version__',
    'NutritionLabelDetector',
    'VisionEngines',
    'RawImage',
    'DetectionResult',
    'DetectorConfig',
    'LabelLanguage',
    'setup_logging',
    # Exceptions
    'NutritionScannerError',
    'ConfigurationError',
    'ImageProcessingError',
    'DetectionError',
    'NoNutritionLabelError',
    'DegenerateFitError',
]
