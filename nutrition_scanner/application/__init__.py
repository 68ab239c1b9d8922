"""Application layer - use cases and orchestration."""

from .services.label_detector import NutritionLabelDetector, VisionEngines
from .services.batch_scanner import BatchScanner

__all__ = ['NutritionLabelDetector', 'VisionEngines', 'BatchScanner']
