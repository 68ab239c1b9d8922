"""Application services - orchestrate use cases."""

from .skew_correction import SkewCorrector
from .panel_locators import PrimaryPanelLocator, SecondaryPanelLocator, LocatedPanel
from .label_detector import NutritionLabelDetector, VisionEngines
from .batch_scanner import BatchScanner, BatchResult, ScanOutcome

__all__ = [
    'SkewCorrector',
    'PrimaryPanelLocator',
    'SecondaryPanelLocator',
    'LocatedPanel',
    'NutritionLabelDetector',
    'VisionEngines',
    'BatchScanner',
    'BatchResult',
    'ScanOutcome',
]
