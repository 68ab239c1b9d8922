"""Vision adapters - rectangle/character detection and image transforms."""

from .opencv_adapter import (
    OpenCVRectangleDetector,
    OpenCVCharacterDetector,
    OpenCVImageTransform,
)

__all__ = ['OpenCVRectangleDetector', 'OpenCVCharacterDetector', 'OpenCVImageTransform']
