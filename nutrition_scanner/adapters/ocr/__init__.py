"""OCR adapters - implementations of TextDetector port."""

from .paddle_adapter import PaddleTextDetector

__all__ = ['PaddleTextDetector']
