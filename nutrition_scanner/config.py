"""Configuration and constants for the nutrition label scanner."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DetectionDefaults:
    """Default tuning values for label localization."""
    # Character-line tracing (normalized units)
    max_character_distance_sq: float = 0.001
    max_direction_delta: float = 0.05  # radians
    min_line_length: float = 0.03

    # Skew histogram
    histogram_window: int = 2  # +/- degrees
    min_skew_score: float = 5.0
    min_skew_degrees: int = 3

    # Secondary locator context margin
    label_margin: float = 1.1


DETECTION_DEFAULTS = DetectionDefaults()


@dataclass(frozen=True)
class OpenCVDefaults:
    """Defaults for the OpenCV vision adapters."""
    # Rectangle detection
    canny_low: int = 50
    canny_high: int = 150
    approx_epsilon: float = 0.02  # fraction of contour perimeter
    min_rectangle_area: float = 0.02  # fraction of image area
    max_rectangles: int = 15

    # Character detection (fractions of image height)
    min_character_height: float = 0.005
    max_character_height: float = 0.08
    max_character_aspect: float = 4.0


OPENCV_DEFAULTS = OpenCVDefaults()


# PaddleOCR model names per recognition level
PADDLE_MODELS: dict[str, tuple[str, str]] = {
    "fast": ("PP-OCRv5_mobile_det", "PP-OCRv5_mobile_rec"),
    "accurate": ("PP-OCRv5_server_det", "PP-OCRv5_server_rec"),
}


# File handling - formats readable by Pillow
SUPPORTED_IMAGE_EXTENSIONS: tuple[str, ...] = (
    '.jpg', '.jpeg', '.png', '.bmp', '.webp', '.tiff', '.tif',
)


# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
