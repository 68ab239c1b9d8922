"""Custom exceptions for the nutrition label scanner."""

from typing import Optional


class NutritionScannerError(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error description
        error_code: Optional error code for programmatic handling
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ConfigurationError(NutritionScannerError):
    """Error in configuration or settings.

    Attributes:
        config_key: The configuration key that caused the error (if applicable)
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, error_code="CONFIG_ERROR")
        self.config_key = config_key


class ImageProcessingError(NutritionScannerError):
    """Error loading or transforming an image.

    Attributes:
        image_path: Path to the image being processed when error occurred
    """

    def __init__(self, message: str, image_path: Optional[str] = None):
        super().__init__(message, error_code="IMAGE_ERROR")
        self.image_path = image_path

    def __str__(self) -> str:
        if self.image_path:
            return f"{super().__str__()} (image: {self.image_path})"
        return super().__str__()


class DetectionError(NutritionScannerError):
    """A vision engine failed to run a detection request.

    Never handled inside the pipeline; callers decide whether to retry
    with a fresh session.

    Attributes:
        engine: Name of the engine that failed (if applicable)
    """

    def __init__(self, message: str, engine: Optional[str] = None):
        super().__init__(message, error_code="DETECTION_ERROR")
        self.engine = engine


class NoNutritionLabelError(NutritionScannerError):
    """A full scan was requested before a label was located."""

    def __init__(self, message: str = "no nutrition label found"):
        super().__init__(message, error_code="NO_LABEL")


class DegenerateFitError(NutritionScannerError):
    """Least-squares fit over points without variance on the fitted axis."""

    def __init__(self, message: str):
        super().__init__(message, error_code="DEGENERATE_FIT")
