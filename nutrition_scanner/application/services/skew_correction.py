"""Skew correction - rotate an image so its text runs horizontally."""

from __future__ import annotations

import logging
import math

from ...domain.entities.image import ImageOrientation, RawImage
from ...domain.services.skew_estimation import SkewEstimate, estimate_skew
from ...domain.value_objects.config import DetectorConfig
from ..ports.image_transform import ImageTransform
from ..ports.vision_engine import CharacterDetector

logger = logging.getLogger(__name__)


class SkewCorrector:
    """Estimate text rotation from character geometry and undo it."""

    def __init__(
        self,
        character_detector: CharacterDetector,
        transform: ImageTransform,
        config: DetectorConfig | None = None
    ):
        self._characters = character_detector
        self._transform = transform
        self._config = config or DetectorConfig()

    async def estimate(self, image: RawImage) -> SkewEstimate:
        """Detect characters and estimate the dominant text angle."""
        characters = await self._characters.detect(image, ImageOrientation.UP)
        return estimate_skew(characters, self._config)

    async def correct(self, image: RawImage) -> RawImage:
        """Return a rotation-corrected copy, or the original image.

        The original is returned when no reliable angle is found or the
        rotation cannot be applied.
        """
        estimate = await self.estimate(image)
        if not estimate.accepted:
            return image

        radians = -math.radians(estimate.angle_degrees)
        rotated = self._transform.rotate(image, radians)
        if rotated is None:
            logger.warning(
                f"Rotation by {-estimate.angle_degrees} deg failed, using original image"
            )
            return image

        logger.info(f"Corrected text skew of {estimate.angle_degrees} deg")
        return rotated
