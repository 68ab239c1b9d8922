"""Nutrition label detector - one localization-and-scan session per image."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ...domain.entities.image import ImageOrientation, RawImage
from ...domain.entities.observations import DetectionResult, RecognitionLevel
from ...domain.value_objects.config import DetectorConfig
from ...domain.value_objects.language import LabelLanguage
from ...exceptions import ConfigurationError, NoNutritionLabelError
from ..ports.event_publisher import DetectionEvent, EventPublisher, SimpleEventPublisher
from ..ports.image_transform import ImageTransform
from ..ports.label_parser import LabelParser, ParsedLabel
from ..ports.vision_engine import CharacterDetector, RectangleDetector, TextDetector
from .panel_locators import (
    LocatedPanel,
    PanelLocator,
    PrimaryPanelLocator,
    SecondaryPanelLocator,
)
from .skew_correction import SkewCorrector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisionEngines:
    """The external engines a detection session relies on."""
    rectangles: RectangleDetector
    text: TextDetector
    characters: CharacterDetector
    transform: ImageTransform


class NutritionLabelDetector:
    """Locate a nutrition label in an image, then scan it.

    A detector is a single-use session: `find_nutrition_label` stores the
    label language and the cropped label image together, and
    `scan_nutrition_label` consumes them. State is only written after every
    engine call of a strategy has returned, so a cancelled session is left
    untouched.
    """

    def __init__(
        self,
        image: RawImage,
        engines: VisionEngines,
        parser: LabelParser | None = None,
        config: DetectorConfig | None = None,
        events: EventPublisher | None = None
    ):
        self.image = image
        self.language: LabelLanguage | None = None
        self.nutrition_label_image: RawImage | None = None

        self._engines = engines
        self._parser = parser
        self._config = config or DetectorConfig()
        self._events = events or SimpleEventPublisher()
        self._strategies = self._build_strategies()

    def _build_strategies(self) -> list[PanelLocator]:
        """Build the ordered list of locators to try."""
        skew_corrector = SkewCorrector(
            self._engines.characters,
            self._engines.transform,
            self._config
        )
        return [
            PrimaryPanelLocator(
                self._engines.rectangles,
                self._engines.text,
                self._engines.transform,
                self._config
            ),
            SecondaryPanelLocator(self._engines.text, skew_corrector, self._config),
        ]

    @property
    def strategies(self) -> list[str]:
        return [s.name for s in self._strategies]

    @property
    def has_label(self) -> bool:
        return self.language is not None and self.nutrition_label_image is not None

    async def find_nutrition_label(self) -> DetectionResult | None:
        """Try each locator in order until one finds a label.

        Returns:
            The cropped label and its rectangle, or None if no strategy succeeded

        Raises:
            DetectionError: If a vision engine fails
        """
        total = len(self._strategies)
        for i, strategy in enumerate(self._strategies):
            self._events.publish(DetectionEvent(
                stage=strategy.name,
                message=f"Running {strategy.name} locator",
                progress=i / total,
                image_path=self.image.source_path
            ))

            located = await strategy.locate(self.image)
            if located is None:
                logger.info(f"{strategy.name} locator found no label")
                continue

            self._commit(located)
            self._events.publish(DetectionEvent(
                stage="located",
                message=f"Label found by {strategy.name} locator",
                progress=1.0,
                image_path=self.image.source_path
            ))
            return DetectionResult(
                image=located.image,
                rectangle=located.rectangle,
                language=located.language,
                strategy=strategy.name,
            )

        self._events.publish(DetectionEvent(
            stage="not_found",
            message="No nutrition label found",
            progress=1.0,
            image_path=self.image.source_path
        ))
        return None

    def _commit(self, located: LocatedPanel) -> None:
        self.language = located.language
        self.nutrition_label_image = located.image

    async def scan_nutrition_label(self) -> ParsedLabel:
        """Run an accurate text scan of the located label and parse it.

        Raises:
            NoNutritionLabelError: If no label has been located yet
            ConfigurationError: If the session has no parser
            DetectionError: If the text engine fails
        """
        if self.language is None or self.nutrition_label_image is None:
            raise NoNutritionLabelError()
        if self._parser is None:
            raise ConfigurationError("No label parser configured", config_key="parser")

        self._events.publish(DetectionEvent(
            stage="scan",
            message="Scanning nutrition label",
            image_path=self.image.source_path
        ))

        texts = await self._engines.text.detect(
            self.nutrition_label_image,
            ImageOrientation.UP,
            RecognitionLevel.ACCURATE
        )
        logger.info(f"Accurate scan found {len(texts)} text boxes")
        return self._parser.parse(texts, self.language)

    def subscribe_to_events(self, callback) -> None:
        """Subscribe to detection events."""
        self._events.subscribe(callback)
