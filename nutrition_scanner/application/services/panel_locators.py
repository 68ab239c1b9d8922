"""Panel locators - strategies for finding the nutrition panel in an image."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

from ...domain.entities.image import ImageOrientation, RawImage
from ...domain.entities.observations import RecognitionLevel, RectangleCandidate, TextBox
from ...domain.services.language_scoring import (
    contains_keyword,
    count_distinct_keywords,
    determine_label_language,
)
from ...domain.value_objects.config import DetectorConfig
from ...domain.value_objects.geometry import BoundingBox
from ...domain.value_objects.language import LabelLanguage
from ..ports.image_transform import ImageTransform
from ..ports.vision_engine import RectangleDetector, TextDetector
from .skew_correction import SkewCorrector

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocatedPanel:
    """Output of a successful locator."""
    image: RawImage
    rectangle: RectangleCandidate
    language: LabelLanguage


class PanelLocator(Protocol):
    """One strategy for locating a panel."""

    name: str

    async def locate(self, image: RawImage) -> LocatedPanel | None:
        """Return the located panel, or None to let the next strategy try."""
        ...


@dataclass(frozen=True, slots=True)
class CandidateScore:
    """Keyword evaluation of one deskewed rectangle candidate."""
    index: int
    rectangle: RectangleCandidate
    image: RawImage
    language: LabelLanguage
    keyword_count: int

    @property
    def area(self) -> int:
        return self.image.area


def select_best_candidate(scores: Sequence[CandidateScore]) -> CandidateScore | None:
    """Pick the candidate with most distinct keywords, then smallest area.

    Remaining ties keep the earliest candidate. Candidates without any
    keyword never win.
    """
    best: CandidateScore | None = None
    for score in sorted(scores, key=lambda s: s.index):
        if score.keyword_count == 0:
            continue
        if (
            best is None
            or score.keyword_count > best.keyword_count
            or (score.keyword_count == best.keyword_count and score.area < best.area)
        ):
            best = score
    return best


class PrimaryPanelLocator:
    """Score rectangle candidates by keyword density and area."""

    name = "primary"

    def __init__(
        self,
        rectangle_detector: RectangleDetector,
        text_detector: TextDetector,
        transform: ImageTransform,
        config: DetectorConfig | None = None
    ):
        self._rectangles = rectangle_detector
        self._text = text_detector
        self._transform = transform
        self._config = config or DetectorConfig()

    async def locate(self, image: RawImage) -> LocatedPanel | None:
        rectangles = await self._rectangles.detect(image, ImageOrientation.UP)
        logger.info(f"Evaluating {len(rectangles)} rectangle candidates")

        if self._config.parallel_candidates:
            results = await asyncio.gather(*(
                self._score_candidate(image, i, rectangle)
                for i, rectangle in enumerate(rectangles)
            ))
        else:
            results = [
                await self._score_candidate(image, i, rectangle)
                for i, rectangle in enumerate(rectangles)
            ]

        best = select_best_candidate([r for r in results if r is not None])
        if best is None:
            logger.info("No rectangle candidate contains a known keyword")
            return None

        logger.info(
            f"Selected candidate {best.index} ({best.keyword_count} keywords, "
            f"{best.image.width}x{best.image.height}, {best.language.value})"
        )
        return LocatedPanel(image=best.image, rectangle=best.rectangle, language=best.language)

    async def _score_candidate(
        self,
        image: RawImage,
        index: int,
        rectangle: RectangleCandidate
    ) -> CandidateScore | None:
        corners = rectangle.absolute_corners(image.width, image.height)
        deskewed = self._transform.perspective_correct(image, corners)
        if deskewed is None:
            logger.debug(f"Candidate {index}: perspective correction failed, skipping")
            return None

        texts = await self._text.detect(deskewed, ImageOrientation.UP, RecognitionLevel.FAST)
        search_texts = [t.text for t in texts]

        language = determine_label_language(search_texts, self._config.default_language)
        keyword_count = count_distinct_keywords(search_texts, language)

        logger.debug(
            f"Candidate {index}: {len(texts)} texts, {keyword_count} keywords ({language.value})"
        )
        return CandidateScore(
            index=index,
            rectangle=rectangle,
            image=deskewed,
            language=language,
            keyword_count=keyword_count,
        )


def accumulate_keyword_box(
    text_boxes: Sequence[TextBox],
    language: LabelLanguage
) -> BoundingBox | None:
    """Bounding box around every text box containing a keyword."""
    box: BoundingBox | None = None
    for text_box in text_boxes:
        if not contains_keyword(text_box.text, language):
            continue

        if box is None:
            box = text_box.bounding_box
        else:
            box = box.expanded_to_contain(text_box.bounding_box.top_left)
            box = box.expanded_to_contain(text_box.bounding_box.bottom_right)
    return box


def crop_normalized(image: RawImage, region: BoundingBox) -> RawImage | None:
    """Crop a normalized region, clamped to the image bounds."""
    bounds = BoundingBox(0, 0, image.width, image.height)
    pixels = region.to_absolute(image.width, image.height).intersection(bounds)
    if pixels is None:
        return None

    x = int(round(pixels.min_x))
    y = int(round(pixels.min_y))
    w = int(round(pixels.max_x)) - x
    h = int(round(pixels.max_y)) - y
    if w <= 0 or h <= 0:
        return None

    return image.crop(x, y, w, h)


class SecondaryPanelLocator:
    """Aggregate keyword-bearing text boxes of the deskewed full image."""

    name = "secondary"

    def __init__(
        self,
        text_detector: TextDetector,
        skew_corrector: SkewCorrector,
        config: DetectorConfig | None = None
    ):
        self._text = text_detector
        self._skew = skew_corrector
        self._config = config or DetectorConfig()

    async def locate(self, image: RawImage) -> LocatedPanel | None:
        corrected = await self._skew.correct(image)

        texts = await self._text.detect(corrected, ImageOrientation.UP, RecognitionLevel.FAST)
        language = determine_label_language(
            [t.text for t in texts], self._config.default_language
        )

        box = accumulate_keyword_box(texts, language)
        if box is None:
            logger.info(f"No keyword found in {len(texts)} text boxes")
            return None

        region = box.scaled_by(self._config.label_margin)
        cropped = crop_normalized(corrected, region)
        if cropped is None:
            logger.info("Keyword region lies outside the image")
            return None

        logger.info(
            f"Keyword region {cropped.width}x{cropped.height} ({language.value})"
        )
        return LocatedPanel(
            image=cropped,
            rectangle=RectangleCandidate.from_bounding_box(region),
            language=language,
        )
