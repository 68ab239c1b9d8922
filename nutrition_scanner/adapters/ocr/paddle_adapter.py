"""PaddleOCR adapter - implements TextDetector port."""

from __future__ import annotations

import asyncio
import gc
import logging
import threading

from ...config import PADDLE_MODELS
from ...domain.entities.image import ImageOrientation, RawImage
from ...domain.entities.observations import RecognitionLevel, TextBox
from ...domain.value_objects.geometry import BoundingBox, Point
from ...exceptions import DetectionError
from ..arrays import oriented_array

logger = logging.getLogger(__name__)


class PaddleTextDetector:
    """Adapter for the PaddleOCR text pipeline.

    Uses the mobile detection/recognition models for fast scans and the
    server models for accurate scans. Each model pair is loaded on first use.
    Loading and inference are serialized by a lock: one detector may be
    called from several worker threads, and a PaddleOCR pipeline is not
    safe for concurrent `predict` calls.
    """

    def __init__(
        self,
        device: str = "auto",
        lang: str | None = None,
        min_confidence: float = 0.0
    ):
        self._device = device
        self._lang = lang
        self._min_confidence = min_confidence
        self._models: dict[RecognitionLevel, object] = {}
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "PaddleOCR"

    @property
    def is_available(self) -> bool:
        """Check if PaddleOCR is installed."""
        try:
            import paddleocr  # noqa: F401
            return True
        except ImportError:
            return False

    def load(self, level: RecognitionLevel = RecognitionLevel.FAST) -> None:
        """Load the model pair for a recognition level."""
        with self._lock:
            self._load_locked(level)

    def _load_locked(self, level: RecognitionLevel) -> object:
        """Return the pipeline for a level, loading it first if needed.

        Caller must hold `self._lock`.
        """
        if level in self._models:
            return self._models[level]

        try:
            from paddleocr import PaddleOCR
        except ImportError as e:
            raise DetectionError(
                "PaddleOCR not installed. Install with: pip install paddleocr",
                engine=self.name
            ) from e

        det_model, rec_model = PADDLE_MODELS[level.value]
        kwargs: dict[str, object] = {
            "text_detection_model_name": det_model,
            "text_recognition_model_name": rec_model,
            "use_doc_orientation_classify": False,
            "use_doc_unwarping": False,
            "use_textline_orientation": False,
        }
        if self._lang:
            kwargs["lang"] = self._lang
        if self._device != "auto":
            kwargs["device"] = self._device

        model = PaddleOCR(**kwargs)
        self._models[level] = model
        logger.info(f"PaddleOCR {level.value} models loaded ({det_model}, {rec_model})")
        return model

    def unload(self) -> None:
        """Unload all models."""
        with self._lock:
            if not self._models:
                return
            self._models.clear()
        gc.collect()
        logger.info("PaddleOCR models unloaded")

    async def detect(
        self,
        image: RawImage,
        orientation: ImageOrientation = ImageOrientation.UP,
        level: RecognitionLevel = RecognitionLevel.FAST
    ) -> list[TextBox]:
        """Detect text lines; inference runs in a worker thread."""
        return await asyncio.to_thread(self._detect, image, orientation, level)

    def _detect(
        self,
        image: RawImage,
        orientation: ImageOrientation,
        level: RecognitionLevel
    ) -> list[TextBox]:
        arr = oriented_array(image, orientation)
        if arr.ndim == 3:
            arr = arr[:, :, ::-1].copy()  # PaddleOCR expects BGR
        height, width = arr.shape[:2]

        with self._lock:
            model = self._load_locked(level)
            logger.debug(f"Running PaddleOCR ({level.value}) on {width}x{height} image")
            try:
                results = model.predict(arr)
            except Exception as e:
                raise DetectionError(f"PaddleOCR failed: {e}", engine=self.name) from e

        boxes: list[TextBox] = []
        for page in results or []:
            boxes.extend(self._parse_result(page, width, height))
        return boxes

    def _parse_result(self, raw_result: object, width: int, height: int) -> list[TextBox]:
        """Parse one PaddleOCR result page into normalized text boxes."""
        result_dict = dict(raw_result)

        texts = list(result_dict.get("rec_texts", []))
        polygons = list(result_dict.get("rec_polys", []))
        scores = list(result_dict.get("rec_scores", []))

        boxes: list[TextBox] = []

        for i, text in enumerate(texts):
            if i >= len(polygons):
                logger.warning(f"Mismatch between texts and polygons at index {i}")
                break

            confidence = float(scores[i]) if i < len(scores) else 0.0
            if not str(text).strip() or confidence < self._min_confidence:
                continue

            points = [
                Point(float(p[0]) / width, float(p[1]) / height)
                for p in polygons[i]
            ]
            boxes.append(TextBox(
                bounding_box=BoundingBox.from_points(points),
                text=str(text),
                confidence=confidence
            ))

        return boxes
