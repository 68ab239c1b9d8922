"""Batch scanner for locating labels in multiple images."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from ...domain.entities.image import RawImage
from ...domain.entities.observations import DetectionResult
from ...domain.value_objects.config import DetectorConfig
from ...exceptions import ImageProcessingError
from ..ports.event_publisher import DetectionEvent, EventPublisher, SimpleEventPublisher
from ..ports.label_parser import LabelParser, ParsedLabel
from .label_detector import NutritionLabelDetector, VisionEngines

logger = logging.getLogger(__name__)


@dataclass
class ScanOutcome:
    """Result for one image."""
    path: Path
    detection: DetectionResult | None = None
    parsed: ParsedLabel | None = None
    label_file: Path | None = None
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.detection is not None and self.error_message is None

    def to_dict(self) -> dict:
        data: dict = {"image": str(self.path), "found": self.detection is not None}
        if self.detection is not None:
            rect = self.detection.rectangle
            data["strategy"] = self.detection.strategy
            data["language"] = self.detection.language.value
            data["rectangle"] = {
                name: [point.x, point.y]
                for name, point in (
                    ("top_left", rect.top_left),
                    ("top_right", rect.top_right),
                    ("bottom_left", rect.bottom_left),
                    ("bottom_right", rect.bottom_right),
                )
            }
        if self.parsed is not None:
            data["label"] = self.parsed.to_dict()
        if self.error_message:
            data["error"] = self.error_message
        return data


@dataclass
class BatchResult:
    """Result of batch scanning."""
    total: int
    successful: int
    failed: int
    processing_time_ms: float
    outcomes: list[ScanOutcome]

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        if self.total == 0:
            return 0.0
        return self.successful / self.total


class BatchScanner:
    """Locate (and optionally scan) labels in many images."""

    def __init__(
        self,
        engines: VisionEngines,
        parser: LabelParser | None = None,
        config: DetectorConfig | None = None,
        event_publisher: EventPublisher | None = None
    ):
        self._engines = engines
        self._parser = parser
        self._config = config or DetectorConfig()
        self._events = event_publisher or SimpleEventPublisher()

    async def scan_file(self, file_path: Path, output_dir: Path, scan: bool = False) -> ScanOutcome:
        """Locate the label in one image and save the crop.

        Raises:
            DetectionError: If a vision engine fails
        """
        try:
            image = RawImage.from_file(file_path)
        except OSError as e:
            raise ImageProcessingError(f"Cannot read image: {e}", image_path=str(file_path)) from e

        detector = NutritionLabelDetector(
            image,
            self._engines,
            parser=self._parser,
            config=self._config,
            events=self._events
        )

        outcome = ScanOutcome(path=file_path)
        outcome.detection = await detector.find_nutrition_label()
        if outcome.detection is None:
            outcome.error_message = "no nutrition label found"
            return outcome

        outcome.label_file = output_dir / f"label_{file_path.stem}.png"
        outcome.detection.image.save(outcome.label_file)

        if scan:
            outcome.parsed = await detector.scan_nutrition_label()
            report = output_dir / f"{file_path.stem}.json"
            with open(report, 'w', encoding='utf-8') as f:
                json.dump(outcome.to_dict(), f, indent=2, ensure_ascii=False)

        return outcome

    async def process_files(
        self,
        files: list[Path],
        output_dir: Path,
        scan: bool = False,
        continue_on_error: bool = True,
        progress_callback: Callable[[int, int, str], None] | None = None
    ) -> BatchResult:
        """Process multiple files.

        Args:
            files: List of image files to process
            output_dir: Directory to save results
            scan: Also run the accurate scan and write a JSON report
            continue_on_error: Keep going after a failed image
            progress_callback: Optional callback(current, total, message)

        Returns:
            Batch processing result
        """
        start_time = time.time()

        outcomes: list[ScanOutcome] = []
        successful = 0
        failed = 0

        output_dir.mkdir(parents=True, exist_ok=True)

        self._events.publish(DetectionEvent(
            stage="batch_start",
            message=f"Starting batch of {len(files)} files",
            progress=0.0
        ))

        try:
            for i, file_path in enumerate(files, 1):
                if progress_callback:
                    progress_callback(i, len(files), f"Scanning {file_path.name}")

                try:
                    outcome = await self.scan_file(file_path, output_dir, scan=scan)
                except Exception as e:
                    logger.exception(f"Error scanning {file_path.name}")
                    outcome = ScanOutcome(path=file_path, error_message=f"{type(e).__name__}: {e}")

                outcomes.append(outcome)
                if outcome.success:
                    successful += 1
                    logger.info(f"Saved: {outcome.label_file.name} ({outcome.detection.strategy})")
                else:
                    failed += 1
                    logger.error(f"Failed {file_path.name}: {outcome.error_message}")
                    if not continue_on_error:
                        break
        finally:
            self.release_engines()

        elapsed = (time.time() - start_time) * 1000

        self._events.publish(DetectionEvent(
            stage="batch_complete",
            message=f"Batch complete: {successful}/{len(files)} succeeded",
            progress=1.0
        ))

        return BatchResult(
            total=len(files),
            successful=successful,
            failed=failed,
            processing_time_ms=elapsed,
            outcomes=outcomes
        )

    def release_engines(self) -> None:
        """Free models held by engines that support unloading."""
        for engine in (self._engines.rectangles, self._engines.text, self._engines.characters):
            unload = getattr(engine, "unload", None)
            if callable(unload):
                unload()

    def subscribe_to_events(self, callback: Callable[[DetectionEvent], None]) -> None:
        """Subscribe to detection events."""
        self._events.subscribe(callback)
