"""Command line interface for locating and scanning nutrition labels."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from ...adapters.parsing.row_parser import RowLabelParser
from ...adapters.vision.opencv_adapter import (
    OpenCVCharacterDetector,
    OpenCVImageTransform,
    OpenCVRectangleDetector,
)
from ...application.services.batch_scanner import BatchScanner
from ...application.services.label_detector import VisionEngines
from ...config import DETECTION_DEFAULTS, SUPPORTED_IMAGE_EXTENSIONS
from ...domain.value_objects.config import DetectorConfig
from ...domain.value_objects.language import LabelLanguage
from ...exceptions import NutritionScannerError
from ...infrastructure.plugin_registry import PluginRegistry
from ...utils.env import setup_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="nutrition-scanner",
        description="Locate, deskew and crop nutrition-facts panels in product photos"
    )

    parser.add_argument("input", help="Input image or folder")
    parser.add_argument("-o", "--output", required=True, help="Output folder")

    parser.add_argument(
        "--scan",
        action="store_true",
        help="Also run an accurate text scan and write a JSON report per image"
    )

    # Detection settings
    detect_group = parser.add_argument_group("Detection options")
    detect_group.add_argument(
        "--margin",
        type=float,
        default=DETECTION_DEFAULTS.label_margin,
        help=f"Context margin around keyword regions (default: {DETECTION_DEFAULTS.label_margin})"
    )
    detect_group.add_argument(
        "--default-language",
        choices=[lang.value for lang in LabelLanguage],
        default=LabelLanguage.ENGLISH.value,
        help="Language assumed when no keyword is found (default: english)"
    )
    detect_group.add_argument(
        "--parallel-candidates",
        action="store_true",
        help="Evaluate rectangle candidates concurrently"
    )

    # Text engine settings
    ocr_group = parser.add_argument_group("Text engine options")
    ocr_group.add_argument(
        "--text-engine",
        default="paddleocr",
        help="Text detection backend (default: paddleocr)"
    )
    ocr_group.add_argument(
        "--device",
        default="auto",
        help="Compute device for the text engine, e.g. cpu or gpu (default: auto)"
    )
    ocr_group.add_argument(
        "--ocr-lang",
        help="Recognition language passed to the text engine"
    )

    # Error handling
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Continue processing remaining images if one fails"
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    return parser


def collect_files(input_path: Path) -> list[Path]:
    """Images to process: the file itself or a folder's images, sorted."""
    if input_path.is_file():
        return [input_path]
    return sorted(
        f for f in input_path.iterdir()
        if f.is_file() and f.suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS
    )


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    setup_logging(logging.DEBUG if parsed.verbose else logging.INFO, parsed.log_file)

    input_path = Path(parsed.input)
    output_path = Path(parsed.output)

    if not input_path.exists():
        logger.error(f"Input not found: {input_path}")
        return 1

    try:
        config = DetectorConfig(
            label_margin=parsed.margin,
            default_language=parsed.default_language,
            parallel_candidates=parsed.parallel_candidates,
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    engine_kwargs: dict[str, object] = {"device": parsed.device}
    if parsed.ocr_lang:
        engine_kwargs["lang"] = parsed.ocr_lang

    try:
        text_engine = PluginRegistry.create_text_engine(parsed.text_engine, **engine_kwargs)
    except NutritionScannerError as e:
        logger.error(f"Failed to initialize text engine: {e}")
        return 1

    if not getattr(text_engine, "is_available", True):
        logger.error(f"Text engine {parsed.text_engine} is not installed")
        return 1

    engines = VisionEngines(
        rectangles=OpenCVRectangleDetector(),
        text=text_engine,
        characters=OpenCVCharacterDetector(),
        transform=OpenCVImageTransform(),
    )
    scanner = BatchScanner(engines, parser=RowLabelParser(), config=config)

    files = collect_files(input_path)
    if not files:
        logger.error("No image files found")
        return 1

    logger.info(f"Processing {len(files)} image(s) with {parsed.text_engine}...")

    try:
        result = asyncio.run(scanner.process_files(
            files,
            output_path,
            scan=parsed.scan,
            continue_on_error=parsed.continue_on_error,
        ))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1

    # Summary
    logger.info("=" * 50)
    if result.failed:
        logger.warning(f"Completed: {result.successful}/{result.total} labels found")
        for outcome in result.outcomes:
            if not outcome.success:
                logger.error(f"  - {outcome.path.name}: {outcome.error_message}")
        return 1

    logger.info(f"Completed: labels found in all {result.total} images")
    return 0


if __name__ == "__main__":
    sys.exit(main())
