"""Skew estimation from traced character lines."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from ..entities.observations import CharacterBox
from ..value_objects.config import DetectorConfig
from ..value_objects.geometry import Point
from .line_tracing import CharacterLine, trace_character_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SkewEstimate:
    """Dominant text angle of an image."""
    angle_degrees: int
    score: float
    line_count: int
    accepted: bool


def trace_lines(
    characters: Sequence[CharacterBox],
    config: DetectorConfig | None = None
) -> list[CharacterLine]:
    """Trace every character line long enough to carry an angle.

    Characters are visited in the given order; each center belongs to at
    most one line.
    """
    config = config or DetectorConfig()
    consumed: set[Point] = set()
    lines: list[CharacterLine] = []

    for character in characters:
        if character.center in consumed:
            continue
        consumed.add(character.center)

        line = trace_character_line(
            character,
            characters,
            consumed,
            max_distance_sq=config.max_character_distance_sq,
            max_direction_delta=config.max_direction_delta,
        )
        if line is None or line.length < config.min_line_length:
            continue
        lines.append(line)

    return lines


def build_angle_histogram(lines: Sequence[CharacterLine]) -> Counter[int]:
    """Count lines per whole-degree angle."""
    return Counter(line.angle_degrees for line in lines)


def find_dominant_angle(histogram: Counter[int], window: int = 2) -> tuple[int, float]:
    """Find the angle with the highest windowed average count.

    For every angle between the smallest and largest bucket, average the
    buckets that exist within +/- window degrees. The first angle reaching
    the maximum wins.

    Returns:
        Tuple of (angle, average). (0, 0.0) for an empty histogram.
    """
    if not histogram:
        return 0, 0.0

    best_angle = 0
    best_score = 0.0

    for angle in range(min(histogram), max(histogram) + 1):
        counts = [
            histogram[angle + offset]
            for offset in range(-window, window + 1)
            if angle + offset in histogram
        ]
        if not counts:
            continue

        avg = sum(counts) / len(counts)
        if avg > best_score:
            best_score = avg
            best_angle = angle

    return best_angle, best_score


def is_skew_accepted(angle_degrees: int, score: float, config: DetectorConfig) -> bool:
    """Whether an estimate is reliable and large enough to correct."""
    return score > config.min_skew_score and abs(angle_degrees) > config.min_skew_degrees


def estimate_skew(
    characters: Sequence[CharacterBox],
    config: DetectorConfig | None = None
) -> SkewEstimate:
    """Estimate the rotation of the text in an image.

    Args:
        characters: Character boxes detected on the upright image
        config: Detection tuning

    Returns:
        Estimate; `accepted` tells whether it should be corrected
    """
    config = config or DetectorConfig()

    lines = trace_lines(characters, config)
    histogram = build_angle_histogram(lines)
    angle, score = find_dominant_angle(histogram, config.histogram_window)
    accepted = is_skew_accepted(angle, score, config)

    logger.debug(
        f"Skew estimate: {angle} deg (score {score:.2f}, "
        f"{len(lines)} lines from {len(characters)} characters, accepted={accepted})"
    )

    return SkewEstimate(
        angle_degrees=angle,
        score=score,
        line_count=len(lines),
        accepted=accepted,
    )
