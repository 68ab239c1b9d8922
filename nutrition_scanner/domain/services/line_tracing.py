"""Character line tracing - chain glyph boxes into rows of text."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from ...config import DETECTION_DEFAULTS
from ...exceptions import DegenerateFitError
from ..entities.observations import CharacterBox
from ..value_objects.geometry import Point
from .regression import LinearRegression

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CharacterLine:
    """A traced row of characters."""
    start: Point
    end: Point
    count: int

    @property
    def vector(self) -> Point:
        return self.end - self.start

    @property
    def length(self) -> float:
        return self.vector.magnitude

    @property
    def angle(self) -> float:
        """Signed angle to the horizontal axis, in radians."""
        return self.vector.heading

    @property
    def angle_degrees(self) -> int:
        """Angle truncated to whole degrees."""
        return int(math.degrees(self.angle))


def trace_character_line(
    start: CharacterBox,
    characters: Sequence[CharacterBox],
    consumed: set[Point],
    max_distance_sq: float = DETECTION_DEFAULTS.max_character_distance_sq,
    max_direction_delta: float = DETECTION_DEFAULTS.max_direction_delta,
) -> CharacterLine | None:
    """Greedily extend a line of characters to the right of `start`.

    Each step picks the nearest character strictly to the right within
    `max_distance_sq`. Once two characters are chained, a candidate must
    keep the direction of the last segment within `max_direction_delta`.
    Tracing stops when nothing qualifies or the nearest candidate is
    already in `consumed`. Every character added is recorded in `consumed`;
    marking `start` is the caller's job.

    Args:
        start: Character to start from
        characters: All characters of the image
        consumed: Centers already claimed by a line (mutated)
        max_distance_sq: Maximum squared distance between neighbours
        max_direction_delta: Maximum direction change in radians

    Returns:
        Line endpoints, or None if fewer than two characters chained.
        Chains of three or more are smoothed with a least-squares fit.
    """
    chain: list[CharacterBox] = [start]
    current = start

    while True:
        center = current.center
        closest: CharacterBox | None = None
        min_distance = math.inf

        for other in characters:
            offset = other.center - center
            if offset.x <= 0:
                continue

            distance = offset.magnitude_squared
            if distance == 0 or distance > max_distance_sq or distance >= min_distance:
                continue

            if len(chain) > 1:
                direction = chain[-1].center - chain[-2].center
                if abs(direction.angle_to(offset)) >= max_direction_delta:
                    continue

            min_distance = distance
            closest = other

        if closest is None:
            break

        if closest.center in consumed:
            break

        consumed.add(closest.center)
        chain.append(closest)
        current = closest

    if len(chain) < 2:
        return None

    first = chain[0].center
    last = chain[-1].center

    if len(chain) == 2:
        return CharacterLine(start=first, end=last, count=2)

    centers = [c.center for c in chain]
    try:
        fit = LinearRegression.fit([p.x for p in centers], [p.y for p in centers])
    except DegenerateFitError as e:
        logger.debug(f"Skipping character line of {len(chain)} characters: {e}")
        return None

    return CharacterLine(
        start=Point(first.x, fit.predict_y(first.x)),
        end=Point(last.x, fit.predict_y(last.x)),
        count=len(chain),
    )
