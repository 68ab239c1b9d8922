"""Unit tests for character line tracing."""

import math

import pytest
from nutrition_scanner.domain.entities.observations import CharacterBox
from nutrition_scanner.domain.services.line_tracing import CharacterLine, trace_character_line
from nutrition_scanner.domain.services.regression import LinearRegression
from nutrition_scanner.domain.value_objects.geometry import BoundingBox, Point


def glyph(cx, cy, size=0.006):
    half = size / 2
    return CharacterBox(BoundingBox(cx - half, cy - half, cx + half, cy + half))


def trace(characters, start=0, consumed=None):
    consumed = set() if consumed is None else consumed
    consumed.add(characters[start].center)
    return trace_character_line(characters[start], characters, consumed)


class TestCharacterLine:
    """Tests for CharacterLine properties."""

    def test_horizontal(self):
        line = CharacterLine(Point(0.1, 0.5), Point(0.3, 0.5), count=5)
        assert line.length == pytest.approx(0.2)
        assert line.angle == 0.0
        assert line.angle_degrees == 0

    def test_angle_truncates_toward_zero(self):
        angle = math.radians(10.7)
        end = Point(0.1 + math.cos(angle) * 0.1, 0.5 + math.sin(angle) * 0.1)
        assert CharacterLine(Point(0.1, 0.5), end, 3).angle_degrees == 10

        end = Point(0.1 + math.cos(-angle) * 0.1, 0.5 + math.sin(-angle) * 0.1)
        assert CharacterLine(Point(0.1, 0.5), end, 3).angle_degrees == -10


class TestTraceCharacterLine:
    """Tests for trace_character_line."""

    def test_isolated_character(self):
        assert trace([glyph(0.5, 0.5)]) is None

    def test_two_characters_use_raw_centers(self, fake):
        characters = fake.character_line(0.1, 0.5, 20, 2)
        line = trace(characters)
        assert line.count == 2
        assert line.start == characters[0].center
        assert line.end == characters[1].center

    def test_collinear_characters_fit_their_line(self, fake):
        characters = fake.character_line(0.1, 0.2, 15, 6)
        line = trace(characters)
        assert line.count == 6
        assert line.start.x == pytest.approx(characters[0].center.x)
        assert line.start.y == pytest.approx(characters[0].center.y)
        assert line.end.x == pytest.approx(characters[-1].center.x)
        assert line.end.y == pytest.approx(characters[-1].center.y)
        assert math.degrees(line.angle) == pytest.approx(15)

    def test_endpoints_lie_on_exact_line(self):
        """Glyphs on y = 0.5x + 0.2 yield endpoints on that line."""
        characters = [glyph(x, 0.5 * x + 0.2) for x in (0.1, 0.115, 0.13, 0.145, 0.16)]
        centers = [c.center for c in characters]

        fit = LinearRegression.fit([p.x for p in centers], [p.y for p in centers])
        assert fit.slope == pytest.approx(0.5)
        assert fit.intercept == pytest.approx(0.2)

        line = trace(characters)
        assert line.count == 5
        assert line.start.y == pytest.approx(0.5 * line.start.x + 0.2)
        assert line.end.y == pytest.approx(0.5 * line.end.x + 0.2)

    def test_marks_chained_characters_consumed(self, fake):
        characters = fake.character_line(0.1, 0.5, 0, 4)
        consumed = set()
        trace(characters, consumed=consumed)
        assert consumed == {c.center for c in characters}

    def test_start_is_not_marked_by_tracer(self, fake):
        characters = fake.character_line(0.1, 0.5, 0, 3)
        consumed = set()
        trace_character_line(characters[0], characters, consumed)
        assert characters[0].center not in consumed
        assert characters[1].center in consumed

    def test_only_extends_rightward(self, fake):
        characters = fake.character_line(0.1, 0.5, 0, 3)
        assert trace(characters, start=2) is None

    def test_distant_characters_not_chained(self):
        # 0.04 apart: squared distance 0.0016 exceeds 0.001
        assert trace([glyph(0.1, 0.5), glyph(0.14, 0.5)]) is None

    def test_picks_nearest_candidate(self):
        characters = [glyph(0.1, 0.5), glyph(0.125, 0.5), glyph(0.115, 0.51)]
        line = trace(characters)
        # The farther glyph then lies off the chosen direction
        assert line.count == 2
        assert line.end == characters[2].center

    def test_stops_at_consumed_character(self, fake):
        characters = fake.character_line(0.1, 0.5, 0, 4)
        consumed = {characters[2].center}
        line = trace(characters, consumed=consumed)
        assert line.count == 2
        assert characters[3].center not in consumed

    def test_stops_at_direction_change(self):
        characters = [
            glyph(0.1, 0.5),
            glyph(0.12, 0.5),
            glyph(0.14, 0.5),
            glyph(0.155, 0.515),  # 45 degree turn
        ]
        line = trace(characters)
        assert line.count == 3
        assert line.end.y == pytest.approx(0.5)

    @pytest.mark.parametrize("dy", [0.003, -0.003])
    def test_direction_check_is_symmetric(self, dy):
        """Turning up or down by the same amount is treated alike."""
        characters = [
            glyph(0.1, 0.5),
            glyph(0.12, 0.5),
            glyph(0.14, 0.5),
            glyph(0.16, 0.5 + dy),  # ~0.15 rad turn
        ]
        assert trace(characters).count == 3

    def test_small_direction_drift_allowed(self):
        characters = [
            glyph(0.1, 0.5),
            glyph(0.12, 0.5),
            glyph(0.14, 0.5005),
            glyph(0.16, 0.501),
        ]
        assert trace(characters).count == 4

    def test_duplicate_center_is_skipped(self):
        """A candidate at zero distance never chains."""
        characters = [glyph(0.1, 0.5), glyph(0.1, 0.5, size=0.008)]
        assert trace(characters) is None
