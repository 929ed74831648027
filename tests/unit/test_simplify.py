"""Unit tests for analysis.simplify (Ramer-Douglas-Peucker)."""

import math

import numpy as np
import pytest

from ink_lib.analysis.simplify import simplify
from ink_lib.domain import Point, Polyline


def _noisy_stroke(n=300, seed=7):
    """Wavy stroke with deterministic jitter."""
    rng = np.random.RandomState(seed)
    xs = np.linspace(0, 300, n)
    ys = 40 * np.sin(xs / 30) + rng.normal(0, 2.0, n)
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


class TestSimplify:
    """Tests for simplify."""

    def test_two_points_unchanged(self):
        pts = [Point(0, 0), Point(10, 10)]
        assert simplify(pts, 1.5) == pts

    def test_single_point_unchanged(self):
        assert simplify([Point(3, 3)], 1.5) == [Point(3, 3)]

    def test_straight_line_collapses(self, straight_stroke):
        result = simplify(straight_stroke, 1.5)
        assert result == [Point(0.0, 0.0), Point(200.0, 0.0)]

    def test_keeps_sharp_corner(self):
        pts = [Point(float(x), 0.0) for x in range(0, 51, 5)]
        pts += [Point(50.0, float(y)) for y in range(5, 51, 5)]
        assert simplify(pts, 1.5) == [Point(0, 0), Point(50, 0), Point(50, 50)]

    def test_within_epsilon_collapses(self):
        pts = [Point(0, 0), Point(5, 1.0), Point(10, 0)]
        assert simplify(pts, 1.5) == [Point(0, 0), Point(10, 0)]

    def test_exceeding_epsilon_kept(self):
        pts = [Point(0, 0), Point(5, 2.0), Point(10, 0)]
        assert simplify(pts, 1.5) == pts

    def test_tie_break_first_point_wins(self):
        """Equal deviations split at the earlier point."""
        pts = [Point(0, 0), Point(1, 5), Point(2, 5), Point(3, 0)]
        assert simplify(pts, 1.0) == [Point(0, 0), Point(1, 5), Point(3, 0)]

    def test_closed_stroke_uses_point_distance(self):
        """A loop whose ends coincide splits at the farthest point."""
        pts = [Point(0, 0), Point(10, 0), Point(20, 0), Point(10, 0), Point(0, 0)]
        assert simplify(pts, 1.0) == [Point(0, 0), Point(20, 0), Point(0, 0)]

    def test_endpoints_preserved(self):
        pts = _noisy_stroke()
        result = simplify(pts, 1.5)
        assert result[0] == pts[0]
        assert result[-1] == pts[-1]

    def test_output_is_subsequence(self):
        pts = _noisy_stroke()
        result = simplify(pts, 1.5)
        it = iter(pts)
        assert all(any(p == q for q in it) for p in result)

    def test_point_count_not_increased(self):
        pts = _noisy_stroke()
        assert len(simplify(pts, 1.5)) <= len(pts)
        assert len(simplify(pts, 8.0)) <= len(simplify(pts, 1.5))

    @pytest.mark.parametrize('epsilon', [0.5, 1.5, 8.0])
    def test_idempotent(self, epsilon):
        pts = _noisy_stroke()
        once = simplify(pts, epsilon)
        assert simplify(once, epsilon) == once

    def test_accepts_polyline(self):
        poly = Polyline.from_tuples([(0, 0), (5, 0.1), (10, 0)])
        assert simplify(poly, 1.5) == [Point(0, 0), Point(10, 0)]

    def test_does_not_mutate_input(self):
        pts = _noisy_stroke(50)
        copy = list(pts)
        simplify(pts, 1.5)
        assert pts == copy

    def test_negative_epsilon_rejected(self):
        with pytest.raises(ValueError):
            simplify([Point(0, 0), Point(1, 1), Point(2, 0)], -1.0)

    @pytest.mark.slow
    def test_long_irregular_stroke(self):
        """Deep splits do not hit the recursion limit."""
        n = 20000
        pts = [Point(t * math.cos(t / 10), t * math.sin(t / 10)) for t in range(n)]
        result = simplify(pts, 0.01)
        assert result[0] == pts[0]
        assert result[-1] == pts[-1]
        assert len(result) > 1000
