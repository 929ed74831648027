"""Unit tests for analysis.corners."""

import math

import pytest

from ink_lib.analysis.corners import detect_corners
from ink_lib.domain import Point


class TestDetectCorners:
    """Tests for detect_corners."""

    def test_too_few_points(self):
        pts = [Point(0, 0), Point(50, 0), Point(50, 50), Point(0, 50)]
        assert detect_corners(pts) == []

    def test_straight_stroke_has_none(self, straight_stroke):
        assert detect_corners(straight_stroke) == []

    def test_right_angle_elbow(self, densify):
        pts = densify([(0, 0), (100, 0), (100, 100)])
        corners = detect_corners(pts)
        assert len(corners) == 1
        assert corners[0].point == Point(100, 0)
        assert corners[0].angle == pytest.approx(math.pi / 2)

    def test_obtuse_turn_is_not_a_corner(self, densify):
        """A 120-degree interior angle is above the sharpness threshold."""
        end = (100 + 100 * math.cos(math.radians(60)), 100 * math.sin(math.radians(60)))
        pts = densify([(0, 0), (100, 0), end])
        assert detect_corners(pts) == []

    def test_small_wiggles_ignored(self):
        """Jitter below the coarse epsilon never produces corners."""
        pts = [Point(float(x), 3.0 * (x % 2)) for x in range(0, 120, 3)]
        assert detect_corners(pts) == []

    def test_rectangle_corners_in_traversal_order(self, rectangle_stroke):
        corners = detect_corners(rectangle_stroke)
        assert [c.point for c in corners] == [
            Point(250, 50), Point(250, 150), Point(50, 150), Point(50, 50),
        ]

    def test_circle_has_none(self, circle_polyline):
        assert detect_corners(circle_polyline) == []
