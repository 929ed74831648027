"""Shape recognition for freehand strokes.

This module provides the ShapeClassifier class, which decides whether a
finished stroke approximates a line, an arrow, a rectangle, an ellipse, a
triangle or a diamond. The tests run in a fixed order and each one
assumes the earlier ones failed:

    1. Strokes shorter than ``MIN_STROKE_LENGTH`` are rejected.
    2. Nearly straight strokes become a line, or an arrow when the tail
       contains a sharp hook.
    3. Strokes whose ends do not meet are rejected (freehand fallback).
    4. Closed strokes are tested as ellipse, then triangle, then
       quadrilateral (rectangle or diamond).

A rejected stroke is the common case, not an error: ``classify`` returns
None and the caller keeps the stroke as a freehand path.

Example usage::

    from ink_lib.analysis.shapes import ShapeClassifier

    classifier = ShapeClassifier()
    match = classifier.classify(samples)
    if match is not None:
        print(match.to_dict())
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np

from ..config import (
    ARROW_ANGLE_DEVIATION,
    ARROW_MIN_POINTS,
    ARROW_TAIL_FRACTION,
    CLOSED_RATIO,
    DIAMOND_ERROR_RATIO,
    ELLIPSE_MAX_CORNERS,
    ELLIPSE_MAX_ERROR,
    ELLIPSE_MAX_LENGTH_RATIO,
    ELLIPSE_MIN_LENGTH_RATIO,
    ELLIPSE_MIN_RADIUS,
    LINE_MIN_LENGTH,
    LINE_STRAIGHTNESS,
    MIN_SHAPE_EXTENT,
    MIN_STROKE_LENGTH,
    QUAD_MAX_CORNERS,
    QUAD_MIN_CORNERS,
    RECTANGLE_ANGLE_ERROR,
    RECTANGLE_FALLBACK_ANGLE_ERROR,
    TRIANGLE_MIN_SIDE_RATIO,
)
from ..domain.geometry import BBox, Corner, Point
from ..domain.shapes import ShapeKind, ShapeMatch
from ..utils.geometry import angle_between, path_length, point_distance
from .corners import detect_corners

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClosedStroke:
    """Measurements of a closed stroke shared by the closed-shape tests."""
    points: Sequence[Point]
    length: float
    bbox: BBox
    corners: List[Corner]

    @property
    def center(self) -> Point:
        return self.bbox.center


def first_match(stroke: ClosedStroke,
                tests: Iterable[Callable[[ClosedStroke], Optional[ShapeMatch]]]
                ) -> Optional[ShapeMatch]:
    """Run tests in order and return the first non-None result."""
    for test in tests:
        match = test(stroke)
        if match is not None:
            return match
    return None


def estimate_ellipse_perimeter(rx: float, ry: float) -> float:
    """Ramanujan's approximation of an ellipse perimeter."""
    h = ((rx - ry) * (rx - ry)) / ((rx + ry) * (rx + ry))
    return math.pi * (rx + ry) * (1 + (3 * h) / (10 + math.sqrt(4 - 3 * h)))


def sort_clockwise(points: Sequence[Point], center: Point) -> List[Point]:
    """Sort points by polar angle around ``center``.

    With screen coordinates (y grows downwards) increasing angle runs
    clockwise. The sort is stable.
    """
    return sorted(points, key=lambda p: math.atan2(p.y - center.y, p.x - center.x))


def best_four_corners(corners: Sequence[Point], center: Point) -> Optional[List[Point]]:
    """Pick one corner per bounding-box quadrant, the farthest from center.

    Quadrants are visited top-left, top-right, bottom-left, bottom-right.
    A point on a center line belongs to the right / bottom quadrant.

    Returns:
        Four points, or None when fewer than 4 corners are given or a
        quadrant is empty.
    """
    if len(corners) < 4:
        return None
    quadrants: List[List[Point]] = [[], [], [], []]
    for c in corners:
        qx = 1 if c.x >= center.x else 0
        qy = 1 if c.y >= center.y else 0
        quadrants[qy * 2 + qx].append(c)

    result = []
    for q in quadrants:
        if not q:
            return None
        # max() keeps the first of equally distant corners
        result.append(max(q, key=lambda p: point_distance(p, center)))
    return result


class ShapeClassifier:
    """Classifies finished strokes into canonical shapes.

    The classifier is stateless; one instance can be shared freely. All
    thresholds come from ``ink_lib.config``.

    Example:
        >>> classifier = ShapeClassifier()
        >>> classifier.classify([Point(0, 0), Point(50, 0), Point(100, 0)]).kind
        <ShapeKind.LINE: 'line'>
    """

    def classify(self, points: Sequence[Point]) -> Optional[ShapeMatch]:
        """Recognize the shape a stroke approximates.

        Args:
            points: Raw stroke samples in world coordinates.

        Returns:
            A ShapeMatch, or None when the stroke should stay freehand.
        """
        if len(points) < 3:
            return None

        total_length = path_length(points)
        if total_length < MIN_STROKE_LENGTH:
            return None
        logger.debug("classify: %d points, length %.1f", len(points), total_length)

        line = self.detect_line(points, total_length)
        if line is not None:
            logger.debug("classify: -> %s", line.kind.value)
            return line

        start_end = point_distance(points[0], points[-1])
        if start_end >= total_length * CLOSED_RATIO:
            logger.debug("classify: open stroke (start-end %.1f) -> freehand", start_end)
            return None

        stroke = ClosedStroke(
            points=points,
            length=total_length,
            bbox=BBox.from_points(points),
            corners=detect_corners(points),
        )
        logger.debug("classify: bbox %.0fx%.0f, %d corners",
                     stroke.bbox.width, stroke.bbox.height, len(stroke.corners))

        match = first_match(stroke, (
            self.detect_ellipse,
            self.detect_triangle,
            self.detect_quadrilateral,
        ))
        if match is None:
            logger.debug("classify: no closed shape matched -> freehand")
            return None
        if match.bbox.width < MIN_SHAPE_EXTENT or match.bbox.height < MIN_SHAPE_EXTENT:
            logger.debug("classify: degenerate %s bbox rejected", match.kind.value)
            return None
        logger.debug("classify: -> %s", match.kind.value)
        return match

    # ------------------------------------------------------------------
    # Line / arrow
    # ------------------------------------------------------------------

    def detect_line(self, points: Sequence[Point], total_length: float) -> Optional[ShapeMatch]:
        """Match a nearly straight stroke as a line or an arrow."""
        start, end = points[0], points[-1]
        direct = point_distance(start, end)
        straightness = direct / total_length
        if straightness < LINE_STRAIGHTNESS or direct < LINE_MIN_LENGTH:
            return None

        kind = ShapeKind.ARROW if self.has_arrow_head(points) else ShapeKind.LINE
        return ShapeMatch.linear(kind, start, end)

    def has_arrow_head(self, points: Sequence[Point]) -> bool:
        """Check the last quarter of the stroke for a sharp hook.

        The hook of a hand-drawn arrow shows up as a vertex whose angle
        deviates from straight by more than ``ARROW_ANGLE_DEVIATION``.
        Strokes with fewer than ``ARROW_MIN_POINTS`` points never qualify.
        """
        n = len(points)
        if n < ARROW_MIN_POINTS:
            return False

        tail = points[int(math.floor(n * ARROW_TAIL_FRACTION)):]
        max_change = 0.0
        for i in range(1, len(tail) - 1):
            angle = angle_between(tail[i - 1], tail[i], tail[i + 1])
            max_change = max(max_change, abs(math.pi - angle))
        return max_change > ARROW_ANGLE_DEVIATION

    # ------------------------------------------------------------------
    # Closed shapes
    # ------------------------------------------------------------------

    def detect_ellipse(self, stroke: ClosedStroke) -> Optional[ShapeMatch]:
        """Match a stroke that stays close to its bounding-box ellipse."""
        if len(stroke.corners) > ELLIPSE_MAX_CORNERS:
            return None

        rx = stroke.bbox.width / 2
        ry = stroke.bbox.height / 2
        if rx < ELLIPSE_MIN_RADIUS or ry < ELLIPSE_MIN_RADIUS:
            return None

        c = stroke.center
        xy = np.array([(p.x, p.y) for p in stroke.points], dtype=float)
        radial = np.hypot((xy[:, 0] - c.x) / rx, (xy[:, 1] - c.y) / ry)
        avg_error = float(np.mean(np.abs(radial - 1.0)))

        length_ratio = stroke.length / estimate_ellipse_perimeter(rx, ry)
        logger.debug("ellipse: avg_error=%.3f length_ratio=%.3f", avg_error, length_ratio)

        if (avg_error < ELLIPSE_MAX_ERROR
                and ELLIPSE_MIN_LENGTH_RATIO < length_ratio < ELLIPSE_MAX_LENGTH_RATIO):
            return ShapeMatch.boxed(ShapeKind.ELLIPSE, stroke.bbox)
        return None

    def detect_triangle(self, stroke: ClosedStroke) -> Optional[ShapeMatch]:
        """Match a stroke with exactly three well-separated corners."""
        if len(stroke.corners) != 3:
            return None

        p0, p1, p2 = (c.point for c in stroke.corners)
        sides = (point_distance(p0, p1), point_distance(p1, p2), point_distance(p2, p0))
        perimeter = sum(sides)
        if min(sides) < perimeter * TRIANGLE_MIN_SIDE_RATIO:
            logger.debug("triangle: sliver rejected (min side %.1f)", min(sides))
            return None
        return ShapeMatch.boxed(ShapeKind.TRIANGLE, stroke.bbox)

    def detect_quadrilateral(self, stroke: ClosedStroke) -> Optional[ShapeMatch]:
        """Match a four-cornered stroke as a rectangle or a diamond.

        Rectangles are recognized by near-right interior angles, diamonds
        by corners close to the bounding-box edge midpoints. A looser
        angle threshold accepts rectangles that failed both.
        """
        n = len(stroke.corners)
        if not QUAD_MIN_CORNERS <= n <= QUAD_MAX_CORNERS:
            return None

        center = stroke.center
        points = [c.point for c in stroke.corners]
        four = points if n == 4 else best_four_corners(points, center)
        if four is None:
            logger.debug("quadrilateral: cannot reduce %d corners to 4", n)
            return None

        ordered = sort_clockwise(four, center)
        angles = [
            angle_between(ordered[(i + 3) % 4], ordered[i], ordered[(i + 1) % 4])
            for i in range(4)
        ]
        avg_angle_error = sum(abs(a - math.pi / 2) for a in angles) / 4
        logger.debug("quadrilateral: avg_angle_error=%.3f", avg_angle_error)

        if avg_angle_error < RECTANGLE_ANGLE_ERROR:
            return ShapeMatch.boxed(ShapeKind.RECTANGLE, stroke.bbox)

        midpoints = stroke.bbox.edge_midpoints()
        diamond_error = sum(
            min(point_distance(p, m) for m in midpoints) for p in ordered
        ) / 4
        if diamond_error < stroke.bbox.diagonal * DIAMOND_ERROR_RATIO:
            return ShapeMatch.boxed(ShapeKind.DIAMOND, stroke.bbox)

        if avg_angle_error < RECTANGLE_FALLBACK_ANGLE_ERROR:
            return ShapeMatch.boxed(ShapeKind.RECTANGLE, stroke.bbox)
        return None


def classify(points: Sequence[Point]) -> Optional[ShapeMatch]:
    """Classify a stroke with a default ShapeClassifier."""
    return ShapeClassifier().classify(points)
