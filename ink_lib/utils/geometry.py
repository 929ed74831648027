"""Geometric utility functions.

This module provides the pure geometry primitives shared by the
simplifier, the shape classifier and the trim engine. They supplement the
methods on the domain objects (Point, Polyline, etc.) with operations
over plain point sequences, so callers can pass either a Polyline or a
list of Points. None of the functions mutate their inputs.

The module provides the following functions:
    point_distance: Euclidean distance between two points.
    perpendicular_distance: Distance from a point to the line through two points.
    segment_distance: Distance from a point to a segment.
    path_length: Total arc length of a point sequence.
    cumulative_lengths: Running arc length at every vertex.
    angle_between: Interior angle at a vertex given its two neighbors.
    point_at_t: Point at a normalized arc-length parameter.
    closest_t: Normalized arc-length parameter of the closest point.
    distance_to_path: Distance from a point to a point sequence.
    resample_path: Resample a path to evenly-spaced points.

Example usage:
    Vertex angles::

        from ink_lib.domain import Point
        from ink_lib.utils.geometry import angle_between

        # Right angle at the origin
        angle_between(Point(10, 0), Point(0, 0), Point(0, 10))  # pi/2

    Arc-length parameters::

        from ink_lib.utils.geometry import closest_t, point_at_t

        path = [Point(0, 0), Point(100, 0)]
        closest_t(path, Point(25, 10))   # 0.25
        point_at_t(path, 0.5)            # Point(50.0, 0.0)
"""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from ..config import MIN_SEGMENT_LENGTH, T_TOLERANCE
from ..domain.geometry import Point


def point_distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def perpendicular_distance(point: Point, line_start: Point, line_end: Point) -> float:
    """Distance from a point to the infinite line through two points.

    Args:
        point: The point to measure.
        line_start: First point on the line.
        line_end: Second point on the line.

    Returns:
        Perpendicular distance. When the two line points coincide the line
        is undefined and the distance to ``line_start`` is returned.
    """
    dx = line_end.x - line_start.x
    dy = line_end.y - line_start.y
    length = math.hypot(dx, dy)
    if length == 0:
        return point_distance(point, line_start)
    cross = dx * (point.y - line_start.y) - dy * (point.x - line_start.x)
    return abs(cross) / length


def segment_distance(point: Point, a: Point, b: Point) -> float:
    """Distance from a point to the segment ``a``-``b``.

    The projection parameter is clamped to [0, 1], so points beyond either
    end measure to the nearer endpoint.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return point_distance(point, a)
    t = ((point.x - a.x) * dx + (point.y - a.y) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(point.x - (a.x + t * dx), point.y - (a.y + t * dy))


def path_length(points: Sequence[Point]) -> float:
    """Total arc length of a point sequence (0 for fewer than 2 points)."""
    total = 0.0
    for i in range(1, len(points)):
        total += point_distance(points[i - 1], points[i])
    return total


def cumulative_lengths(points: Sequence[Point]) -> np.ndarray:
    """Arc length from the first point to every vertex.

    Returns:
        Array of length ``len(points)`` starting at 0.0 and ending at the
        total path length.
    """
    if len(points) == 0:
        return np.zeros(0)
    xy = np.array([(p.x, p.y) for p in points], dtype=float)
    seg = np.hypot(np.diff(xy[:, 0]), np.diff(xy[:, 1]))
    return np.concatenate(([0.0], np.cumsum(seg)))


def angle_between(prev: Point, vertex: Point, next_: Point) -> float:
    """Interior angle at ``vertex`` between its two incident edges.

    Computes the angle between the vectors vertex->prev and vertex->next
    using the dot product. A straight continuation gives pi, a full
    reversal gives 0.

    Args:
        prev: Neighbor before the vertex.
        vertex: The vertex being measured.
        next_: Neighbor after the vertex.

    Returns:
        Angle in radians in [0, pi]. Returns pi (no turn) when either
        incident vector has zero length.

    Example:
        >>> angle_between(Point(-1, 0), Point(0, 0), Point(1, 0))
        3.141592653589793
    """
    bax = prev.x - vertex.x
    bay = prev.y - vertex.y
    bcx = next_.x - vertex.x
    bcy = next_.y - vertex.y
    mag_ba = math.hypot(bax, bay)
    mag_bc = math.hypot(bcx, bcy)
    if mag_ba == 0 or mag_bc == 0:
        return math.pi
    cos_angle = (bax * bcx + bay * bcy) / (mag_ba * mag_bc)
    return math.acos(max(-1.0, min(1.0, cos_angle)))


def point_at_t(points: Sequence[Point], t: float) -> Point:
    """Point at normalized arc-length parameter ``t`` along a path.

    Walks the segments until the one containing ``t * length`` (within a
    small tolerance) and interpolates inside it. Segments shorter than
    ``MIN_SEGMENT_LENGTH`` resolve to their start point. A parameter past
    the end resolves to the last point.
    """
    total = path_length(points)
    target = t * total
    cum = 0.0
    for i in range(len(points) - 1):
        a, b = points[i], points[i + 1]
        seg_len = point_distance(a, b)
        if cum + seg_len >= target - T_TOLERANCE:
            frac = (target - cum) / seg_len if seg_len > MIN_SEGMENT_LENGTH else 0.0
            return Point(a.x + frac * (b.x - a.x), a.y + frac * (b.y - a.y))
        cum += seg_len
    return points[-1]


def closest_t(points: Sequence[Point], target: Point) -> float:
    """Normalized arc-length parameter of the point on a path closest to ``target``.

    Every segment is scanned with a clamped projection; the first segment
    reaching the minimum distance wins. Segments shorter than
    ``MIN_SEGMENT_LENGTH`` are skipped.

    Returns:
        Parameter in [0, 1]; 0.0 for a path of zero length.
    """
    total = path_length(points)
    best_dist = math.inf
    best_t = 0.0
    cum = 0.0
    for i in range(len(points) - 1):
        a, b = points[i], points[i + 1]
        seg_len = point_distance(a, b)
        if seg_len < MIN_SEGMENT_LENGTH:
            cum += seg_len
            continue

        dx = b.x - a.x
        dy = b.y - a.y
        u = ((target.x - a.x) * dx + (target.y - a.y) * dy) / (dx * dx + dy * dy)
        u = max(0.0, min(1.0, u))
        dist = math.hypot(target.x - (a.x + u * dx), target.y - (a.y + u * dy))

        if dist < best_dist:
            best_dist = dist
            best_t = (cum + u * seg_len) / total
        cum += seg_len
    return best_t


def distance_to_path(point: Point, points: Sequence[Point]) -> float:
    """Minimum distance from a point to any segment of a path."""
    best = math.inf
    for i in range(len(points) - 1):
        best = min(best, segment_distance(point, points[i], points[i + 1]))
    return best


def resample_path(points: Sequence[Point], num_points: int) -> List[Point]:
    """Resample a path to have a specified number of evenly-spaced points.

    Creates a new path with points distributed at equal arc-length
    intervals along the original path.

    Args:
        points: Path to resample.
        num_points: Desired number of points in the output path.

    Returns:
        List of evenly-spaced points that always includes the original
        start and end points. Returns a copy of the input if it has fewer
        than 2 points, if num_points is less than 2, or if the path has
        no length.

    Example:
        >>> path = [Point(0, 0), Point(100, 0), Point(100, 100)]
        >>> len(resample_path(path, num_points=5))
        5
    """
    if len(points) < 2 or num_points < 2:
        return list(points)

    distances = cumulative_lengths(points)
    total_length = distances[-1]
    if total_length < MIN_SEGMENT_LENGTH:
        return list(points)

    targets = np.linspace(0.0, total_length, num_points)
    xs = np.interp(targets, distances, [p.x for p in points])
    ys = np.interp(targets, distances, [p.y for p in points])

    result = [Point(float(x), float(y)) for x, y in zip(xs, ys)]
    # Keep endpoints exact
    result[0] = points[0]
    result[-1] = points[-1]
    return result
