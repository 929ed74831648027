"""Polyline intersection and trim.

This module implements the geometry behind the trim tool: clicking on a
piece of a shape removes exactly the piece bounded by its two nearest
crossings with other shapes.

The trim works on normalized arc-length parameters. Every intersection is
located on the target polyline as ``t`` in [0, 1] (arc length up to the
crossing divided by total length), which puts crossings found on
different segments on a common scale. The click is projected onto the
target the same way, the crossings that bracket it are found, and the
bracketed span is cut out:

    - open targets keep the pieces before and after the span;
    - closed targets keep the rest of the loop as a single piece, which
      runs through the closure point when the span does not.

Trimming never raises on bad geometry. Whenever no valid bracket exists
(fewer than 2 crossings, click outside the crossings of an open target,
click exactly on a crossing) ``trim`` returns None and the caller leaves
its state untouched.

Example usage::

    from ink_lib.analysis.intersections import find_intersections, trim

    crossings = find_intersections(circle, chord)
    result = trim(circle, click, [('chord-1', chord)])
    if result is not None:
        for piece in result:
            print(len(piece), piece.length())
"""

from __future__ import annotations

import logging
from typing import Hashable, Iterable, List, Optional, Sequence, Tuple

from ..config import (
    INTERSECTION_MERGE_DISTANCE,
    OPEN_KEEP_END,
    OPEN_KEEP_START,
    PARALLEL_EPSILON,
    T_TOLERANCE,
)
from ..domain.geometry import Point, Polyline
from ..domain.shapes import Intersection, TrimResult
from ..utils.geometry import closest_t, cumulative_lengths, point_at_t, point_distance

logger = logging.getLogger(__name__)


def segment_intersection(p1: Point, p2: Point, p3: Point,
                         p4: Point) -> Optional[Tuple[Point, float, float]]:
    """Intersect segment p1-p2 with segment p3-p4.

    Returns:
        ``(point, t, u)`` where ``t`` and ``u`` are the local parameters
        along the first and second segment, or None when the segments are
        parallel or do not cross within both parameter ranges.
    """
    dx1 = p2.x - p1.x
    dy1 = p2.y - p1.y
    dx2 = p4.x - p3.x
    dy2 = p4.y - p3.y

    denom = dx1 * dy2 - dy1 * dx2
    if abs(denom) < PARALLEL_EPSILON:
        return None

    t = ((p3.x - p1.x) * dy2 - (p3.y - p1.y) * dx2) / denom
    u = ((p3.x - p1.x) * dy1 - (p3.y - p1.y) * dx1) / denom
    if t < 0 or t > 1 or u < 0 or u > 1:
        return None

    return Point(p1.x + t * dx1, p1.y + t * dy1), t, u


def find_intersections(poly_a: Sequence[Point], poly_b: Sequence[Point],
                       other_id: Hashable = None) -> List[Intersection]:
    """Find every crossing between two polylines.

    Segments are compared pairwise. Local segment parameters are turned
    into global arc-length parameters on each polyline.

    Args:
        poly_a: Target polyline; ``t_self`` is measured along it.
        poly_b: Other polyline; ``t_other`` is measured along it.
        other_id: Token stored on each result to identify ``poly_b``.

    Returns:
        Intersections in segment scan order (not sorted by parameter).
        A polyline of zero length yields no intersections.
    """
    cum_a = cumulative_lengths(poly_a)
    cum_b = cumulative_lengths(poly_b)
    total_a = float(cum_a[-1]) if len(cum_a) else 0.0
    total_b = float(cum_b[-1]) if len(cum_b) else 0.0
    if total_a == 0 or total_b == 0:
        return []

    result = []
    for i in range(len(poly_a) - 1):
        seg_a = float(cum_a[i + 1] - cum_a[i])
        for j in range(len(poly_b) - 1):
            hit = segment_intersection(poly_a[i], poly_a[i + 1], poly_b[j], poly_b[j + 1])
            if hit is None:
                continue
            point, t, u = hit
            seg_b = float(cum_b[j + 1] - cum_b[j])
            result.append(Intersection(
                point=point,
                t_self=(float(cum_a[i]) + t * seg_a) / total_a,
                t_other=(float(cum_b[j]) + u * seg_b) / total_b,
                other_id=other_id,
            ))
    return result


def merge_intersections(intersections: Sequence[Intersection],
                        distance: float = INTERSECTION_MERGE_DISTANCE) -> List[Intersection]:
    """Drop intersections lying within ``distance`` of the previously kept one.

    The input must already be sorted by ``t_self``. The first intersection
    of each cluster is kept.
    """
    if not intersections:
        return []
    merged = [intersections[0]]
    for curr in intersections[1:]:
        if point_distance(curr.point, merged[-1].point) > distance:
            merged.append(curr)
    return merged


def find_bracket(merged: Sequence[Intersection],
                 click_t: float) -> Tuple[Optional[int], Optional[int]]:
    """Indices of the intersections surrounding ``click_t``.

    Scans linearly: the left bound is the last intersection with
    ``t <= click_t``; the right bound is found scanning from the end and
    keeping the last one seen with ``t >= click_t``. A click exactly on an
    intersection therefore returns the same index for both bounds.

    Returns:
        ``(left, right)``; either is None when no intersection qualifies.
    """
    left = None
    right = None
    for i in range(len(merged)):
        if merged[i].t_self <= click_t:
            left = i
    for i in range(len(merged) - 1, -1, -1):
        if merged[i].t_self >= click_t:
            right = i
    return left, right


def extract_span(points: Sequence[Point], t0: float, t1: float,
                 start_pt: Optional[Point] = None,
                 end_pt: Optional[Point] = None) -> List[Point]:
    """Points of a polyline between parameters ``t0`` and ``t1``.

    The span starts at ``start_pt`` (or the point at ``t0``), includes
    every vertex whose incoming segment overlaps the span and ends by
    ``t1``, and ends at ``end_pt`` (or the point at ``t1``) unless that
    repeats the last vertex.
    """
    cum = cumulative_lengths(points)
    total = float(cum[-1])
    pts = [start_pt if start_pt is not None else point_at_t(points, t0)]
    for i in range(len(points) - 1):
        t_start = float(cum[i]) / total
        t_end = float(cum[i + 1]) / total
        if t0 + T_TOLERANCE < t_end <= t1 + T_TOLERANCE and t_start < t1 - T_TOLERANCE:
            pts.append(points[i + 1])
    end = end_pt if end_pt is not None else point_at_t(points, t1)
    if end != pts[-1]:
        pts.append(end)
    return pts


def split_and_remove(points: Sequence[Point], t_left: float, t_right: float,
                     closed: bool, left_pt: Optional[Point] = None,
                     right_pt: Optional[Point] = None) -> List[List[Point]]:
    """Remove the span between two parameters and return what is left.

    Args:
        points: The polyline being trimmed.
        t_left: Parameter of the left bound.
        t_right: Parameter of the right bound.
        closed: Whether the polyline is a closed loop.
        left_pt: Exact coordinates of the left bound, if known.
        right_pt: Exact coordinates of the right bound, if known.

    Returns:
        Remaining pieces as point lists. A closed loop yields exactly one
        piece; an open polyline yields up to two.
    """
    if closed:
        if t_right > t_left:
            # Removed span is inside [0, 1]; keep the wrap-around rest
            tail = extract_span(points, t_right, 1.0, right_pt, None)
            head = extract_span(points, 0.0, t_left, None, left_pt)
            return [tail + head[1:]]
        # Removed span wraps through the closure point; keep the middle
        return [extract_span(points, t_right, t_left, right_pt, left_pt)]

    pieces = []
    if t_left > OPEN_KEEP_START:
        pieces.append(extract_span(points, 0.0, t_left, None, left_pt))
    if t_right < OPEN_KEEP_END:
        pieces.append(extract_span(points, t_right, 1.0, right_pt, None))
    return pieces


def trim(target: Polyline, click_point: Point,
         cutters: Iterable[Tuple[Hashable, Optional[Polyline]]]) -> Optional[TrimResult]:
    """Remove the piece of ``target`` that was clicked.

    Args:
        target: Polyline of the element being trimmed.
        click_point: Where the user clicked, in world coordinates.
        cutters: ``(id, polyline)`` pairs for every other element. Pairs
            whose polyline is None or shorter than 2 points are skipped.

    Returns:
        TrimResult with the surviving pieces (possibly none), or None when
        the click is not bracketed by two distinct intersections.
    """
    intersections = []
    for other_id, poly in cutters:
        if poly is None or len(poly) < 2:
            continue
        intersections.extend(find_intersections(target, poly, other_id))

    if len(intersections) < 2:
        logger.debug("trim: need at least 2 intersections, found %d", len(intersections))
        return None

    click_t = closest_t(target, click_point)
    ordered = sorted(intersections, key=lambda ix: ix.t_self)
    merged = merge_intersections(ordered)

    left, right = find_bracket(merged, click_t)
    closed = target.is_closed
    if closed:
        if left is None:
            left = len(merged) - 1
        if right is None:
            right = 0

    if left is None or right is None:
        logger.debug("trim: click at t=%.3f not between two intersections", click_t)
        return None
    if left == right:
        logger.debug("trim: click at t=%.3f lies on an intersection", click_t)
        return None

    t_left = merged[left].t_self
    t_right = merged[right].t_self
    logger.info("trim: removing span between t=%.3f and t=%.3f (click at t=%.3f)",
                t_left, t_right, click_t)

    pieces = split_and_remove(target, t_left, t_right, closed,
                              merged[left].point, merged[right].point)
    polylines = [Polyline(piece) for piece in pieces if len(piece) >= 2]
    return TrimResult(polylines=polylines, t_left=t_left, t_right=t_right)
