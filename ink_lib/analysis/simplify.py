"""Ramer-Douglas-Peucker path simplification.

This module reduces raw pointer samples to a compact polyline. A span is
collapsed to its two endpoints unless some interior point deviates from
the chord by more than ``epsilon``; in that case the span is split at the
farthest point and both halves are processed the same way.

Splits are driven by an explicit stack of ``(start, end)`` index ranges
into a single coordinate array rather than by recursion.

Example usage::

    from ink_lib.analysis.simplify import simplify

    compact = simplify(samples, epsilon=1.5)
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from ..config import FINALIZE_EPSILON
from ..domain.geometry import Point


def _chord_distances(xy: np.ndarray, start: int, end: int) -> np.ndarray:
    """Distances of ``xy[start+1:end]`` from the line through ``xy[start]`` and ``xy[end]``."""
    interior = xy[start + 1:end]
    p0 = xy[start]
    dx, dy = xy[end] - p0
    length = np.hypot(dx, dy)
    rel = interior - p0
    if length == 0:
        return np.hypot(rel[:, 0], rel[:, 1])
    return np.abs(dx * rel[:, 1] - dy * rel[:, 0]) / length


def simplify(points: Sequence[Point], epsilon: float = FINALIZE_EPSILON) -> List[Point]:
    """Simplify a path with the Ramer-Douglas-Peucker algorithm.

    Args:
        points: Ordered points of the path (a Polyline or a list).
        epsilon: Maximum allowed perpendicular deviation of a dropped
            point from the chord that replaces it.

    Returns:
        New list of points. The first and last input points are always
        kept; every kept point is one of the input points, in input order.
        Inputs with 2 or fewer points are returned unchanged (as a list).

    Raises:
        ValueError: If epsilon is negative.
    """
    if epsilon < 0:
        raise ValueError(f"epsilon must be non-negative, got {epsilon}")
    if len(points) <= 2:
        return list(points)

    xy = np.array([(p.x, p.y) for p in points], dtype=float)
    keep = np.zeros(len(points), dtype=bool)
    keep[0] = keep[-1] = True

    stack = [(0, len(points) - 1)]
    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue
        dists = _chord_distances(xy, start, end)
        # argmax returns the first index on ties
        offset = int(np.argmax(dists))
        if dists[offset] > epsilon:
            split = start + 1 + offset
            keep[split] = True
            stack.append((split, end))
            stack.append((start, split))

    return [p for p, k in zip(points, keep) if k]
