"""Corner detection on freehand strokes.

Corners are found on a coarse simplification of the stroke: the stroke is
reduced with a large RDP epsilon so that hand jitter disappears, and every
interior vertex of the result whose interior angle is sharper than
``CORNER_ANGLE_THRESHOLD`` is reported.

Example usage::

    from ink_lib.analysis.corners import detect_corners

    corners = detect_corners(samples)
    for c in corners:
        print(f"({c.x:.0f}, {c.y:.0f}) angle={c.angle:.2f}")
"""

from __future__ import annotations

from typing import List, Sequence

from ..config import CORNER_ANGLE_THRESHOLD, CORNER_EPSILON, MIN_CORNER_POINTS
from ..domain.geometry import Corner, Point
from ..utils.geometry import angle_between
from .simplify import simplify


def detect_corners(points: Sequence[Point]) -> List[Corner]:
    """Find sharp vertices of a stroke.

    Args:
        points: Raw (unsimplified) stroke points.

    Returns:
        Corners in traversal order of the simplified stroke. Empty when
        the stroke has fewer than ``MIN_CORNER_POINTS`` points or when the
        coarse simplification leaves no interior vertex.
    """
    if len(points) < MIN_CORNER_POINTS:
        return []

    simplified = simplify(points, CORNER_EPSILON)
    if len(simplified) < 3:
        return []

    corners = []
    for i in range(1, len(simplified) - 1):
        angle = angle_between(simplified[i - 1], simplified[i], simplified[i + 1])
        if angle < CORNER_ANGLE_THRESHOLD:
            corners.append(Corner(simplified[i], angle))
    return corners
