"""Conversion of drawing elements to polylines.

The trim engine only understands polylines, so every element taking part
in a trim is first sampled into one. Closed shapes produce closed
polylines (last point repeats the first); lines and paths keep their own
topology.

Supported elements:
    shape: ellipse, rectangle, rounded-rectangle, diamond, triangle,
        hexagon. Unknown variants fall back to the bounding rectangle.
    line: its endpoints, with any routing waypoints in between.
    path: its stored points, moved from element-relative to world
        coordinates.

Example usage::

    from ink_lib.analysis.polyline import to_polyline
    from ink_lib.domain import ElementDescriptor

    desc = ElementDescriptor('shape', 'ellipse', x=0, y=0, width=100, height=100)
    poly = to_polyline(desc)
    print(len(poly), poly.is_closed)   # 121 True
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

import numpy as np

from ..config import DEFAULT_CORNER_RADIUS, ELLIPSE_SAMPLES, ROUNDED_ARC_STEPS
from ..domain.geometry import Point, Polyline
from ..domain.shapes import ElementDescriptor

logger = logging.getLogger(__name__)


def _ellipse(cx: float, cy: float, rx: float, ry: float) -> List[Point]:
    theta = np.linspace(0.0, 2 * math.pi, ELLIPSE_SAMPLES + 1)
    xs = cx + rx * np.cos(theta)
    ys = cy + ry * np.sin(theta)
    pts = [Point(float(x), float(y)) for x, y in zip(xs, ys)]
    # theta = 2*pi lands a rounding error away from the start
    pts[-1] = pts[0]
    return pts


def _rectangle(x: float, y: float, w: float, h: float) -> List[Point]:
    return [
        Point(x, y), Point(x + w, y),
        Point(x + w, y + h), Point(x, y + h),
        Point(x, y),
    ]


def _arc(cx: float, cy: float, r: float, start_angle: float) -> List[Point]:
    """Quarter arc of ``ROUNDED_ARC_STEPS`` steps, both ends included."""
    pts = []
    for i in range(ROUNDED_ARC_STEPS + 1):
        a = start_angle + (math.pi / 2) * (i / ROUNDED_ARC_STEPS)
        pts.append(Point(cx + r * math.cos(a), cy + r * math.sin(a)))
    return pts


def _rounded_rectangle(x: float, y: float, w: float, h: float,
                       corner_radius: Optional[float]) -> List[Point]:
    r = min(corner_radius or DEFAULT_CORNER_RADIUS, w / 2, h / 2)
    pts = [Point(x + r, y), Point(x + w - r, y)]
    pts += _arc(x + w - r, y + r, r, -math.pi / 2)       # top-right
    pts.append(Point(x + w, y + h - r))
    pts += _arc(x + w - r, y + h - r, r, 0.0)            # bottom-right
    pts.append(Point(x + r, y + h))
    pts += _arc(x + r, y + h - r, r, math.pi / 2)        # bottom-left
    pts.append(Point(x, y + r))
    pts += _arc(x + r, y + r, r, math.pi)                # top-left
    pts.append(pts[0])
    return pts


def _diamond(x: float, y: float, w: float, h: float) -> List[Point]:
    cx, cy = x + w / 2, y + h / 2
    return [
        Point(cx, y), Point(x + w, cy),
        Point(cx, y + h), Point(x, cy),
        Point(cx, y),
    ]


def _triangle(x: float, y: float, w: float, h: float) -> List[Point]:
    cx = x + w / 2
    return [Point(cx, y), Point(x + w, y + h), Point(x, y + h), Point(cx, y)]


def _hexagon(cx: float, cy: float, rx: float, ry: float) -> List[Point]:
    pts = []
    for i in range(7):
        angle = (math.pi / 3) * (i % 6) - math.pi / 2
        pts.append(Point(cx + rx * math.cos(angle), cy + ry * math.sin(angle)))
    return pts


def shape_points(desc: ElementDescriptor) -> List[Point]:
    """Sample a 'shape' element's outline as a closed point list."""
    x, y, w, h = desc.x, desc.y, desc.width, desc.height
    variant = desc.variant

    if variant == 'ellipse':
        return _ellipse(x + w / 2, y + h / 2, w / 2, h / 2)
    if variant == 'rectangle':
        return _rectangle(x, y, w, h)
    if variant == 'rounded-rectangle':
        return _rounded_rectangle(x, y, w, h, desc.corner_radius)
    if variant == 'diamond':
        return _diamond(x, y, w, h)
    if variant == 'triangle':
        return _triangle(x, y, w, h)
    if variant == 'hexagon':
        return _hexagon(x + w / 2, y + h / 2, w / 2, h / 2)

    logger.debug("Unsupported shape variant %r, using bounding rectangle", variant)
    return _rectangle(x, y, w, h)


def line_points(desc: ElementDescriptor) -> List[Point]:
    """Endpoints of a 'line' element with its waypoints in between."""
    x1, y1 = desc.x, desc.y
    x2 = desc.x2 if desc.x2 is not None else x1 + desc.width
    y2 = desc.y2 if desc.y2 is not None else y1 + desc.height
    return [Point(x1, y1), *desc.waypoints, Point(x2, y2)]


def path_points(desc: ElementDescriptor) -> List[Point]:
    """Stored points of a 'path' element in world coordinates."""
    offset = Point(desc.x, desc.y)
    return [p + offset for p in desc.points]


_CONVERTERS = {
    'shape': shape_points,
    'line': line_points,
    'path': path_points,
}


def to_polyline(desc: ElementDescriptor) -> Optional[Polyline]:
    """Convert an element descriptor into a world-space polyline.

    Args:
        desc: Geometry of the element.

    Returns:
        The sampled Polyline, or None when the element type has no
        outline (text, images, frames) or yields fewer than 2 points.
    """
    converter = _CONVERTERS.get(desc.element_type)
    if converter is None:
        return None
    points = converter(desc)
    if len(points) < 2:
        return None
    return Polyline(points)
