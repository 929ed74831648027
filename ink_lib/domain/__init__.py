"""Domain objects for stroke processing.

This module provides the value objects used throughout the engine. All
of them are created fresh per call; no component keeps geometry between
calls.

Geometry classes:
    Point: Immutable 2D point with vector operations.
    BBox: Immutable axis-aligned bounding box.
    Corner: A sharp vertex of a simplified stroke.
    Polyline: Ordered sequence of at least two points.

Shape classes:
    ShapeKind: Recognizable shapes (line, arrow, rectangle, ...).
    ShapeMatch: A recognized shape with its parametric geometry.
    ElementDescriptor: Geometry of an existing drawing element.
    Intersection: A crossing between two polylines.
    TrimResult: Polylines that replace a trimmed element.

Example usage::

    from ink_lib.domain import Point, Polyline

    poly = Polyline([Point(0, 0), Point(100, 0), Point(100, 50)])
    print(poly.length())     # 150.0
    print(poly.is_closed)    # False
"""

from .geometry import BBox, Corner, Point, Polyline
from .shapes import ElementDescriptor, Intersection, ShapeKind, ShapeMatch, TrimResult

__all__ = [
    'Point', 'BBox', 'Corner', 'Polyline',
    'ShapeKind', 'ShapeMatch', 'ElementDescriptor', 'Intersection', 'TrimResult',
]
