"""Stroke analysis algorithms.

This module provides the numerical core of the engine:

    simplify: Ramer-Douglas-Peucker path simplification.
    detect_corners: Sharp-vertex detection on a coarse simplification.
    ShapeClassifier: Line / arrow / ellipse / triangle / rectangle /
        diamond recognition.
    to_polyline: Sampling of drawing elements into polylines.
    find_intersections, trim: Polyline crossings and segment removal.

Example usage:
    Recognize a finished stroke::

        from ink_lib.analysis import ShapeClassifier, simplify

        match = ShapeClassifier().classify(samples)
        if match is None:
            compact = simplify(samples, epsilon=1.5)

    Trim a shape::

        from ink_lib.analysis import to_polyline, trim

        target = to_polyline(target_desc)
        result = trim(target, click, [(cutter_id, to_polyline(cutter_desc))])
"""

from .corners import detect_corners
from .intersections import find_intersections, trim
from .polyline import to_polyline
from .shapes import ShapeClassifier, classify
from .simplify import simplify

__all__ = [
    'simplify', 'detect_corners', 'ShapeClassifier', 'classify',
    'to_polyline', 'find_intersections', 'trim',
]
