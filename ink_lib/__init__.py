"""Stroke geometry engine for a freehand drawing surface.

This package compresses raw pointer strokes into compact polylines,
recognizes strokes that approximate canonical shapes, and trims existing
shapes at their intersections with other shapes.

The package is organized into the following modules:
    domain: Value objects (Point, BBox, Polyline, ShapeMatch, ...).
    analysis: Simplification, corner detection, shape classification,
        polyline conversion, intersection and trim.
    utils: Geometry primitives over point sequences.
    api: StrokeService, the element-store facade.
    config: Tuned thresholds and RecognitionSettings.

Example usage:
    Recognizing a stroke::

        from ink_lib import Point, ShapeClassifier

        samples = [Point(x, 0) for x in range(0, 200, 5)]
        match = ShapeClassifier().classify(samples)
        print(match.kind)   # ShapeKind.LINE

    Working with elements::

        from ink_lib import StrokeService

        service = StrokeService()
        element = service.finish_stroke(samples)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .analysis import ShapeClassifier, detect_corners, find_intersections, simplify, to_polyline, trim
from .api import StrokeService
from .config import RecognitionSettings
from .domain import (
    BBox,
    Corner,
    ElementDescriptor,
    Intersection,
    Point,
    Polyline,
    ShapeKind,
    ShapeMatch,
    TrimResult,
)

__all__ = [
    # Domain objects
    'Point', 'BBox', 'Corner', 'Polyline',
    'ShapeKind', 'ShapeMatch', 'ElementDescriptor', 'Intersection', 'TrimResult',
    # Analysis
    'simplify', 'detect_corners', 'ShapeClassifier', 'to_polyline',
    'find_intersections', 'trim',
    # Services
    'StrokeService', 'RecognitionSettings',
]

__version__ = '1.0.0'
