"""Shared configuration for the stroke geometry engine.

This module centralizes the tuned constants used by:
    - analysis.simplify (Ramer-Douglas-Peucker epsilons)
    - analysis.corners (corner sharpness threshold)
    - analysis.shapes (shape recognition thresholds)
    - analysis.polyline (shape sampling resolution)
    - analysis.intersections (trim tolerances)
    - api.services (hit testing, eraser, element defaults)

The thresholds are behavioral constants, not hyperparameters. Changing
them changes which strokes are recognized as which shapes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# --- Simplification ---
FINALIZE_EPSILON = 1.5     # freehand stroke finalization
CORNER_EPSILON = 8.0       # coarse simplification for corner finding

# --- Corner detection ---
MIN_CORNER_POINTS = 5
CORNER_ANGLE_THRESHOLD = math.pi * 0.55   # ~99 degrees

# --- Shape recognition ---
MIN_STROKE_LENGTH = 20.0
LINE_STRAIGHTNESS = 0.85
LINE_MIN_LENGTH = 30.0
ARROW_MIN_POINTS = 10
ARROW_TAIL_FRACTION = 0.75                # tail starts at 75% of the points
ARROW_ANGLE_DEVIATION = math.pi / 3       # 60 degrees
CLOSED_RATIO = 0.15
ELLIPSE_MAX_CORNERS = 3
ELLIPSE_MIN_RADIUS = 10.0
ELLIPSE_MAX_ERROR = 0.25
ELLIPSE_MIN_LENGTH_RATIO = 0.7
ELLIPSE_MAX_LENGTH_RATIO = 1.5
TRIANGLE_MIN_SIDE_RATIO = 0.15
QUAD_MIN_CORNERS = 3
QUAD_MAX_CORNERS = 5
RECTANGLE_ANGLE_ERROR = 0.45
RECTANGLE_FALLBACK_ANGLE_ERROR = 0.7
DIAMOND_ERROR_RATIO = 0.2
MIN_SHAPE_EXTENT = 1.0

# --- Polyline conversion ---
ELLIPSE_SAMPLES = 120
ROUNDED_ARC_STEPS = 8
DEFAULT_CORNER_RADIUS = 8
RECOGNIZED_RECTANGLE_RADIUS = 8

# --- Intersection & trim ---
CLOSED_EPSILON = 2.0
PARALLEL_EPSILON = 1e-10
INTERSECTION_MERGE_DISTANCE = 3.0
MIN_SEGMENT_LENGTH = 0.001
T_TOLERANCE = 0.001
OPEN_KEEP_START = 0.01
OPEN_KEEP_END = 0.99

# --- Element service ---
HIT_TOLERANCE = 8.0
ERASER_TOLERANCE = 8.0
ERASER_BBOX_MARGIN = 10.0
UNHITTABLE_TYPES = frozenset({'text', 'image', 'frame'})


@dataclass
class RecognitionSettings:
    """Drawing-surface settings consumed by the element service.

    Attributes:
        enabled: Whether finished strokes are run through shape
            recognition before falling back to a freehand path.
        simplify_epsilon: RDP epsilon used when finalizing a freehand
            stroke and for live previews.
        default_stroke: Stroke color for newly created elements.
        default_stroke_width: Stroke width for newly created elements.
        default_fill: Fill color for recognized closed shapes.
        default_fill_opacity: Fill opacity for recognized closed shapes.
    """
    enabled: bool = True
    simplify_epsilon: float = FINALIZE_EPSILON
    default_stroke: str = '#000000'
    default_stroke_width: float = 2
    default_fill: str = 'transparent'
    default_fill_opacity: float = 1.0
