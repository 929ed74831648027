"""Service layer for drawing-surface operations.

This module provides the StrokeService class, which connects the
geometry engine to an element store. Elements are plain dictionaries
keyed by id, with a separate z-order list, the same shape a canvas
front-end keeps them in:

    shape elements: ``type='shape'``, ``shapeVariant``, ``x``, ``y``,
        ``width``, ``height``, ``cornerRadius``
    line elements: ``type='line'``, ``x``, ``y``, ``x2``, ``y2``,
        ``waypoints``, ``arrowHead``
    path elements: ``type='path'``, ``x``, ``y``, ``width``, ``height``
        and ``points`` relative to ``(x, y)``

The service never keeps elements between calls and never mutates the
maps it is given. Operations that change the store return fresh
structures; operations that find nothing to do return None.

Example usage::

    from ink_lib.api.services import StrokeService

    service = StrokeService()

    # Pointer-up: recognized shape or freehand path
    element = service.finish_stroke(samples)

    # Trim click: new elements and order, or None
    changed = service.trim_at(x, y, elements, order)
    if changed is not None:
        elements, order = changed
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..analysis.intersections import trim
from ..analysis.polyline import to_polyline
from ..analysis.shapes import ShapeClassifier
from ..analysis.simplify import simplify
from ..config import (
    ERASER_BBOX_MARGIN,
    ERASER_TOLERANCE,
    HIT_TOLERANCE,
    RECOGNIZED_RECTANGLE_RADIUS,
    UNHITTABLE_TYPES,
    RecognitionSettings,
)
from ..domain.geometry import BBox, Point, Polyline
from ..domain.shapes import ElementDescriptor, ShapeKind, ShapeMatch
from ..utils.geometry import distance_to_path, segment_distance

# Logger for service operations
_logger = logging.getLogger(__name__)

Elements = Dict[str, dict]
Order = List[str]


def _sequential_ids(prefix: str = 'el') -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def path_element(points: Sequence[Point], stroke: str, stroke_width: float,
                 min_size: float = 0.0, **extra) -> dict:
    """Materialize world-space points as a path element.

    The element is placed at the points' bounding-box origin and its
    points are stored relative to it.

    Args:
        points: World-space points, at least two.
        stroke: Stroke color.
        stroke_width: Stroke width.
        min_size: Floor applied to the element's width and height.
        **extra: Additional element fields (id, zIndex, layer, ...).

    Returns:
        New path element dictionary.
    """
    bbox = BBox.from_points(points)
    element = {
        'type': 'path',
        'id': None,
        'x': bbox.x_min,
        'y': bbox.y_min,
        'width': max(bbox.width, min_size),
        'height': max(bbox.height, min_size),
        'points': [{'x': p.x - bbox.x_min, 'y': p.y - bbox.y_min} for p in points],
        'stroke': stroke,
        'strokeWidth': stroke_width,
        'fill': 'none',
        'groupId': None,
        'parentId': None,
        'locked': False,
        'visible': True,
    }
    element.update(extra)
    return element


@dataclass
class StrokeService:
    """Element-level facade over the stroke geometry engine.

    Attributes:
        settings: Recognition flag and style defaults.
        id_factory: Callable producing ids for elements created by trims.
        classifier: ShapeClassifier used by ``finish_stroke``.

    Example:
        >>> service = StrokeService(RecognitionSettings(enabled=False))
        >>> service.finish_stroke([Point(0, 0), Point(50, 5)])['type']
        'path'
    """
    settings: Optional[RecognitionSettings] = None
    id_factory: Optional[Callable[[], str]] = None
    classifier: ShapeClassifier = field(default_factory=ShapeClassifier)

    def __post_init__(self):
        if self.settings is None:
            self.settings = RecognitionSettings()
        if self.id_factory is None:
            self.id_factory = _sequential_ids('trim')

    # ------------------------------------------------------------------
    # Pen tool
    # ------------------------------------------------------------------

    def preview_stroke(self, points: Sequence[Point]) -> Optional[Polyline]:
        """Simplified polyline for the in-progress stroke, or None below 2 points."""
        if len(points) < 2:
            return None
        return Polyline(simplify(points, self.settings.simplify_epsilon))

    def finish_stroke(self, points: Sequence[Point]) -> Optional[dict]:
        """Turn a finished stroke into a new element.

        Args:
            points: Pointer samples of the stroke in world coordinates.

        Returns:
            A line or shape element when recognition is enabled and the
            stroke matches a shape, otherwise a simplified path element.
            None when the stroke has fewer than 2 points.
        """
        if len(points) < 2:
            return None

        if self.settings.enabled:
            match = self.classifier.classify(points)
            if match is not None:
                _logger.debug("finish_stroke: recognized %s", match.kind.value)
                return self.shape_element(match)

        simplified = simplify(points, self.settings.simplify_epsilon)
        return path_element(
            simplified,
            stroke=self.settings.default_stroke,
            stroke_width=self.settings.default_stroke_width,
            min_size=1,
        )

    def shape_element(self, match: ShapeMatch) -> dict:
        """Materialize a recognized shape as a line or shape element."""
        s = self.settings
        if match.kind.is_linear:
            return {
                'type': 'line',
                'id': None,
                'x': match.start.x,
                'y': match.start.y,
                'x2': match.end.x,
                'y2': match.end.y,
                'stroke': s.default_stroke,
                'strokeWidth': s.default_stroke_width,
                'lineStyle': 'solid',
                'arrowHead': 'arrow' if match.kind is ShapeKind.ARROW else 'none',
                'curvature': 0,
                'startConnection': None,
                'endConnection': None,
                'groupId': None,
                'parentId': None,
                'locked': False,
                'visible': True,
            }

        element = {
            'type': 'shape',
            'id': None,
            'shapeVariant': match.kind.value,
            'fill': s.default_fill,
            'fillOpacity': s.default_fill_opacity,
            'stroke': s.default_stroke,
            'strokeWidth': s.default_stroke_width,
            'cornerRadius': RECOGNIZED_RECTANGLE_RADIUS if match.kind is ShapeKind.RECTANGLE else 0,
            'text': None,
            'isContainer': False,
            'childIds': [],
            'shadow': None,
            'groupId': None,
            'parentId': None,
            'locked': False,
            'visible': True,
        }
        element.update(match.bbox.to_dict())
        return element

    # ------------------------------------------------------------------
    # Eraser
    # ------------------------------------------------------------------

    def erase_at(self, x: float, y: float, elements: Elements, order: Order) -> Optional[str]:
        """Id of the topmost visible path element under the eraser, or None."""
        pt = Point(x, y)
        for el_id in reversed(order):
            el = elements.get(el_id)
            if not el or el.get('type') != 'path' or not el.get('visible', True):
                continue
            desc = ElementDescriptor.from_element(el)
            if not desc.bbox.contains(pt, margin=ERASER_BBOX_MARGIN):
                continue

            world = [p + Point(desc.x, desc.y) for p in desc.points]
            for a, b in zip(world, world[1:]):
                if segment_distance(pt, a, b) < ERASER_TOLERANCE:
                    return el_id
        return None

    # ------------------------------------------------------------------
    # Trim tool
    # ------------------------------------------------------------------

    def hit_test(self, x: float, y: float, elements: Elements, order: Order) -> Optional[str]:
        """Id of the topmost visible, unlocked element near the point, or None.

        Text, image and frame elements are never hit. The tolerance grows
        with the element's stroke width.
        """
        pt = Point(x, y)
        for el_id in reversed(order):
            el = elements.get(el_id)
            if not el or not el.get('visible', True) or el.get('locked'):
                continue
            if el.get('type') in UNHITTABLE_TYPES:
                continue

            poly = to_polyline(ElementDescriptor.from_element(el))
            if poly is None:
                continue
            tolerance = HIT_TOLERANCE + (el.get('strokeWidth') or 2)
            if distance_to_path(pt, poly) < tolerance:
                return el_id
        return None

    def trim_at(self, x: float, y: float, elements: Elements,
                order: Order) -> Optional[Tuple[Elements, Order]]:
        """Trim the clicked element against every other visible element.

        Args:
            x, y: Click position in world coordinates.
            elements: Element map keyed by id. Not modified.
            order: Element ids in z-order. Not modified.

        Returns:
            ``(elements, order)`` with the clicked element replaced in
            place by one path element per surviving piece, or None when
            nothing was hit, the trim was a no-op, or nothing survived.
        """
        target_id = self.hit_test(x, y, elements, order)
        if target_id is None:
            return None

        target_el = elements[target_id]
        target = to_polyline(ElementDescriptor.from_element(target_el))
        if target is None:
            return None

        cutters = []
        for other_id in order:
            if other_id == target_id:
                continue
            other = elements.get(other_id)
            if not other or not other.get('visible', True):
                continue
            cutters.append((other_id, to_polyline(ElementDescriptor.from_element(other))))

        result = trim(target, Point(x, y), cutters)
        if result is None:
            return None
        if result.is_empty:
            _logger.debug("trim_at: nothing remaining after trim of %s", target_id)
            return None

        new_ids = []
        new_elements = {k: v for k, v in elements.items() if k != target_id}
        for piece in result:
            el_id = self.id_factory()
            new_elements[el_id] = path_element(
                piece.points,
                stroke=target_el.get('stroke') or '#000000',
                stroke_width=target_el.get('strokeWidth') or 2,
                id=el_id,
                zIndex=target_el.get('zIndex') or 0,
                groupId=target_el.get('groupId'),
                parentId=target_el.get('parentId'),
                layer=target_el.get('layer') or 'default',
            )
            new_ids.append(el_id)

        idx = order.index(target_id)
        new_order = order[:idx] + new_ids + order[idx + 1:]
        _logger.info("trim_at: replaced %s with %d path segment(s)", target_id, len(new_ids))
        return new_elements, new_order
