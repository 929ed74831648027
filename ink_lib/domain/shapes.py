"""Shape-related domain objects.

This module provides the data structures exchanged between the engine and
its callers: recognized shapes, descriptors of existing drawing elements,
polyline intersections and trim results.

The module provides the following classes:
    ShapeKind: Enumeration of recognizable shapes.
    ShapeMatch: A recognized shape and its parametric geometry.
    ElementDescriptor: Read-only view of an existing element's geometry.
    Intersection: A crossing between a target polyline and another one.
    TrimResult: The polylines that replace a trimmed element.

Example usage:
    Converting a store element into a descriptor::

        from ink_lib.domain.shapes import ElementDescriptor

        desc = ElementDescriptor.from_element({
            'type': 'shape', 'shapeVariant': 'ellipse',
            'x': 0, 'y': 0, 'width': 100, 'height': 60,
        })
        print(desc.variant)  # 'ellipse'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Iterator, List, Optional, Tuple

from .geometry import BBox, Point, Polyline


class ShapeKind(Enum):
    """Shapes the classifier can recognize.

    LINE and ARROW are described by their two endpoints; the closed kinds
    are described by the bounding box of the stroke.
    """
    LINE = 'line'
    ARROW = 'arrow'
    RECTANGLE = 'rectangle'
    ELLIPSE = 'ellipse'
    TRIANGLE = 'triangle'
    DIAMOND = 'diamond'

    @property
    def is_linear(self) -> bool:
        return self in (ShapeKind.LINE, ShapeKind.ARROW)


@dataclass(frozen=True)
class ShapeMatch:
    """A recognized shape.

    Attributes:
        kind: Which shape was recognized.
        bbox: Bounding box for closed shapes, None for lines and arrows.
        start: First endpoint for lines and arrows, None otherwise.
        end: Last endpoint for lines and arrows (the arrow tip), None
            otherwise.
    """
    kind: ShapeKind
    bbox: Optional[BBox] = None
    start: Optional[Point] = None
    end: Optional[Point] = None

    @classmethod
    def linear(cls, kind: ShapeKind, start: Point, end: Point) -> ShapeMatch:
        return cls(kind=kind, start=start, end=end)

    @classmethod
    def boxed(cls, kind: ShapeKind, bbox: BBox) -> ShapeMatch:
        return cls(kind=kind, bbox=bbox)

    def to_dict(self) -> dict:
        """Convert to ``{'type': ..., 'bounds': {...}}``.

        Lines and arrows carry ``x1, y1, x2, y2`` bounds; closed shapes
        carry ``x, y, width, height`` bounds.
        """
        if self.kind.is_linear:
            bounds = {
                'x1': self.start.x, 'y1': self.start.y,
                'x2': self.end.x, 'y2': self.end.y,
            }
        else:
            bounds = self.bbox.to_dict()
        return {'type': self.kind.value, 'bounds': bounds}

    @classmethod
    def from_dict(cls, d: dict) -> ShapeMatch:
        kind = ShapeKind(d['type'])
        b = d['bounds']
        if kind.is_linear:
            return cls.linear(kind, Point(b['x1'], b['y1']), Point(b['x2'], b['y2']))
        return cls.boxed(kind, BBox.from_dict(b))


@dataclass(frozen=True)
class ElementDescriptor:
    """Geometry of an existing drawing element.

    Attributes:
        element_type: Store type ('shape', 'line', 'path', ...).
        variant: Shape variant for 'shape' elements ('rectangle',
            'rounded-rectangle', 'ellipse', 'diamond', 'triangle',
            'hexagon'); None otherwise.
        x, y, width, height: Element bounds. For lines x, y is the start.
        corner_radius: Corner radius of rounded rectangles, None if unset.
        x2, y2: Line end point, None if unset.
        waypoints: Intermediate routing points of a line, world coordinates.
        points: Stored points of a path, relative to (x, y).
    """
    element_type: str
    variant: Optional[str] = None
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    corner_radius: Optional[float] = None
    x2: Optional[float] = None
    y2: Optional[float] = None
    waypoints: Tuple[Point, ...] = ()
    points: Tuple[Point, ...] = ()

    @property
    def bbox(self) -> BBox:
        return BBox.from_rect(self.x, self.y, self.width, self.height)

    @classmethod
    def from_element(cls, el: dict) -> ElementDescriptor:
        """Build a descriptor from an element-store dictionary."""
        return cls(
            element_type=el.get('type', 'shape'),
            variant=el.get('shapeVariant'),
            x=el.get('x') or 0.0,
            y=el.get('y') or 0.0,
            width=el.get('width') or 0.0,
            height=el.get('height') or 0.0,
            corner_radius=el.get('cornerRadius'),
            x2=el.get('x2'),
            y2=el.get('y2'),
            waypoints=tuple(Point.from_dict(p) for p in el.get('waypoints') or ()),
            points=tuple(Point.from_dict(p) for p in el.get('points') or ()),
        )


@dataclass(frozen=True)
class Intersection:
    """A crossing between a target polyline and another polyline.

    Attributes:
        point: The crossing point.
        t_self: Normalized arc-length parameter along the target, in [0, 1].
        t_other: Normalized arc-length parameter along the other
            polyline, in [0, 1].
        other_id: Token identifying the element that produced the other
            polyline. Only compared for equality.
    """
    point: Point
    t_self: float
    t_other: float
    other_id: Hashable = None

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    def to_dict(self) -> dict:
        return {
            'x': self.point.x,
            'y': self.point.y,
            'tSelf': self.t_self,
            'tOther': self.t_other,
            'otherId': self.other_id,
        }


@dataclass(frozen=True)
class TrimResult:
    """Polylines that replace a trimmed element.

    Attributes:
        polylines: Surviving sub-paths in traversal order; empty when the
            trim removed everything.
        t_left: Parameter of the lower bracketing intersection.
        t_right: Parameter of the upper bracketing intersection.
    """
    polylines: List[Polyline] = field(default_factory=list)
    t_left: float = 0.0
    t_right: float = 0.0

    def __len__(self) -> int:
        return len(self.polylines)

    def __iter__(self) -> Iterator[Polyline]:
        return iter(self.polylines)

    @property
    def is_empty(self) -> bool:
        return not self.polylines

    def to_list(self) -> List[List[Any]]:
        return [poly.to_list() for poly in self.polylines]
