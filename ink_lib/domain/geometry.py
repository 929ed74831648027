"""Geometric value objects for stroke processing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from ..config import CLOSED_EPSILON


@dataclass(frozen=True)
class Point:
    """Immutable 2D point in world coordinates."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def length(self) -> float:
        """Length when treated as a vector from origin."""
        return math.hypot(self.x, self.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        """Convert to the ``{'x': .., 'y': ..}`` form used by element stores."""
        return {'x': float(self.x), 'y': float(self.y)}

    @classmethod
    def from_tuple(cls, t: Tuple[float, float]) -> Point:
        return cls(t[0], t[1])

    @classmethod
    def from_dict(cls, d: dict) -> Point:
        return cls(d['x'], d['y'])


@dataclass(frozen=True)
class BBox:
    """Immutable axis-aligned bounding box."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Point:
        return Point(
            (self.x_min + self.x_max) / 2,
            (self.y_min + self.y_max) / 2
        )

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    def edge_midpoints(self) -> List[Point]:
        """Midpoints of the top, right, bottom and left edges, in that order."""
        c = self.center
        return [
            Point(c.x, self.y_min),
            Point(self.x_max, c.y),
            Point(c.x, self.y_max),
            Point(self.x_min, c.y),
        ]

    def contains(self, point: Point, margin: float = 0.0) -> bool:
        """Check if point is inside the box grown by ``margin`` on every side."""
        return (self.x_min - margin <= point.x <= self.x_max + margin and
                self.y_min - margin <= point.y <= self.y_max + margin)

    def to_dict(self) -> dict:
        """Convert to the ``x/y/width/height`` form used by element stores."""
        return {
            'x': float(self.x_min),
            'y': float(self.y_min),
            'width': float(self.width),
            'height': float(self.height),
        }

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> BBox:
        return cls(x, y, x + width, y + height)

    @classmethod
    def from_dict(cls, d: dict) -> BBox:
        return cls.from_rect(d['x'], d['y'], d['width'], d['height'])

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> BBox:
        """Create bounding box containing all points."""
        points = list(points)
        if not points:
            return cls(0, 0, 0, 0)
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True)
class Corner:
    """A vertex of a simplified stroke and its interior angle in radians."""
    point: Point
    angle: float

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y


@dataclass(frozen=True)
class Polyline:
    """An ordered sequence of at least two points.

    Order defines traversal direction and the arc-length parameterization
    used by the trim engine. A polyline is closed when it has at least
    three points and its endpoints lie within ``CLOSED_EPSILON`` units.
    """
    points: Tuple[Point, ...]

    def __post_init__(self):
        # Accept any iterable of points but store an immutable tuple
        object.__setattr__(self, 'points', tuple(self.points))
        if len(self.points) < 2:
            raise ValueError(
                f"Polyline needs at least 2 points, got {len(self.points)}")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, idx):
        return self.points[idx]

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    @property
    def bbox(self) -> BBox:
        return BBox.from_points(self.points)

    @property
    def is_closed(self) -> bool:
        if len(self.points) < 3:
            return False
        return self.start.distance_to(self.end) < CLOSED_EPSILON

    def length(self) -> float:
        """Total arc length."""
        total = 0.0
        for i in range(1, len(self.points)):
            total += self.points[i].distance_to(self.points[i - 1])
        return total

    def translated(self, dx: float, dy: float) -> Polyline:
        offset = Point(dx, dy)
        return Polyline(tuple(p + offset for p in self.points))

    def to_list(self) -> List[dict]:
        """Convert to a list of ``{'x', 'y'}`` dictionaries."""
        return [p.to_dict() for p in self.points]

    @classmethod
    def from_list(cls, lst: Iterable[dict]) -> Polyline:
        return cls(tuple(Point.from_dict(d) for d in lst))

    @classmethod
    def from_tuples(cls, tuples: Iterable[Tuple[float, float]]) -> Polyline:
        return cls(tuple(Point.from_tuple(t) for t in tuples))
