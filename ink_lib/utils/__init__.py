"""Utility functions for stroke geometry.

Geometry utilities:
    point_distance: Euclidean distance between two points.
    perpendicular_distance: Distance from a point to a line.
    segment_distance: Distance from a point to a segment.
    path_length: Total arc length of a path.
    angle_between: Interior angle at a vertex.
    point_at_t / closest_t: Arc-length parameter helpers.
    distance_to_path: Distance from a point to a path.
    resample_path: Resample a path to evenly-spaced points.

Example usage::

    from ink_lib.domain import Point
    from ink_lib.utils import angle_between, path_length

    path = [Point(0, 0), Point(10, 0), Point(10, 10)]
    path_length(path)                       # 20.0
    angle_between(path[0], path[1], path[2])  # pi/2
"""

from .geometry import (
    angle_between,
    closest_t,
    cumulative_lengths,
    distance_to_path,
    path_length,
    perpendicular_distance,
    point_at_t,
    point_distance,
    resample_path,
    segment_distance,
)

__all__ = [
    'point_distance', 'perpendicular_distance', 'segment_distance',
    'path_length', 'cumulative_lengths', 'angle_between',
    'point_at_t', 'closest_t', 'distance_to_path', 'resample_path',
]
