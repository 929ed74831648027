"""Shared pytest fixtures for the ink_lib test suite.

Fixtures:
    straight_stroke: 200-unit horizontal stroke sampled every 5 units
    arrow_stroke: 200-unit horizontal stroke ending in a sharp hook
    circle_polyline: Sampled circle, radius 50, centered at (100, 100)
    rectangle_stroke: Dense 200x100 rectangle outline starting mid-edge
    triangle_stroke: Dense 100x200 triangle outline starting mid-edge
    chord_polyline: Horizontal line crossing circle_polyline at y=80

Helpers:
    densify: Subdivide a vertex outline into points about ``step`` apart
"""

import math
import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ink_lib.analysis.polyline import to_polyline  # noqa: E402
from ink_lib.domain import ElementDescriptor, Point, Polyline  # noqa: E402


def densify(vertices, step=2.0):
    """Subdivide each edge of a vertex outline into points ~``step`` apart.

    Every original vertex is kept exactly; the result ends with the last
    vertex.
    """
    points = [Point(*vertices[0])]
    for (x0, y0), (x1, y1) in zip(vertices, vertices[1:]):
        n = max(1, int(math.ceil(math.hypot(x1 - x0, y1 - y0) / step)))
        for i in range(1, n + 1):
            f = i / n
            points.append(Point(x0 + f * (x1 - x0), y0 + f * (y1 - y0)))
    return points


@pytest.fixture
def straight_stroke():
    """Horizontal stroke from (0, 0) to (200, 0), 41 samples."""
    return [Point(float(x), 0.0) for x in range(0, 201, 5)]


@pytest.fixture
def arrow_stroke():
    """Horizontal stroke with a 150-degree hook after the end point."""
    shaft = [Point(float(x), 0.0) for x in range(0, 201, 10)]
    hook_dx = -5 * math.cos(math.radians(30))
    hook = [Point(200 + hook_dx, 2.5), Point(200 + 2 * hook_dx, 5.0)]
    return shaft + hook


@pytest.fixture
def circle_polyline():
    """Converter-sampled circle with rx = ry = 50 centered at (100, 100)."""
    desc = ElementDescriptor('shape', 'ellipse', x=50, y=50, width=100, height=100)
    return to_polyline(desc)


@pytest.fixture
def rectangle_stroke():
    """Closed 200x100 rectangle at (50, 50), starting at the top-edge midpoint."""
    return densify([(150, 50), (250, 50), (250, 150), (50, 150), (50, 50), (150, 50)])


@pytest.fixture
def triangle_stroke():
    """Closed triangle with bbox (0, 0, 100, 200), starting mid-base."""
    return densify([(50, 200), (0, 200), (50, 0), (100, 200), (50, 200)])


@pytest.fixture
def chord_polyline():
    """Line crossing the circle fixture at y = 80, 20 units above center."""
    return Polyline([Point(30, 80), Point(170, 80)])


@pytest.fixture(name='densify')
def densify_fixture():
    """The densify helper, for tests building their own outlines."""
    return densify


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
