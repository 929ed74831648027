"""Unit tests for api.services.StrokeService."""

import pytest

from ink_lib.api import StrokeService, path_element
from ink_lib.config import RecognitionSettings
from ink_lib.domain import Point


@pytest.fixture
def service():
    return StrokeService()


@pytest.fixture
def circle_and_chord():
    """Circle of radius 50 at (100, 100) under a chord at y = 80."""
    elements = {
        'c': {'type': 'shape', 'id': 'c', 'shapeVariant': 'ellipse',
              'x': 50, 'y': 50, 'width': 100, 'height': 100,
              'stroke': '#ff0000', 'strokeWidth': 3, 'layer': 'ink'},
        'l': {'type': 'line', 'id': 'l', 'x': 30, 'y': 80, 'x2': 170, 'y2': 80},
    }
    return elements, ['c', 'l']


def _path(x, y, points, **extra):
    el = {'type': 'path', 'x': x, 'y': y,
          'points': [{'x': px, 'y': py} for px, py in points]}
    xs = [px for px, _ in points]
    ys = [py for _, py in points]
    el['width'] = max(xs) - min(xs)
    el['height'] = max(ys) - min(ys)
    el.update(extra)
    return el


class TestFinishStroke:
    """Tests for finish_stroke and preview_stroke."""

    def test_line(self, service, straight_stroke):
        el = service.finish_stroke(straight_stroke)
        assert el['type'] == 'line'
        assert (el['x'], el['y'], el['x2'], el['y2']) == (0, 0, 200, 0)
        assert el['arrowHead'] == 'none'
        assert el['stroke'] == '#000000'
        assert el['strokeWidth'] == 2

    def test_arrow(self, service, arrow_stroke):
        el = service.finish_stroke(arrow_stroke)
        assert el['type'] == 'line'
        assert el['arrowHead'] == 'arrow'

    def test_rectangle(self, service, rectangle_stroke):
        el = service.finish_stroke(rectangle_stroke)
        assert el['type'] == 'shape'
        assert el['shapeVariant'] == 'rectangle'
        assert (el['x'], el['y'], el['width'], el['height']) == (50, 50, 200, 100)
        assert el['cornerRadius'] == 8
        assert el['fill'] == 'transparent'

    def test_triangle_has_no_corner_radius(self, service, triangle_stroke):
        el = service.finish_stroke(triangle_stroke)
        assert el['shapeVariant'] == 'triangle'
        assert el['cornerRadius'] == 0

    def test_recognition_disabled(self, straight_stroke):
        service = StrokeService(RecognitionSettings(enabled=False))
        el = service.finish_stroke(straight_stroke)
        assert el['type'] == 'path'
        assert el['points'] == [{'x': 0.0, 'y': 0.0}, {'x': 200.0, 'y': 0.0}]
        assert el['height'] == 1

    def test_unrecognized_becomes_path(self, service, densify):
        u_shape = densify([(10, 10), (10, 110), (110, 110), (110, 10)])
        el = service.finish_stroke(u_shape)
        assert el['type'] == 'path'
        assert (el['x'], el['y']) == (10, 10)
        assert el['points'] == [
            {'x': 0, 'y': 0}, {'x': 0, 'y': 100}, {'x': 100, 'y': 100}, {'x': 100, 'y': 0},
        ]

    def test_custom_style(self, straight_stroke):
        settings = RecognitionSettings(default_stroke='#123456', default_stroke_width=5)
        el = StrokeService(settings).finish_stroke(straight_stroke)
        assert el['stroke'] == '#123456'
        assert el['strokeWidth'] == 5

    def test_single_point(self, service):
        assert service.finish_stroke([Point(1, 1)]) is None

    def test_preview(self, service, straight_stroke):
        preview = service.preview_stroke(straight_stroke)
        assert list(preview) == [Point(0, 0), Point(200, 0)]
        assert service.preview_stroke([Point(0, 0)]) is None


class TestPathElement:
    """Tests for path_element."""

    def test_points_relative_to_origin(self):
        el = path_element([Point(10, 20), Point(30, 60)], '#000', 2)
        assert (el['x'], el['y'], el['width'], el['height']) == (10, 20, 20, 40)
        assert el['points'] == [{'x': 0, 'y': 0}, {'x': 20, 'y': 40}]

    def test_min_size_and_extra_fields(self):
        el = path_element([Point(0, 5), Point(50, 5)], '#000', 2, min_size=1, id='p1')
        assert el['height'] == 1
        assert el['id'] == 'p1'


class TestEraser:
    """Tests for erase_at."""

    def test_hits_path(self, service):
        elements = {'p': _path(10, 10, [(0, 0), (100, 0)])}
        assert service.erase_at(60, 12, elements, ['p']) == 'p'

    def test_misses_far_point(self, service):
        elements = {'p': _path(10, 10, [(0, 0), (100, 0)])}
        assert service.erase_at(60, 40, elements, ['p']) is None

    def test_topmost_wins(self, service):
        elements = {
            'low': _path(0, 0, [(0, 0), (100, 0)]),
            'high': _path(0, 0, [(0, 2), (100, 2)]),
        }
        assert service.erase_at(50, 1, elements, ['low', 'high']) == 'high'

    def test_ignores_hidden_and_non_paths(self, service):
        elements = {
            'hidden': _path(0, 0, [(0, 0), (100, 0)], visible=False),
            'shape': {'type': 'shape', 'shapeVariant': 'rectangle',
                      'x': 0, 'y': 0, 'width': 100, 'height': 100},
        }
        assert service.erase_at(50, 0, elements, ['hidden', 'shape']) is None


class TestHitTest:
    """Tests for hit_test."""

    def test_line_hit(self, service, circle_and_chord):
        elements, order = circle_and_chord
        assert service.hit_test(100, 85, elements, order) == 'l'

    def test_reverse_z_order(self, service, circle_and_chord):
        elements, order = circle_and_chord
        # Both the circle outline and the chord pass near (54.2, 80)
        assert service.hit_test(54.2, 80, elements, order) == 'l'
        assert service.hit_test(54.2, 80, elements, ['l', 'c']) == 'c'

    def test_locked_skipped(self, service, circle_and_chord):
        elements, order = circle_and_chord
        elements['l']['locked'] = True
        assert service.hit_test(100, 85, elements, order) is None

    def test_text_never_hit(self, service):
        elements = {'t': {'type': 'text', 'x': 0, 'y': 0, 'width': 100, 'height': 20}}
        assert service.hit_test(10, 10, elements, ['t']) is None

    def test_tolerance_grows_with_stroke_width(self, service):
        elements = {'l': {'type': 'line', 'x': 0, 'y': 0, 'x2': 100, 'y2': 0}}
        assert service.hit_test(50, 15, elements, ['l']) is None
        elements['l']['strokeWidth'] = 10
        assert service.hit_test(50, 15, elements, ['l']) == 'l'


class TestTrimAt:
    """Tests for trim_at."""

    def test_replaces_target_in_place(self, service, circle_and_chord):
        elements, order = circle_and_chord
        new_elements, new_order = service.trim_at(100, 150, elements, order)
        assert new_order == ['trim-1', 'l']
        assert set(new_elements) == {'trim-1', 'l'}

        piece = new_elements['trim-1']
        assert piece['type'] == 'path'
        assert piece['id'] == 'trim-1'
        assert piece['stroke'] == '#ff0000'
        assert piece['strokeWidth'] == 3
        assert piece['layer'] == 'ink'
        assert piece['y'] == pytest.approx(50.0)
        assert piece['x'] == pytest.approx(100 - 45.83, abs=0.05)

    def test_inputs_not_mutated(self, service, circle_and_chord):
        elements, order = circle_and_chord
        service.trim_at(100, 150, elements, order)
        assert order == ['c', 'l']
        assert set(elements) == {'c', 'l'}

    def test_ids_from_factory(self, circle_and_chord):
        ids = iter(['a', 'b'])
        service = StrokeService(id_factory=lambda: next(ids))
        elements, order = circle_and_chord
        _, new_order = service.trim_at(100, 150, elements, order)
        assert new_order == ['a', 'l']

    def test_miss(self, service, circle_and_chord):
        elements, order = circle_and_chord
        assert service.trim_at(300, 300, elements, order) is None

    def test_no_bracket(self, service, circle_and_chord):
        """Clicking the chord outside the circle leaves no crossing before the click."""
        elements, order = circle_and_chord
        assert service.trim_at(35, 80, elements, order) is None

    def test_hidden_cutters_ignored(self, service, circle_and_chord):
        elements, order = circle_and_chord
        elements['l']['visible'] = False
        assert service.trim_at(100, 150, elements, order) is None
