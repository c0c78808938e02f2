"""
Radial layout engine tests.

Covers angular placement, linear radial scaling, tier classification,
the minimum-count guard, per-segment descriptors, average annotations,
background stops and the layer order handed to the painter.
"""

import math

import pytest
from PyQt5 import QtCore, QtGui

from spidergraph.core.datasource import GraphPoint
from spidergraph.core.layout import (
    LAYER_ANNOTATIONS,
    LAYER_BACKGROUND_GRADIENT,
    LAYER_LINE,
    LAYER_LINE_MASK,
    LAYER_MARKERS,
    LAYER_SEGMENT_GRADIENTS,
    TIER_DANGER,
    TIER_OK,
    TIER_WARNING,
    Arc,
    RadialChartLayoutEngine,
    classify_point,
)
from spidergraph.core.options import ChartOptions

SIZE = (200.0, 200.0)


def engine_with(**kwargs):
    return RadialChartLayoutEngine(ChartOptions(**kwargs))


class TestClassification:

    def test_priority_always_wins(self):
        assert classify_point(GraphPoint(100, 10, True)) == TIER_DANGER
        assert classify_point(GraphPoint(0, 10, True)) == TIER_DANGER

    def test_below_average_is_warning(self):
        assert classify_point(GraphPoint(40, 50)) == TIER_WARNING

    def test_at_or_above_average_is_ok(self):
        assert classify_point(GraphPoint(50, 50)) == TIER_OK
        assert classify_point(GraphPoint(69, 50)) == TIER_OK

    def test_tier_colors_come_from_options(self):
        engine = engine_with(ok_color=QtGui.QColor("#010203"))
        assert engine.point_color(GraphPoint(10, 5)).name() == "#010203"
        assert engine.tier_color(TIER_DANGER).name().upper() == "#DA0032"
        assert engine.tier_color(TIER_WARNING).name().upper() == "#F6AA42"


class TestPlacement:

    @pytest.mark.parametrize("count", [1, 2, 3, 5, 8])
    def test_angles_are_evenly_spaced(self, count):
        angles = RadialChartLayoutEngine.point_angles(count)
        assert angles[0] == pytest.approx(-math.pi / 2)
        for first, second in zip(angles, angles[1:]):
            assert second - first == pytest.approx(2 * math.pi / count)

    def test_no_angles_for_empty_input(self):
        assert RadialChartLayoutEngine.point_angles(0) == []

    def test_distance_is_linear_in_score(self):
        engine = RadialChartLayoutEngine()
        geometry = engine.compute_geometry(
            [GraphPoint(20, 0), GraphPoint(40, 0), GraphPoint(0, 0)], 100, SIZE
        )
        cx, cy = geometry.center

        def dist(p):
            return math.hypot(p.x - cx, p.y - cy)

        assert dist(geometry.points[1]) == pytest.approx(2 * dist(geometry.points[0]))
        assert dist(geometry.points[2]) == pytest.approx(0.0)

    def test_max_score_reaches_the_boundary(self):
        geometry = RadialChartLayoutEngine().compute_geometry([GraphPoint(100, 0)], 100, (300.0, 200.0))
        point = geometry.points[0]
        assert geometry.radii == (150.0, 100.0)
        assert (point.x, point.y) == pytest.approx((150.0, 0.0))

    def test_scores_above_max_are_not_clamped(self):
        geometry = RadialChartLayoutEngine().compute_geometry([GraphPoint(150, 0)], 100, SIZE)
        point = geometry.points[0]
        assert point.score_factor == pytest.approx(1.5)
        assert point.y == pytest.approx(100 - 150)

    def test_elliptical_placement(self):
        geometry = RadialChartLayoutEngine().compute_geometry(
            [GraphPoint(50, 0)] * 4, 100, (400.0, 200.0)
        )
        xs = [p.x for p in geometry.points]
        ys = [p.y for p in geometry.points]
        assert xs[1] == pytest.approx(200 + 100)
        assert ys[2] == pytest.approx(100 + 50)

    @pytest.mark.parametrize("bad", [0, -5, None, "abc", float("nan")])
    def test_bad_max_score_falls_back_to_default(self, bad):
        geometry = RadialChartLayoutEngine().compute_geometry([GraphPoint(50, 0)], bad, SIZE)
        assert geometry.points[0].score_factor == pytest.approx(0.5)

    def test_max_score_defaults_to_options(self):
        engine = engine_with(max_score=50.0)
        geometry = engine.compute_geometry([GraphPoint(50, 0)], None, SIZE)
        assert geometry.points[0].score_factor == pytest.approx(1.0)


class TestScenario:

    def test_five_point_scenario(self, scenario_points):
        geometry = RadialChartLayoutEngine().compute_geometry(scenario_points, 100, SIZE)
        assert geometry.drawable
        assert [p.tier for p in geometry.points] == [
            TIER_WARNING,
            TIER_OK,
            TIER_OK,
            TIER_DANGER,
            TIER_DANGER,
        ]
        degrees = [math.degrees(p.angle) for p in geometry.points]
        assert degrees == pytest.approx([-90, -18, 54, 126, 198])
        first = geometry.points[0]
        assert (first.x, first.y) == pytest.approx((100.0, 25.0))

    def test_closed_line_returns_to_first_point(self, scenario_points):
        geometry = RadialChartLayoutEngine().compute_geometry(scenario_points, 100, SIZE)
        line = geometry.line
        assert len(line) == 6
        assert line[0] == line[-1]
        assert geometry.line_path().elementCount() == 6

    def test_markers_have_fixed_radius_and_tier_fill(self, scenario_points):
        engine = engine_with(point_radius=6.0)
        geometry = engine.compute_geometry(scenario_points, 100, SIZE)
        assert len(geometry.markers) == 5
        for marker, point in zip(geometry.markers, geometry.points):
            assert marker.radius == 6.0
            assert marker.center == (point.x, point.y)
            assert marker.fill_color == point.color
            assert marker.stroke_color.name().upper() == "#FFFFFF"
            assert marker.stroke_width == pytest.approx(1.5)


class TestDegenerateInput:

    def test_no_points_gives_empty_geometry(self):
        geometry = RadialChartLayoutEngine().compute_geometry([], 100, SIZE)
        assert not geometry.drawable
        assert geometry.points == []
        assert geometry.markers == []
        assert geometry.line == []
        assert geometry.layers == ()

    def test_strict_guard_skips_small_counts(self):
        engine = engine_with(min_point_count=3)
        assert not engine.compute_geometry([GraphPoint(1, 0)] * 2, 100, SIZE).drawable
        assert engine.compute_geometry([GraphPoint(1, 0)] * 3, 100, SIZE).drawable

    def test_lenient_mode_draws_degenerate_input(self):
        geometry = RadialChartLayoutEngine().compute_geometry([GraphPoint(50, 0)], 100, SIZE)
        assert geometry.drawable
        assert len(geometry.markers) == 1
        assert geometry.line == [pytest.approx((100.0, 50.0))] * 2

    def test_zero_size(self):
        geometry = RadialChartLayoutEngine().compute_geometry([GraphPoint(50, 0)] * 3, 100, (0, 0))
        assert all((p.x, p.y) == (0.0, 0.0) for p in geometry.points)


class TestSegments:

    def test_one_segment_per_pair(self, scenario_points):
        engine = engine_with(per_segment_gradient_lines=True, line_width=4.0)
        geometry = engine.compute_geometry(scenario_points, 100, SIZE)
        assert len(geometry.segments) == 5
        last = geometry.segments[-1]
        assert last.start == (geometry.points[4].x, geometry.points[4].y)
        assert last.end == (geometry.points[0].x, geometry.points[0].y)
        assert last.start_color == geometry.points[4].color
        assert last.end_color == geometry.points[0].color

    def test_segment_bounds_include_line_width(self):
        engine = engine_with(per_segment_gradient_lines=True, line_width=4.0)
        geometry = engine.compute_geometry([GraphPoint(100, 0), GraphPoint(100, 0)], 100, SIZE)
        bounds = geometry.segments[0].bounds
        assert bounds.left() == pytest.approx(98.0)
        assert bounds.width() == pytest.approx(4.0)
        assert bounds.height() == pytest.approx(204.0)

    def test_segment_gradient_uses_endpoint_colors(self, scenario_points):
        engine = engine_with(per_segment_gradient_lines=True)
        segment = engine.compute_geometry(scenario_points, 100, SIZE).segments[0]
        stops = segment.gradient().stops()
        assert stops[0][1] == segment.start_color
        assert stops[-1][1] == segment.end_color

    def test_no_segments_for_single_point(self):
        engine = engine_with(per_segment_gradient_lines=True)
        assert engine.compute_geometry([GraphPoint(10, 0)], 100, SIZE).segments == []

    def test_no_segments_by_default(self, scenario_points):
        assert RadialChartLayoutEngine().compute_geometry(scenario_points, 100, SIZE).segments == []


class TestAnnotations:

    def test_annotation_sits_at_average_radius(self, scenario_points):
        engine = engine_with(show_average_annotations=True, annotation_size=10.0)
        geometry = engine.compute_geometry(scenario_points, 100, SIZE)
        assert len(geometry.annotations) == 5
        first = geometry.annotations[0]
        assert (first.x, first.y) == pytest.approx((100.0, 100.0 - 90.0))
        assert first.angle == geometry.points[0].angle
        rect = first.rect()
        assert rect.width() == 10.0
        assert rect.center().x() == pytest.approx(first.x)

    def test_disabled_by_default(self, scenario_points):
        assert RadialChartLayoutEngine().compute_geometry(scenario_points, 100, SIZE).annotations == []


class TestBackgroundAndLayers:

    def test_background_stops_follow_point_colors(self, scenario_points):
        geometry = RadialChartLayoutEngine().compute_geometry(scenario_points, 100, SIZE)
        assert geometry.background_locations == pytest.approx([0.0, 0.2, 0.4, 0.6, 0.8, 1.0])
        assert len(geometry.background_colors) == 6
        assert geometry.background_colors[-1] == geometry.points[0].color
        assert geometry.background_colors[3] == geometry.points[3].color

    def test_explicit_gradient_colors_win(self, scenario_points):
        colors = [QtGui.QColor("red"), QtGui.QColor("blue")]
        engine = engine_with(gradient_colors=colors, gradient_locations=[0.0, 1.0])
        geometry = engine.compute_geometry(scenario_points, 100, SIZE)
        assert geometry.background_colors == colors
        assert geometry.background_locations == [0.0, 1.0]

    def test_background_layer_order(self, scenario_points):
        geometry = RadialChartLayoutEngine().compute_geometry(scenario_points, 100, SIZE)
        assert geometry.layers == (LAYER_BACKGROUND_GRADIENT, LAYER_LINE_MASK, LAYER_MARKERS)

    def test_segment_layer_order(self, scenario_points):
        engine = engine_with(per_segment_gradient_lines=True, show_average_annotations=True)
        geometry = engine.compute_geometry(scenario_points, 100, SIZE)
        assert geometry.layers == (LAYER_SEGMENT_GRADIENTS, LAYER_MARKERS, LAYER_ANNOTATIONS)
        assert geometry.background_colors == []

    def test_flat_line_when_no_gradient(self, scenario_points):
        engine = engine_with(background_conic_gradient=False)
        geometry = engine.compute_geometry(scenario_points, 100, SIZE)
        assert geometry.layers == (LAYER_LINE, LAYER_MARKERS)

    def test_pure_and_idempotent(self, scenario_points):
        engine = RadialChartLayoutEngine()
        first = engine.compute_geometry(scenario_points, 100, SIZE)
        second = engine.compute_geometry(scenario_points, 100, SIZE)
        assert [(p.x, p.y, p.tier) for p in first.points] == [(p.x, p.y, p.tier) for p in second.points]


class TestArc:

    def test_full_circle_path(self, qapp):
        arc = Arc(center=(10.0, 20.0), radius=5.0)
        rect = arc.path().boundingRect()
        assert rect.center().x() == pytest.approx(10.0)
        assert rect.center().y() == pytest.approx(20.0)
        assert rect.width() == pytest.approx(10.0)

    def test_partial_arc_clockwise_goes_through_bottom(self, qapp):
        # from 3 o'clock to 9 o'clock clockwise on screen passes 6 o'clock (y down)
        arc = Arc(center=(0.0, 0.0), radius=10.0, start_angle=0.0, end_angle=math.pi)
        rect = arc.path().boundingRect()
        assert rect.bottom() == pytest.approx(10.0, abs=1e-6)
        assert rect.top() == pytest.approx(0.0, abs=1e-6)

    def test_partial_arc_counter_clockwise_goes_through_top(self, qapp):
        arc = Arc(center=(0.0, 0.0), radius=10.0, start_angle=0.0, end_angle=math.pi, clockwise=False)
        rect = arc.path().boundingRect()
        assert rect.top() == pytest.approx(-10.0, abs=1e-6)
        assert rect.bottom() == pytest.approx(0.0, abs=1e-6)


class TestQtSizes:

    @pytest.mark.parametrize("size", [QtCore.QSize(200, 200), QtCore.QSizeF(200.0, 200.0)])
    def test_qt_sizes_match_tuples(self, scenario_points, size):
        engine = RadialChartLayoutEngine()
        from_qt = engine.compute_geometry(scenario_points, 100, size)
        from_tuple = engine.compute_geometry(scenario_points, 100, SIZE)
        assert from_qt.size == SIZE
        assert [(p.x, p.y) for p in from_qt.points] == [(p.x, p.y) for p in from_tuple.points]
