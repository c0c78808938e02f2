"""Polar layout of the spider graph.

:class:`RadialChartLayoutEngine` turns an ordered list of
:class:`~spidergraph.core.datasource.GraphPoint` into a
:class:`ChartGeometry`: positioned points, their tier colors, the closed
polyline, the per-segment gradient descriptors, the marker arcs, the average
annotations and the layer order the painter must follow.

Angles follow the screen convention (y axis pointing down), so they grow
clockwise and ``-π/2`` is 12 o'clock. Point ``i`` of ``N`` sits at
``-π/2 + i * 2π/N`` whatever its score; only the distance from the center
depends on ``score / max_score``. Scores above ``max_score`` are not clamped
and end up outside the nominal ellipse.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from PyQt5 import QtCore, QtGui

from .datasource import GraphPoint
from .diagnostics import debug
from .options import DEFAULT_MAX_SCORE, ChartOptions

CHART_START_ANGLE = -math.pi / 2.0
FULL_TURN = 2.0 * math.pi

TIER_OK = "ok"
TIER_WARNING = "warning"
TIER_DANGER = "danger"

LAYER_BACKGROUND_GRADIENT = "background_gradient"
# clip marker consumed by the background layer, paints nothing on its own
LAYER_LINE_MASK = "line_mask"
LAYER_SEGMENT_GRADIENTS = "segment_gradients"
LAYER_LINE = "line"
LAYER_MARKERS = "markers"
LAYER_ANNOTATIONS = "annotations"

Point = Tuple[float, float]

__all__ = [
    "Annotation",
    "Arc",
    "ChartGeometry",
    "PlacedPoint",
    "RadialChartLayoutEngine",
    "Segment",
    "classify_point",
]


def classify_point(point: GraphPoint) -> str:
    if point.is_priority:
        return TIER_DANGER
    if point.score < point.average:
        return TIER_WARNING
    return TIER_OK


@dataclass
class Arc:
    """Circle (or arc) primitive used for the point markers."""

    center: Point
    radius: float
    start_angle: float = 0.0
    end_angle: float = FULL_TURN
    clockwise: bool = True
    stroke_width: float = 1.0
    stroke_color: QtGui.QColor = field(default_factory=lambda: QtGui.QColor(0, 0, 0))
    fill_color: QtGui.QColor = field(default_factory=lambda: QtGui.QColor(0, 0, 0, 0))

    def bounding_rect(self) -> QtCore.QRectF:
        cx, cy = self.center
        return QtCore.QRectF(cx - self.radius, cy - self.radius, self.radius * 2.0, self.radius * 2.0)

    def path(self) -> QtGui.QPainterPath:
        path = QtGui.QPainterPath()
        rect = self.bounding_rect()
        if abs(self.end_angle - self.start_angle) >= FULL_TURN - 1e-9:
            path.addEllipse(rect)
            return path
        # Qt measures angles counter-clockwise on screen, chart angles run clockwise
        span = (self.end_angle - self.start_angle) % FULL_TURN
        if self.clockwise:
            sweep = -math.degrees(span)
        else:
            sweep = math.degrees(FULL_TURN - span) if span else 0.0
        start = -math.degrees(self.start_angle)
        path.arcMoveTo(rect, start)
        path.arcTo(rect, start, sweep)
        return path


@dataclass(frozen=True)
class PlacedPoint:
    index: int
    angle: float
    score_factor: float
    x: float
    y: float
    tier: str
    color: QtGui.QColor
    source: GraphPoint

    @property
    def position(self) -> QtCore.QPointF:
        return QtCore.QPointF(self.x, self.y)


@dataclass(frozen=True)
class Segment:
    """Line between two consecutive points, painted with its own gradient."""

    index: int
    start: Point
    end: Point
    start_color: QtGui.QColor
    end_color: QtGui.QColor
    bounds: QtCore.QRectF

    def path(self) -> QtGui.QPainterPath:
        path = QtGui.QPainterPath(QtCore.QPointF(*self.start))
        path.lineTo(QtCore.QPointF(*self.end))
        return path

    def gradient(self) -> QtGui.QLinearGradient:
        gradient = QtGui.QLinearGradient(QtCore.QPointF(*self.start), QtCore.QPointF(*self.end))
        gradient.setColorAt(0.0, self.start_color)
        gradient.setColorAt(1.0, self.end_color)
        return gradient


@dataclass(frozen=True)
class Annotation:
    """Average marker drawn at the point's angle and the average's radius."""

    index: int
    angle: float
    x: float
    y: float
    size: float

    def rect(self) -> QtCore.QRectF:
        half = self.size / 2.0
        return QtCore.QRectF(self.x - half, self.y - half, self.size, self.size)


@dataclass
class ChartGeometry:
    size: Tuple[float, float]
    center: Point
    radii: Tuple[float, float]
    points: List[PlacedPoint] = field(default_factory=list)
    markers: List[Arc] = field(default_factory=list)
    segments: List[Segment] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    background_colors: List[QtGui.QColor] = field(default_factory=list)
    background_locations: List[float] = field(default_factory=list)
    layers: Tuple[str, ...] = ()
    drawable: bool = False

    @property
    def line(self) -> List[Point]:
        """Closed polyline in index order, back to point 0."""

        coords = [(p.x, p.y) for p in self.points]
        return coords + coords[:1]

    def line_path(self) -> QtGui.QPainterPath:
        path = QtGui.QPainterPath()
        coords = self.line
        if not coords:
            return path
        path.moveTo(QtCore.QPointF(*coords[0]))
        for x, y in coords[1:]:
            path.lineTo(QtCore.QPointF(x, y))
        return path


class RadialChartLayoutEngine:
    """Compute the render-ready geometry of the spider graph."""

    def __init__(self, options: Optional[ChartOptions] = None) -> None:
        self.options = options if options is not None else ChartOptions()

    # ------------------------------------------------------------------ helpers
    def tier_color(self, tier: str) -> QtGui.QColor:
        if tier == TIER_DANGER:
            return QtGui.QColor(self.options.danger_color)
        if tier == TIER_WARNING:
            return QtGui.QColor(self.options.warning_color)
        return QtGui.QColor(self.options.ok_color)

    def point_color(self, point: GraphPoint) -> QtGui.QColor:
        return self.tier_color(classify_point(point))

    @staticmethod
    def point_angles(count: int) -> List[float]:
        if count <= 0:
            return []
        delta = FULL_TURN / count
        return [CHART_START_ANGLE + i * delta for i in range(count)]

    def _resolve_max_score(self, max_score: Optional[float]) -> float:
        value = self.options.max_score if max_score is None else max_score
        try:
            value = float(value)
        except (TypeError, ValueError):
            value = 0.0
        if not value > 0.0 or math.isinf(value):
            debug(f"max score {max_score!r} is not usable, falling back to {DEFAULT_MAX_SCORE:g}")
            return DEFAULT_MAX_SCORE
        return value

    def _layers(self) -> Tuple[str, ...]:
        opts = self.options
        if opts.per_segment_gradient_lines:
            layers: Tuple[str, ...] = (LAYER_SEGMENT_GRADIENTS, LAYER_MARKERS)
        elif opts.background_conic_gradient:
            layers = (LAYER_BACKGROUND_GRADIENT, LAYER_LINE_MASK, LAYER_MARKERS)
        else:
            layers = (LAYER_LINE, LAYER_MARKERS)
        if opts.show_average_annotations:
            layers += (LAYER_ANNOTATIONS,)
        return layers

    # ------------------------------------------------------------------ main entry
    def compute_geometry(
        self,
        points: Iterable[GraphPoint],
        max_score: Optional[float] = None,
        size: Union[Sequence[float], QtCore.QSize, QtCore.QSizeF] = (0.0, 0.0),
    ) -> ChartGeometry:
        opts = self.options
        values = list(points)
        if isinstance(size, (QtCore.QSize, QtCore.QSizeF)):
            size = (size.width(), size.height())
        width = max(0.0, float(size[0]))
        height = max(0.0, float(size[1]))
        cx, cy = width / 2.0, height / 2.0
        rx, ry = width / 2.0, height / 2.0
        geometry = ChartGeometry(size=(width, height), center=(cx, cy), radii=(rx, ry))

        count = len(values)
        if count == 0:
            return geometry
        if count < opts.min_point_count:
            debug(f"{count} point(s) below the minimum of {opts.min_point_count}, nothing to draw")
            return geometry

        scale = self._resolve_max_score(max_score)
        for index, (point, angle) in enumerate(zip(values, self.point_angles(count))):
            factor = point.score / scale
            tier = classify_point(point)
            geometry.points.append(
                PlacedPoint(
                    index=index,
                    angle=angle,
                    score_factor=factor,
                    x=cx + rx * factor * math.cos(angle),
                    y=cy + ry * factor * math.sin(angle),
                    tier=tier,
                    color=self.tier_color(tier),
                    source=point,
                )
            )

        geometry.markers = [
            Arc(
                center=(p.x, p.y),
                radius=opts.point_radius,
                stroke_width=opts.marker_stroke_width,
                stroke_color=QtGui.QColor(opts.marker_stroke_color),
                fill_color=QtGui.QColor(p.color),
            )
            for p in geometry.points
        ]

        if opts.per_segment_gradient_lines and count >= 2:
            geometry.segments = self._segments(geometry.points)

        if opts.show_average_annotations:
            geometry.annotations = [
                Annotation(
                    index=p.index,
                    angle=p.angle,
                    x=cx + rx * (p.source.average / scale) * math.cos(p.angle),
                    y=cy + ry * (p.source.average / scale) * math.sin(p.angle),
                    size=opts.annotation_size,
                )
                for p in geometry.points
            ]

        if opts.background_conic_gradient and not opts.per_segment_gradient_lines:
            if len(opts.gradient_colors) >= 2:
                geometry.background_colors = [QtGui.QColor(c) for c in opts.gradient_colors]
                geometry.background_locations = list(opts.gradient_locations)
            else:
                # each point's color sits at its own angle, closing back on point 0
                geometry.background_colors = [QtGui.QColor(p.color) for p in geometry.points]
                geometry.background_colors.append(QtGui.QColor(geometry.points[0].color))
                geometry.background_locations = [i / count for i in range(count)] + [1.0]

        geometry.layers = self._layers()
        geometry.drawable = True
        return geometry

    def _segments(self, placed: Sequence[PlacedPoint]) -> List[Segment]:
        half = self.options.line_width / 2.0
        segments: List[Segment] = []
        for index, first in enumerate(placed):
            second = placed[(index + 1) % len(placed)]
            bounds = QtCore.QRectF(
                QtCore.QPointF(first.x, first.y), QtCore.QPointF(second.x, second.y)
            ).normalized().adjusted(-half, -half, half, half)
            segments.append(
                Segment(
                    index=index,
                    start=(first.x, first.y),
                    end=(second.x, second.y),
                    start_color=QtGui.QColor(first.color),
                    end_color=QtGui.QColor(second.color),
                    bounds=bounds,
                )
            )
        return segments
