"""Chart configuration shared by the control panel and the renderer.

The state travels as a nested mapping (``graph``, ``palette``, ``gradient``
and ``features`` sections, camelCase keys) so the controller can push
partial deltas. :class:`ChartOptions` is the typed, normalized view the
layout engine and the painter work with.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from PyQt5 import QtGui

from .colors import hex_to_color, order_stops, parse_color_stops, parse_hex
from .diagnostics import warn
from .gradient import DEFAULT_END_ANGLE, DEFAULT_START_ANGLE

DEFAULT_MAX_SCORE = 100.0
DEFAULT_POINT_RADIUS = 4.0
DEFAULT_LINE_WIDTH = 2.0
DEFAULT_MARKER_STROKE_WIDTH = 1.5
DEFAULT_ANNOTATION_SIZE = 12.0

OK_HEX = "#0FA45A"
WARNING_HEX = "#F6AA42"
DANGER_HEX = "#DA0032"
WHITE_HEX = "#FFFFFF"

__all__ = [
    "ChartOptions",
    "DEFAULT_MAX_SCORE",
    "default_chart_state",
    "sanitize_chart_state",
]


def default_chart_state() -> dict:
    """Return the default configuration used by both the UI and the view."""
    return {
        "graph": {
            "maxScore": DEFAULT_MAX_SCORE,
            "pointRadius": DEFAULT_POINT_RADIUS,
            "lineWidth": DEFAULT_LINE_WIDTH,
            "markerStrokeWidth": DEFAULT_MARKER_STROKE_WIDTH,
            "markerStrokeColor": WHITE_HEX,
            "lineColor": WHITE_HEX,
            "minPointCount": 0,
        },
        "palette": {
            "ok": OK_HEX,
            "warning": WARNING_HEX,
            "danger": DANGER_HEX,
        },
        "gradient": {
            "colors": "",
            "locations": "",
            "startAngle": DEFAULT_START_ANGLE,
            "endAngle": DEFAULT_END_ANGLE,
            "native": False,
        },
        "features": {
            "backgroundConicGradient": True,
            "perSegmentGradientLines": False,
            "averageAnnotations": False,
            "annotationSize": DEFAULT_ANNOTATION_SIZE,
        },
    }


def sanitize_chart_state(payload: Optional[Mapping[str, object]], base: Optional[dict] = None) -> dict:
    """Merge a (partial) payload section by section onto ``base`` or the defaults.

    Unknown sections and non-mapping sections are ignored.
    """

    state = copy.deepcopy(base) if isinstance(base, dict) else default_chart_state()
    if not isinstance(payload, Mapping):
        return state
    for section, values in payload.items():
        if section not in state or not isinstance(values, Mapping):
            continue
        state[section].update(values)
    return state


def _coerce_float(value: object, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def _positive(section: Mapping[str, object], key: str, default: float) -> float:
    raw = section.get(key, default)
    value = _coerce_float(raw, default)
    if value <= 0.0:
        warn(f"{key}={raw!r} is not positive, falling back to {default:g}")
        return default
    return value


def _color(section: Mapping[str, object], key: str, default_hex: str) -> QtGui.QColor:
    raw = section.get(key, default_hex)
    if isinstance(raw, QtGui.QColor) and raw.isValid():
        return QtGui.QColor(raw)
    color = parse_hex(raw)
    if color is None:
        warn(f"{key}={raw!r} is not a valid color, falling back to {default_hex}")
        return hex_to_color(default_hex)
    return color


@dataclass
class ChartOptions:
    """Normalized chart configuration with documented defaults."""

    max_score: float = DEFAULT_MAX_SCORE
    point_radius: float = DEFAULT_POINT_RADIUS
    line_width: float = DEFAULT_LINE_WIDTH
    marker_stroke_width: float = DEFAULT_MARKER_STROKE_WIDTH
    marker_stroke_color: QtGui.QColor = field(default_factory=lambda: hex_to_color(WHITE_HEX))
    line_color: QtGui.QColor = field(default_factory=lambda: hex_to_color(WHITE_HEX))
    ok_color: QtGui.QColor = field(default_factory=lambda: hex_to_color(OK_HEX))
    warning_color: QtGui.QColor = field(default_factory=lambda: hex_to_color(WARNING_HEX))
    danger_color: QtGui.QColor = field(default_factory=lambda: hex_to_color(DANGER_HEX))
    gradient_colors: List[QtGui.QColor] = field(default_factory=list)
    gradient_locations: List[float] = field(default_factory=list)
    start_angle: float = DEFAULT_START_ANGLE
    end_angle: float = DEFAULT_END_ANGLE
    native_sweep_gradient: bool = False
    background_conic_gradient: bool = True
    per_segment_gradient_lines: bool = False
    show_average_annotations: bool = False
    annotation_size: float = DEFAULT_ANNOTATION_SIZE
    min_point_count: int = 0

    @classmethod
    def from_state(cls, state: Optional[Mapping[str, object]]) -> "ChartOptions":
        """Build options from a nested state, applying every fallback rule."""

        merged = sanitize_chart_state(state)
        graph = merged["graph"]
        palette = merged["palette"]
        gradient = merged["gradient"]
        features = merged["features"]

        stroke_width = _coerce_float(graph.get("markerStrokeWidth"), DEFAULT_MARKER_STROKE_WIDTH)
        if stroke_width < 0.0:
            warn(f"markerStrokeWidth={stroke_width:g} is negative, falling back to {DEFAULT_MARKER_STROKE_WIDTH:g}")
            stroke_width = DEFAULT_MARKER_STROKE_WIDTH

        raw_count = graph.get("minPointCount", 0)
        try:
            min_count = int(raw_count)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            min_count = 0
        min_count = max(0, min_count)

        start = _coerce_float(gradient.get("startAngle"), DEFAULT_START_ANGLE)
        end = _coerce_float(gradient.get("endAngle"), DEFAULT_END_ANGLE)
        if end <= start:
            warn(f"gradient endAngle {end:g} does not exceed startAngle {start:g}, using the default full turn")
            start, end = DEFAULT_START_ANGLE, DEFAULT_END_ANGLE

        colors, locations = parse_color_stops(gradient.get("colors"))
        raw_locations = gradient.get("locations")
        if raw_locations and not locations:
            if isinstance(raw_locations, str):
                raw_locations = [part for part in raw_locations.split(",") if part.strip()]
            try:
                locations = [float(v) for v in raw_locations]  # type: ignore[union-attr]
            except (TypeError, ValueError):
                locations = []
        if locations and len(locations) != len(colors):
            warn(f"{len(locations)} gradient locations for {len(colors)} colors, spreading stops uniformly")
            locations = []
        if locations:
            ordered_colors, ordered = order_stops(colors, locations)
            if ordered != locations:
                warn("gradient locations clamped into [0, 1] and sorted")
            colors, locations = ordered_colors, ordered

        return cls(
            max_score=_positive(graph, "maxScore", DEFAULT_MAX_SCORE),
            point_radius=_positive(graph, "pointRadius", DEFAULT_POINT_RADIUS),
            line_width=_positive(graph, "lineWidth", DEFAULT_LINE_WIDTH),
            marker_stroke_width=stroke_width,
            marker_stroke_color=_color(graph, "markerStrokeColor", WHITE_HEX),
            line_color=_color(graph, "lineColor", WHITE_HEX),
            ok_color=_color(palette, "ok", OK_HEX),
            warning_color=_color(palette, "warning", WARNING_HEX),
            danger_color=_color(palette, "danger", DANGER_HEX),
            gradient_colors=colors,
            gradient_locations=locations,
            start_angle=start,
            end_angle=end,
            native_sweep_gradient=bool(gradient.get("native", False)),
            background_conic_gradient=bool(features.get("backgroundConicGradient", True)),
            per_segment_gradient_lines=bool(features.get("perSegmentGradientLines", False)),
            show_average_annotations=bool(features.get("averageAnnotations", False)),
            annotation_size=_positive(features, "annotationSize", DEFAULT_ANNOTATION_SIZE),
            min_point_count=min_count,
        )
