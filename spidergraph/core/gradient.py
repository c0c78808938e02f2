"""Conical (angular) gradient computed from color stops.

The renderer answers two questions:

* which color sits at a given angle around a center, given an ordered list
  of color stops whose locations are fractions of the configured angular
  span (``start_angle`` to ``end_angle``);
* how to paint that gradient into a region whose clip has already been set
  on the painter.

Painting uses dense radial strokes, one per ``angle_step``, from a circle
enclosing the region down to its center. This works on any ``QPaintDevice``.
A native :class:`QtGui.QConicalGradient` sampled from :meth:`color_at` is
available as well through ``native=True``.

Without at least two colors the gradient falls back to a hue spectrum, so a
freshly created renderer already paints a rainbow.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from PyQt5 import QtCore, QtGui

from .colors import hue_color, lerp_color, order_stops, to_color

DEFAULT_START_ANGLE = -math.pi / 2.0
DEFAULT_END_ANGLE = 3.0 * math.pi / 2.0
NATIVE_SAMPLE_COUNT = 256

__all__ = [
    "ConicalGradientRenderer",
    "DEFAULT_END_ANGLE",
    "DEFAULT_START_ANGLE",
    "Transition",
]


@dataclass(frozen=True)
class Transition:
    """Interpolated region between two consecutive stops."""

    from_location: float
    to_location: float
    from_color: QtGui.QColor
    to_color: QtGui.QColor

    def contains(self, percent: float) -> bool:
        return self.from_location <= percent < self.to_location

    def color_for_percent(self, percent: float) -> QtGui.QColor:
        span = self.to_location - self.from_location
        local = 0.0 if span == 0.0 else (percent - self.from_location) / span
        return lerp_color(self.from_color, self.to_color, local)


class ConicalGradientRenderer:
    """Angular gradient with lazily rebuilt transitions."""

    def __init__(
        self,
        colors: Sequence[object] = (),
        locations: Sequence[float] = (),
        *,
        start_angle: float = DEFAULT_START_ANGLE,
        end_angle: float = DEFAULT_END_ANGLE,
    ) -> None:
        self._colors: List[QtGui.QColor] = [to_color(c) for c in colors]
        self._locations: List[float] = [float(loc) for loc in locations]
        self._start_angle = float(start_angle)
        self._end_angle = float(end_angle)
        self._transitions: Optional[List[Transition]] = None

    # ------------------------------------------------------------ configuration
    @property
    def colors(self) -> List[QtGui.QColor]:
        return [QtGui.QColor(c) for c in self._colors]

    @colors.setter
    def colors(self, values: Sequence[object]) -> None:
        self._colors = [to_color(c) for c in values]
        self.invalidate()

    @property
    def locations(self) -> List[float]:
        return list(self._locations)

    @locations.setter
    def locations(self, values: Sequence[float]) -> None:
        self._locations = [float(v) for v in values]
        self.invalidate()

    @property
    def start_angle(self) -> float:
        return self._start_angle

    @start_angle.setter
    def start_angle(self, value: float) -> None:
        self._start_angle = float(value)
        self.invalidate()

    @property
    def end_angle(self) -> float:
        return self._end_angle

    @end_angle.setter
    def end_angle(self, value: float) -> None:
        self._end_angle = float(value)
        self.invalidate()

    def set_stops(self, colors: Sequence[object], locations: Sequence[float] = ()) -> None:
        """Replace colors and locations together, invalidating once."""

        self._colors = [to_color(c) for c in colors]
        self._locations = [float(v) for v in locations]
        self.invalidate()

    def invalidate(self) -> None:
        self._transitions = None

    # ------------------------------------------------------------ transitions
    @property
    def transitions(self) -> List[Transition]:
        if self._transitions is None:
            self._transitions = self._build_transitions()
        return self._transitions

    def stop_locations(self) -> List[float]:
        """Effective location of every color, after the uniform fallback."""

        count = len(self._colors)
        if count < 2:
            return []
        if len(self._locations) == count:
            return list(self._locations)
        step = 1.0 / (count - 1)
        return [step * i for i in range(count)]

    def _build_transitions(self) -> List[Transition]:
        colors, locations = order_stops(self._colors, self.stop_locations())
        return [
            Transition(locations[i], locations[i + 1], colors[i], colors[i + 1])
            for i in range(len(locations) - 1)
        ]

    def transition_for_percent(self, percent: float) -> Optional[Transition]:
        transitions = self.transitions
        if not transitions:
            return None
        for transition in transitions:
            if transition.contains(percent):
                return transition
        # p == 1.0 and floating point leftovers land outside every [from, to)
        return transitions[0] if percent <= 0.5 else transitions[-1]

    # ------------------------------------------------------------ colors
    def percent_for_angle(self, angle: float) -> float:
        span = self._end_angle - self._start_angle
        if span == 0.0:
            return 0.0
        return (angle - self._start_angle) / span

    def color_for_percent(self, percent: float) -> QtGui.QColor:
        transition = self.transition_for_percent(percent)
        if transition is None:
            return hue_color(percent)
        return transition.color_for_percent(percent)

    def color_at(self, angle: float) -> QtGui.QColor:
        return self.color_for_percent(self.percent_for_angle(angle))

    def spectrum_color(self, angle: float) -> QtGui.QColor:
        return hue_color(self.percent_for_angle(angle))

    # ------------------------------------------------------------ painting
    @staticmethod
    def angle_step(radius: float) -> float:
        return (math.pi / 2.0) / radius

    @staticmethod
    def covering_radius(rect: QtCore.QRectF) -> float:
        """Radius of a circle centred on ``rect`` that reaches past all its corners."""

        return max(rect.width(), rect.height()) * math.sqrt(2.0)

    def stroke_angles(self, radius: float) -> List[float]:
        """Stroke angles from ``start_angle`` to ``end_angle``, in the span's own direction."""

        if radius <= 0.0:
            return []
        span = self._end_angle - self._start_angle
        count = int(math.floor(abs(span) / self.angle_step(radius) + 1e-9))
        step = math.copysign(self.angle_step(radius), span)
        return [self._start_angle + i * step for i in range(count + 1)]

    def render(
        self,
        painter: QtGui.QPainter,
        center: QtCore.QPointF,
        radius: float,
        *,
        native: bool = False,
    ) -> None:
        """Paint the gradient around ``center`` inside the painter's current clip."""

        if radius <= 0.0:
            return
        painter.save()
        try:
            if native:
                painter.setPen(QtCore.Qt.NoPen)
                painter.setBrush(QtGui.QBrush(self.sweep_gradient(center)))
                painter.drawEllipse(center, radius, radius)
                return
            pen = QtGui.QPen()
            pen.setWidthF(2.0)
            pen.setCapStyle(QtCore.Qt.FlatCap)
            for angle in self.stroke_angles(radius):
                pen.setColor(self.color_at(angle))
                painter.setPen(pen)
                edge = QtCore.QPointF(
                    center.x() + radius * math.cos(angle),
                    center.y() + radius * math.sin(angle),
                )
                painter.drawLine(QtCore.QLineF(edge, center))
        finally:
            painter.restore()

    def sweep_gradient(
        self, center: QtCore.QPointF, samples: int = NATIVE_SAMPLE_COUNT
    ) -> QtGui.QConicalGradient:
        """Native conical gradient matching :meth:`color_at` at every sample.

        Qt sweeps counter-clockwise on screen while chart angles grow
        clockwise (y axis down), so position ``s`` maps back to the angle
        ``start_angle + 2π * (1 - s)``. Angles beyond ``end_angle`` keep the
        end color.
        """

        gradient = QtGui.QConicalGradient(center, -math.degrees(self._start_angle))
        samples = max(2, int(samples))
        for k in range(samples + 1):
            position = k / samples
            angle = self._start_angle + 2.0 * math.pi * (1.0 - position)
            gradient.setColorAt(position, self.color_at(min(angle, self._end_angle)))
        return gradient
