"""QPainter composition of a :class:`ChartGeometry`.

The painter walks ``geometry.layers`` in order:

* ``background_gradient``: the conical gradient. When ``line_mask`` is also
  listed, the gradient is clipped to the stroked loop united with the marker
  discs, so it only shows through the line; ``line_mask`` itself paints
  nothing;
* ``segment_gradients``: one linear gradient per segment, confined to the
  segment's bounds and clipped to its own stroke;
* ``line``: a flat stroke in ``line_color``;
* ``markers`` then ``annotations`` on top.
"""

from __future__ import annotations

from typing import Optional

from PyQt5 import QtCore, QtGui

from ..core.gradient import ConicalGradientRenderer
from ..core.layout import (
    LAYER_ANNOTATIONS,
    LAYER_BACKGROUND_GRADIENT,
    LAYER_LINE,
    LAYER_LINE_MASK,
    LAYER_MARKERS,
    LAYER_SEGMENT_GRADIENTS,
    ChartGeometry,
)
from ..core.options import ChartOptions

__all__ = ["ChartPainter", "default_average_marker"]


def default_average_marker(size: int = 24) -> QtGui.QImage:
    """White ring with a dark core, used when no annotation image is supplied."""

    size = max(2, int(size))
    image = QtGui.QImage(size, size, QtGui.QImage.Format_ARGB32_Premultiplied)
    image.fill(QtCore.Qt.transparent)
    painter = QtGui.QPainter(image)
    try:
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        ring = size * 0.12
        painter.setPen(QtGui.QPen(QtGui.QColor("white"), ring))
        painter.setBrush(QtGui.QColor(32, 32, 40, 200))
        inset = ring / 2.0 + 0.5
        painter.drawEllipse(QtCore.QRectF(inset, inset, size - 2 * inset, size - 2 * inset))
    finally:
        painter.end()
    return image


class ChartPainter:
    def __init__(
        self,
        options: Optional[ChartOptions] = None,
        gradient: Optional[ConicalGradientRenderer] = None,
    ) -> None:
        self.options = options if options is not None else ChartOptions()
        self.gradient = gradient if gradient is not None else ConicalGradientRenderer()
        self._marker_image: Optional[QtGui.QImage] = None

    # ------------------------------------------------------------------ images
    def set_average_marker(self, image: Optional[QtGui.QImage]) -> None:
        self._marker_image = None if image is None or image.isNull() else QtGui.QImage(image)

    def average_marker(self) -> QtGui.QImage:
        if self._marker_image is None:
            self._marker_image = default_average_marker()
        return self._marker_image

    # ------------------------------------------------------------------ paths
    def line_stroke(self, geometry: ChartGeometry) -> QtGui.QPainterPath:
        stroker = QtGui.QPainterPathStroker()
        stroker.setWidth(self.options.line_width)
        stroker.setJoinStyle(QtCore.Qt.RoundJoin)
        stroker.setCapStyle(QtCore.Qt.RoundCap)
        return stroker.createStroke(geometry.line_path())

    def line_mask(self, geometry: ChartGeometry) -> QtGui.QPainterPath:
        mask = self.line_stroke(geometry)
        for arc in geometry.markers:
            mask.addPath(arc.path())
        return mask.simplified()

    def sync_gradient(self, geometry: ChartGeometry) -> None:
        gradient = self.gradient
        if gradient.colors != geometry.background_colors or gradient.locations != geometry.background_locations:
            gradient.set_stops(geometry.background_colors, geometry.background_locations)
        if gradient.start_angle != self.options.start_angle:
            gradient.start_angle = self.options.start_angle
        if gradient.end_angle != self.options.end_angle:
            gradient.end_angle = self.options.end_angle

    # ------------------------------------------------------------------ painting
    def paint(self, painter: QtGui.QPainter, geometry: ChartGeometry) -> None:
        if not geometry.drawable:
            return
        painter.save()
        try:
            painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
            for layer in geometry.layers:
                if layer == LAYER_BACKGROUND_GRADIENT:
                    self._paint_background(painter, geometry)
                elif layer == LAYER_SEGMENT_GRADIENTS:
                    self._paint_segments(painter, geometry)
                elif layer == LAYER_LINE:
                    self._paint_line(painter, geometry)
                elif layer == LAYER_MARKERS:
                    self._paint_markers(painter, geometry)
                elif layer == LAYER_ANNOTATIONS:
                    self._paint_annotations(painter, geometry)
        finally:
            painter.restore()

    def _paint_background(self, painter: QtGui.QPainter, geometry: ChartGeometry) -> None:
        self.sync_gradient(geometry)
        width, height = geometry.size
        radius = self.gradient.covering_radius(QtCore.QRectF(0.0, 0.0, width, height))
        painter.save()
        try:
            if LAYER_LINE_MASK in geometry.layers:
                painter.setClipPath(self.line_mask(geometry), QtCore.Qt.IntersectClip)
            self.gradient.render(
                painter,
                QtCore.QPointF(*geometry.center),
                radius,
                native=self.options.native_sweep_gradient,
            )
        finally:
            painter.restore()

    def _paint_segments(self, painter: QtGui.QPainter, geometry: ChartGeometry) -> None:
        stroker = QtGui.QPainterPathStroker()
        stroker.setWidth(self.options.line_width)
        stroker.setCapStyle(QtCore.Qt.RoundCap)
        for segment in geometry.segments:
            painter.save()
            try:
                painter.setClipRect(segment.bounds, QtCore.Qt.IntersectClip)
                painter.fillPath(stroker.createStroke(segment.path()), QtGui.QBrush(segment.gradient()))
            finally:
                painter.restore()

    def _paint_line(self, painter: QtGui.QPainter, geometry: ChartGeometry) -> None:
        pen = QtGui.QPen(self.options.line_color, self.options.line_width)
        pen.setJoinStyle(QtCore.Qt.RoundJoin)
        pen.setCapStyle(QtCore.Qt.RoundCap)
        painter.setPen(pen)
        painter.setBrush(QtCore.Qt.NoBrush)
        painter.drawPath(geometry.line_path())

    def _paint_markers(self, painter: QtGui.QPainter, geometry: ChartGeometry) -> None:
        for arc in geometry.markers:
            if arc.stroke_width > 0.0:
                painter.setPen(QtGui.QPen(arc.stroke_color, arc.stroke_width))
            else:
                painter.setPen(QtCore.Qt.NoPen)
            painter.setBrush(arc.fill_color)
            painter.drawPath(arc.path())

    def _paint_annotations(self, painter: QtGui.QPainter, geometry: ChartGeometry) -> None:
        image = self.average_marker()
        for annotation in geometry.annotations:
            painter.drawImage(annotation.rect(), image)
