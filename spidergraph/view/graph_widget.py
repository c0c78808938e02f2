"""Spider graph widget.

:class:`SpiderGraphWidget` owns the data pulled from a
:class:`~spidergraph.core.datasource.GraphDataSource`, the chart state
pushed by the controller and the derived geometry cache. Every input change
(data reload, new size, new parameters) drops the cache and schedules a
repaint; the geometry is rebuilt on the next paint.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from PyQt5 import QtCore, QtGui, QtWidgets

from ..core.datasource import GraphDataSource, GraphPoint, load_points
from ..core.diagnostics import debug
from ..core.layout import ChartGeometry, RadialChartLayoutEngine
from ..core.options import ChartOptions, sanitize_chart_state
from .chart_painter import ChartPainter

__all__ = ["SpiderGraphWidget"]


class SpiderGraphWidget(QtWidgets.QWidget):
    dataReloaded = QtCore.pyqtSignal(int)

    def __init__(
        self,
        parent: Optional[QtWidgets.QWidget] = None,
        *,
        data_source: Optional[GraphDataSource] = None,
        state: Optional[Mapping[str, object]] = None,
    ) -> None:
        super().__init__(parent)
        self.setAttribute(QtCore.Qt.WA_TranslucentBackground, True)
        self.setAutoFillBackground(False)
        self._state = sanitize_chart_state(state)
        self._options = ChartOptions.from_state(self._state)
        self._engine = RadialChartLayoutEngine(self._options)
        self._painter = ChartPainter(self._options)
        self._data_source = data_source
        self._points: List[GraphPoint] = []
        self._setup_complete = False
        self._geometry: Optional[ChartGeometry] = None

    # ------------------------------------------------------------------ API
    @property
    def options(self) -> ChartOptions:
        return self._options

    @property
    def state(self) -> dict:
        return sanitize_chart_state(None, base=self._state)

    @property
    def engine(self) -> RadialChartLayoutEngine:
        return self._engine

    @property
    def chart_painter(self) -> ChartPainter:
        return self._painter

    def data_source(self) -> Optional[GraphDataSource]:
        return self._data_source

    def set_data_source(self, source: Optional[GraphDataSource]) -> None:
        self._data_source = source
        if self._setup_complete:
            self.reload_data()

    def points(self) -> List[GraphPoint]:
        self._ensure_setup()
        return list(self._points)

    def reload_data(self) -> None:
        """Drop the current points and fetch them again from the data source."""

        self._points = load_points(self._data_source)
        self._setup_complete = True
        debug(f"reloaded {len(self._points)} point(s)")
        self.invalidate_geometry()
        self.dataReloaded.emit(len(self._points))

    def set_params(self, payload: Mapping[str, object]) -> None:
        if not isinstance(payload, Mapping):
            return
        self._state = sanitize_chart_state(payload, base=self._state)
        self._options = ChartOptions.from_state(self._state)
        self._engine.options = self._options
        self._painter.options = self._options
        self.invalidate_geometry()

    def set_average_marker(self, image: Optional[QtGui.QImage]) -> None:
        self._painter.set_average_marker(image)
        self.update()

    def invalidate_geometry(self) -> None:
        self._geometry = None
        self.update()

    def chart_geometry(self, size: Optional[Tuple[float, float]] = None) -> ChartGeometry:
        """Geometry for ``size``, or the cached geometry for the widget's own size."""

        self._ensure_setup()
        if size is not None:
            return self._engine.compute_geometry(self._points, self._options.max_score, size)
        if self._geometry is None:
            self._geometry = self._engine.compute_geometry(
                self._points, self._options.max_score, (float(self.width()), float(self.height()))
            )
        return self._geometry

    def render_chart(self, painter: QtGui.QPainter, width: float, height: float) -> ChartGeometry:
        if (width, height) == (float(self.width()), float(self.height())):
            geometry = self.chart_geometry()
        else:
            geometry = self.chart_geometry((width, height))
        self._painter.paint(painter, geometry)
        return geometry

    def render_to_image(
        self, width: int, height: int, background: Optional[QtGui.QColor] = None
    ) -> QtGui.QImage:
        """Render the chart off-screen, independently of the widget's size."""

        image = QtGui.QImage(max(1, int(width)), max(1, int(height)), QtGui.QImage.Format_ARGB32_Premultiplied)
        image.fill(background if background is not None else QtGui.QColor(QtCore.Qt.transparent))
        painter = QtGui.QPainter(image)
        try:
            self.render_chart(painter, float(image.width()), float(image.height()))
        finally:
            painter.end()
        return image

    # ------------------------------------------------------------------ internals
    def _ensure_setup(self) -> None:
        if not self._setup_complete:
            self.reload_data()

    # ------------------------------------------------------------------ Qt events
    def sizeHint(self) -> QtCore.QSize:  # type: ignore[override]
        return QtCore.QSize(320, 320)

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.invalidate_geometry()

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # type: ignore[override]
        del event
        painter = QtGui.QPainter(self)
        try:
            self.render_chart(painter, float(self.width()), float(self.height()))
        finally:
            painter.end()
