# -*- coding: utf-8 -*-
"""Desktop entry point: a chart window driven by a control window.

``--export PATH`` renders the chart off-screen to a PNG and exits without
opening any window.
"""

from __future__ import annotations

import argparse
import io
import os
import sys
from typing import List, NoReturn, Optional, Sequence, TextIO


_QT_HINTS = {
    "libGL.so.1": "la bibliothèque système libGL.so.1 est absente (paquets Mesa/OpenGL).",
    "xcb": "le plugin de plateforme xcb est inutilisable ; essayez QT_QPA_PLATFORM=offscreen avec --export.",
}


def _handle_qt_import_error(exc: ImportError) -> NoReturn:
    """Turn a failed PyQt5 import into a readable exit message."""

    details = str(exc)
    lines = ["SpiderGraph ne peut pas démarrer : PyQt5 est introuvable ou inutilisable (pip install PyQt5)."]
    lines += [f"Indice : {hint}" for needle, hint in _QT_HINTS.items() if needle in details]
    lines.append(f"Erreur d'origine : {details}")
    raise SystemExit("\n".join(lines)) from exc


try:
    from PyQt5 import QtCore, QtGui, QtWidgets
    from PyQt5.QtCore import Qt
except ImportError as exc:  # pragma: no cover - dépendances environnementales
    _handle_qt_import_error(exc)

from .control.control_window import ControlWindow
from .core.datasource import GraphPoint, StaticDataSource
from .core.diagnostics import DEBUG_MARKER
from .view.graph_widget import SpiderGraphWidget


class _DebugSilencer(io.TextIOBase):
    """Line-buffered stream that drops every line tagged with one of ``markers``."""

    def __init__(self, stream: TextIO, *markers: str) -> None:
        super().__init__()
        self._stream = stream
        self._markers = tuple(m for m in markers if m)
        self._pending = ""

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:  # type: ignore[override]
        *lines, self._pending = (self._pending + text).split("\n")
        for line in lines:
            self._forward(line + "\n")
        return len(text)

    def flush(self) -> None:  # type: ignore[override]
        if self._pending:
            self._forward(self._pending)
            self._pending = ""
        self._stream.flush()

    def _forward(self, chunk: str) -> None:
        if not any(marker in chunk for marker in self._markers):
            self._stream.write(chunk)


def _install_debug_silencer(*markers: str) -> None:
    """Filter tagged debug lines out of stdout; warnings on stderr stay visible."""

    if not isinstance(sys.stdout, _DebugSilencer):
        sys.stdout = _DebugSilencer(sys.stdout, *(markers or (DEBUG_MARKER,)))


def sample_data_source() -> StaticDataSource:
    """Five scored points covering the three tiers."""
    return StaticDataSource(
        [
            GraphPoint(75, 90, False),
            GraphPoint(69, 50, False),
            GraphPoint(100, 75, False),
            GraphPoint(51, 50, True),
            GraphPoint(56, 60, True),
        ]
    )


class ViewWindow(QtWidgets.QMainWindow):
    def __init__(self, screen: QtGui.QScreen, data_source=None, state=None):
        super().__init__(None)
        self.setWindowTitle("SpiderGraph")
        self.view = SpiderGraphWidget(self, data_source=data_source, state=state)

        w = QtWidgets.QWidget()
        w.setStyleSheet("background: #1E1B2E;")
        lay = QtWidgets.QVBoxLayout(w)
        lay.setContentsMargins(24, 24, 24, 24)
        lay.addWidget(self.view)
        self.setCentralWidget(w)

        geometry = screen.availableGeometry()
        side = int(min(geometry.width(), geometry.height()) * 0.6)
        self.setGeometry(
            geometry.left() + (geometry.width() - side) // 2,
            geometry.top() + (geometry.height() - side) // 2,
            side,
            side,
        )
        QtWidgets.QShortcut(Qt.Key_Escape, self, activated=self.close)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="spidergraph", description="Graphe radial des scores.")
    parser.add_argument("--export", metavar="PATH", help="rendre le graphe dans un PNG puis quitter")
    parser.add_argument("--width", type=int, default=480)
    parser.add_argument("--height", type=int, default=480)
    parser.add_argument("--segments", action="store_true", help="dégradé par segment au lieu du dégradé conique")
    parser.add_argument("--annotations", action="store_true", help="afficher les repères de moyenne")
    parser.add_argument("--min-points", type=int, default=0, help="nombre minimum de points à dessiner")
    parser.add_argument("--debug", action="store_true", help="afficher les messages de diagnostic")
    return parser.parse_args(list(argv) if argv is not None else None)


def _state_from_args(args: argparse.Namespace) -> dict:
    return {
        "graph": {"minPointCount": max(0, args.min_points)},
        "features": {
            "perSegmentGradientLines": bool(args.segments),
            "averageAnnotations": bool(args.annotations),
        },
    }


def export_png(path: str, width: int, height: int, state: Optional[dict] = None, data_source=None) -> bool:
    """Render the chart off-screen into ``path``; requires a ``QGuiApplication``."""

    view = SpiderGraphWidget(data_source=data_source or sample_data_source(), state=state)
    image = view.render_to_image(width, height, background=QtGui.QColor("#1E1B2E"))
    return image.save(path, "PNG")


def main(argv: Optional[List[str]] = None) -> int:
    """Start the application and return the exit code."""

    args = _parse_args(argv)
    if not args.debug:
        _install_debug_silencer()
    state = _state_from_args(args)

    if args.export:
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv[:1])  # noqa: F841
        ok = export_png(args.export, args.width, args.height, state)
        if not ok:
            print(f"Échec de l'export vers {args.export}", file=sys.stderr)
        return 0 if ok else 1

    QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_EnableHighDpiScaling, True)
    app = QtWidgets.QApplication(sys.argv[:1])
    screen = QtGui.QGuiApplication.primaryScreen()
    view_win = ViewWindow(screen, data_source=sample_data_source(), state=state)
    control_win = ControlWindow(app, screen, view_win)
    view_win.show()
    control_win.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
