
from PyQt5 import QtWidgets, QtCore, QtGui

from ..core.options import sanitize_chart_state
from .config import DEFAULTS
from .graph_tab import GraphTab


class ControlWindow(QtWidgets.QMainWindow):
    def __init__(self, app: QtWidgets.QApplication, screen: QtGui.QScreen, view_win):
        super().__init__(None)
        self.setWindowTitle("SpiderGraph — Contrôle")
        self.view_win = view_win
        self.tabs = QtWidgets.QTabWidget()
        self.tab_graph = GraphTab()
        self.tab_graph.changed.connect(self.on_delta)
        self.tabs.addTab(self.tab_graph, "Graphe")

        self.btn_reload = QtWidgets.QPushButton("Recharger les données")
        self.btn_reload.clicked.connect(self.reload_data)
        self.btn_quit = QtWidgets.QPushButton("Quitter")
        self.btn_quit.clicked.connect(app.quit)
        buttons = QtWidgets.QHBoxLayout(); buttons.setContentsMargins(8, 4, 8, 8)
        buttons.addWidget(self.btn_reload); buttons.addStretch(1); buttons.addWidget(self.btn_quit)

        central = QtWidgets.QWidget()
        lay = QtWidgets.QVBoxLayout(central); lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self.tabs, 1)
        lay.addLayout(buttons)
        self.setCentralWidget(central)
        self.resize(520, 760)
        geo = screen.availableGeometry()
        self.move(geo.x()+(geo.width()-self.width())//2, geo.y()+(geo.height()-self.height())//2)
        current = getattr(view_win.view, "state", None)
        self.state = sanitize_chart_state(None, base=current if isinstance(current, dict) else DEFAULTS)
        self.tab_graph.set_state(self.state)
        self.push_params()

    def on_delta(self, delta: dict):
        self.state = sanitize_chart_state(delta, base=self.state)
        self.push_params()

    def push_params(self):
        self.view_win.view.set_params(self.state)

    def reload_data(self):
        self.view_win.view.reload_data()
