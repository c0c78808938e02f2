from PyQt5 import QtWidgets, QtCore, QtGui


_ROUND_STYLE = (
    "QToolButton{{border:1px solid {border};border-radius:{radius}px;padding:0;font-weight:bold;"
    "color:{fg};background:{bg};}}QToolButton:hover{{background:{hover};}}"
)


def _round_button(text: str, tip: str, diameter: int, **colors) -> QtWidgets.QToolButton:
    b = QtWidgets.QToolButton(); b.setText(text); b.setCursor(QtCore.Qt.PointingHandCursor)
    b.setToolTip(tip); b.setFixedSize(diameter, diameter)
    b.setStyleSheet(_ROUND_STYLE.format(radius=diameter // 2, **colors))
    return b

def mk_info(text: str) -> QtWidgets.QToolButton:
    b = _round_button("i", text, 20, border="#7aa7c7", fg="#2b6ea8", bg="#e6f2fb", hover="#d8ecfa")
    b.setToolTipDuration(0)
    return b

def mk_reset(cb) -> QtWidgets.QToolButton:
    b = _round_button("↺", "Valeur par défaut", 22, border="#9aa5b1", fg="#2b2b2b", bg="#f2f4f7", hover="#e9edf2")
    b.clicked.connect(lambda checked=False: cb())
    return b

def row(form: QtWidgets.QFormLayout, label: str, widget: QtWidgets.QWidget, tip: str, reset_cb=None) -> QtWidgets.QWidget:
    """Add ``label | widget [reset] (i)`` to ``form`` and return the field container."""
    field = QtWidgets.QWidget()
    h = QtWidgets.QHBoxLayout(field); h.setContentsMargins(0,0,0,0); h.setSpacing(6)
    h.addWidget(widget, 1)
    if reset_cb is not None:
        h.addWidget(mk_reset(reset_cb))
    h.addWidget(mk_info(tip))
    form.addRow(QtWidgets.QLabel(label), field)
    return field


class ColorField(QtWidgets.QWidget):
    """Hex line edit with a picker button; emits ``changed`` with the hex text."""

    changed = QtCore.pyqtSignal(str)

    def __init__(self, value: str, title: str = "Couleur"):
        super().__init__()
        self._title = title
        self.edit = QtWidgets.QLineEdit(value)
        self.button = QtWidgets.QPushButton("Pick")
        self.button.clicked.connect(self._pick)
        lay = QtWidgets.QHBoxLayout(self); lay.setContentsMargins(0,0,0,0); lay.setSpacing(4)
        lay.addWidget(self.edit, 1); lay.addWidget(self.button, 0)
        self.edit.editingFinished.connect(lambda: self.changed.emit(self.text()))

    def text(self) -> str:
        return self.edit.text().strip()

    def setText(self, value: str) -> None:
        self.edit.setText(value)
        self.changed.emit(self.text())

    def _pick(self):
        dlg = QtWidgets.QColorDialog(QtGui.QColor(self.text()), self)
        dlg.setWindowTitle(self._title)
        dlg.setOption(QtWidgets.QColorDialog.ShowAlphaChannel, False)
        if dlg.exec_() == QtWidgets.QDialog.Accepted:
            self.setText(dlg.selectedColor().name().upper())
