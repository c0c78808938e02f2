import math

from PyQt5 import QtWidgets, QtCore

from .widgets import row, ColorField
from .config import DEFAULTS, TOOLTIPS


class GraphTab(QtWidgets.QWidget):
    """Form editing every section of the chart state.

    Angles are edited in degrees and pushed in radians.
    """

    changed = QtCore.pyqtSignal(dict)

    def __init__(self):
        super().__init__()
        g, p, gr, f = DEFAULTS["graph"], DEFAULTS["palette"], DEFAULTS["gradient"], DEFAULTS["features"]
        outer = QtWidgets.QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(8)

        # Graphe
        box_graph = QtWidgets.QGroupBox("Graphe")
        fl = QtWidgets.QFormLayout(box_graph)
        self.sp_max = QtWidgets.QDoubleSpinBox(); self.sp_max.setRange(0.0, 100000.0); self.sp_max.setValue(g["maxScore"])
        self.sp_point = QtWidgets.QDoubleSpinBox(); self.sp_point.setRange(0.0, 50.0); self.sp_point.setSingleStep(0.5); self.sp_point.setValue(g["pointRadius"])
        self.sp_line = QtWidgets.QDoubleSpinBox(); self.sp_line.setRange(0.0, 20.0); self.sp_line.setSingleStep(0.5); self.sp_line.setValue(g["lineWidth"])
        self.sp_stroke = QtWidgets.QDoubleSpinBox(); self.sp_stroke.setRange(0.0, 10.0); self.sp_stroke.setSingleStep(0.5); self.sp_stroke.setValue(g["markerStrokeWidth"])
        self.cf_stroke = ColorField(g["markerStrokeColor"], "Contour des pastilles")
        self.cf_line = ColorField(g["lineColor"], "Couleur de ligne")
        self.sp_min = QtWidgets.QSpinBox(); self.sp_min.setRange(0, 64); self.sp_min.setValue(g["minPointCount"])
        row(fl, "Score max", self.sp_max, TOOLTIPS["graph.maxScore"], lambda: self.sp_max.setValue(g["maxScore"]))
        row(fl, "Rayon des pastilles", self.sp_point, TOOLTIPS["graph.pointRadius"], lambda: self.sp_point.setValue(g["pointRadius"]))
        row(fl, "Épaisseur de ligne", self.sp_line, TOOLTIPS["graph.lineWidth"], lambda: self.sp_line.setValue(g["lineWidth"]))
        row(fl, "Contour des pastilles", self.sp_stroke, TOOLTIPS["graph.markerStrokeWidth"], lambda: self.sp_stroke.setValue(g["markerStrokeWidth"]))
        row(fl, "Couleur du contour", self.cf_stroke, TOOLTIPS["graph.markerStrokeColor"], lambda: self.cf_stroke.setText(g["markerStrokeColor"]))
        row(fl, "Couleur de ligne", self.cf_line, TOOLTIPS["graph.lineColor"], lambda: self.cf_line.setText(g["lineColor"]))
        row(fl, "Points minimum", self.sp_min, TOOLTIPS["graph.minPointCount"], lambda: self.sp_min.setValue(g["minPointCount"]))
        outer.addWidget(box_graph)

        # Palette
        box_palette = QtWidgets.QGroupBox("Palette")
        fl = QtWidgets.QFormLayout(box_palette)
        self.cf_ok = ColorField(p["ok"], "Couleur OK")
        self.cf_warning = ColorField(p["warning"], "Couleur alerte")
        self.cf_danger = ColorField(p["danger"], "Couleur prioritaire")
        row(fl, "Atteint la moyenne", self.cf_ok, TOOLTIPS["palette.ok"], lambda: self.cf_ok.setText(p["ok"]))
        row(fl, "Sous la moyenne", self.cf_warning, TOOLTIPS["palette.warning"], lambda: self.cf_warning.setText(p["warning"]))
        row(fl, "Prioritaire", self.cf_danger, TOOLTIPS["palette.danger"], lambda: self.cf_danger.setText(p["danger"]))
        outer.addWidget(box_palette)

        # Dégradé
        box_gradient = QtWidgets.QGroupBox("Dégradé conique")
        fl = QtWidgets.QFormLayout(box_gradient)
        self.ed_colors = QtWidgets.QLineEdit(gr["colors"])
        self.sp_start = QtWidgets.QDoubleSpinBox(); self.sp_start.setRange(-720.0, 720.0); self.sp_start.setValue(math.degrees(gr["startAngle"]))
        self.sp_end = QtWidgets.QDoubleSpinBox(); self.sp_end.setRange(-720.0, 720.0); self.sp_end.setValue(math.degrees(gr["endAngle"]))
        self.chk_native = QtWidgets.QCheckBox(); self.chk_native.setChecked(gr["native"])
        row(fl, "Couleurs", self.ed_colors, TOOLTIPS["gradient.colors"], lambda: self.ed_colors.setText(gr["colors"]))
        row(fl, "Angle de départ (°)", self.sp_start, TOOLTIPS["gradient.startAngle"], lambda: self.sp_start.setValue(math.degrees(gr["startAngle"])))
        row(fl, "Angle de fin (°)", self.sp_end, TOOLTIPS["gradient.endAngle"], lambda: self.sp_end.setValue(math.degrees(gr["endAngle"])))
        row(fl, "Dégradé natif", self.chk_native, TOOLTIPS["gradient.native"], lambda: self.chk_native.setChecked(gr["native"]))
        outer.addWidget(box_gradient)

        # Variantes
        box_features = QtWidgets.QGroupBox("Variantes")
        fl = QtWidgets.QFormLayout(box_features)
        self.chk_background = QtWidgets.QCheckBox(); self.chk_background.setChecked(f["backgroundConicGradient"])
        self.chk_segments = QtWidgets.QCheckBox(); self.chk_segments.setChecked(f["perSegmentGradientLines"])
        self.chk_annotations = QtWidgets.QCheckBox(); self.chk_annotations.setChecked(f["averageAnnotations"])
        self.sp_annotation = QtWidgets.QDoubleSpinBox(); self.sp_annotation.setRange(1.0, 64.0); self.sp_annotation.setValue(f["annotationSize"])
        row(fl, "Dégradé de fond", self.chk_background, TOOLTIPS["features.backgroundConicGradient"], lambda: self.chk_background.setChecked(f["backgroundConicGradient"]))
        row(fl, "Dégradé par segment", self.chk_segments, TOOLTIPS["features.perSegmentGradientLines"], lambda: self.chk_segments.setChecked(f["perSegmentGradientLines"]))
        row(fl, "Repères de moyenne", self.chk_annotations, TOOLTIPS["features.averageAnnotations"], lambda: self.chk_annotations.setChecked(f["averageAnnotations"]))
        row(fl, "Taille des repères", self.sp_annotation, TOOLTIPS["features.annotationSize"], lambda: self.sp_annotation.setValue(f["annotationSize"]))
        outer.addWidget(box_features)
        outer.addStretch(1)

        for w in [self.sp_max, self.sp_point, self.sp_line, self.sp_stroke, self.sp_min, self.sp_start, self.sp_end, self.sp_annotation]:
            w.valueChanged.connect(self.emit_delta)
        for w in [self.chk_native, self.chk_background, self.chk_segments, self.chk_annotations]:
            w.stateChanged.connect(self.emit_delta)
        for w in [self.cf_stroke, self.cf_line, self.cf_ok, self.cf_warning, self.cf_danger]:
            w.changed.connect(self.emit_delta)
        self.ed_colors.editingFinished.connect(self.emit_delta)

    def collect(self):
        return {
            "graph": dict(
                maxScore=self.sp_max.value(), pointRadius=self.sp_point.value(), lineWidth=self.sp_line.value(),
                markerStrokeWidth=self.sp_stroke.value(), markerStrokeColor=self.cf_stroke.text(),
                lineColor=self.cf_line.text(), minPointCount=self.sp_min.value(),
            ),
            "palette": dict(ok=self.cf_ok.text(), warning=self.cf_warning.text(), danger=self.cf_danger.text()),
            "gradient": dict(
                colors=self.ed_colors.text().strip(), startAngle=math.radians(self.sp_start.value()),
                endAngle=math.radians(self.sp_end.value()), native=self.chk_native.isChecked(),
            ),
            "features": dict(
                backgroundConicGradient=self.chk_background.isChecked(),
                perSegmentGradientLines=self.chk_segments.isChecked(),
                averageAnnotations=self.chk_annotations.isChecked(),
                annotationSize=self.sp_annotation.value(),
            ),
        }

    def set_state(self, cfg):
        cfg = cfg or {}
        g = {**DEFAULTS["graph"], **cfg.get("graph", {})}
        p = {**DEFAULTS["palette"], **cfg.get("palette", {})}
        gr = {**DEFAULTS["gradient"], **cfg.get("gradient", {})}
        f = {**DEFAULTS["features"], **cfg.get("features", {})}
        values = [
            (self.sp_max, float(g["maxScore"])), (self.sp_point, float(g["pointRadius"])),
            (self.sp_line, float(g["lineWidth"])), (self.sp_stroke, float(g["markerStrokeWidth"])),
            (self.sp_min, int(g["minPointCount"])), (self.sp_start, math.degrees(float(gr["startAngle"]))),
            (self.sp_end, math.degrees(float(gr["endAngle"]))), (self.sp_annotation, float(f["annotationSize"])),
        ]
        for w, v in values:
            with QtCore.QSignalBlocker(w):
                w.setValue(v)
        checks = [
            (self.chk_native, gr["native"]), (self.chk_background, f["backgroundConicGradient"]),
            (self.chk_segments, f["perSegmentGradientLines"]), (self.chk_annotations, f["averageAnnotations"]),
        ]
        for w, v in checks:
            with QtCore.QSignalBlocker(w):
                w.setChecked(bool(v))
        fields = [
            (self.cf_stroke, g["markerStrokeColor"]), (self.cf_line, g["lineColor"]),
            (self.cf_ok, p["ok"]), (self.cf_warning, p["warning"]), (self.cf_danger, p["danger"]),
        ]
        for w, v in fields:
            with QtCore.QSignalBlocker(w):
                w.setText(str(v))
        with QtCore.QSignalBlocker(self.ed_colors):
            self.ed_colors.setText(str(gr["colors"] or ""))

    def emit_delta(self, *a):
        self.changed.emit(self.collect())
