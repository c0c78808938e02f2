from ..core.options import default_chart_state

DEFAULTS = default_chart_state()

TOOLTIPS = {
    "graph.maxScore":"Score correspondant au bord du graphe ; les scores supérieurs dépassent le cercle.",
    "graph.pointRadius":"Rayon des pastilles dessinées sur chaque point.",
    "graph.lineWidth":"Épaisseur de la ligne reliant les points.",
    "graph.markerStrokeWidth":"Épaisseur du contour des pastilles.",
    "graph.markerStrokeColor":"Couleur du contour des pastilles.",
    "graph.lineColor":"Couleur de la ligne lorsqu’aucun dégradé n’est actif.",
    "graph.minPointCount":"Nombre minimum de points pour dessiner le graphe (0 = toujours).",
    "palette.ok":"Couleur des points dont le score atteint la moyenne.",
    "palette.warning":"Couleur des points sous la moyenne.",
    "palette.danger":"Couleur des points prioritaires.",
    "gradient.colors":"Couleurs et positions du dégradé conique (ex. #F00@0,#00F@1). Vide = couleurs des points.",
    "gradient.startAngle":"Angle de départ du dégradé conique (degrés, 0 = 3 h).",
    "gradient.endAngle":"Angle de fin du dégradé conique (degrés).",
    "gradient.native":"Utilise le dégradé conique natif de Qt au lieu des traits radiaux.",
    "features.backgroundConicGradient":"Colore la ligne avec un dégradé conique unique.",
    "features.perSegmentGradientLines":"Dégradé linéaire entre les couleurs de chaque paire de points.",
    "features.averageAnnotations":"Affiche un repère à la position de la moyenne de chaque point.",
    "features.annotationSize":"Taille des repères de moyenne en pixels.",
}
