"""Color helpers used by the layout engine and the conical gradient renderer."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from PyQt5 import QtGui

ColorLike = Union[QtGui.QColor, str, Tuple[int, int, int], Tuple[int, int, int, int]]

__all__ = [
    "clamp01",
    "color_to_hex",
    "hex_to_color",
    "hue_color",
    "lerp_color",
    "order_stops",
    "parse_color_stops",
    "parse_hex",
    "to_color",
]


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def parse_hex(value: object) -> Optional[QtGui.QColor]:
    """Parse ``#RGB``, ``#RRGGBB`` or ``#AARRGGBB``; ``None`` when malformed."""

    text = str(value or "").strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) not in (6, 8):
        return None
    try:
        number = int(text, 16)
    except ValueError:
        return None
    alpha = (number >> 24) & 255 if len(text) == 8 else 255
    return QtGui.QColor((number >> 16) & 255, (number >> 8) & 255, number & 255, alpha)


def hex_to_color(value: str, fallback: Optional[QtGui.QColor] = None) -> QtGui.QColor:
    """Like :func:`parse_hex` but returns a copy of ``fallback`` (opaque black by default)."""

    color = parse_hex(value)
    if color is not None:
        return color
    return QtGui.QColor(fallback) if fallback is not None else QtGui.QColor(0, 0, 0)


def color_to_hex(color: QtGui.QColor) -> str:
    if color.alpha() < 255:
        return f"#{color.alpha():02X}{color.red():02X}{color.green():02X}{color.blue():02X}"
    return f"#{color.red():02X}{color.green():02X}{color.blue():02X}"


def to_color(value: object, fallback: Optional[QtGui.QColor] = None) -> QtGui.QColor:
    """Return ``value`` as a new :class:`QColor` (hex text, RGB(A) tuple or QColor)."""

    if isinstance(value, QtGui.QColor):
        return QtGui.QColor(value)
    if isinstance(value, str):
        return hex_to_color(value, fallback)
    if isinstance(value, Sequence) and len(value) in (3, 4):
        try:
            channels = [max(0, min(255, int(c))) for c in value]
        except (TypeError, ValueError):
            channels = []
        if channels:
            return QtGui.QColor(*channels)
    return QtGui.QColor(fallback) if fallback is not None else QtGui.QColor(0, 0, 0)


def lerp_color(start: QtGui.QColor, end: QtGui.QColor, t: float) -> QtGui.QColor:
    """Interpolate each RGBA channel independently: ``a + t * (b - a)``."""

    r1, g1, b1, a1 = start.getRgbF()
    r2, g2, b2, a2 = end.getRgbF()
    return QtGui.QColor.fromRgbF(
        clamp01(r1 + t * (r2 - r1)),
        clamp01(g1 + t * (g2 - g1)),
        clamp01(b1 + t * (b2 - b1)),
        clamp01(a1 + t * (a2 - a1)),
    )


def hue_color(fraction: float) -> QtGui.QColor:
    """Fully saturated, full brightness color whose hue is ``fraction`` of a turn."""

    hue = fraction % 1.0
    return QtGui.QColor.fromHsvF(hue, 1.0, 1.0, 1.0)


def order_stops(
    colors: Sequence[QtGui.QColor], locations: Sequence[float]
) -> Tuple[List[QtGui.QColor], List[float]]:
    """Clamp locations into [0, 1] and sort the stops by location.

    The sort is stable, so stops sharing a location keep their order.
    """

    pairs = sorted(zip(colors, (clamp01(float(v)) for v in locations)), key=lambda entry: entry[1])
    return [color for color, _ in pairs], [location for _, location in pairs]


def parse_color_stops(value: object) -> Tuple[List[QtGui.QColor], List[float]]:
    """Split a stop description into parallel color and location lists.

    ``value`` is either text such as ``"#F00@0,#0F0@0.5,#00F@1"`` or a
    sequence of colors. Locations are only returned when every entry carries
    one, in which case the stops come back sorted by location; otherwise the
    list is empty and the stops are spread uniformly by the renderer.
    """

    if not value:
        return [], []
    if isinstance(value, str):
        entries = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, Sequence):
        entries = list(value)
    else:
        return [], []

    colors: List[QtGui.QColor] = []
    locations: List[Optional[float]] = []
    for entry in entries:
        if isinstance(entry, str) and "@" in entry:
            color, pos = entry.split("@", 1)
            try:
                location: Optional[float] = clamp01(float(pos))
            except ValueError:
                location = None
            colors.append(hex_to_color(color))
            locations.append(location)
        else:
            colors.append(to_color(entry))
            locations.append(None)

    if any(loc is None for loc in locations):
        return colors, []
    return order_stops(colors, locations)  # type: ignore[arg-type]
