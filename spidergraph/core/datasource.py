"""Data source contract feeding the chart, and the loader normalizing it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, Union

from .diagnostics import debug

__all__ = ["GraphDataSource", "GraphPoint", "StaticDataSource", "load_points"]


@dataclass(frozen=True)
class GraphPoint:
    """One measured quantity: its score, the reference average and the priority flag."""

    score: float
    average: float
    is_priority: bool = False


PointLike = Union[GraphPoint, Tuple[float, float], Tuple[float, float, bool]]


class GraphDataSource(Protocol):
    def point_count(self) -> int: ...

    def point_at(self, index: int) -> GraphPoint: ...


def _as_point(entry: PointLike) -> GraphPoint:
    if isinstance(entry, GraphPoint):
        return entry
    score, average, *rest = entry
    return GraphPoint(float(score), float(average), bool(rest[0]) if rest else False)


class StaticDataSource:
    """List-backed data source, handy for demos and tests."""

    def __init__(self, points: Iterable[PointLike] = ()) -> None:
        self._points: List[GraphPoint] = [_as_point(p) for p in points]

    @classmethod
    def from_columns(
        cls,
        scores: Sequence[float],
        averages: Sequence[float],
        priorities: Optional[Sequence[bool]] = None,
    ) -> "StaticDataSource":
        flags = list(priorities) if priorities is not None else [False] * len(scores)
        return cls(GraphPoint(float(s), float(a), bool(p)) for s, a, p in zip(scores, averages, flags))

    def point_count(self) -> int:
        return len(self._points)

    def point_at(self, index: int) -> GraphPoint:
        return self._points[index]


def load_points(source: Optional[GraphDataSource]) -> List[GraphPoint]:
    """Fetch every point from ``source`` once.

    A missing source or a negative count yields no points. Negative scores are
    clamped to zero.
    """

    if source is None:
        return []
    count = max(int(source.point_count()), 0)
    points: List[GraphPoint] = []
    for index in range(count):
        point = _as_point(source.point_at(index))
        if point.score < 0.0:
            debug(f"point {index} has a negative score ({point.score:g}), clamped to 0")
            point = GraphPoint(0.0, point.average, point.is_priority)
        points.append(point)
    return points
