import pytest

from spidergraph.core.datasource import GraphPoint, StaticDataSource, load_points


class _BrokenCountSource:
    def point_count(self):
        return -3

    def point_at(self, index):
        raise AssertionError("point_at must not be called")


class TestStaticDataSource:

    def test_accepts_points_and_tuples(self):
        source = StaticDataSource([GraphPoint(1, 2), (3, 4), (5, 6, True)])
        assert source.point_count() == 3
        assert source.point_at(1) == GraphPoint(3.0, 4.0, False)
        assert source.point_at(2).is_priority is True

    def test_from_columns(self):
        source = StaticDataSource.from_columns([10, 20], [15, 15], [False, True])
        assert [source.point_at(i) for i in range(2)] == [
            GraphPoint(10.0, 15.0, False),
            GraphPoint(20.0, 15.0, True),
        ]

    def test_from_columns_without_priorities(self):
        source = StaticDataSource.from_columns([1, 2, 3], [0, 0, 0])
        assert not any(source.point_at(i).is_priority for i in range(3))


class TestLoadPoints:

    def test_none_source_yields_nothing(self):
        assert load_points(None) == []

    def test_negative_count_is_treated_as_empty(self):
        assert load_points(_BrokenCountSource()) == []

    def test_loads_in_index_order(self, scenario_source, scenario_points):
        assert load_points(scenario_source) == scenario_points

    def test_negative_score_is_clamped(self, capsys):
        points = load_points(StaticDataSource([(-5, 10, True)]))
        assert points == [GraphPoint(0.0, 10.0, True)]
        assert "[SpiderGraph][DEBUG]" in capsys.readouterr().out

    @pytest.mark.parametrize("score", [0, 100, 250])
    def test_non_negative_scores_are_kept(self, score):
        assert load_points(StaticDataSource([(score, 50)]))[0].score == score
