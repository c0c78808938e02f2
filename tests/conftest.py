import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5 import QtWidgets

from spidergraph.core.datasource import GraphPoint, StaticDataSource


@pytest.fixture(scope="session")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def scenario_points():
    scores = [75, 69, 100, 51, 56]
    averages = [90, 50, 75, 50, 60]
    priorities = [False, False, False, True, True]
    return [GraphPoint(s, a, p) for s, a, p in zip(scores, averages, priorities)]


@pytest.fixture
def scenario_source(scenario_points):
    return StaticDataSource(scenario_points)
