import math

import pytest

from graph import Graph
from helpers import TRIANGLE, TRIANGLE_EDGES


@pytest.fixture
def graph():
    return Graph(seed=1234)


@pytest.fixture
def square_graph(graph):
    """Base triangle plus V4 below the V2-V3 edge: periphery V1, V2, V4, V3."""
    graph.beginManualSelection(1)
    res = graph.toggleSelection(2)
    assert res.ok, res.message
    return graph


@pytest.fixture
def ringed_triangle():
    """
    Base triangle enclosed by a hidden 16-gon of radius 110. Hidden edges
    still count for crossings, so no vertex outside the triangle's margin can
    reach all three corners.
    """
    ring = [(110.0 * math.cos(2 * math.pi * k / 16), 110.0 * math.sin(2 * math.pi * k / 16))
            for k in range(16)]
    edges = TRIANGLE_EDGES + [(3 + k, 3 + (k + 1) % 16) for k in range(16)]
    g = Graph.fromGeometry(TRIANGLE + ring, edges, seed=5)
    g.setVisibilityThreshold(3)
    return g


@pytest.fixture
def crossed_far_away():
    """Base triangle plus a hidden X of two crossing edges far from it."""
    far = [(1000.0, 1000.0), (1100.0, 1100.0), (1000.0, 1100.0), (1100.0, 1000.0)]
    g = Graph.fromGeometry(TRIANGLE + far, TRIANGLE_EDGES + [(3, 4), (5, 6)], seed=5)
    g.setVisibilityThreshold(3)
    return g
