import math

import pytest

from graph import Graph
from placement import PlacementSearch, PlacementConfig
from qtcore_shim import QPointF
from utils_geom import distance


def test_candidate_schedule_interleaves_angle_and_radius(graph):
    cands = graph.search.candidates([1, 2])
    assert len(cands) == 32
    # Outward from the graph center (0, 0) through the V2-V3 centroid (0, 50)
    assert cands[0].toTuple() == pytest.approx((0.0, 130.0))
    # Attempt 1: distance 100, rotated by 45 degrees
    d = cands[1] - QPointF(0.0, 50.0)
    assert math.hypot(d.x(), d.y()) == pytest.approx(100.0)
    assert math.atan2(d.y(), d.x()) == pytest.approx(math.pi / 2 + math.pi / 4)
    # Attempt 8 returns to the base direction at distance 240
    assert cands[8].toTuple() == pytest.approx((0.0, 290.0))


def test_zero_direction_falls_back_to_x_axis(graph):
    # Full triangle: segment centroid equals the graph center
    cands = graph.search.candidates([0, 1, 2])
    assert cands[0].toTuple() == pytest.approx((80.0, 0.0))


def test_find_returns_first_valid_candidate(graph):
    pos = graph.search.find([1, 2])
    assert pos.toTuple() == pytest.approx((0.0, 130.0))


def test_find_result_honours_clearances(square_graph):
    g = square_graph
    seg = g.periphery.getSegment(2, 0)
    pos = g.search.find(seg)
    assert pos is not None
    for v in g.vertices:
        assert distance(pos, v.getPosition()) >= 50.0
    assert g.search.validate_basic(pos) is None
    assert g.search.find_crossing(pos, seg) is None


def test_find_rejects_short_segment(graph):
    assert graph.search.find([1]) is None


def test_validate_basic_reasons(graph):
    s = graph.search
    assert "too close to existing vertex" in s.validate_basic(QPointF(0.0, -80.0))
    assert "too close to existing edge" in s.validate_basic(QPointF(0.0, 40.0))
    assert "outside current graph" in s.validate_basic(QPointF(0.0, 0.0))
    assert s.validate_basic(QPointF(0.0, 300.0)) is None


def test_find_crossing_names_the_blocking_edge(graph):
    # Joining (0, 130) to V1 passes straight through the V2-V3 edge
    msg = graph.search.find_crossing(QPointF(0.0, 130.0), [0])
    assert msg == "New edge would intersect existing edge V2-V3"
    assert graph.search.find_crossing(QPointF(0.0, 130.0), [1, 2]) is None


def test_exhausted_budget_returns_none(ringed_triangle):
    g = ringed_triangle
    assert g.search.find([1, 2, 0]) is None


def test_search_does_not_mutate(square_graph):
    before = square_graph.snapshot()
    square_graph.search.find([0, 1])
    square_graph.previewPlacement([0, 1])
    assert square_graph.snapshot() == before


def test_custom_config_budget():
    cfg = PlacementConfig(max_attempts=4, angular_steps=4)
    g = Graph(seed=1)
    s = PlacementSearch(g, cfg)
    cands = s.candidates([1, 2])
    assert len(cands) == 4
    assert cands[1].toTuple() == pytest.approx((-100.0, 50.0))


def test_find_crossing_reports_overlapping_new_edges():
    # From (0, 200) the edge to (0, 0) runs straight through (0, 50)
    g = Graph.fromGeometry([(0.0, 0.0), (0.0, 50.0), (-40.0, 25.0)], [], seed=1)
    assert g.search.find_crossing(QPointF(0.0, 200.0), [0, 1]) == "New edges would intersect each other"
    assert g.search.find_crossing(QPointF(0.0, 200.0), [1, 2]) is None
