import pytest

from periphery import Periphery
from qtcore_shim import QPointF
from vertex import Vertex


def make_vertices(coords):
    return [Vertex(i, QPointF(x, y), i + 1) for i, (x, y) in enumerate(coords)]


def make_periphery(indices):
    p = Periphery()
    p.initialize(indices)
    return p


def test_extract_segment_forward_wrap_and_single():
    p = make_periphery([10, 11, 12, 13, 14])
    assert p.extractSegment(1, 3) == [11, 12, 13]
    assert p.extractSegment(3, 1) == [13, 14, 10, 11]
    assert p.extractSegment(2, 2) == [12]
    # Full cycle: end just before start
    assert p.extractSegment(2, 1) == [12, 13, 14, 10, 11]


def test_extract_segment_out_of_range():
    p = make_periphery([0, 1, 2])
    with pytest.raises(ValueError):
        p.extractSegment(0, 3)


def test_get_segment_by_vertex():
    p = make_periphery([10, 11, 12, 13])
    assert p.getSegment(13, 11) == [13, 10, 11]
    assert p.getSegment(13, 99) is None


def test_replace_segment_keeps_arc_endpoints():
    p = make_periphery([0, 1, 2, 3, 4])
    assert p.replaceSegment(1, 3, 9) == (0, 1, 9, 3, 4)
    assert p.indexOf(2) == -1
    assert p.validate()


def test_replace_segment_wraparound():
    p = make_periphery([0, 1, 2, 3, 4])
    # Arc 3, 4, 0, 1 crosses the array boundary
    assert p.replaceSegment(3, 1, 9) == (1, 2, 3, 9)
    assert p.matchesCycle([3, 9, 1, 2])


def test_replace_segment_full_cycle():
    p = make_periphery([0, 1, 2, 3])
    p.replaceSegment(0, 3, 9)
    assert p.matchesCycle([0, 9, 3])
    p = make_periphery([0, 1, 2, 3])
    p.replaceSegment(2, 1, 9)
    assert p.matchesCycle([2, 9, 1])


def test_replace_segment_rejects_bad_arguments():
    p = make_periphery([0, 1, 2])
    with pytest.raises(ValueError):
        p.replaceSegment(1, 1, 9)
    with pytest.raises(ValueError):
        p.replaceSegment(0, 1, 2)


def test_ensure_clockwise_reverses_ccw_cycle():
    verts = make_vertices([(0, 0), (10, 0), (10, 10), (0, 10)])
    p = make_periphery([0, 1, 2, 3])  # CCW
    assert p.ensureClockwise(verts)
    assert p.signedArea(verts) < 0
    assert not p.ensureClockwise(verts)


def test_recompute_is_cw_hull_of_visible_vertices():
    verts = make_vertices([(0, 0), (10, 0), (10, 10), (0, 10), (5, 5), (50, 50)])
    verts[5].setVisible(False)
    p = Periphery()
    p.recompute(verts)
    assert sorted(p.getIndices()) == [0, 1, 2, 3]
    assert p.signedArea(verts) < 0


def test_recompute_keeps_previous_start():
    verts = make_vertices([(0, 0), (10, 0), (10, 10), (0, 10)])
    p = make_periphery([2, 1, 0, 3])
    p.recompute(verts)
    assert p.getIndices()[0] == 2
    p.recompute(verts, preferStart=0)
    assert p.getIndices() == (0, 3, 2, 1)


def test_recompute_distinguishes_coincident_vertices():
    verts = make_vertices([(0, 0), (10, 0), (5, 8), (5, 8)])
    p = Periphery()
    p.recompute(verts)
    assert p.size() == 3
    assert p.contains(0) and p.contains(1)


def test_matches_cycle_is_rotation_insensitive_but_directional():
    p = make_periphery([0, 1, 2, 3])
    assert p.matchesCycle([2, 3, 0, 1])
    assert not p.matchesCycle([3, 2, 1, 0])
    assert not p.matchesCycle([0, 1, 2])


def test_is_contiguous():
    p = make_periphery([0, 1, 2, 3])
    assert p.isContiguous([3, 0, 1])
    assert not p.isContiguous([0, 2])
