import random

import numpy as np
from scipy.spatial import ConvexHull

from hull import convex_hull
from qtcore_shim import QPointF
from utils_geom import polygon_signed_area


def _items(coords):
    return [(i, QPointF(x, y)) for i, (x, y) in enumerate(coords)]


def test_fewer_than_three_points_returned_unchanged():
    assert convex_hull(_items([(0, 0), (5, 5)])) == [0, 1]
    assert convex_hull([]) == []


def test_anchor_is_max_y_then_min_x():
    coords = [(0, -100), (-87, 50), (87, 50)]
    hull = convex_hull(_items(coords))
    assert hull[0] == 1
    assert sorted(hull) == [0, 1, 2]


def test_output_is_ccw_and_drops_interior_points():
    coords = [(0, 0), (10, 0), (10, 10), (0, 10), (5, 5), (3, 7)]
    hull = convex_hull(_items(coords))
    assert sorted(hull) == [0, 1, 2, 3]
    pts = [QPointF(*coords[i]) for i in hull]
    assert polygon_signed_area(pts) > 0


def test_collinear_boundary_points_are_dropped():
    coords = [(0, 0), (5, 0), (10, 0), (10, 10), (0, 10)]
    assert sorted(convex_hull(_items(coords))) == [0, 2, 3, 4]


def test_coincident_points_keep_distinct_keys():
    # Same coordinates, different keys: at most one may survive.
    coords = [(0, 0), (10, 0), (5, 8), (5, 8)]
    hull = convex_hull(_items(coords))
    assert len(hull) == 3
    assert len({2, 3} & set(hull)) == 1


def test_deterministic_order():
    rng = random.Random(3)
    coords = [(rng.uniform(-100, 100), rng.uniform(-100, 100)) for _ in range(60)]
    assert convex_hull(_items(coords)) == convex_hull(_items(coords))


def test_matches_scipy_hull():
    rng = random.Random(11)
    coords = [(rng.uniform(-500, 500), rng.uniform(-500, 500)) for _ in range(200)]
    ours = set(convex_hull(_items(coords)))
    theirs = set(ConvexHull(np.array(coords)).vertices.tolist())
    assert ours == theirs
