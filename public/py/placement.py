# placement.py
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import structlog

from hull import convex_hull
from qtcore_shim import QPointF
from utils_geom import (
    v_add, v_sub, v_scale, normalize_or, rotate, polygon_centroid,
    expand_polygon, point_in_polygon, segments_intersect, edges_share_endpoint, rays_overlap,
    SHARED_ENDPOINT_TOL,
)

logger = structlog.get_logger()


@dataclass
class PlacementConfig:
    # Clearances (world units)
    min_vertex_distance: float = 50.0
    min_edge_distance: float = 30.0
    hull_margin: float = 40.0

    # Search schedule: attempt k sits at base + k*step, rotated (k % angular_steps) * 2pi/angular_steps
    base_distance: float = 80.0
    distance_step: float = 20.0
    max_attempts: int = 32
    angular_steps: int = 8

    shared_endpoint_tol: float = SHARED_ENDPOINT_TOL


class _Clearance:
    """Visible geometry packed into arrays once per search."""

    __slots__ = ("points", "edge_a", "edge_b", "hull")

    def __init__(self, graph, margin: float):
        vis = [v for v in graph.vertices if v.isVisible()]
        self.points = np.array([v.getPosition().toTuple() for v in vis], dtype=float).reshape(-1, 2)

        a, b = [], []
        for e in graph.edges:
            u, w = graph.vertices[e.getStartIndex()], graph.vertices[e.getEndIndex()]
            if u.isVisible() and w.isVisible():
                a.append(u.getPosition().toTuple())
                b.append(w.getPosition().toTuple())
        self.edge_a = np.array(a, dtype=float).reshape(-1, 2)
        self.edge_b = np.array(b, dtype=float).reshape(-1, 2)

        hull_keys = convex_hull([(v.getIndex(), v.getPosition()) for v in vis])
        if len(hull_keys) >= 3:
            self.hull = expand_polygon([graph.vertices[i].getPosition() for i in hull_keys], margin)
        else:
            self.hull = None

    def nearest_vertex(self, c: np.ndarray) -> float:
        if not len(self.points):
            return math.inf
        d = self.points - c
        return float(np.min(np.hypot(d[:, 0], d[:, 1])))

    def nearest_edge(self, c: np.ndarray) -> float:
        if not len(self.edge_a):
            return math.inf
        ab = self.edge_b - self.edge_a
        denom = np.einsum("ij,ij->i", ab, ab)
        safe = np.where(denom > 0.0, denom, 1.0)
        t = np.einsum("ij,ij->i", c - self.edge_a, ab) / safe
        t = np.where(denom > 0.0, np.clip(t, 0.0, 1.0), 0.0)
        q = self.edge_a + t[:, None] * ab
        d = c - q
        return float(np.min(np.hypot(d[:, 0], d[:, 1])))


class PlacementSearch:
    """
    Finds a spot for a new vertex joined to every vertex of a periphery segment.

    Candidates fan out from the segment centroid along the direction pointing
    away from the graph center: 8 angular offsets interleaved with growing
    radii. Cheap clearance checks run first; the crossing scan over all stored
    edges only runs for candidates that pass them.

    Read-only: never touches the graph it inspects.
    """

    def __init__(self, graph, config: Optional[PlacementConfig] = None):
        self.graph = graph
        self.config = config or PlacementConfig()

    # --------------------------
    # Search
    # --------------------------
    def candidates(self, segment: Sequence[int]) -> List[QPointF]:
        """The full ordered candidate schedule for segment."""
        cfg = self.config
        verts = self.graph.vertices
        centroid = polygon_centroid([verts[i].getPosition() for i in segment])
        center = polygon_centroid([v.getPosition() for v in verts if v.isVisible()])
        direction = normalize_or(v_sub(centroid, center))

        step_angle = 2.0 * math.pi / cfg.angular_steps
        out = []
        for k in range(cfg.max_attempts):
            dist = cfg.base_distance + k * cfg.distance_step
            d = rotate(direction, (k % cfg.angular_steps) * step_angle)
            out.append(v_add(centroid, v_scale(d, dist)))
        return out

    def find(self, segment: Sequence[int]) -> Optional[QPointF]:
        """First candidate passing every check, or None once the budget is spent."""
        segment = list(segment)
        if len(segment) < 2:
            return None

        clearance = _Clearance(self.graph, self.config.hull_margin)
        rejected = {"vertex": 0, "edge": 0, "hull": 0, "crossing": 0}
        for attempt, cand in enumerate(self.candidates(segment)):
            reason = self._basic_reason(cand, clearance)
            if reason is not None:
                rejected[reason] += 1
                continue
            if self.find_crossing(cand, segment) is not None:
                rejected["crossing"] += 1
                continue
            logger.debug("placement found", attempt=attempt, x=cand.x(), y=cand.y(), segment=len(segment))
            return cand

        logger.debug("placement exhausted", segment=len(segment), **rejected)
        return None

    # --------------------------
    # Constraints
    # --------------------------
    def _basic_reason(self, cand: QPointF, clearance: _Clearance) -> Optional[str]:
        cfg = self.config
        c = np.array(cand.toTuple(), dtype=float)
        if clearance.nearest_vertex(c) < cfg.min_vertex_distance:
            return "vertex"
        if clearance.nearest_edge(c) < cfg.min_edge_distance:
            return "edge"
        if clearance.hull is not None and point_in_polygon(cand, clearance.hull):
            return "hull"
        return None

    def validate_basic(self, cand: QPointF) -> Optional[str]:
        """Human-readable reason cand violates a clearance rule, or None."""
        reason = self._basic_reason(cand, _Clearance(self.graph, self.config.hull_margin))
        return {
            None: None,
            "vertex": "New vertex would be too close to existing vertex",
            "edge": "New vertex too close to existing edge",
            "hull": "Vertex must be placed outside current graph with sufficient margin",
        }[reason]

    def find_crossing(self, cand: QPointF, segment: Sequence[int]) -> Optional[str]:
        """
        Check the would-be edges cand->segment[i] against every stored edge and
        against each other. Pairs meeting at a common endpoint (within
        shared_endpoint_tol) are allowed. Returns a diagnostic or None.
        """
        tol = self.config.shared_endpoint_tol
        verts = self.graph.vertices
        ends = [verts[i].getPosition() for i in segment]

        for p in ends:
            for e in self.graph.edges:
                a = verts[e.getStartIndex()]
                b = verts[e.getEndIndex()]
                pa, pb = a.getPosition(), b.getPosition()
                if edges_share_endpoint(cand, p, pa, pb, tol):
                    continue
                if segments_intersect(cand, p, pa, pb):
                    return f"New edge would intersect existing edge {a.label()}-{b.label()}"

        # New edges all meet at cand, so they can only collide by running along each other.
        for i in range(len(ends)):
            for j in range(i + 1, len(ends)):
                if rays_overlap(cand, ends[i], ends[j]):
                    return "New edges would intersect each other"
        return None
