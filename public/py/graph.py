# graph.py

from vertex import Vertex
from edge import Edge
from periphery import Periphery
from placement import PlacementSearch, PlacementConfig
from mutator import GraphMutator
from results import ErrorKind, Failure, Success
from utils_geom import distance, segments_intersect
from qtcore_shim import QPointF
from typing import Iterable, List, Optional, Sequence, Tuple
import math
import secrets
import random
from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger()

INITIAL_TRIANGLE = ((0.0, -100.0), (-87.0, 50.0), (87.0, 50.0))


@dataclass
class GraphConfig:
    # Seed polygon, listed CW (negative shoelace area)
    triangle: Tuple[Tuple[float, float], ...] = INITIAL_TRIANGLE

    # Hit radius for findVertexAt (world units)
    hit_radius: float = 15.0

    # Random insertions use segments of 2..random_segment_max periphery vertices
    random_segment_max: int = 6

    placement: PlacementConfig = field(default_factory=PlacementConfig)


class Graph:
    """
    In-memory planar graph: append-only vertex/edge arena, CW periphery and
    the transient manual selection. Every command returns a Success or a
    Failure and leaves the graph planar.
    """

    def __init__(self, config: Optional[GraphConfig] = None, seed: Optional[int] = None):
        self.config = config or GraphConfig()
        self.vertices: List[Vertex] = []
        self.edges: List[Edge] = []
        self.periphery = Periphery()
        self.selection: List[int] = []
        self.segmentVertices: List[int] = []
        self.manualMode = False
        self.maxVertexId = 0

        # Robust randomness, reproducible when a seed is given
        self._rng = random.Random(seed if seed is not None else secrets.randbits(64))

        self.search = PlacementSearch(self, self.config.placement)
        self.mutator = GraphMutator(self, self.search)

        self.resetToTriangle()

    @classmethod
    def fromGeometry(cls, points: Sequence[Tuple[float, float]], edges: Iterable[Tuple[int, int]],
                     config: Optional[GraphConfig] = None, seed: Optional[int] = None) -> "Graph":
        """
        Build a graph from explicit coordinates and index pairs. Identifiers are
        1..n in point order; the periphery is the CW hull. No planarity check is
        made, so callers can stage arbitrary fixtures.
        """
        g = cls(config=config, seed=seed)
        g.clear()
        for i, (x, y) in enumerate(points):
            g.vertices.append(Vertex(i, QPointF(x, y), i + 1, origin="seed"))
        g.maxVertexId = len(g.vertices)
        for u, v in edges:
            g.edges.append(Edge(u, v))
        g.periphery.recompute(g.vertices)
        return g

    # --------------------------
    # Base graph ops
    # --------------------------
    def clear(self):
        self.vertices.clear()
        self.edges.clear()
        self.periphery.clear()
        self.selection.clear()
        self.segmentVertices = []
        self.maxVertexId = 0

    def resetToTriangle(self):
        self.clear()
        for i, (x, y) in enumerate(self.config.triangle):
            self.vertices.append(Vertex(i, QPointF(x, y), i + 1, origin="seed"))
        n = len(self.vertices)
        self.maxVertexId = n
        for i in range(n):
            self.edges.append(Edge(i, (i + 1) % n))

        self.periphery.initialize(range(n))
        self.periphery.ensureClockwise(self.vertices)
        self.manualMode = False
        logger.info("graph reset", vertices=n)
        return Success("Triangle reset - planarity guaranteed")

    # --------------------------
    # Getters (used by UI)
    # --------------------------
    def getVertices(self):
        return self.vertices

    def getEdges(self):
        return self.edges

    def getPeriphery(self):
        return self.periphery.getIndices()

    def getSelection(self) -> Tuple[int, ...]:
        return tuple(self.selection)

    def getSegmentVertices(self) -> Tuple[int, ...]:
        return tuple(self.segmentVertices)

    def isManualMode(self) -> bool:
        return self.manualMode

    def vertexById(self, vertexId: int) -> Optional[Vertex]:
        for v in self.vertices:
            if v.getId() == vertexId:
                return v
        return None

    def edgeLabel(self, e: Edge) -> Tuple[int, int]:
        return (self.vertices[e.getStartIndex()].getId(), self.vertices[e.getEndIndex()].getId())

    def findVertexAt(self, x: float, y: float, radius: Optional[float] = None) -> int:
        """Index of the nearest visible vertex within radius of (x, y), or -1."""
        r = self.config.hit_radius if radius is None else float(radius)
        p = QPointF(x, y)
        best, best_d = -1, math.inf
        for v in self.vertices:
            if not v.isVisible():
                continue
            d = distance(p, v.getPosition())
            if d <= r and d < best_d:
                best, best_d = v.getIndex(), d
        return best

    def snapshot(self):
        """Structural, comparable copy of everything a command may change."""
        return (
            tuple((v.getPosition().toTuple(), v.getId(), v.isVisible()) for v in self.vertices),
            tuple(e.indices() for e in self.edges),
            self.periphery.getIndices(),
            tuple(self.selection),
            tuple(self.segmentVertices),
        )

    def get_stats(self):
        return {
            "total_vertices": len(self.vertices),
            "visible_vertices": sum(1 for v in self.vertices if v.isVisible()),
            "seed": sum(1 for v in self.vertices if v.getOrigin() == "seed"),
            "random": sum(1 for v in self.vertices if v.getOrigin() == "random"),
            "manual": sum(1 for v in self.vertices if v.getOrigin() == "manual"),
            "edges": len(self.edges),
            "periphery_size": self.periphery.size(),
            "max_vertex_id": self.maxVertexId,
        }

    # --------------------------
    # Selection
    # --------------------------
    def setManualMode(self, enabled: bool):
        self.manualMode = bool(enabled)
        self.clearSelection()
        state = "enabled" if self.manualMode else "disabled"
        return Success(f"Manual segment mode {state}")

    def toggleManualMode(self):
        return self.setManualMode(not self.manualMode)

    def clearSelection(self):
        self.selection.clear()
        self.segmentVertices = []
        return Success("Selection cleared")

    def _not_on_periphery(self, vertexIndex: int) -> Optional[Failure]:
        if not self.periphery.contains(vertexIndex):
            return Failure(ErrorKind.INVALID_SELECTION,
                           f"Vertex index {vertexIndex} is not on the periphery")
        return None

    def beginManualSelection(self, vertexIndex: int):
        """Enter manual mode with vertexIndex as the first segment endpoint."""
        bad = self._not_on_periphery(vertexIndex)
        if bad is not None:
            return bad
        self.manualMode = True
        self.clearSelection()
        self.selection.append(vertexIndex)
        return Success(f"Selected vertex {self.vertices[vertexIndex].label()}")

    def toggleSelection(self, vertexIndex: int):
        """
        Select or deselect a periphery vertex. Selecting the second endpoint
        derives the CW segment and runs the insertion.
        """
        if not self.manualMode:
            return Failure(ErrorKind.INVALID_SELECTION, "Manual segment mode is off")
        bad = self._not_on_periphery(vertexIndex)
        if bad is not None:
            return bad

        label = self.vertices[vertexIndex].label()
        if vertexIndex in self.selection:
            self.selection.remove(vertexIndex)
            self.segmentVertices = []
            return Success(f"Deselected vertex {label}")

        self.selection.append(vertexIndex)
        if len(self.selection) < 2:
            return Success(f"Selected vertex {label}")

        a, b = self.selection
        self.segmentVertices = self.periphery.getSegment(a, b) or []
        return self.insertSelection()

    def insertSelection(self):
        return self.mutator.insertSelection(origin="manual")

    def insertRandomSegment(self):
        """Pick a random CW run of 2..min(6, n) periphery vertices and insert on it."""
        peri = self.periphery.getIndices()
        n = len(peri)
        if n < 2:
            return Failure(ErrorKind.INVALID_SELECTION, "Need at least 2 periphery vertices")

        size = self._rng.randint(2, min(self.config.random_segment_max, n))
        start = self._rng.randrange(n)
        end = (start + size - 1) % n
        self.selection[:] = [peri[start], peri[end]]
        logger.debug("random segment", start=peri[start], end=peri[end], size=size)
        return self.mutator.insertSelection(origin="random")

    # --------------------------
    # Visibility
    # --------------------------
    def setVisibilityThreshold(self, vertexId: int):
        """Show vertices with identifier <= vertexId, hide the rest."""
        m = max(0, int(vertexId))
        for v in self.vertices:
            v.setVisible(v.getId() <= m)
        self.clearSelection()
        self.periphery.recompute(self.vertices)
        return Success(f"Showing vertices 1 to {m}")

    # --------------------------
    # Read-only checks
    # --------------------------
    def findCrossing(self) -> Optional[Tuple[Edge, Edge]]:
        """First pair of stored edges that cross without sharing a vertex, O(E^2)."""
        verts = self.vertices
        edges = self.edges
        for i in range(len(edges)):
            e1 = edges[i]
            p1 = verts[e1.getStartIndex()].getPosition()
            p2 = verts[e1.getEndIndex()].getPosition()
            for j in range(i + 1, len(edges)):
                e2 = edges[j]
                if e1.sharesIndex(e2):
                    continue
                p3 = verts[e2.getStartIndex()].getPosition()
                p4 = verts[e2.getEndIndex()].getPosition()
                if segments_intersect(p1, p2, p3, p4):
                    return e1, e2
        return None

    def computeIntegrityStatus(self):
        crossing = self.findCrossing()
        if crossing is None:
            return Success(f"Planarity confirmed: no crossings among {len(self.edges)} edges")
        a, b = (self.edgeLabel(e) for e in crossing)
        logger.error("graph integrity violation", edges=(a, b))
        return Failure(
            ErrorKind.INTEGRITY_VIOLATION,
            f"Graph integrity error - crossing between V{a[0]}-V{a[1]} and V{b[0]}-V{b[1]}!",
            (a, b),
        )

    def refreshPeriphery(self):
        """Rebuild the periphery from the hull, then report planarity."""
        self.periphery.recompute(self.vertices)
        return self.computeIntegrityStatus()

    def previewPlacement(self, segment: Optional[Sequence[int]] = None) -> Optional[QPointF]:
        """Where a vertex joined to segment would go; does not modify the graph."""
        seg = list(self.segmentVertices if segment is None else segment)
        if len(seg) < 2 or not self.periphery.isContiguous(seg):
            return None
        return self.search.find(seg)

    def validate_invariants(self, verbose: bool = False) -> bool:
        ok = True
        problems = []
        V = len(self.vertices)

        if not self.periphery.validate():
            problems.append("Periphery map inconsistent or contains duplicates.")

        # Periphery is the CW hull of the visible vertices
        hull = Periphery()
        hull.recompute(self.vertices)
        if not self.periphery.matchesCycle(hull.getIndices()):
            problems.append(f"Periphery {self.periphery.getIndices()} differs from hull {hull.getIndices()}.")
        if self.periphery.size() >= 3 and self.periphery.signedArea(self.vertices) > 0.0:
            problems.append("Periphery is not clockwise.")

        # Arena consistency
        for i, v in enumerate(self.vertices):
            if v.getIndex() != i:
                problems.append(f"Vertex stored at {i} reports index {v.getIndex()}.")
        ids = [v.getId() for v in self.vertices]
        if any(b <= a for a, b in zip(ids, ids[1:])):
            problems.append(f"Vertex identifiers not strictly increasing: {ids}")
        for e in self.edges:
            u, w = e.indices()
            if not (0 <= u < V and 0 <= w < V):
                problems.append(f"Edge {e} references a missing vertex.")

        crossing = self.findCrossing() if not problems else None
        if crossing is not None:
            problems.append(f"Crossing between {crossing[0]} and {crossing[1]}.")

        if problems:
            ok = False
            if verbose:
                for p in problems:
                    logger.warning("invariant violated", detail=p)
        return ok
