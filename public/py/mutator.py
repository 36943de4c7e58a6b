# mutator.py
from contextlib import nullcontext
from enum import Enum
from typing import List, Optional, Tuple

import structlog

from edge import Edge
from periphery import Periphery
from placement import PlacementSearch
from qtcore_shim import QPointF
from results import (
    EngineError, Failure, IntegrityViolation, IntersectionRejected,
    InvalidSelection, PlacementNotFound, Success,
)
from vertex import Vertex

logger = structlog.get_logger()


class InsertionState(Enum):
    IDLE = "idle"
    SEGMENT_CHOSEN = "segment_chosen"
    SEARCHING = "searching"
    VALIDATING = "validating"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    REJECTED = "rejected"


class GraphMutator:
    """
    Runs one insertion attempt as a single unit:
    selection -> segment -> search -> pre-commit check -> commit -> full scan.

    A crossing found by the full scan undoes the commit, so callers see either
    the graph before the call or a graph with one more vertex and no crossings.
    `guard` is entered around the whole attempt (no-op by default).
    """

    def __init__(self, graph, search: PlacementSearch, guard=None):
        self.graph = graph
        self.search = search
        self.guard = guard if guard is not None else nullcontext()
        self.state = InsertionState.IDLE

    def insertSelection(self, origin: str = "manual"):
        g = self.graph
        with self.guard:
            priorStart = g.periphery.indices[0] if g.periphery.size() else None
            try:
                segment, startPos, endPos = self._choose_segment()
                pos = self._search(segment)
                self._validate(pos, segment)
                newIdx = self._commit(pos, segment, startPos, endPos, origin, priorStart)
                self._verify(newIdx, len(segment), priorStart)
            except EngineError as err:
                self.state = (InsertionState.ROLLED_BACK if isinstance(err, IntegrityViolation)
                              else InsertionState.REJECTED)
                logger.info("insertion failed", kind=err.kind.value, reason=err.message)
                return Failure.from_error(err)
            finally:
                g.selection.clear()
                g.segmentVertices = []

            self.state = InsertionState.COMMITTED
            v = g.vertices[newIdx]
            logger.info("vertex added", vertex=v.getId(), index=newIdx, segment=len(segment), origin=origin)
            return Success(
                f"Added vertex {v.label()} connecting to segment of {len(segment)} vertices - planarity maintained",
                vertexId=v.getId(), vertexIndex=newIdx, segmentSize=len(segment), position=pos,
            )

    # --------------------------
    # Steps
    # --------------------------
    def _choose_segment(self) -> Tuple[List[int], int, int]:
        g = self.graph
        if len(g.selection) != 2:
            raise InvalidSelection("Must select exactly 2 periphery vertices")
        a, b = g.selection
        startPos = g.periphery.indexOf(a)
        endPos = g.periphery.indexOf(b)
        if startPos < 0 or endPos < 0:
            raise InvalidSelection("Selected vertices must be in periphery")
        segment = g.periphery.extractSegment(startPos, endPos)
        if len(segment) < 2:
            raise InvalidSelection("Segment must contain at least 2 vertices")
        g.segmentVertices = segment
        self.state = InsertionState.SEGMENT_CHOSEN
        return segment, startPos, endPos

    def _search(self, segment: List[int]) -> QPointF:
        self.state = InsertionState.SEARCHING
        pos = self.search.find(segment)
        if pos is None:
            raise PlacementNotFound(
                "Cannot find valid position that maintains planarity - "
                f"no valid placement found after {self.search.config.max_attempts} attempts"
            )
        return pos

    def _validate(self, pos: QPointF, segment: List[int]):
        self.state = InsertionState.VALIDATING
        problem = self.search.find_crossing(pos, segment)
        if problem is not None:
            raise IntersectionRejected(f"Cannot add vertex: {problem}")

    def _commit(self, pos: QPointF, segment: List[int], startPos: int, endPos: int,
                origin: str, priorStart: Optional[int]) -> int:
        g = self.graph
        newIdx = len(g.vertices)
        g.maxVertexId += 1
        g.vertices.append(Vertex(newIdx, pos, g.maxVertexId, origin=origin))
        for idx in segment:
            g.edges.append(Edge(newIdx, idx))

        g.periphery.replaceSegment(startPos, endPos, newIdx)
        g.periphery.ensureClockwise(g.vertices)

        # The patched cycle must still be the hull of the visible vertices.
        hull = Periphery()
        hull.recompute(g.vertices)
        if not g.periphery.matchesCycle(hull.getIndices()):
            logger.debug("patched periphery differs from hull; rebuilding",
                         patched=list(g.periphery.getIndices()), hull=list(hull.getIndices()))
            g.periphery.recompute(g.vertices, preferStart=priorStart)
        return newIdx

    def _verify(self, newIdx: int, added: int, priorStart: Optional[int]):
        g = self.graph
        crossing = g.findCrossing()
        if crossing is None:
            return
        e1, e2 = crossing
        edges = (g.edgeLabel(e1), g.edgeLabel(e2))
        message = ("Operation rolled back: Graph integrity error - crossing between "
                   f"V{edges[0][0]}-V{edges[0][1]} and V{edges[1][0]}-V{edges[1][1]}!")
        logger.error("integrity violation after commit", edges=edges, vertex=g.vertices[newIdx].getId())

        self._rollback(added, priorStart)
        raise IntegrityViolation(message, edges)

    def _rollback(self, added: int, priorStart: Optional[int]):
        g = self.graph
        g.vertices.pop()
        del g.edges[len(g.edges) - added:]
        g.periphery.recompute(g.vertices, preferStart=priorStart)
        logger.warning("insertion rolled back", vertices=len(g.vertices), edges=len(g.edges))
