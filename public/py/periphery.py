# periphery.py
from typing import Iterable, List, Dict, Tuple, Optional, Sequence

from hull import convex_hull
from utils_geom import polygon_signed_area


class Periphery:
    """
    Maintains the periphery (outer boundary) as a CW cycle of vertex indices.
    - indices: internal mutable list storing the periphery cycle in CW order
    - _pos: maps vertex -> position in indices for O(1) lookups

    CW means negative shoelace area with the y axis pointing up.
    """

    def __init__(self):
        self.indices: List[int] = []
        self._pos: Dict[int, int] = {}  # vertex -> position in indices (for O(1) lookups)

    # -------- internal helpers --------
    def _rebuild_index_map(self):
        self._pos = {v: i for i, v in enumerate(self.indices)}

    def _set(self, indices: Iterable[int]):
        self.indices = list(indices)
        self._rebuild_index_map()

    # -------- basic ops --------
    def initialize(self, initialIndices: Iterable[int]):
        self._set(initialIndices)

    def getIndices(self) -> Tuple[int, ...]:
        """
        Return the periphery as an immutable tuple to prevent external mutation,
        which would otherwise desync the index map.
        """
        return tuple(self.indices)

    def clear(self):
        self.indices.clear()
        self._pos.clear()

    def indexOf(self, v: int) -> int:
        return self._pos.get(v, -1)

    def contains(self, v: int) -> bool:
        return v in self._pos

    def size(self) -> int:
        return len(self.indices)

    # -------- rebuild from geometry --------
    def recompute(self, vertices, preferStart: Optional[int] = None) -> Tuple[int, ...]:
        """
        Rebuild the cycle as the CW convex hull of the visible vertices.
        Hull points come back keyed by storage index, so two vertices that
        happen to share coordinates are never confused.

        The cycle is rotated to begin at preferStart (or at the previous first
        element) when that vertex is still on the hull.
        """
        previousStart = self.indices[0] if self.indices else None
        items = [(v.getIndex(), v.getPosition()) for v in vertices if v is not None and v.isVisible()]
        self._set(convex_hull(items))
        self.ensureClockwise(vertices)

        for start in (preferStart, previousStart):
            if start is not None and start in self._pos:
                self.rotateTo(start)
                break
        return self.getIndices()

    def ensureClockwise(self, vertices) -> bool:
        """Reverse the cycle when it is CCW. Returns True if it was reversed."""
        if len(self.indices) < 3:
            return False
        area = polygon_signed_area([vertices[i].getPosition() for i in self.indices])
        if area > 0.0:
            self._set(reversed(self.indices))
            return True
        return False

    def signedArea(self, vertices) -> float:
        return polygon_signed_area([vertices[i].getPosition() for i in self.indices])

    def rotateTo(self, v: int):
        i = self._pos.get(v, -1)
        if i < 0:
            raise ValueError(f"rotateTo: vertex {v} is not on the periphery.")
        if i:
            self._set(self.indices[i:] + self.indices[:i])

    # -------- queries --------
    def isContiguous(self, testIndices: Iterable[int]) -> bool:
        """
        Checks if testIndices form a contiguous segment of the periphery (clockwise).
        Accepts segments that are given starting at any element of the segment (i.e. rotation),
        but the order must match the CW traversal.
        """
        seq = list(testIndices)
        if not seq or len(seq) > len(self.indices):
            return False
        n = len(self.indices)
        start_pos = self._pos.get(seq[0], -1)
        if start_pos < 0:
            return False
        for i in range(len(seq)):
            if self.indices[(start_pos + i) % n] != seq[i]:
                return False
        return True

    def matchesCycle(self, other: Sequence[int]) -> bool:
        """True if other lists the same cycle in the same direction, from any start."""
        other = list(other)
        if len(other) != len(self.indices):
            return False
        if not other:
            return True
        return self.isContiguous(other)

    def extractSegment(self, startPos: int, endPos: int) -> List[int]:
        """
        Periphery indices on the CW walk from position startPos to position endPos,
        both inclusive. startPos == endPos yields a single element.
        """
        n = len(self.indices)
        if not (0 <= startPos < n and 0 <= endPos < n):
            raise ValueError(f"extractSegment: positions ({startPos}, {endPos}) out of range for size {n}.")
        segment: List[int] = []
        curr = startPos
        while True:
            segment.append(self.indices[curr])
            if curr == endPos:
                break
            curr = (curr + 1) % n
        return segment

    def getSegment(self, start_node: int, end_node: int) -> Optional[List[int]]:
        """
        Same as extractSegment, addressed by vertex instead of position.
        Returns None if either endpoint is not on the periphery.
        """
        ip = self._pos.get(start_node, -1)
        iq = self._pos.get(end_node, -1)
        if ip < 0 or iq < 0:
            return None
        return self.extractSegment(ip, iq)

    # -------- update after outward insertion --------
    def replaceSegment(self, startPos: int, endPos: int, newIndex: int) -> Tuple[int, ...]:
        """
        Replace the CW arc (Vp ... Vq) between the two positions with [Vp, New, Vq].
        Interior arc vertices leave the periphery; the endpoints stay since the
        new vertex is joined to them. Handles the wrapped arc (startPos > endPos)
        and the full cycle.

        Orientation is not re-checked here; callers follow with ensureClockwise.
        """
        n = len(self.indices)
        if not (0 <= startPos < n and 0 <= endPos < n):
            raise ValueError(f"replaceSegment: positions ({startPos}, {endPos}) out of range for size {n}.")
        if startPos == endPos:
            raise ValueError("replaceSegment: arc must span at least 2 vertices.")
        if newIndex in self._pos:
            raise ValueError(f"replaceSegment: vertex {newIndex} is already on the periphery.")

        if startPos < endPos:
            new_indices = self.indices[:startPos + 1] + [newIndex] + self.indices[endPos:]
        else:
            # Wrapped arc: keep Vq .. Vp (the CW complement plus both endpoints).
            new_indices = self.indices[endPos:startPos + 1] + [newIndex]

        self._set(new_indices)
        return self.getIndices()

    # -------- integrity check --------
    def validate(self) -> bool:
        """
        Basic invariants:
        - All periphery vertices are unique
        - _pos is consistent with indices
        """
        if len(set(self.indices)) != len(self.indices):
            return False
        if any(self._pos.get(v, None) != i for i, v in enumerate(self.indices)):
            return False
        return True
