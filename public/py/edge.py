# edge.py
from typing import FrozenSet, Tuple


class Edge:
    """Unordered pair of vertex storage indices."""

    __slots__ = ("_u", "_v")

    def __init__(self, u: int, v: int):
        if u == v:
            raise ValueError(f"Edge: self-loop at {u}")
        self._u = int(u)
        self._v = int(v)

    def getStartIndex(self) -> int:
        return self._u

    def getEndIndex(self) -> int:
        return self._v

    def indices(self) -> Tuple[int, int]:
        return (self._u, self._v)

    def key(self) -> FrozenSet[int]:
        return frozenset((self._u, self._v))

    def sharesIndex(self, other: "Edge") -> bool:
        return bool(self.key() & other.key())

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return f"Edge({self._u}, {self._v})"
