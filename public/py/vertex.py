# vertex.py
from qtcore_shim import QPointF


class Vertex:
    """
    One entry of the append-only vertex arena.
    - index: storage slot, used by edges, periphery and selection
    - vertexId: user-facing label (V1, V2, ...), never reused
    Hiding a vertex keeps its geometry; only drawing and interaction skip it.
    """

    __slots__ = ("_index", "_id", "_pos", "_visible", "_origin")

    def __init__(self, index: int, position: QPointF, vertexId: int, origin: str = "manual"):
        self._index = int(index)
        self._id = int(vertexId)
        self._pos = position
        self._visible = True
        self._origin = origin

    def getIndex(self) -> int:
        return self._index

    def getId(self) -> int:
        return self._id

    def getPosition(self) -> QPointF:
        return self._pos

    def isVisible(self) -> bool:
        return self._visible

    def setVisible(self, flag: bool):
        self._visible = bool(flag)

    def getOrigin(self) -> str:
        return self._origin

    def label(self) -> str:
        return f"V{self._id}"

    def __repr__(self):
        return f"Vertex({self._index}, {self.label()}, {self._pos!r}, visible={self._visible})"
