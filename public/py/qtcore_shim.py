class QPointF:
    """Minimal stand-in for QtCore.QPointF so the engine runs without Qt."""
    __slots__ = ("_x", "_y")

    def __init__(self, x=0.0, y=0.0):
        self._x = float(x); self._y = float(y)

    def x(self): return self._x
    def y(self): return self._y

    def toTuple(self):
        return (self._x, self._y)

    def __add__(self, other): return QPointF(self._x + other.x(), self._y + other.y())
    def __sub__(self, other): return QPointF(self._x - other.x(), self._y - other.y())
    def __mul__(self, s): return QPointF(self._x * s, self._y * s)
    __rmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, QPointF):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __hash__(self):
        return hash((self._x, self._y))

    def __repr__(self): return f"QPointF({self._x:.3f}, {self._y:.3f})"
