# results.py
"""
Outcome types shared by every public command.

Inside an insertion the steps raise EngineError subclasses; the transaction
boundary turns them into Failure values, so callers only ever receive a
Success or a Failure.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from qtcore_shim import QPointF

EdgeLabel = Tuple[int, int]  # (vertexId, vertexId)


class ErrorKind(Enum):
    INVALID_SELECTION = "InvalidSelection"
    PLACEMENT_NOT_FOUND = "PlacementNotFound"
    INTERSECTION_REJECTED = "IntersectionRejected"
    INTEGRITY_VIOLATION = "IntegrityViolation"


class EngineError(Exception):
    kind: ErrorKind = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidSelection(EngineError):
    kind = ErrorKind.INVALID_SELECTION


class PlacementNotFound(EngineError):
    kind = ErrorKind.PLACEMENT_NOT_FOUND


class IntersectionRejected(EngineError):
    kind = ErrorKind.INTERSECTION_REJECTED


class IntegrityViolation(EngineError):
    kind = ErrorKind.INTEGRITY_VIOLATION

    def __init__(self, message: str, edges: Tuple[EdgeLabel, EdgeLabel]):
        super().__init__(message)
        self.edges = edges


@dataclass(frozen=True)
class Success:
    message: str
    vertexId: Optional[int] = None
    vertexIndex: Optional[int] = None
    segmentSize: int = 0
    position: Optional[QPointF] = None

    ok = True
    kind = None


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    edges: Optional[Tuple[EdgeLabel, EdgeLabel]] = None

    ok = False

    @classmethod
    def from_error(cls, err: EngineError) -> "Failure":
        return cls(err.kind, err.message, getattr(err, "edges", None))
