# hull.py
import math
from typing import Hashable, List, Sequence, Tuple

from qtcore_shim import QPointF
from utils_geom import orientation


def convex_hull(items: Sequence[Tuple[Hashable, QPointF]]) -> List[Hashable]:
    """
    Graham-style angular sweep over (key, point) pairs.

    Returns the keys of the hull vertices in the counter-clockwise order the
    sweep produces. With fewer than 3 items the keys are returned unchanged,
    which callers read as "no periphery constraint yet".

    Keys travel with their points so the caller can map the hull back to its
    own storage without comparing coordinates.
    """
    items = list(items)
    if len(items) < 3:
        return [k for k, _ in items]

    # Anchor: max y, then min x. Fixes the rotational start of the sweep.
    a = 0
    for i in range(1, len(items)):
        p = items[i][1]
        q = items[a][1]
        if p.y() > q.y() or (p.y() == q.y() and p.x() < q.x()):
            a = i
    anchor_key, anchor = items[a]

    def sort_key(item):
        p = item[1]
        dx = p.x() - anchor.x()
        dy = p.y() - anchor.y()
        return (math.atan2(dy, dx), dx * dx + dy * dy)

    # Exact duplicates of the anchor would close the sweep on itself.
    rest = sorted((it for i, it in enumerate(items) if i != a and it[1] != anchor), key=sort_key)

    stack = [(anchor_key, anchor)]
    for it in rest:
        while len(stack) > 1 and not orientation(stack[-2][1], stack[-1][1], it[1]):
            stack.pop()
        stack.append(it)
    return [k for k, _ in stack]
