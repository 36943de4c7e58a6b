# utils_geom.py

from qtcore_shim import QPointF
import math

# Relative slack for calling two directions parallel.
EPS = 1e-9
# Two endpoints closer than this are treated as the same vertex by the
# crossing checks that work on positions rather than storage indices.
SHARED_ENDPOINT_TOL = 1e-3


def v_add(a: QPointF, b: QPointF) -> QPointF:
    return a + b

def v_sub(a: QPointF, b: QPointF) -> QPointF:
    return a - b

def v_scale(a: QPointF, s: float) -> QPointF:
    return a * s

def v_len(a: QPointF) -> float:
    return math.hypot(a.x(), a.y())

def normalize_or(a: QPointF, fallback: QPointF = None) -> QPointF:
    """Unit vector along a; fallback (default (1, 0)) when a has zero length."""
    L = v_len(a)
    if L == 0.0:
        return fallback if fallback is not None else QPointF(1.0, 0.0)
    return v_scale(a, 1.0 / L)

def rotate(a: QPointF, theta_rad: float) -> QPointF:
    c = math.cos(theta_rad)
    s = math.sin(theta_rad)
    return QPointF(a.x() * c - a.y() * s, a.x() * s + a.y() * c)

def distance(a: QPointF, b: QPointF) -> float:
    return math.hypot(a.x() - b.x(), a.y() - b.y())


# --------------------------
# Predicates
# --------------------------
def cross(a: QPointF, b: QPointF, c: QPointF) -> float:
    # Signed area of a->b->c, doubled. Positive is counter-clockwise.
    return (c.y() - a.y()) * (b.x() - a.x()) - (b.y() - a.y()) * (c.x() - a.x())

def orientation(a: QPointF, b: QPointF, c: QPointF) -> bool:
    # True iff a->b->c turns counter-clockwise; collinear counts as False.
    return cross(a, b, c) > 0.0

def segments_intersect(p1: QPointF, p2: QPointF, p3: QPointF, p4: QPointF) -> bool:
    """
    True if the segments p1p2 and p3p4 cross properly: the endpoints of each
    one lie on opposite sides of the other. Touching and collinear overlaps
    are not reported; callers skip pairs sharing an endpoint beforehand.
    """
    return (cross(p1, p3, p4) * cross(p2, p3, p4) < 0.0 and
            cross(p1, p2, p3) * cross(p1, p2, p4) < 0.0)

def rays_overlap(o: QPointF, a: QPointF, b: QPointF) -> bool:
    """True if the segments o->a and o->b leave o along the same line and direction."""
    ua, ub = v_sub(a, o), v_sub(b, o)
    la, lb = v_len(ua), v_len(ub)
    if la == 0.0 or lb == 0.0:
        return False
    if abs(cross(o, a, b)) > EPS * la * lb:
        return False
    return ua.x() * ub.x() + ua.y() * ub.y() > 0.0

def points_coincide(a: QPointF, b: QPointF, tol: float = SHARED_ENDPOINT_TOL) -> bool:
    return distance(a, b) < tol

def edges_share_endpoint(a1: QPointF, a2: QPointF, b1: QPointF, b2: QPointF,
                         tol: float = SHARED_ENDPOINT_TOL) -> bool:
    return (points_coincide(a1, b1, tol) or points_coincide(a1, b2, tol) or
            points_coincide(a2, b1, tol) or points_coincide(a2, b2, tol))

def point_segment_distance(p: QPointF, a: QPointF, b: QPointF) -> float:
    ax, ay = a.x(), a.y()
    abx, aby = b.x() - ax, b.y() - ay
    denom = abx * abx + aby * aby
    if denom == 0.0:
        return distance(p, a)
    t = ((p.x() - ax) * abx + (p.y() - ay) * aby) / denom
    t = 0.0 if t < 0.0 else (1.0 if t > 1.0 else t)
    return math.hypot(p.x() - (ax + t * abx), p.y() - (ay + t * aby))


# --------------------------
# Polygons
# --------------------------
def polygon_centroid(pts) -> QPointF:
    """Vertex average (not the area centroid)."""
    pts = list(pts)
    if not pts:
        return QPointF(0.0, 0.0)
    cx = sum(p.x() for p in pts) / len(pts)
    cy = sum(p.y() for p in pts) / len(pts)
    return QPointF(cx, cy)

def polygon_signed_area(pts) -> float:
    """Shoelace area: positive for CCW, negative for CW (y axis pointing up)."""
    pts = list(pts)
    n = len(pts)
    if n < 3:
        return 0.0
    A = 0.0
    for i in range(n):
        j = (i + 1) % n
        A += pts[i].x() * pts[j].y() - pts[j].x() * pts[i].y()
    return 0.5 * A

def point_in_polygon(pt: QPointF, poly_pts) -> bool:
    # Ray-casting parity test; points exactly on the boundary are unspecified.
    x, y = pt.x(), pt.y()
    inside = False
    n = len(poly_pts)
    if n < 3:
        return False
    j = n - 1
    for i in range(n):
        xi, yi = poly_pts[i].x(), poly_pts[i].y()
        xj, yj = poly_pts[j].x(), poly_pts[j].y()
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside

def expand_polygon(poly_pts, margin: float):
    """Push every vertex away from the centroid by margin along its centroid ray."""
    center = polygon_centroid(poly_pts)
    out = []
    for p in poly_pts:
        d = v_sub(p, center)
        L = v_len(d)
        if L == 0.0:
            out.append(p)
            continue
        out.append(v_add(p, v_scale(d, margin / L)))
    return out
