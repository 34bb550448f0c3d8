"""Geometry primitives, predicates and tolerances.

This is the primitive layer the algorithm engines are written against:
orientation predicates, distances, areas, containment tests, pairwise
intersections, and the small value types (``Ball``, ``Rectangle``).

Canonical data format:
    points:   (N, d) float64 array (d = 2 unless stated otherwise)
    polygon:  (K, 2) float64 array, implicitly closed
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .constants import EPS_AREA, EPS_COLLINEAR, EPS_CONTAINMENT
from .exceptions import InvalidInputError

__all__ = [
    'LEFT', 'RIGHT', 'COLLINEAR',
    'as_points', 'orient', 'robust_orientation', 'distance',
    'triangle_area', 'triangle_angles', 'polygon_signed_area',
    'polygon_orientation', 'point_in_polygon', 'point_in_triangle',
    'is_convex_polygon', 'seg_intersect', 'segment_intersection_point',
    'closest_points_between_segments', 'circle_circle_intersection',
    'circumball', 'Ball', 'Rectangle', 'EPS_AREA', 'EPS_COLLINEAR',
]

# Orientation classes returned by robust_orientation
LEFT = 1
RIGHT = -1
COLLINEAR = 0


def as_points(points, dim: Optional[int] = None, name: str = 'points') -> np.ndarray:
    """Return ``points`` as a fresh (N, d) float64 array.

    An empty input becomes a (0, dim) array (dim defaults to 2). Anything
    that is not a 2-D table of coordinates raises InvalidInputError.
    """
    arr = np.array(points, dtype=np.float64)
    if arr.size == 0:
        width = dim if dim is not None else (arr.shape[-1] if arr.ndim == 2 else 2)
        return np.empty((0, width), dtype=np.float64)
    if arr.ndim != 2:
        raise InvalidInputError(f"{name} must be an (N, d) array, got shape {arr.shape}")
    if dim is not None and arr.shape[1] != dim:
        raise InvalidInputError(f"{name} must have {dim} coordinates per point, got {arr.shape[1]}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} contains non-finite coordinates")
    return arr


def orient(a, b, c):
    """2D orientation (signed area * 2) for points a,b,c.

    Returns a positive value when (a,b,c) are counter-clockwise, negative when clockwise,
    and zero when colinear.
    """
    return (b[0]-a[0])*(c[1]-a[1]) - (b[1]-a[1])*(c[0]-a[0])


def robust_orientation(a, b, c, eps: float = EPS_COLLINEAR) -> int:
    """Tolerant turn direction of (a, b, c): LEFT, RIGHT or COLLINEAR.

    The cross product is compared against ``eps * |b-a| * |c-a|`` so the
    decision depends on the turn angle and not on coordinate magnitude.
    """
    cross = orient(a, b, c)
    scale = math.hypot(b[0]-a[0], b[1]-a[1]) * math.hypot(c[0]-a[0], c[1]-a[1])
    if abs(cross) <= eps * scale:
        return COLLINEAR
    return LEFT if cross > 0 else RIGHT


def distance(p, q) -> float:
    return float(np.linalg.norm(np.asarray(q, dtype=np.float64) - np.asarray(p, dtype=np.float64)))


def triangle_area(p0, p1, p2):
    """Signed area of triangle (p0, p1, p2); positive if CCW."""
    return 0.5 * orient(p0, p1, p2)


def triangle_angles(p0, p1, p2):
    p0 = np.asarray(p0); p1 = np.asarray(p1); p2 = np.asarray(p2)
    a = np.linalg.norm(p1 - p2)
    b = np.linalg.norm(p0 - p2)
    c = np.linalg.norm(p0 - p1)
    def ang(A,B,C):
        denom = 2*B*C
        if denom == 0.0:
            return 0.0
        cosang = (B*B + C*C - A*A) / denom
        return math.degrees(math.acos(np.clip(cosang, -1.0, 1.0)))
    return [ang(a,b,c), ang(b,c,a), ang(c,a,b)]


def polygon_signed_area(polygon):
    """Return signed area of polygon (list of (x,y)); positive if CCW."""
    arr = np.asarray(polygon, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] < 3:
        return 0.0
    x = arr[:,0]; y = arr[:,1]
    return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def polygon_orientation(polygon, eps: float = EPS_AREA) -> int:
    """LEFT for counter-clockwise, RIGHT for clockwise, COLLINEAR if the area vanishes."""
    area = polygon_signed_area(polygon)
    if abs(area) <= eps:
        return COLLINEAR
    return LEFT if area > 0 else RIGHT


def point_in_polygon(x, y, poly):
    """Ray casting even-odd rule; boundary points may fall either way."""
    inside = False
    n = len(poly)
    if n < 3:
        return False
    for i in range(n):
        x0, y0 = poly[i]
        x1, y1 = poly[(i+1) % n]
        if ((y0 > y) != (y1 > y)):
            xint = (x1 - x0) * (y - y0) / (y1 - y0) + x0
            if x < xint:
                inside = not inside
    return inside


def point_in_triangle(p, a, b, c, eps: float = EPS_COLLINEAR) -> bool:
    """Closed containment test: points on an edge count as inside."""
    o1 = robust_orientation(a, b, p, eps)
    o2 = robust_orientation(b, c, p, eps)
    o3 = robust_orientation(c, a, p, eps)
    has_left = LEFT in (o1, o2, o3)
    has_right = RIGHT in (o1, o2, o3)
    return not (has_left and has_right)


def is_convex_polygon(polygon, eps: float = EPS_COLLINEAR) -> bool:
    """True if the (implicitly closed) polygon is convex.

    Collinear vertices are tolerated. Besides requiring every turn to go the
    same way, the total turning must be one full revolution, which rejects
    star-shaped self-overlapping outlines such as a pentagram.
    """
    pts = np.asarray(polygon, dtype=np.float64)
    n = pts.shape[0]
    if n < 3:
        return False
    sign = COLLINEAR
    turning = 0.0
    for i in range(n):
        a = pts[i - 1]; b = pts[i]; c = pts[(i + 1) % n]
        o = robust_orientation(a, b, c, eps)
        if o != COLLINEAR:
            if sign == COLLINEAR:
                sign = o
            elif o != sign:
                return False
        u = b - a; v = c - b
        turning += math.atan2(u[0]*v[1] - u[1]*v[0], u[0]*v[0] + u[1]*v[1])
    if sign == COLLINEAR:
        return False
    return abs(abs(turning) - 2.0 * math.pi) < math.pi


def seg_intersect(p1, p2, p3, p4):
    """Return True if segment p1-p2 strictly intersects p3-p4 (excluding shared endpoints and colinear overlaps).

    Parameters accept array-like 2D points.
    """
    p1 = np.asarray(p1); p2 = np.asarray(p2); p3 = np.asarray(p3); p4 = np.asarray(p4)
    if (p1 == p3).all() or (p1 == p4).all() or (p2 == p3).all() or (p2 == p4).all():
        return False
    o1 = orient(p1, p2, p3); o2 = orient(p1, p2, p4)
    o3 = orient(p3, p4, p1); o4 = orient(p3, p4, p2)
    if o1 == 0 and o2 == 0 and o3 == 0 and o4 == 0:
        return False
    return (o1*o2 < 0) and (o3*o4 < 0)


def segment_intersection_point(p1, p2, p3, p4, eps: float = EPS_COLLINEAR) -> Optional[np.ndarray]:
    """Unique intersection point of closed 2D segments p1-p2 and p3-p4, or None.

    Parallel and collinear-overlapping pairs have no unique point and yield
    None; touching at an endpoint counts as an intersection.
    """
    p1 = np.asarray(p1, dtype=np.float64); p2 = np.asarray(p2, dtype=np.float64)
    p3 = np.asarray(p3, dtype=np.float64); p4 = np.asarray(p4, dtype=np.float64)
    r = p2 - p1
    s = p4 - p3
    denom = r[0]*s[1] - r[1]*s[0]
    if abs(denom) <= eps * np.linalg.norm(r) * np.linalg.norm(s):
        return None
    w = p3 - p1
    t = (w[0]*s[1] - w[1]*s[0]) / denom
    u = (w[0]*r[1] - w[1]*r[0]) / denom
    if -eps <= t <= 1.0 + eps and -eps <= u <= 1.0 + eps:
        return p1 + min(max(t, 0.0), 1.0) * r
    return None


def closest_points_between_segments(p1, q1, p2, q2) -> Tuple[np.ndarray, np.ndarray]:
    """Closest pair of points between segments p1-q1 and p2-q2 (any dimension).

    Clamped parametric solution; degenerate (zero length) segments are
    handled as points.
    """
    p1 = np.asarray(p1, dtype=np.float64); q1 = np.asarray(q1, dtype=np.float64)
    p2 = np.asarray(p2, dtype=np.float64); q2 = np.asarray(q2, dtype=np.float64)
    d1 = q1 - p1
    d2 = q2 - p2
    r = p1 - p2
    a = float(np.dot(d1, d1))
    e = float(np.dot(d2, d2))
    f = float(np.dot(d2, r))
    if a == 0.0 and e == 0.0:
        return p1.copy(), p2.copy()
    if a == 0.0:
        s = 0.0
        t = min(max(f / e, 0.0), 1.0)
    else:
        c = float(np.dot(d1, r))
        if e == 0.0:
            t = 0.0
            s = min(max(-c / a, 0.0), 1.0)
        else:
            b = float(np.dot(d1, d2))
            denom = a*e - b*b
            s = min(max((b*f - c*e) / denom, 0.0), 1.0) if denom > 0.0 else 0.0
            t = (b*s + f) / e
            if t < 0.0:
                t = 0.0
                s = min(max(-c / a, 0.0), 1.0)
            elif t > 1.0:
                t = 1.0
                s = min(max((b - c) / a, 0.0), 1.0)
    return p1 + s * d1, p2 + t * d2


def circle_circle_intersection(c0: 'Ball', c1: 'Ball', eps: float = EPS_CONTAINMENT) -> List[np.ndarray]:
    """Intersection points of two circles.

    Returns two points for crossing circles (the same point twice when the
    circles are tangent) and an empty list for disjoint, nested or
    concentric circles.
    """
    delta = c1.center - c0.center
    d = float(np.linalg.norm(delta))
    r0 = c0.radius; r1 = c1.radius
    slack = eps * max(1.0, r0 + r1)
    if d == 0.0 or d > r0 + r1 + slack or d < abs(r0 - r1) - slack:
        return []
    a = (r0*r0 - r1*r1 + d*d) / (2.0 * d)
    h = math.sqrt(max(r0*r0 - a*a, 0.0))
    unit = delta / d
    base = c0.center + a * unit
    perp = np.array([-unit[1], unit[0]])
    return [base + h * perp, base - h * perp]


@dataclass(frozen=True, eq=False)
class Ball:
    """Circle (2D) or sphere (3D): a center point and a radius."""
    center: np.ndarray
    radius: float

    def __post_init__(self):
        object.__setattr__(self, 'center', np.array(self.center, dtype=np.float64).reshape(-1))
        object.__setattr__(self, 'radius', float(self.radius))

    @classmethod
    def degenerate(cls, dim: int = 2) -> 'Ball':
        """Zero-radius ball at the origin, the result for empty input."""
        return cls(np.zeros(dim), 0.0)

    @property
    def dim(self) -> int:
        return int(self.center.shape[0])

    @property
    def is_degenerate(self) -> bool:
        return self.radius == 0.0

    def _slack(self, eps: float) -> float:
        return eps * max(1.0, self.radius)

    def contains(self, point, eps: float = EPS_CONTAINMENT) -> bool:
        p = np.asarray(point, dtype=np.float64)
        return float(np.linalg.norm(p - self.center)) <= self.radius + self._slack(eps)

    def contains_all(self, points, eps: float = EPS_CONTAINMENT) -> bool:
        pts = np.asarray(points, dtype=np.float64)
        if pts.size == 0:
            return True
        dists = np.linalg.norm(pts - self.center, axis=1)
        return bool(np.all(dists <= self.radius + self._slack(eps)))

    def isclose(self, other: 'Ball', eps: float = EPS_CONTAINMENT) -> bool:
        tol = self._slack(eps)
        return (abs(self.radius - other.radius) <= tol
                and float(np.linalg.norm(self.center - other.center)) <= tol)

    def __repr__(self) -> str:
        return f"Ball(center={self.center.tolist()}, radius={self.radius!r})"


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned box used as a clip window."""
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self):
        if self.xmin > self.xmax or self.ymin > self.ymax:
            raise InvalidInputError(f"inverted rectangle bounds: {self}")

    def corners(self) -> np.ndarray:
        """Counter-clockwise corner array starting at (xmin, ymin)."""
        return np.array([
            [self.xmin, self.ymin],
            [self.xmax, self.ymin],
            [self.xmax, self.ymax],
            [self.xmin, self.ymax],
        ], dtype=np.float64)


def circumball(support) -> Optional[Ball]:
    """Smallest ball with every point of ``support`` on its boundary.

    ``support`` holds 1..d+1 affinely independent points in d dimensions.
    The center lies in their affine hull, found from the linear system
    ``(A A^T) lam = |A|^2 / 2`` with ``A`` the offsets from the first point.
    Returns None when the points are affinely dependent (e.g. three
    collinear points in the plane).
    """
    pts = np.asarray(support, dtype=np.float64)
    if pts.shape[0] == 0:
        return None
    origin = pts[0]
    if pts.shape[0] == 1:
        return Ball(origin, 0.0)
    A = pts[1:] - origin
    gram = A @ A.T
    rhs = 0.5 * np.einsum('ij,ij->i', A, A)
    try:
        lam = np.linalg.solve(gram, rhs)
    except np.linalg.LinAlgError:
        return None
    offset = A.T @ lam
    center = origin + offset
    radius = float(np.linalg.norm(offset))
    if not np.isfinite(radius):
        return None
    # Nearly dependent supports solve to a wildly off center; reject those too
    spread = np.linalg.norm(pts - center, axis=1)
    if np.max(np.abs(spread - radius)) > EPS_CONTAINMENT * max(1.0, radius):
        return None
    return Ball(center, radius)
