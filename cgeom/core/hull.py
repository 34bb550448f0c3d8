"""Planar convex hull construction.

Three interchangeable algorithms share one contract: given an (N, 2)
point array, return the hull as a (H, 2) array of input points in
counter-clockwise order, without duplicate or collinear consecutive
vertices. Degenerate input (fewer than three distinct points, or all
points collinear) yields the empty (0, 2) array rather than raising.

- Graham scan: pivot + polar sort + stack scan, O(n log n).
- Jarvis march (gift wrapping): O(n h), good when the hull is small.
- Melkman: online, O(n), but only for points forming a simple polyline in
  the given order. That precondition is not checked.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, Optional

import numpy as np

from .config import HullConfig
from .constants import EPS_COLLINEAR
from .exceptions import InvalidInputError
from .geometry import LEFT, RIGHT, COLLINEAR, as_points, robust_orientation
from .logging_utils import get_logger

logger = get_logger('cgeom.hull')

__all__ = [
    'HullAlgorithm', 'GrahamScan', 'JarvisMarch', 'Melkman',
    'HULL_ALGORITHMS', 'convex_hull',
    'convex_hull_graham', 'convex_hull_jarvis', 'convex_hull_melkman',
]


def _empty_hull() -> np.ndarray:
    return np.empty((0, 2), dtype=np.float64)


def _lowest_index(pts: np.ndarray) -> int:
    """Index of the point with lowest y, ties broken by lowest x."""
    return int(np.lexsort((pts[:, 0], pts[:, 1]))[0])


def _drop_collinear(vertices, eps):
    """Remove vertices whose neighbours make them collinear (cyclic).

    Repeats until stable, so runs of collinear vertices collapse to their
    extreme points. Fewer than three survivors means the hull is degenerate.
    """
    verts = list(vertices)
    changed = True
    while changed and len(verts) >= 3:
        changed = False
        m = len(verts)
        for i in range(m):
            prev = verts[i - 1]; curr = verts[i]; nxt = verts[(i + 1) % m]
            if robust_orientation(prev, curr, nxt, eps) != LEFT:
                del verts[i]
                changed = True
                break
    if len(verts) < 3:
        return _empty_hull()
    return np.asarray(verts, dtype=np.float64)


class HullAlgorithm:
    """Base class for convex hull strategies.

    Subclasses implement ``_build`` on a validated (N, 2) array holding at
    least three points; ``build`` handles conversion and the small-input
    policy shared by every algorithm.
    """

    name = 'base'

    def __init__(self, eps: float = EPS_COLLINEAR):
        self.eps = eps

    def build(self, points) -> np.ndarray:
        pts = as_points(points, dim=2)
        if pts.shape[0] < 3:
            logger.debug("%s: %d point(s), hull is degenerate", self.name, pts.shape[0])
            return _empty_hull()
        hull = self._build(pts)
        if hull.shape[0] < 3:
            logger.debug("%s: input is collinear or coincident, hull is degenerate", self.name)
            return _empty_hull()
        return hull

    def _build(self, pts: np.ndarray) -> np.ndarray:
        raise NotImplementedError("Subclasses must implement _build")

    def __call__(self, points) -> np.ndarray:
        return self.build(points)


class GrahamScan(HullAlgorithm):
    """Graham scan.

    The pivot is the lowest (then leftmost) point. The rest are sorted by
    polar angle about it, nearer first on equal angles, and the scan pops
    every vertex that does not make a strict left turn, which drops nearer
    collinear points.
    """

    name = 'graham'

    def _build(self, pts):
        pivot_idx = _lowest_index(pts)
        pivot = pts[pivot_idx]
        rest = np.delete(pts, pivot_idx, axis=0)
        offsets = rest - pivot
        dist2 = np.einsum('ij,ij->i', offsets, offsets)
        # Copies of the pivot carry no angle information
        keep = dist2 > 0.0
        rest, offsets, dist2 = rest[keep], offsets[keep], dist2[keep]
        if rest.shape[0] < 2:
            return _empty_hull()
        angles = np.arctan2(offsets[:, 1], offsets[:, 0])
        order = np.lexsort((dist2, angles))
        stack = [pivot]
        for p in rest[order]:
            while len(stack) >= 2 and robust_orientation(stack[-2], stack[-1], p, self.eps) != LEFT:
                stack.pop()
            stack.append(p)
        return _drop_collinear(stack, self.eps)


class JarvisMarch(HullAlgorithm):
    """Gift wrapping from the lowest point.

    Each step picks the candidate with no point to its right; collinear
    ties go to the farther point, so interior boundary points are skipped.
    """

    name = 'jarvis'

    def _build(self, pts):
        n = pts.shape[0]
        start = _lowest_index(pts)
        hull_idx = [start]
        current = start
        for _ in range(n + 1):
            candidate = -1
            for i in range(n):
                if np.array_equal(pts[i], pts[current]):
                    continue
                if candidate < 0:
                    candidate = i
                    continue
                o = robust_orientation(pts[current], pts[candidate], pts[i], self.eps)
                if o == RIGHT:
                    candidate = i
                elif o == COLLINEAR:
                    to_cand = pts[candidate] - pts[current]
                    to_i = pts[i] - pts[current]
                    if np.dot(to_i, to_i) > np.dot(to_cand, to_cand) and np.dot(to_i, to_cand) > 0.0:
                        candidate = i
            if candidate < 0:
                # every point coincides with the start
                return _empty_hull()
            if np.array_equal(pts[candidate], pts[start]):
                break
            hull_idx.append(candidate)
            current = candidate
        else:
            raise InvalidInputError(
                "jarvis: gift wrapping did not close; tolerance too small for this input")
        return _drop_collinear(pts[hull_idx], self.eps)


class Melkman(HullAlgorithm):
    """Melkman's online hull of a simple polyline.

    The deque holds the hull counter-clockwise from bottom to top with the
    most recent hull vertex at both ends. A point left of both edges
    adjacent to that vertex is inside and skipped; otherwise vertices are
    popped from each end until the new point makes a left turn, and it is
    pushed on both ends.
    """

    name = 'melkman'

    def _build(self, pts):
        n = pts.shape[0]
        # Collapse a collinear (or repeated) prefix to its two extremes
        first = pts[0]
        k = 1
        while k < n and np.array_equal(pts[k], first):
            k += 1
        if k >= n:
            return _empty_hull()
        second_idx = k
        k += 1
        while k < n and robust_orientation(first, pts[second_idx], pts[k], self.eps) == COLLINEAR:
            k += 1
        if k >= n:
            return _empty_hull()
        a, b, c = first, pts[k - 1], pts[k]
        if robust_orientation(a, b, c, self.eps) == LEFT:
            deq = deque([c, a, b, c])
        else:
            deq = deque([c, b, a, c])
        for p in pts[k + 1:]:
            top_left = robust_orientation(deq[-2], deq[-1], p, self.eps) == LEFT
            bottom_left = robust_orientation(deq[0], deq[1], p, self.eps) == LEFT
            if top_left and bottom_left:
                continue
            while len(deq) > 2 and robust_orientation(deq[-2], deq[-1], p, self.eps) != LEFT:
                deq.pop()
            deq.append(p)
            while len(deq) > 2 and robust_orientation(deq[0], deq[1], p, self.eps) != LEFT:
                deq.popleft()
            deq.appendleft(p)
        deq.pop()
        return _drop_collinear(deq, self.eps)


HULL_ALGORITHMS: Dict[str, type] = {
    GrahamScan.name: GrahamScan,
    JarvisMarch.name: JarvisMarch,
    Melkman.name: Melkman,
}


def convex_hull(points, method: Optional[str] = None, eps: Optional[float] = None,
                config=None) -> np.ndarray:
    """Convex hull of a planar point set with the named algorithm.

    ``method`` and ``eps`` default to the fields of ``config`` (a
    HullConfig), then to the Graham scan with ``EPS_COLLINEAR``.
    """
    cfg = config or HullConfig()
    method = cfg.method if method is None else method
    eps = cfg.eps if eps is None else eps
    try:
        algorithm = HULL_ALGORITHMS[method]
    except KeyError:
        raise InvalidInputError(
            f"unknown hull method {method!r}; expected one of {sorted(HULL_ALGORITHMS)}") from None
    return algorithm(eps).build(points)


def convex_hull_graham(points, eps: float = EPS_COLLINEAR) -> np.ndarray:
    return GrahamScan(eps).build(points)


def convex_hull_jarvis(points, eps: float = EPS_COLLINEAR) -> np.ndarray:
    return JarvisMarch(eps).build(points)


def convex_hull_melkman(points, eps: float = EPS_COLLINEAR) -> np.ndarray:
    return Melkman(eps).build(points)
