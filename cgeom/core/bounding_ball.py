"""Minimum enclosing ball (circle in 2D, sphere in 3D).

Solvers
-------
naive       exact; tries every ball spanned by 2..d+1 input points, O(n^(d+2))
randomized  exact; Welzl-style incremental growth over a random permutation,
            expected O(n). Randomness comes from an injectable NumPy
            Generator so runs can be reproduced by seeding.
ritter      approximate; two passes, O(n). Seeds a ball from the widest
            axis-extremal pair and grows it to swallow outliers. The result
            can exceed the optimum radius by several percent.

Each solver can be wrapped in ``HullFilteredBall``, which first reduces
the input to its convex hull vertices. The enclosing ball of a set equals
that of its hull, so the output contract is unchanged.
"""
from __future__ import annotations

import itertools
from typing import Dict, Optional

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from .config import BallConfig
from .constants import EPS_COLLINEAR, EPS_CONTAINMENT, NAIVE_BALL_MAX_POINTS
from .exceptions import InvalidInputError
from .geometry import Ball, as_points, circumball, distance
from .hull import convex_hull_graham
from .logging_utils import get_logger

logger = get_logger('cgeom.bounding_ball')

__all__ = [
    'BallAlgorithm', 'NaiveBall', 'RandomizedBall', 'RitterBall',
    'HullFilteredBall', 'BALL_ALGORITHMS', 'minimum_enclosing_ball',
    'minimal_ball_of_few',
]


def _check_dim(pts: np.ndarray) -> np.ndarray:
    if pts.shape[1] not in (2, 3):
        raise InvalidInputError(f"enclosing balls are supported in 2D and 3D, got {pts.shape[1]}D points")
    return pts


def _diameter_ball(p, q) -> Ball:
    p = np.asarray(p, dtype=np.float64); q = np.asarray(q, dtype=np.float64)
    return Ball(0.5 * (p + q), 0.5 * distance(p, q))


def _farthest_pair_ball(pts: np.ndarray) -> Ball:
    best = (0, 0)
    best_d = -1.0
    for i, j in itertools.combinations(range(pts.shape[0]), 2):
        d = float(np.dot(pts[i] - pts[j], pts[i] - pts[j]))
        if d > best_d:
            best_d = d
            best = (i, j)
    return _diameter_ball(pts[best[0]], pts[best[1]])


def _ball_through(support: np.ndarray) -> Ball:
    """Smallest ball with the support points on its boundary.

    Affinely dependent supports (collinear triples in the plane, coplanar
    quadruples in space) fall back to the ball over their farthest pair.
    """
    ball = circumball(support)
    if ball is None:
        return _farthest_pair_ball(support)
    return ball


def minimal_ball_of_few(points, eps: float = EPS_CONTAINMENT) -> Ball:
    """Exact minimum ball of at most d+1 points by exhausting their subsets.

    For an obtuse triangle this is the ball over the longest side, not the
    circumcircle.
    """
    pts = np.asarray(points, dtype=np.float64)
    n = pts.shape[0]
    if n == 0:
        return Ball.degenerate(pts.shape[1] if pts.ndim == 2 else 2)
    if n == 1:
        return Ball(pts[0], 0.0)
    best: Optional[Ball] = None
    for size in range(2, n + 1):
        for subset in itertools.combinations(range(n), size):
            ball = circumball(pts[list(subset)])
            if ball is None or not ball.contains_all(pts, eps):
                continue
            if best is None or ball.radius < best.radius:
                best = ball
    return best if best is not None else _farthest_pair_ball(pts)


class BallAlgorithm:
    """Base class for enclosing ball strategies.

    ``enclose`` converts input and applies the shared small-input policy:
    empty input gives ``Ball.degenerate()``, and up to d+1 points are solved
    exactly. Subclasses implement ``_enclose`` for the general case.
    """

    name = 'base'
    exact = True

    def __init__(self, eps: float = EPS_CONTAINMENT):
        self.eps = eps

    def enclose(self, points) -> Ball:
        pts = as_points(points)
        if pts.shape[0] == 0:
            logger.debug("%s: empty input, returning degenerate ball", self.name)
            return Ball.degenerate(pts.shape[1])
        pts = _check_dim(pts)
        if pts.shape[0] <= pts.shape[1] + 1:
            return minimal_ball_of_few(pts, self.eps)
        return self._enclose(pts)

    def _enclose(self, pts: np.ndarray) -> Ball:
        raise NotImplementedError("Subclasses must implement _enclose")

    def __call__(self, points) -> Ball:
        return self.enclose(points)


class NaiveBall(BallAlgorithm):
    """Exhaustive search over every ball spanned by 2..d+1 input points.

    Only meant for small inputs and as a validation oracle.
    """

    name = 'naive'

    def __init__(self, eps: float = EPS_CONTAINMENT, max_points: int = NAIVE_BALL_MAX_POINTS):
        super().__init__(eps)
        self.max_points = max_points

    def _enclose(self, pts):
        n, dim = pts.shape
        if n > self.max_points:
            logger.warning("naive: %d points exceeds the intended bound of %d; "
                           "expect O(n^%d) running time", n, self.max_points, dim + 2)
        best: Optional[Ball] = None
        for size in range(2, dim + 2):
            for subset in itertools.combinations(range(n), size):
                ball = circumball(pts[list(subset)])
                if ball is None:
                    continue
                if best is not None and ball.radius >= best.radius:
                    continue
                if ball.contains_all(pts, self.eps):
                    best = ball
        if best is None:
            # Only reachable through tolerance trouble; the diameter ball is a safe bound
            logger.warning("naive: no candidate ball enclosed every point, using farthest pair")
            best = _farthest_pair_ball(pts)
        return best


class RandomizedBall(BallAlgorithm):
    """Welzl's randomized incremental algorithm.

    Points are visited in a random permutation. Whenever a point falls
    outside the ball of the prefix, it joins the support set and the
    prefix is re-solved with it pinned to the boundary. Recursion depth is
    bounded by the support size (d+1); the outer loops are iterative.
    """

    name = 'randomized'

    def __init__(self, eps: float = EPS_CONTAINMENT, rng=None):
        super().__init__(eps)
        self.rng = np.random.default_rng(rng)

    def _enclose(self, pts):
        shuffled = pts[self.rng.permutation(pts.shape[0])]
        return self._with_support(shuffled, shuffled.shape[0], [])

    def _with_support(self, pts, count, support):
        dim = pts.shape[1]
        ball = _ball_through(np.asarray(support)) if support else None
        if len(support) == dim + 1:
            return ball
        for i in range(count):
            if ball is not None and ball.contains(pts[i], self.eps):
                continue
            ball = self._with_support(pts, i, support + [pts[i]])
        return ball


class RitterBall(BallAlgorithm):
    """Ritter's bounding sphere heuristic (approximate)."""

    name = 'ritter'
    exact = False

    def _enclose(self, pts):
        lo = np.argmin(pts, axis=0)
        hi = np.argmax(pts, axis=0)
        spans = np.linalg.norm(pts[hi] - pts[lo], axis=1)
        axis = int(np.argmax(spans))
        ball = _diameter_ball(pts[lo[axis]], pts[hi[axis]])
        center = ball.center
        radius = ball.radius
        radius_sq = radius * radius
        for p in pts:
            offset = p - center
            dist_sq = float(np.dot(offset, offset))
            if dist_sq > radius_sq:
                dist = dist_sq ** 0.5
                new_radius = 0.5 * (radius + dist)
                # slide the center toward p so the far side stays put
                center = center + ((dist - new_radius) / dist) * offset
                radius = new_radius
                radius_sq = radius * radius
        return Ball(center, radius)


class HullFilteredBall(BallAlgorithm):
    """Run a wrapped solver on the convex hull vertices only.

    2D input is filtered with the Graham scan (using ``hull_eps`` as its
    collinearity tolerance), 3D input with Qhull. When the hull is
    degenerate (collinear or coplanar input) the full point set is passed
    through unchanged.
    """

    def __init__(self, wrapped: BallAlgorithm, hull_eps: float = EPS_COLLINEAR):
        super().__init__(wrapped.eps)
        self.wrapped = wrapped
        self.hull_eps = hull_eps
        self.name = f'{wrapped.name}+hull'
        self.exact = wrapped.exact

    def _hull_vertices(self, pts):
        if pts.shape[1] == 2:
            hull = convex_hull_graham(pts, self.hull_eps)
            return hull if hull.shape[0] else None
        try:
            return pts[ConvexHull(pts).vertices]
        except QhullError:
            return None

    def _enclose(self, pts):
        vertices = self._hull_vertices(pts)
        if vertices is None:
            logger.debug("%s: degenerate hull, solving on all %d points", self.name, pts.shape[0])
            return self.wrapped.enclose(pts)
        logger.debug("%s: hull filter kept %d of %d points", self.name, vertices.shape[0], pts.shape[0])
        return self.wrapped.enclose(vertices)


BALL_ALGORITHMS: Dict[str, type] = {
    NaiveBall.name: NaiveBall,
    RandomizedBall.name: RandomizedBall,
    RitterBall.name: RitterBall,
}


def minimum_enclosing_ball(points, method: Optional[str] = None, hull_filter: Optional[bool] = None,
                           rng=None, eps: Optional[float] = None, config=None) -> Ball:
    """Enclosing ball of a 2D or 3D point set.

    Parameters
    ----------
    points : (N, 2) or (N, 3) array-like
    method : {'naive', 'randomized', 'ritter'}, optional
        Defaults to ``config.method`` ('randomized' without a config).
    hull_filter : bool, optional
        Solve on the convex hull vertices only (same result, less work).
    rng : int, numpy.random.Generator or None
        Random source for the randomized solver. Falls back to
        ``config.seed`` when None.
    eps : float, optional
        Containment tolerance, defaults to ``config.eps``.
    config : BallConfig, optional
        Supplies every setting not passed explicitly, plus the naive size
        bound and the hull pre-filter tolerance.

    Returns
    -------
    Ball
        ``Ball.degenerate()`` for empty input.
    """
    cfg = config or BallConfig()
    method = cfg.method if method is None else method
    hull_filter = cfg.hull_filter if hull_filter is None else hull_filter
    eps = cfg.eps if eps is None else eps
    rng = cfg.seed if rng is None else rng
    if method == NaiveBall.name:
        solver: BallAlgorithm = NaiveBall(eps, max_points=cfg.naive_max_points)
    elif method == RandomizedBall.name:
        solver = RandomizedBall(eps, rng=rng)
    elif method == RitterBall.name:
        solver = RitterBall(eps)
    else:
        raise InvalidInputError(
            f"unknown ball method {method!r}; expected one of {sorted(BALL_ALGORITHMS)}")
    if hull_filter:
        solver = HullFilteredBall(solver, hull_eps=cfg.hull_eps)
    return solver.enclose(points)
