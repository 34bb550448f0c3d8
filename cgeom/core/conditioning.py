"""Point-set conditioning: normalization, covariance, de-duplication, ordering.

Pure functions over (N, d) point arrays. None of them mutate their input.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from scipy.spatial import cKDTree

from .constants import DEFAULT_AXIS_COUNT, EPS_DUPLICATE, NORMALIZATION_TARGET
from .exceptions import InvalidInputError
from .geometry import as_points
from .logging_utils import get_logger

logger = get_logger('cgeom.conditioning')

__all__ = [
    'SimilarityTransform', 'isotropic_normalization', 'covariance_matrix',
    'remove_duplicates', 'ordered_polygon', 'axis_projection_descriptor',
]


@dataclass(frozen=True, eq=False)
class SimilarityTransform:
    """Uniform scale followed by a translation: ``x' = scale * x + translation``.

    ``degenerate`` is set when the source cloud had no spread to normalize,
    in which case ``scale`` is 1 and only the translation applies.
    """
    scale: float
    translation: np.ndarray
    degenerate: bool = False

    @property
    def dim(self) -> int:
        return int(self.translation.shape[0])

    def apply(self, points) -> np.ndarray:
        pts = as_points(points, dim=self.dim)
        return pts * self.scale + self.translation

    def invert(self, points) -> np.ndarray:
        """Map normalized coordinates back to the original frame."""
        pts = as_points(points, dim=self.dim)
        return (pts - self.translation) / self.scale

    def matrix(self) -> np.ndarray:
        """Homogeneous (d+1, d+1) matrix of the transform."""
        d = self.dim
        m = np.eye(d + 1)
        m[:d, :d] *= self.scale
        m[:d, d] = self.translation
        return m


def isotropic_normalization(points, target: float = NORMALIZATION_TARGET
                            ) -> Tuple[np.ndarray, SimilarityTransform]:
    """Center a point cloud on the origin and scale its mean radius to ``target``.

    Returns the normalized copy and the transform that produced it, so
    results computed in the normalized frame can be mapped back with
    ``transform.invert``. When every point coincides (or the input is
    empty) there is no spread to scale. The transform then only
    translates, keeps ``scale == 1`` and is flagged ``degenerate``.
    """
    pts = as_points(points)
    n, dim = pts.shape
    if n == 0:
        logger.warning("isotropic_normalization: empty input, returning identity transform")
        return pts, SimilarityTransform(1.0, np.zeros(dim), degenerate=True)
    mean = pts.mean(axis=0)
    mean_dist = float(np.linalg.norm(pts - mean, axis=1).mean())
    if mean_dist == 0.0:
        logger.warning("isotropic_normalization: all %d points coincide, translating only", n)
        transform = SimilarityTransform(1.0, -mean, degenerate=True)
    else:
        scale = target / mean_dist
        transform = SimilarityTransform(scale, -mean * scale)
    return transform.apply(pts), transform


def covariance_matrix(points) -> np.ndarray:
    """(d, d) covariance of the cloud about its centroid (divides by n).

    A single point, or an empty (0, d) input, gives the zero matrix.
    """
    pts = as_points(points)
    n, dim = pts.shape
    if n < 2:
        return np.zeros((dim, dim))
    centered = pts - pts.mean(axis=0)
    return centered.T @ centered / n


def remove_duplicates(points, epsilon: float = EPS_DUPLICATE) -> np.ndarray:
    """Keep the first occurrence of each point, preserving input order.

    Two points are equal when every coordinate differs by at most
    ``epsilon``. A point is dropped only when it matches an earlier point
    that was itself kept, so chains of near neighbours do not collapse
    transitively.
    """
    pts = as_points(points)
    n = pts.shape[0]
    if n < 2:
        return pts
    if epsilon < 0.0:
        raise InvalidInputError(f"epsilon must be non-negative, got {epsilon}")
    tree = cKDTree(pts)
    neighbours = tree.query_ball_point(pts, r=epsilon, p=np.inf)
    removed = np.zeros(n, dtype=bool)
    for i in range(n):
        if removed[i]:
            continue
        for j in neighbours[i]:
            if j > i:
                removed[j] = True
    if removed.any():
        logger.debug("remove_duplicates: dropped %d of %d points", int(removed.sum()), n)
    return pts[~removed]


def ordered_polygon(points) -> np.ndarray:
    """Order an unordered planar point set into a polygon boundary.

    Points are sorted counter-clockwise by angle about their centroid;
    exactly equal angles are broken by distance, nearer first.
    """
    pts = as_points(points, dim=2)
    if pts.shape[0] == 0:
        return pts
    offsets = pts - pts.mean(axis=0)
    angles = np.arctan2(offsets[:, 1], offsets[:, 0])
    dist2 = np.einsum('ij,ij->i', offsets, offsets)
    return pts[np.lexsort((dist2, angles))]


def axis_projection_descriptor(polygon, axis_count: int = DEFAULT_AXIS_COUNT) -> np.ndarray:
    """Rotation-normalized shape signature of a polygon.

    The polygon is projected onto ``axis_count`` axes through the origin,
    spaced ``360 / axis_count`` degrees apart. Each value is the length of
    the projected interval. Values are divided by the largest one and the
    sequence is rotated so the smallest comes first.
    """
    pts = as_points(polygon, dim=2, name='polygon')
    if pts.shape[0] == 0 or axis_count <= 0:
        return np.empty((0,), dtype=np.float64)
    theta = np.deg2rad(np.arange(axis_count) * (360.0 / axis_count))
    axes = np.stack([np.cos(theta), np.sin(theta)], axis=1)
    proj = pts @ axes.T
    values = proj.max(axis=0) - proj.min(axis=0)
    largest = values.max()
    if largest > 0.0:
        values = values / largest
    return np.roll(values, -int(np.argmin(values)))
