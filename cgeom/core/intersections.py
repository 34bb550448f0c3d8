"""Brute-force pairwise intersection grouping.

Every unordered pair (i, j), i < j, is tested once, in i-then-j order, so
the output order is deterministic. There is no spatial indexing: O(n^2)
pair tests.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

from .constants import EPS_COLLINEAR, EPS_CONTAINMENT, EPS_SEGMENT_3D
from .exceptions import InvalidInputError
from .geometry import (
    Ball, circle_circle_intersection, closest_points_between_segments,
    segment_intersection_point,
)
from .logging_utils import get_logger

logger = get_logger('cgeom.intersections')

__all__ = ['naive_group_intersections', 'group_segment_intersections', 'group_circle_intersections']


def group_segment_intersections(segments, eps: float = EPS_COLLINEAR,
                                eps_3d: float = EPS_SEGMENT_3D) -> np.ndarray:
    """Intersection points of every intersecting pair of segments.

    ``segments`` is an (M, 2, 2) array of planar segments or an (M, 2, 3)
    array of spatial ones. Spatial segments intersect when their closest
    approach is within ``eps_3d``; the midpoint of the closest pair is
    reported. Collinear overlaps have no unique point and are skipped.
    """
    segs = np.array(segments, dtype=np.float64)
    if segs.size == 0:
        width = segs.shape[-1] if segs.ndim == 3 else 2
        return np.empty((0, width), dtype=np.float64)
    if segs.ndim != 3 or segs.shape[1] != 2 or segs.shape[2] not in (2, 3):
        raise InvalidInputError(f"segments must be an (M, 2, 2) or (M, 2, 3) array, got shape {segs.shape}")
    dim = segs.shape[2]
    out = []
    m = segs.shape[0]
    for i in range(m):
        a0, a1 = segs[i]
        for j in range(i + 1, m):
            b0, b1 = segs[j]
            if dim == 2:
                p = segment_intersection_point(a0, a1, b0, b1, eps)
                if p is not None:
                    out.append(p)
            else:
                c1, c2 = closest_points_between_segments(a0, a1, b0, b1)
                if np.linalg.norm(c1 - c2) <= eps_3d:
                    out.append(0.5 * (c1 + c2))
    logger.debug("group_segment_intersections: %d segments, %d intersections", m, len(out))
    if not out:
        return np.empty((0, dim), dtype=np.float64)
    return np.asarray(out)


def group_circle_intersections(circles, eps: float = EPS_CONTAINMENT) -> np.ndarray:
    """Both crossing points of every intersecting pair of circles.

    Tangent pairs contribute their contact point twice; nested, disjoint
    and concentric pairs contribute nothing.
    """
    circles = list(circles)
    for c in circles:
        if not isinstance(c, Ball) or c.dim != 2:
            raise InvalidInputError("circle grouping expects 2D Ball instances")
    out = []
    for i in range(len(circles)):
        for j in range(i + 1, len(circles)):
            out.extend(circle_circle_intersection(circles[i], circles[j], eps))
    if not out:
        return np.empty((0, 2), dtype=np.float64)
    return np.asarray(out)


def naive_group_intersections(entities, eps: Optional[float] = None,
                              eps_3d: float = EPS_SEGMENT_3D) -> np.ndarray:
    """Pairwise intersections of a homogeneous group of segments or circles.

    A sequence of ``Ball`` objects is treated as circles; anything else as
    an array of segments (see ``group_segment_intersections``). ``eps``
    defaults to ``EPS_CONTAINMENT`` for circles and ``EPS_COLLINEAR`` for
    segments.
    """
    if isinstance(entities, (list, tuple)) and entities and all(isinstance(e, Ball) for e in entities):
        return group_circle_intersections(entities, EPS_CONTAINMENT if eps is None else eps)
    if isinstance(entities, (list, tuple)) and any(isinstance(e, Ball) for e in entities):
        raise InvalidInputError("cannot mix circles and segments in one group")
    return group_segment_intersections(entities, EPS_COLLINEAR if eps is None else eps, eps_3d)
