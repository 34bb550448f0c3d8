"""Sutherland-Hodgman polygon clipping against a convex window.

The subject polygon is re-clipped against the half-plane of each window
edge in turn. The window must be convex; concave windows are rejected
with InvalidInputError instead of producing a plausible but wrong shape.

The inside test is inclusive (within ``eps`` of the edge counts as
inside). Vertices already on the window boundary are therefore kept as
they are, which makes clipping idempotent.
"""
from __future__ import annotations

import math

import numpy as np

from .config import ClipConfig
from .exceptions import InvalidInputError
from .geometry import (
    LEFT, RIGHT, Ball, Rectangle, as_points, is_convex_polygon,
    polygon_orientation,
)
from .logging_utils import get_logger

logger = get_logger('cgeom.clipping')

__all__ = ['clip', 'clip_window_vertices', 'sutherland_hodgman', 'regular_polygon']


def _empty_polygon() -> np.ndarray:
    return np.empty((0, 2), dtype=np.float64)


def regular_polygon(center, radius: float, sides: int) -> np.ndarray:
    """Counter-clockwise regular polygon inscribed in a circle."""
    if sides < 3:
        raise InvalidInputError(f"a polygon needs at least 3 sides, got {sides}")
    theta = np.arange(sides) * (2.0 * math.pi / sides)
    c = np.asarray(center, dtype=np.float64)
    return np.stack([c[0] + radius * np.cos(theta), c[1] + radius * np.sin(theta)], axis=1)


def clip_window_vertices(window, config: ClipConfig = None) -> np.ndarray:
    """Normalize a clip window to a counter-clockwise convex vertex array.

    Accepts a convex polygon / triangle array, a ``Rectangle`` or a 2D
    ``Ball`` (circle, replaced by an inscribed regular polygon with
    ``config.circle_segments`` sides).
    """
    cfg = config or ClipConfig()
    if isinstance(window, Rectangle):
        verts = window.corners()
    elif isinstance(window, Ball):
        if window.dim != 2:
            raise InvalidInputError("only circles (2D balls) can serve as clip windows")
        verts = regular_polygon(window.center, window.radius, cfg.circle_segments)
    else:
        verts = _merge_repeats(as_points(window, dim=2, name='window'), 0.0)
    orientation = polygon_orientation(verts)
    if verts.shape[0] < 3 or orientation not in (LEFT, RIGHT):
        raise InvalidInputError("clip window needs at least three non-collinear vertices")
    if not is_convex_polygon(verts):
        raise InvalidInputError("clip window must be convex")
    if orientation == RIGHT:
        verts = verts[::-1].copy()
    return verts


def _clip_against_edge(subject, a, b, eps):
    """Keep the part of ``subject`` left of (or on) the directed line a->b."""
    edge = b - a
    length = float(np.hypot(edge[0], edge[1]))
    normal = np.array([-edge[1], edge[0]]) / length
    # signed distance to the edge line, positive on the inside
    side = (subject - a) @ normal
    tol = eps * max(1.0, length)
    out = []
    m = subject.shape[0]
    for k in range(m):
        cur, s_cur = subject[k], side[k]
        prev, s_prev = subject[k - 1], side[k - 1]
        cur_in = s_cur >= -tol
        prev_in = s_prev >= -tol
        if cur_in:
            if not prev_in and s_cur > tol:
                t = s_prev / (s_prev - s_cur)
                out.append(prev + t * (cur - prev))
            out.append(cur)
        elif prev_in and s_prev > tol:
            t = s_prev / (s_prev - s_cur)
            out.append(prev + t * (cur - prev))
    if not out:
        return _empty_polygon()
    return np.asarray(out)


def _merge_repeats(poly, eps):
    if poly.shape[0] == 0:
        return poly
    keep = []
    for p in poly:
        if keep and np.all(np.abs(p - keep[-1]) <= eps):
            continue
        keep.append(p)
    while len(keep) > 1 and np.all(np.abs(keep[0] - keep[-1]) <= eps):
        keep.pop()
    return np.asarray(keep)


def sutherland_hodgman(subject, window_vertices, eps: float) -> np.ndarray:
    """Clip ``subject`` against a CCW convex vertex array (no validation)."""
    out = np.asarray(subject, dtype=np.float64)
    n = window_vertices.shape[0]
    for i in range(n):
        if out.shape[0] == 0:
            break
        out = _clip_against_edge(out, window_vertices[i], window_vertices[(i + 1) % n], eps)
    out = _merge_repeats(out, eps)
    if out.shape[0] < 3:
        return _empty_polygon()
    return out


def clip(polygon, window, config: ClipConfig = None) -> np.ndarray:
    """Intersection of a polygon with a convex window.

    Returns a (K, 2) array keeping the subject's vertex order and winding.
    The result is empty when the subject lies entirely outside the window
    or has fewer than three vertices, and equals the subject when it lies
    entirely inside.
    """
    cfg = config or ClipConfig()
    subject = as_points(polygon, dim=2, name='polygon')
    window_verts = clip_window_vertices(window, cfg)
    if subject.shape[0] < 3:
        logger.debug("clip: subject has %d vertices, result is empty", subject.shape[0])
        return _empty_polygon()
    result = sutherland_hodgman(subject, window_verts, cfg.eps)
    if result.shape[0] == 0:
        logger.debug("clip: subject lies outside the window")
    return result
