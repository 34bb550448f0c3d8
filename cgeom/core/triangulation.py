"""Polygon triangulation by ear clipping.

A vertex is an ear when it is convex with respect to the polygon winding
and the triangle it forms with its two neighbours contains no other
remaining vertex. Clipping ears one at a time until three vertices remain
yields n-2 triangles covering the polygon interior.

Collinear vertices (both incident edges on one line) are dropped from the
working polygon without emitting a triangle, so no zero-area triangles are
produced; the triangle count is then n-2 minus the number dropped.
"""
from __future__ import annotations

import numpy as np

from .config import TriangulationConfig
from .constants import EPS_AREA
from .exceptions import InvalidInputError
from .geometry import (
    LEFT, COLLINEAR, as_points, point_in_triangle, polygon_signed_area,
    robust_orientation, seg_intersect, triangle_angles,
)
from .logging_utils import get_logger

logger = get_logger('cgeom.triangulation')

__all__ = [
    'ear_clip_triangulation',
    'triangulate',
    'polygon_has_self_intersections',
    'EAR_SELECTIONS',
]

EAR_SELECTIONS = ('first', 'best')


def polygon_has_self_intersections(polygon):
    """Return True if polygon (sequence of (x,y)) contains any pair of crossing non-adjacent edges."""
    if len(polygon) < 4:
        return False
    pts = [np.asarray(p, dtype=float) for p in polygon]
    n = len(pts)
    for i in range(n):
        a = pts[i]; b = pts[(i+1)%n]
        for j in range(i+1, n):
            if j in (i, (i+1)%n, (i-1)%n):
                continue
            if (i==0 and (j+1)%n==0):
                continue
            c = pts[j]; d = pts[(j+1)%n]
            if seg_intersect(a,b,c,d):
                return True
    return False


def _validate(points, poly_indices):
    if len(set(poly_indices)) != len(poly_indices):
        raise InvalidInputError("Duplicate vertices detected in poly_indices for ear_clip_triangulation")
    coords = points[list(poly_indices)]
    if len({tuple(p) for p in coords}) != len(poly_indices):
        raise InvalidInputError("Repeated coordinates in polygon passed to ear_clip_triangulation")
    if polygon_has_self_intersections(coords):
        raise InvalidInputError("Self-intersecting polygon in ear_clip_triangulation")


def _is_ear(points, verts, i, eps):
    m = len(verts)
    prev = verts[(i-1) % m]; curr = verts[i]; nxt = verts[(i+1) % m]
    pa = points[prev]; pb = points[curr]; pc = points[nxt]
    if robust_orientation(pa, pb, pc, eps) != LEFT:
        return False
    corners = {tuple(pa), tuple(pb), tuple(pc)}
    for v in verts:
        if v in (prev, curr, nxt):
            continue
        pv = points[v]
        if tuple(pv) in corners:
            continue
        if point_in_triangle(pv, pa, pb, pc, eps):
            return False
    return True


def _drop_one_collinear(points, verts, eps):
    m = len(verts)
    for i in range(m):
        if robust_orientation(points[verts[(i-1) % m]], points[verts[i]], points[verts[(i+1) % m]], eps) == COLLINEAR:
            del verts[i]
            return True
    return False


def _ear_quality(points, verts, i):
    m = len(verts)
    return min(triangle_angles(points[verts[(i-1) % m]], points[verts[i]], points[verts[(i+1) % m]]))


def _ear_clip(points, poly_indices, selection, eps):
    verts = [int(v) for v in poly_indices]
    area = polygon_signed_area(points[verts])
    if abs(area) <= EPS_AREA:
        logger.debug("ear clipping: polygon of %d vertices has no area", len(verts))
        return []
    if area < 0:
        verts = verts[::-1]
    tris_out = []
    dropped = 0
    while len(verts) > 3:
        if _drop_one_collinear(points, verts, eps):
            dropped += 1
            continue
        ears = [i for i in range(len(verts)) if _is_ear(points, verts, i, eps)]
        if not ears:
            raise InvalidInputError(
                f"no ear found with {len(verts)} vertices remaining; polygon is not simple")
        if selection == 'best':
            i = max(ears, key=lambda k: _ear_quality(points, verts, k))
        else:
            i = ears[0]
        m = len(verts)
        tris_out.append((verts[(i-1) % m], verts[i], verts[(i+1) % m]))
        del verts[i]
    a, b, c = verts
    if robust_orientation(points[a], points[b], points[c], eps) == LEFT:
        tris_out.append((a, b, c))
    else:
        dropped += 1
    if dropped:
        logger.debug("ear clipping: skipped %d collinear vertices", dropped)
    return tris_out


def ear_clip_triangulation(points, poly_indices, config: TriangulationConfig = None):
    """Ear clipping triangulation of the polygon ``points[poly_indices]``.

    Returns a list of counter-clockwise vertex index triplets. Polygons with
    fewer than three vertices or zero area give an empty list. Duplicate
    vertices and self-intersections raise InvalidInputError unless
    ``config.validate`` is False.
    """
    cfg = config or TriangulationConfig()
    if cfg.ear_selection not in EAR_SELECTIONS:
        raise InvalidInputError(f"unknown ear selection {cfg.ear_selection!r}; expected one of {EAR_SELECTIONS}")
    pts = as_points(points, dim=2)
    poly_indices = [int(v) for v in poly_indices]
    if len(poly_indices) < 3:
        return []
    if cfg.validate:
        _validate(pts, poly_indices)
    return _ear_clip(pts, poly_indices, cfg.ear_selection, cfg.eps)


def triangulate(polygon, config: TriangulationConfig = None) -> np.ndarray:
    """Triangulate a simple polygon given as a (K, 2) vertex array.

    Returns an (M, 3, 2) array of counter-clockwise triangles.
    """
    pts = as_points(polygon, dim=2, name='polygon')
    tris = ear_clip_triangulation(pts, range(pts.shape[0]), config)
    if not tris:
        return np.empty((0, 3, 2), dtype=np.float64)
    return pts[np.asarray(tris, dtype=np.intp)]
