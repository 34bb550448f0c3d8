"""Public package API for the cgeom computational geometry toolkit.

This facade provides a stable, flat import surface on top of the internal
implementation package ``cgeom.core``.

Example
-------
    from cgeom import convex_hull, minimum_enclosing_ball, triangulate, clip

The deeper modules (``cgeom.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("cgeom")
except _NotFound:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_const = _imp('cgeom.core.constants')
_geom = _imp('cgeom.core.geometry')
_cond = _imp('cgeom.core.conditioning')
_inter = _imp('cgeom.core.intersections')
_hull = _imp('cgeom.core.hull')
_ball = _imp('cgeom.core.bounding_ball')
_tri = _imp('cgeom.core.triangulation')
_clip = _imp('cgeom.core.clipping')
_config = _imp('cgeom.core.config')
_log = _imp('cgeom.core.logging_utils')
_exc = _imp('cgeom.core.exceptions')

# Value types and errors
Ball = _geom.Ball
Rectangle = _geom.Rectangle
SimilarityTransform = _cond.SimilarityTransform
InvalidInputError = _exc.InvalidInputError

# Convex hull
convex_hull = _hull.convex_hull
convex_hull_graham = _hull.convex_hull_graham
convex_hull_jarvis = _hull.convex_hull_jarvis
convex_hull_melkman = _hull.convex_hull_melkman

# Enclosing balls
minimum_enclosing_ball = _ball.minimum_enclosing_ball

# Triangulation and clipping
triangulate = _tri.triangulate
ear_clip_triangulation = _tri.ear_clip_triangulation
clip = _clip.clip

# Conditioning
normalize_points = _cond.isotropic_normalization
isotropic_normalization = _cond.isotropic_normalization
covariance = _cond.covariance_matrix
covariance_matrix = _cond.covariance_matrix
remove_duplicates = _cond.remove_duplicates
order_polygon = _cond.ordered_polygon
ordered_polygon = _cond.ordered_polygon
axis_projection_descriptor = _cond.axis_projection_descriptor

# Intersection grouping
group_intersections = _inter.naive_group_intersections
naive_group_intersections = _inter.naive_group_intersections

# Configuration and logging
GeometryConfig = _config.GeometryConfig
HullConfig = _config.HullConfig
BallConfig = _config.BallConfig
TriangulationConfig = _config.TriangulationConfig
ClipConfig = _config.ClipConfig
configure_logging = _log.configure_logging

# Namespace submodules for exploratory users
constants = _const
geometry = _geom
conditioning = _cond
intersections = _inter
hull = _hull
bounding_ball = _ball
triangulation = _tri
clipping = _clip

__all__ = [
    '__version__',
    # value types
    'Ball', 'Rectangle', 'SimilarityTransform', 'InvalidInputError',
    # algorithms
    'convex_hull', 'convex_hull_graham', 'convex_hull_jarvis', 'convex_hull_melkman',
    'minimum_enclosing_ball', 'triangulate', 'ear_clip_triangulation', 'clip',
    'normalize_points', 'isotropic_normalization', 'covariance', 'covariance_matrix',
    'remove_duplicates', 'order_polygon', 'ordered_polygon', 'axis_projection_descriptor',
    'group_intersections', 'naive_group_intersections',
    # configuration
    'GeometryConfig', 'HullConfig', 'BallConfig', 'TriangulationConfig', 'ClipConfig',
    'configure_logging',
    # submodules / namespaces
    'constants', 'geometry', 'conditioning', 'intersections', 'hull',
    'bounding_ball', 'triangulation', 'clipping',
]
