"""Central numerical tolerances and small geometry constants.

Every algorithm in cgeom threads its tolerance through these values so
near-collinear / near-coincident decisions are made the same way
everywhere. Reference them instead of scattering literals.
"""
from __future__ import annotations

import math

# Orientation / collinearity
EPS_COLLINEAR: float = 1e-12      # |sin| of the turn angle treated as zero
EPS_AREA: float = 1e-12           # minimum positive (absolute) triangle area

# Membership and equality
EPS_CONTAINMENT: float = 1e-9     # relative slack for point-in-ball tests
EPS_DUPLICATE: float = 1e-12      # default per-coordinate duplicate radius
EPS_CLIP: float = 1e-12           # half-plane slack in polygon clipping
EPS_SEGMENT_3D: float = 1e-9      # closest-approach distance counted as a hit

# Conditioning
NORMALIZATION_TARGET: float = math.sqrt(2.0)  # mean distance after normalization
DEFAULT_AXIS_COUNT: int = 36

# Size bounds
NAIVE_BALL_MAX_POINTS: int = 64   # above this the exhaustive ball solver warns
CIRCLE_WINDOW_SEGMENTS: int = 64  # sides of the polygon standing in for a circle window

__all__ = [
    'EPS_COLLINEAR',
    'EPS_AREA',
    'EPS_CONTAINMENT',
    'EPS_DUPLICATE',
    'EPS_CLIP',
    'EPS_SEGMENT_3D',
    'NORMALIZATION_TARGET',
    'DEFAULT_AXIS_COUNT',
    'NAIVE_BALL_MAX_POINTS',
    'CIRCLE_WINDOW_SEGMENTS',
]
