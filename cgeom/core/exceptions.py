"""Exception types raised by cgeom."""
from __future__ import annotations


class InvalidInputError(ValueError):
    """A caller violated an algorithm precondition.

    Raised for non-simple polygons handed to ear clipping, concave clip
    windows, malformed point arrays and unknown algorithm names. Degenerate
    but well-formed input (too few points, all collinear) never raises; it
    yields an empty or degenerate result instead.
    """


__all__ = ['InvalidInputError']
