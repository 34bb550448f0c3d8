"""Configuration objects for the cgeom algorithm engines."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional, Any, Dict

from .constants import (
    CIRCLE_WINDOW_SEGMENTS, EPS_CLIP, EPS_COLLINEAR, EPS_CONTAINMENT,
    NAIVE_BALL_MAX_POINTS,
)


@dataclass
class HullConfig:
    method: str = 'graham'
    eps: float = EPS_COLLINEAR


@dataclass
class BallConfig:
    method: str = 'randomized'
    hull_filter: bool = False
    # Seed for the randomized solver; None draws fresh OS entropy
    seed: Optional[int] = None
    eps: float = EPS_CONTAINMENT
    # Above this size the exhaustive solver logs a warning
    naive_max_points: int = NAIVE_BALL_MAX_POINTS
    # Collinearity tolerance of the 2D hull pre-filter
    hull_eps: float = EPS_COLLINEAR


@dataclass
class TriangulationConfig:
    """Ear clipping preferences.

    - ear_selection: 'first' clips the first ear found, 'best' clips the ear
      whose triangle has the largest minimum angle.
    - validate: reject duplicate vertices and self-intersections up front.
    """
    ear_selection: str = 'first'
    validate: bool = True
    eps: float = EPS_COLLINEAR


@dataclass
class ClipConfig:
    circle_segments: int = CIRCLE_WINDOW_SEGMENTS
    eps: float = EPS_CLIP


@dataclass
class GeometryConfig:
    """Unified configuration.

    Attributes
    ----------
    hull, ball, triangulation, clip :
        Per-engine settings.
    extras : dict
        Free-form dictionary for caller-specific settings.
    """
    hull: HullConfig = field(default_factory=HullConfig)
    ball: BallConfig = field(default_factory=BallConfig)
    triangulation: TriangulationConfig = field(default_factory=TriangulationConfig)
    clip: ClipConfig = field(default_factory=ClipConfig)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeometryConfig':
        """Build from a nested mapping such as ``{'ball': {'seed': 3}}``.

        Unknown top-level keys are kept in ``extras``; unknown keys inside a
        section raise ``TypeError`` like the dataclass constructor does.
        """
        sections = {f.name: f for f in fields(cls) if f.name != 'extras'}
        kwargs: Dict[str, Any] = {}
        extras = dict(data.get('extras', {}))
        for key, value in data.items():
            if key == 'extras':
                continue
            if key in sections:
                section_type = sections[key].default_factory  # type: ignore[misc]
                kwargs[key] = value if not isinstance(value, dict) else section_type(**value)
            else:
                extras[key] = value
        return cls(extras=extras, **kwargs)


__all__ = [
    'HullConfig', 'BallConfig', 'TriangulationConfig', 'ClipConfig',
    'GeometryConfig',
]
