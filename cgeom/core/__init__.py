"""Implementation package for cgeom; import public names from ``cgeom``."""
