"""Smoke test to ensure top-level package import works and exposes the
flat API layer (`cgeom/__init__.py`).
"""

def test_import_cgeom_smoke():
    import cgeom  # noqa: F401
    assert hasattr(cgeom, 'convex_hull')
    assert hasattr(cgeom, 'minimum_enclosing_ball')
    assert hasattr(cgeom, 'triangulate')
    assert hasattr(cgeom, 'clip')
    assert hasattr(cgeom, 'group_intersections')
    for name in cgeom.__all__:
        assert hasattr(cgeom, name), name
