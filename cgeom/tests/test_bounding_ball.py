"""Tests for the minimum enclosing ball solvers."""
import numpy as np
import pytest

from cgeom import Ball, InvalidInputError, minimum_enclosing_ball
from cgeom.core import bounding_ball
from cgeom.core.bounding_ball import (
    HullFilteredBall, NaiveBall, RandomizedBall, RitterBall, minimal_ball_of_few,
)
from cgeom.core.config import BallConfig
from cgeom.core.hull import convex_hull_graham

EXACT = ['naive', 'randomized']


class TestSmallInputs:
    """Closed-form answers for a handful of points."""

    @pytest.mark.parametrize('method', EXACT)
    def test_right_triangle_uses_hypotenuse(self, method):
        # right angle at (1, 1): the hypotenuse is a diameter
        ball = minimum_enclosing_ball([[0, 0], [2, 0], [1, 1]], method=method)
        assert np.allclose(ball.center, [1.0, 0.0])
        assert abs(ball.radius - 1.0) < 1e-10

    @pytest.mark.parametrize('method', EXACT)
    def test_acute_triangle_uses_circumcircle(self, method):
        ball = minimum_enclosing_ball([[0, 0], [2, 0], [1, 2]], method=method)
        assert np.allclose(ball.center, [1.0, 0.75])
        assert abs(ball.radius - 1.25) < 1e-10

    @pytest.mark.parametrize('method', EXACT)
    def test_obtuse_triangle_uses_longest_side(self, method):
        ball = minimum_enclosing_ball([[0, 0], [4, 0], [2, 0.5]], method=method)
        assert np.allclose(ball.center, [2.0, 0.0])
        assert abs(ball.radius - 2.0) < 1e-10

    def test_single_point(self):
        ball = minimum_enclosing_ball([[3.0, -1.0]])
        assert np.allclose(ball.center, [3.0, -1.0])
        assert ball.radius == 0.0

    def test_two_points(self):
        ball = minimum_enclosing_ball([[0, 0], [0, 6]])
        assert np.allclose(ball.center, [0.0, 3.0])
        assert abs(ball.radius - 3.0) < 1e-12

    @pytest.mark.parametrize('method', ['naive', 'randomized', 'ritter'])
    def test_empty_input_is_degenerate(self, method):
        ball = minimum_enclosing_ball(np.empty((0, 2)), method=method)
        assert ball.is_degenerate
        assert ball.dim == 2

    def test_collinear_triple(self):
        ball = minimal_ball_of_few(np.array([[0, 0], [1, 0], [3, 0]], dtype=float))
        assert np.allclose(ball.center, [1.5, 0.0])
        assert abs(ball.radius - 1.5) < 1e-12


@pytest.mark.parametrize('seed', range(6))
def test_randomized_matches_naive(seed):
    gen = np.random.default_rng(seed)
    pts = gen.uniform(-5, 5, size=(12, 2))
    naive = NaiveBall().enclose(pts)
    fast = RandomizedBall(rng=seed).enclose(pts)
    assert naive.isclose(fast, 1e-7)
    assert fast.contains_all(pts)


def test_randomized_encloses_large_set(rng):
    pts = rng.normal(size=(2000, 2))
    ball = minimum_enclosing_ball(pts, rng=rng)
    assert ball.contains_all(pts)
    # at least two input points lie on the boundary of the optimum
    dists = np.linalg.norm(pts - ball.center, axis=1)
    assert np.sum(np.abs(dists - ball.radius) < 1e-7 * max(1.0, ball.radius)) >= 2


def test_seeded_runs_are_reproducible(rng):
    pts = rng.uniform(size=(300, 2))
    a = minimum_enclosing_ball(pts, rng=7)
    b = minimum_enclosing_ball(pts, rng=7)
    assert np.array_equal(a.center, b.center)
    assert a.radius == b.radius


def test_config_seed_is_used(rng):
    pts = rng.uniform(size=(100, 2))
    cfg = BallConfig(seed=11)
    a = minimum_enclosing_ball(pts, config=cfg)
    b = minimum_enclosing_ball(pts, config=cfg)
    assert np.array_equal(a.center, b.center)


@pytest.mark.parametrize('method', ['naive', 'randomized', 'ritter'])
def test_hull_filter_keeps_result(method, rng):
    pts = rng.uniform(-1, 1, size=(40, 2))
    plain = minimum_enclosing_ball(pts, method=method, rng=3)
    filtered = minimum_enclosing_ball(pts, method=method, hull_filter=True, rng=3)
    assert filtered.contains_all(pts)
    if method != 'ritter':
        assert plain.isclose(filtered, 1e-7)


def test_hull_filter_with_collinear_input():
    pts = np.array([[0, 0], [1, 0], [2, 0], [5, 0]], dtype=float)
    ball = HullFilteredBall(RandomizedBall(rng=0)).enclose(pts)
    assert np.allclose(ball.center, [2.5, 0.0])
    assert abs(ball.radius - 2.5) < 1e-12


def test_hull_filter_name():
    assert HullFilteredBall(NaiveBall()).name == 'naive+hull'


def test_ritter_encloses_and_bounds(rng):
    pts = rng.normal(size=(500, 2))
    approx = RitterBall().enclose(pts)
    exact = RandomizedBall(rng=0).enclose(pts)
    assert approx.contains_all(pts)
    assert approx.radius >= exact.radius - 1e-9
    assert not RitterBall.exact


class TestThreeDimensions:

    def test_tetrahedron_vertices(self):
        pts = np.array([[1, 1, 1], [1, -1, -1], [-1, 1, -1], [-1, -1, 1]], dtype=float)
        ball = minimum_enclosing_ball(pts)
        assert np.allclose(ball.center, 0.0)
        assert abs(ball.radius - np.sqrt(3.0)) < 1e-10

    def test_points_on_sphere(self, rng):
        v = rng.normal(size=(200, 3))
        v /= np.linalg.norm(v, axis=1)[:, None]
        pts = 2.0 * v + np.array([1.0, -2.0, 0.5])
        ball = minimum_enclosing_ball(pts, rng=1)
        assert ball.contains_all(pts)
        assert ball.radius <= 2.0 + 1e-7

    def test_randomized_matches_naive(self, rng):
        pts = rng.uniform(size=(10, 3))
        assert NaiveBall().enclose(pts).isclose(RandomizedBall(rng=2).enclose(pts), 1e-7)

    def test_hull_filter_uses_qhull(self, rng):
        pts = rng.uniform(size=(60, 3))
        plain = minimum_enclosing_ball(pts, rng=4)
        filtered = minimum_enclosing_ball(pts, hull_filter=True, rng=4)
        assert plain.isclose(filtered, 1e-7)

    def test_coplanar_hull_filter_falls_back(self):
        pts = np.array([[0, 0, 0], [2, 0, 0], [0, 2, 0], [2, 2, 0], [1, 1, 0]], dtype=float)
        ball = minimum_enclosing_ball(pts, hull_filter=True, rng=0)
        assert np.allclose(ball.center, [1.0, 1.0, 0.0])
        assert abs(ball.radius - np.sqrt(2.0)) < 1e-10

    def test_empty_3d(self):
        assert minimum_enclosing_ball(np.empty((0, 3))).dim == 3


def test_four_dimensions_rejected():
    with pytest.raises(InvalidInputError):
        minimum_enclosing_ball(np.zeros((5, 4)))


def test_unknown_method_rejected():
    with pytest.raises(InvalidInputError):
        minimum_enclosing_ball([[0, 0], [1, 1]], method='bogus')


def test_ball_contains():
    ball = Ball([0.0, 0.0], 1.0)
    assert ball.contains([1.0, 0.0])
    assert ball.contains([0.6, 0.8])
    assert not ball.contains([1.01, 0.0])


class TestConfigPrecedence:
    """Explicit arguments win over BallConfig fields; missing ones come from it."""

    def test_explicit_method_overrides_config(self, rng):
        pts = rng.normal(size=(400, 2))
        ball = minimum_enclosing_ball(pts, method='ritter', config=BallConfig(seed=1))
        expected = RitterBall().enclose(pts)
        assert np.array_equal(ball.center, expected.center)
        assert ball.radius == expected.radius

    def test_config_method_used_when_not_given(self, rng):
        pts = rng.normal(size=(200, 2))
        ball = minimum_enclosing_ball(pts, config=BallConfig(method='ritter'))
        assert ball.radius == RitterBall().enclose(pts).radius

    def test_explicit_hull_filter_overrides_config(self, rng, monkeypatch):
        calls = []
        original = bounding_ball.HullFilteredBall._hull_vertices

        def recording(self, pts):
            calls.append(pts.shape[0])
            return original(self, pts)

        monkeypatch.setattr(bounding_ball.HullFilteredBall, '_hull_vertices', recording)
        pts = rng.uniform(size=(50, 2))
        minimum_enclosing_ball(pts, hull_filter=False, config=BallConfig(hull_filter=True, seed=0))
        assert calls == []
        minimum_enclosing_ball(pts, hull_filter=True, config=BallConfig(seed=0))
        assert calls == [50]

    def test_explicit_rng_overrides_seed(self, rng):
        pts = rng.uniform(size=(100, 2))
        a = minimum_enclosing_ball(pts, rng=5, config=BallConfig(seed=9))
        b = minimum_enclosing_ball(pts, rng=5)
        assert np.array_equal(a.center, b.center)

    def test_explicit_eps_reaches_solver(self, monkeypatch):
        seen = []
        original = bounding_ball.RitterBall.__init__

        def recording(self, eps=bounding_ball.EPS_CONTAINMENT):
            seen.append(eps)
            original(self, eps)

        monkeypatch.setattr(bounding_ball.RitterBall, '__init__', recording)
        minimum_enclosing_ball([[0, 0], [1, 0]], method='ritter', eps=0.5, config=BallConfig(eps=0.25))
        minimum_enclosing_ball([[0, 0], [1, 0]], config=BallConfig(method='ritter', eps=0.25))
        assert seen == [0.5, 0.25]


def test_hull_filter_receives_configured_tolerance(rng, monkeypatch):
    seen = []

    def recording(points, eps=None):
        seen.append(eps)
        return convex_hull_graham(points, eps)

    monkeypatch.setattr(bounding_ball, 'convex_hull_graham', recording)
    pts = rng.uniform(size=(30, 2))
    minimum_enclosing_ball(pts, config=BallConfig(hull_filter=True, hull_eps=1e-6, seed=0))
    assert seen == [1e-6]
    assert HullFilteredBall(NaiveBall(), hull_eps=1e-3).hull_eps == 1e-3
