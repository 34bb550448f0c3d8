import logging

import pytest

from cgeom import GeometryConfig, configure_logging
from cgeom.core.config import BallConfig, HullConfig
from cgeom.core.constants import EPS_COLLINEAR
from cgeom.core.logging_utils import get_logger


def test_defaults():
    cfg = GeometryConfig()
    assert cfg.hull.method == 'graham'
    assert cfg.hull.eps == EPS_COLLINEAR
    assert cfg.ball.method == 'randomized'
    assert cfg.ball.seed is None
    assert cfg.triangulation.ear_selection == 'first'
    assert cfg.clip.circle_segments == 64
    assert cfg.extras == {}


def test_from_dict_nested_sections():
    cfg = GeometryConfig.from_dict({
        'hull': {'method': 'melkman'},
        'ball': {'seed': 3, 'hull_filter': True},
        'label': 'run-1',
    })
    assert isinstance(cfg.hull, HullConfig)
    assert cfg.hull.method == 'melkman'
    assert isinstance(cfg.ball, BallConfig)
    assert cfg.ball.seed == 3 and cfg.ball.hull_filter
    assert cfg.triangulation.validate
    assert cfg.extras == {'label': 'run-1'}


def test_from_dict_accepts_section_objects():
    cfg = GeometryConfig.from_dict({'hull': HullConfig(method='jarvis'), 'extras': {'a': 1}})
    assert cfg.hull.method == 'jarvis'
    assert cfg.extras == {'a': 1}


def test_from_dict_rejects_unknown_section_keys():
    with pytest.raises(TypeError):
        GeometryConfig.from_dict({'ball': {'radius': 2}})


def test_get_logger_namespace():
    assert get_logger('hull').name == 'cgeom.hull'
    assert get_logger('cgeom.clipping').name == 'cgeom.clipping'
    assert get_logger('hull').level == logging.NOTSET


def test_configure_logging_leaves_process_root_alone():
    pkg = logging.getLogger('cgeom')
    saved = (list(pkg.handlers), pkg.level, pkg.propagate)
    root_handlers = list(logging.getLogger().handlers)
    try:
        out = configure_logging('DEBUG')
        assert out is pkg
        assert pkg.level == logging.DEBUG
        assert not pkg.propagate
        assert any(isinstance(h, logging.StreamHandler) for h in pkg.handlers)
        assert logging.getLogger().handlers == root_handlers
    finally:
        pkg.handlers[:] = saved[0]
        pkg.setLevel(saved[1])
        pkg.propagate = saved[2]
