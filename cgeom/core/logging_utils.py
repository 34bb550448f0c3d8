"""Logging utilities for cgeom.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All cgeom code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT_NAME = 'cgeom'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_package_root() -> logging.Logger:
    """Give the 'cgeom' logger a single stdout handler, detached from the
    process root logger. Returns the 'cgeom' logger.
    """
    root = logging.getLogger(_ROOT_NAME)
    has_real = any(not isinstance(h, logging.NullHandler) for h in root.handlers)
    if not has_real:
        # The package __init__ installs a NullHandler; swap it for a stream handler
        for h in list(root.handlers):
            root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO') -> logging.Logger:
    """Attach a stream handler to the 'cgeom' logger family and set its level.

    This does NOT modify the process root logger. Library code never calls
    this; applications and scripts opt in.
    """
    root = _ensure_package_root()
    root.setLevel(_to_level(level))
    return root


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'cgeom' namespace.

    Without an explicit level the logger is left at NOTSET so it inherits
    from the 'cgeom' parent configured via configure_logging().
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
