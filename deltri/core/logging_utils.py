"""Logging utilities for deltri.

Provides a consistent logger hierarchy under the ``deltri`` namespace without
touching the process root logger. Library code obtains loggers through
``get_logger()``; applications opt into console output with
``configure_logging()``.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = 'deltri'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_root() -> logging.Logger:
    """Give the 'deltri' logger a single stdout handler, isolated from the
    process root logger. Returns the 'deltri' logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    # Package __init__ installs a NullHandler; swap it for a stream handler
    for h in list(root.handlers):
        if isinstance(h, logging.NullHandler):
            root.removeHandler(h)
    if not root.handlers:
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
    """Attach console output to the 'deltri' logger family and set its level."""
    root = _ensure_root()
    root.setLevel(_to_level(level))
    return root


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'deltri' namespace.

    Without an explicit level the logger is NOTSET and inherits from the
    'deltri' parent, so a single ``configure_logging`` call controls the
    whole family.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + '.'):
        name = f'{ROOT_LOGGER_NAME}.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging', 'ROOT_LOGGER_NAME']
