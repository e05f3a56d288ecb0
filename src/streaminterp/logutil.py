"""Logger for the interpolation engine and its front ends.

The scheduler warns here when degenerate input ends an emission pass,
sinks report write failures, and the engine logs each emitted span at
DEBUG. Quiet (WARNING) by default; ``streaminterp run -v`` (or ``-vv``) raises
it through ``set_verbosity``.
"""
from __future__ import annotations

import logging
from typing import Optional

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger("streaminterp")
        # Embedding applications that attached their own handler keep it
        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("[%(name)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        if logger.level == logging.NOTSET:
            logger.setLevel(logging.WARNING)
        _LOGGER = logger
    return _LOGGER


def set_verbosity(verbose: int) -> None:
    """Map a ``-v`` count onto the package logger level."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    get_logger().setLevel(level)


__all__ = ["get_logger", "set_verbosity"]
