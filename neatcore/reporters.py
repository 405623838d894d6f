"""Debug logging switch for diagnosing evolution runs."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

DEBUG_ENV_VAR = "NEATCORE_DEBUG"
LOGGER_NAME = "neatcore"

_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def debug_enabled() -> bool:
    """Return whether the debug environment variable is set to a non-empty value."""
    return os.environ.get(DEBUG_ENV_VAR, "") != ""


def configure_debug_logging(stream: TextIO | None = None) -> logging.Handler:
    """Send DEBUG records from the package logger to ``stream``.

    Calling this again reuses the handler installed the first time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        if getattr(handler, "_neatcore_debug", False):
            return handler

    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    handler.setLevel(logging.DEBUG)
    handler._neatcore_debug = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


__all__ = [
    "DEBUG_ENV_VAR",
    "LOGGER_NAME",
    "configure_debug_logging",
    "debug_enabled",
]
