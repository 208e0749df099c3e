"""Logger construction for keybasectl.

Nothing here runs at import time. The lookup service receives a logger
explicitly; without one it logs into a `NullHandler`.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "keybasectl"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(*, debug: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Return the `keybasectl` logger.

    Debug mode logs every level to stderr (or `stream`). Otherwise the logger
    is left with its `NullHandler` only and prints nothing, errors included.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    logger.propagate = False
    if not debug:
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
