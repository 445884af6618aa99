"""Debug logging setup for the vibepack logger tree."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER_NAME = "vibepack"
LOG_FORMAT = "[vibekit] %(levelname)s: %(message)s"


class _VibekitStreamHandler(logging.StreamHandler):
    pass


def configure_logging(*, debug: bool) -> logging.Logger:
    """Attach a stderr handler and DEBUG level when ``debug`` is set.

    Without ``debug`` the package logger is left alone so delivery failures stay
    silent. Repeated calls do not stack handlers.
    """
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not debug:
        return logger

    logger.setLevel(logging.DEBUG)
    if not any(isinstance(handler, _VibekitStreamHandler) for handler in logger.handlers):
        handler = _VibekitStreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
