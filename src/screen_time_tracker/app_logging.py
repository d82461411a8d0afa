"""Logging configuration helpers."""

import logging

PACKAGE_LOGGER = "screen_time_tracker"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure the package logger with a single stream handler.

    Repeated calls only adjust the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
