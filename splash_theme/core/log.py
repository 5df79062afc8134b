"""Logging setup. All modules log through loguru's shared `logger`."""

import sys

from loguru import logger

LOG_FORMAT = '{time:HH:mm:ss} | {level: <7} | {message}'


def configure_logging(level: str = 'INFO') -> None:
    """Replace loguru's default sink with a single stderr sink at `level`."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())
