import os
import sys

from loguru import logger

LOG_FORMAT = "<level>{level: <8}</level> | {message}"


def configure_logging(level=None, sink=None):
    """Replace loguru's default handler with a single compact stderr sink.

    ``level`` falls back to ``GIX_LOG_LEVEL``, then WARNING.
    """
    level = (level or os.environ.get("GIX_LOG_LEVEL") or "WARNING").upper()
    logger.remove()
    logger.add(sink or sys.stderr, level=level, format=LOG_FORMAT)
    return level
