"""
Logging setup for the widget process.

conky reads the widget text from stdout, so every log record goes to
stderr through a single handler on the "gcal_conky" logger.
"""

import logging
import sys
from typing import Union


LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("gcal_conky")


def setup_logging(level: Union[str, int] = logging.WARNING) -> logging.Logger:
    """
    Configure the package logger.

    Safe to call more than once: the stderr handler is only added
    the first time, later calls just change the level.

    Args:
        level: Level name ("INFO") or number (logging.INFO)

    Returns:
        The configured "gcal_conky" logger
    """
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
