"""Logging setup for the API process.

Usage:
    from backend.app.logger import setup_logger
    logger = setup_logger("backend", "DEBUG")
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Configure ``name`` with a single stdout handler and return it.

    Calling again only updates the level, so repeated app creation (tests)
    does not stack handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
