"""
logging.py — Log setup for applications using the client.

The library only creates module loggers; configure_logging() is for the
script or notebook on top of it. Format: timestamp | level | module | message
"""

import logging
from typing import Optional

from xbrlus.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Attach a stdout handler to the root logger.

    Parameters:
        level (str): "DEBUG", "INFO", ...; settings.LOG_LEVEL when omitted.
            Unknown names fall back to INFO.

    Example Call:
        configure_logging("DEBUG")  # shows every XBRL US request
    """
    level = level or settings.LOG_LEVEL
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    logging.getLogger(__name__).debug("xbrlus logging at %s", level.upper())


def get_logger(name: str) -> logging.Logger:
    """Module logger; use as `logger = get_logger(__name__)`."""
    return logging.getLogger(name)
