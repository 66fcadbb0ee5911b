"""Process-wide logging configuration.

All modules log through ``logging.getLogger(__name__)``; this installs a single
stream handler on the ``comicshare`` logger honoring ``LOG_LEVEL``.
"""
from __future__ import annotations

import logging

LOGGER_NAME = "comicshare"
LOG_FORMAT = "[comicshare] %(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(app) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


__all__ = ["configure_logging", "LOGGER_NAME"]
