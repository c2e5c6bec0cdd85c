"""Logging helpers for the application.

Provides a `get_logger` factory that attaches a shared stream handler and a
rotating file handler, so every module logs in the same format to the
console and to `logs/fitforge.log`.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from core import config

os.makedirs(config.LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(config.LOG_DIR, "fitforge.log")

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)


def get_logger(name: str = __name__, level: str = config.LOG_LEVEL) -> logging.Logger:
    """Return a logger wired to the shared handlers.

    Handlers are only attached the first time a given name is requested.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    return logger
