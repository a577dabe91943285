"""
Logging setup shared by the web app and any scripts.

Usage:
    from bookkeeping.logging_config import setup_logging
    setup_logging("INFO")

Modules then log through logging.getLogger(__name__).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every query or connection at INFO
NOISY_LOGGERS = [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "httpx",
    "httpcore",
    "multipart",
]


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Configure the root logger with a single stdout handler.

    Calling this more than once replaces the previous handler
    instead of stacking duplicates.

    Returns the root logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.debug("Logging initialised at %s", logging.getLevelName(level))
    return root_logger
