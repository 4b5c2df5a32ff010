"""
Logging setup for the API, the Celery worker and the command-line runner.
"""

import logging
import sys

from fixture_scheduler.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party logger levels
LIBRARY_LOG_LEVELS = {
    "uvicorn": logging.WARNING,
    "fastapi": logging.WARNING,
    "celery": logging.INFO,
    "kombu": logging.WARNING,
    "amqp": logging.WARNING,
    "ortools": logging.WARNING,
}


def setup_logging(log_level=None):
    """
    Send all records to stdout in one format.

    Args:
        log_level: Level for the root logger; defaults to LOG_LEVEL from the environment
    """
    if log_level is None:
        log_level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    for name, level in LIBRARY_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
