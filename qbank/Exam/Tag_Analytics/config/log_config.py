"""
Logging configuration for the Tag Analytics module.
Every service logger writes to one shared rotating log under LogConfig.LOG_DIR.
"""
import os
import time
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional
from qbank.Exam.Tag_Analytics.config.settings import LogConfig

ROOT_LOGGER_NAME = "tag_analytics"
LOG_FILE = os.path.join(LogConfig.LOG_DIR, "tag_analytics.log")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DUPLICATE_WINDOW_SECONDS = 0.1

class DuplicateFilter(logging.Filter):
    """Drops a record identical to the previous one inside a short window"""

    def __init__(self, name=''):
        super().__init__(name)
        self._previous = None
        self._previous_at = 0.0

    def filter(self, record):
        key = (record.levelno, record.getMessage())
        now = time.time()
        repeated = key == self._previous and now - self._previous_at < DUPLICATE_WINDOW_SECONDS
        self._previous, self._previous_at = key, now
        return not repeated

def _file_handler() -> Optional[RotatingFileHandler]:
    """Rotating handler opened on first record, or None when the log dir is unusable"""
    try:
        os.makedirs(LogConfig.LOG_DIR, exist_ok=True)
        handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=LogConfig.MAX_LOG_SIZE,
            backupCount=LogConfig.BACKUP_COUNT,
            delay=True
        )
    except OSError as e:
        logging.getLogger(__name__).warning("Could not set up file logging: %s", e)
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler

def setup_logging(module_name=None):
    """
    Configure and return the logger for one tag analytics module.

    Args:
        module_name: short module name, appended to ``tag_analytics.``

    Returns:
        Logger with the duplicate filter and (when possible) the shared file handler
    """
    logging.getLogger('pymongo').setLevel(logging.WARNING)

    logger_name = f"{ROOT_LOGGER_NAME}.{module_name}" if module_name else ROOT_LOGGER_NAME
    logger = logging.getLogger(logger_name)
    if logger.handlers or logger.filters:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.addFilter(DuplicateFilter())
    handler = _file_handler()
    if handler is not None:
        logger.addHandler(handler)
    return logger

def get_logger(module_name=None):
    """Get a configured logger instance."""
    return setup_logging(module_name)
