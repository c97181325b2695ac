"""
Logging configuration
"""

import logging
import sys
from pathlib import Path
from typing import List
from task_api.config.settings import settings
from task_api.config.constants import LOG_FORMAT, LOG_DATE_FORMAT


def _build_handlers() -> List[logging.Handler]:
    """stdout always; a task_api.log file too when LOG_DIR is set"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "task_api.log"))
    return handlers


def setup_logger(name: str = "task_api") -> logging.Logger:
    """
    Configure the service logger

    Level comes from LOG_LEVEL and applies to every handler.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
    for handler in _build_handlers():
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


# Global logger instance
logger = setup_logger()
