"""Logging utilities"""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a named logger

    Library modules leave the level unset so `setup_logging` decides; stdout is
    never used because it carries the rendered graphs.
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[str] = None
) -> None:
    """Setup logging configuration"""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers
    )
    logging.getLogger().setLevel(level)
