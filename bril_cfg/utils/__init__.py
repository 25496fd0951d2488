"""Utility functions"""

from .logging import get_logger, setup_logging
from .multiproc import parallel_map, pool_size

__all__ = [
    "get_logger",
    "setup_logging",
    "parallel_map",
    "pool_size",
]
