"""Bril CFG - control-flow graph construction for Bril programs"""

from . import ir
from . import data
from . import graphs
from . import pipeline
from . import utils
from .errors import BrilCfgError, ProgramLoadError, ConfigError

__version__ = "0.1.0"
__all__ = [
    "ir",
    "data",
    "graphs",
    "pipeline",
    "utils",
    "BrilCfgError",
    "ProgramLoadError",
    "ConfigError",
]
