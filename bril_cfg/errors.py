"""Exception types raised outside the CFG core"""

from typing import Optional


class BrilCfgError(Exception):
    """Base class for all bril-cfg errors"""


class ProgramLoadError(BrilCfgError, ValueError):
    """Input program is not valid Bril JSON"""

    def __init__(
        self,
        message: str,
        function: Optional[str] = None,
        index: Optional[int] = None,
    ):
        self.function = function
        self.index = index
        location = []
        if function is not None:
            location.append(f"function '{function}'")
        if index is not None:
            location.append(f"instruction {index}")
        if location:
            message = f"{', '.join(location)}: {message}"
        super().__init__(message)


class ConfigError(BrilCfgError, ValueError):
    """Invalid pipeline configuration"""
