"""Program loading for Bril JSON"""

from .loader import (
    BrilLoader,
    load_program,
    parse_code,
    dump_code,
)

__all__ = [
    "BrilLoader",
    "load_program",
    "parse_code",
    "dump_code",
]
