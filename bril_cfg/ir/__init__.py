"""Bril IR data model"""

from .types import (
    Position,
    Constant,
    ValueOperation,
    EffectOperation,
    Label,
    Instruction,
    Code,
    Argument,
    Function,
    Program,
)

__all__ = [
    "Position",
    "Constant",
    "ValueOperation",
    "EffectOperation",
    "Label",
    "Instruction",
    "Code",
    "Argument",
    "Function",
    "Program",
]
