"""Bril intermediate representation data types"""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class Position:
    row: int
    col: int


@dataclass(frozen=True)
class Constant:
    """`dest: type = const value`"""
    dest: str
    type: Any
    value: Any
    op: str = 'const'
    pos: Optional[Position] = None


@dataclass(frozen=True)
class ValueOperation:
    """Operation that defines `dest` from args, funcs and/or labels"""
    op: str
    dest: str
    type: Any
    args: Tuple[str, ...] = ()
    funcs: Tuple[str, ...] = ()
    labels: Tuple[str, ...] = ()
    pos: Optional[Position] = None


@dataclass(frozen=True)
class EffectOperation:
    """Operation without a destination (jmp, br, ret, print, ...)"""
    op: str
    args: Tuple[str, ...] = ()
    funcs: Tuple[str, ...] = ()
    labels: Tuple[str, ...] = ()
    pos: Optional[Position] = None


@dataclass(frozen=True)
class Label:
    label: str
    pos: Optional[Position] = None


Instruction = Union[Constant, ValueOperation, EffectOperation]
Code = Union[Constant, ValueOperation, EffectOperation, Label]


@dataclass(frozen=True)
class Argument:
    name: str
    type: Any


@dataclass
class Function:
    name: str
    instrs: list = field(default_factory=list)
    args: Tuple[Argument, ...] = ()
    type: Any = None
    pos: Optional[Position] = None


@dataclass
class Program:
    functions: list = field(default_factory=list)

    def get_function(self, name: str) -> Optional[Function]:
        for function in self.functions:
            if function.name == name:
                return function
        return None

    @property
    def function_names(self) -> list:
        return [f.name for f in self.functions]
