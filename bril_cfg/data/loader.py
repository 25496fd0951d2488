"""Loading Bril JSON programs into IR dataclasses"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, IO, List, Optional, Union

from ..errors import ProgramLoadError
from ..ir import (
    Argument,
    Code,
    Constant,
    EffectOperation,
    Function,
    Label,
    Position,
    Program,
    ValueOperation,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)


class BrilLoader:
    """Parse and validate Bril JSON into a `Program`"""

    OPERAND_FIELDS = ('args', 'funcs', 'labels')

    def load(self, source: Union[str, Path, IO[str], None] = None) -> Program:
        """Load a program from a path, an open file, or stdin

        Args:
            source: File path, text stream, or None / '-' for stdin

        Returns:
            Parsed Program
        """
        if source is None or source == '-':
            return self.loads(sys.stdin.read(), origin='<stdin>')
        if hasattr(source, 'read'):
            return self.loads(source.read(), origin=getattr(source, 'name', '<stream>'))

        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Program file not found: {path}")
        return self.loads(path.read_text(encoding='utf-8'), origin=str(path))

    def loads(self, text: str, origin: str = '<string>') -> Program:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ProgramLoadError(f"invalid JSON in {origin}: {e}") from e
        program = self.from_dict(data)
        logger.debug(f"Loaded {len(program.functions)} function(s) from {origin}")
        return program

    def from_dict(self, data: Any) -> Program:
        if not isinstance(data, dict):
            raise ProgramLoadError("program must be a JSON object")
        functions = data.get('functions')
        if not isinstance(functions, list):
            raise ProgramLoadError("program has no 'functions' list")
        return Program(functions=[self._parse_function(f) for f in functions])

    def _parse_function(self, data: Any) -> Function:
        if not isinstance(data, dict):
            raise ProgramLoadError("function must be a JSON object")
        name = data.get('name')
        if not isinstance(name, str):
            raise ProgramLoadError("function has no string 'name'")
        instrs = data.get('instrs')
        if not isinstance(instrs, list):
            raise ProgramLoadError("function has no 'instrs' list", function=name)

        code: List[Code] = []
        seen_labels = set()
        for index, item in enumerate(instrs):
            parsed = self._parse_code(item, name, index)
            if isinstance(parsed, Label):
                if parsed.label in seen_labels:
                    raise ProgramLoadError(
                        f"label '{parsed.label}' defined more than once",
                        function=name, index=index,
                    )
                seen_labels.add(parsed.label)
            code.append(parsed)

        args = self._parse_args(data.get('args'), name)
        return Function(
            name=name,
            instrs=code,
            args=args,
            type=data.get('type'),
            pos=_parse_pos(data.get('pos'), name),
        )

    def _parse_args(self, value: Any, function: str) -> tuple:
        if value is None:
            return ()
        if not isinstance(value, list):
            raise ProgramLoadError("'args' must be a list", function=function)
        args = []
        for arg in value:
            if not isinstance(arg, dict) or not isinstance(arg.get('name'), str):
                raise ProgramLoadError("each argument needs a string 'name'", function=function)
            args.append(Argument(name=arg['name'], type=arg.get('type')))
        return tuple(args)

    def _parse_code(self, item: Any, function: str, index: int) -> Code:
        if not isinstance(item, dict):
            raise ProgramLoadError("code item must be a JSON object", function, index)

        pos = _parse_pos(item.get('pos'), function, index)

        if 'label' in item:
            label = item['label']
            if not isinstance(label, str):
                raise ProgramLoadError("label name must be a string", function, index)
            return Label(label=label, pos=pos)

        op = item.get('op')
        if not isinstance(op, str):
            raise ProgramLoadError("instruction has neither 'label' nor string 'op'", function, index)

        if op == 'const':
            dest = item.get('dest')
            if not isinstance(dest, str):
                raise ProgramLoadError("const instruction has no 'dest'", function, index)
            if 'value' not in item:
                raise ProgramLoadError("const instruction has no 'value'", function, index)
            return Constant(dest=dest, type=item.get('type'), value=item['value'], pos=pos)

        operands = {
            key: self._parse_names(item, key, function, index)
            for key in self.OPERAND_FIELDS
        }

        if 'dest' in item:
            dest = item['dest']
            if not isinstance(dest, str):
                raise ProgramLoadError("'dest' must be a string", function, index)
            return ValueOperation(op=op, dest=dest, type=item.get('type'), pos=pos, **operands)

        return EffectOperation(op=op, pos=pos, **operands)

    def _parse_names(self, item: dict, key: str, function: str, index: int) -> tuple:
        value = item.get(key)
        if value is None:
            return ()
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ProgramLoadError(f"'{key}' must be a list of strings", function, index)
        return tuple(value)


def _parse_pos(
    value: Any,
    function: Optional[str] = None,
    index: Optional[int] = None,
) -> Optional[Position]:
    if value is None:
        return None
    if not isinstance(value, dict) or not all(
        isinstance(value.get(key), int) and not isinstance(value.get(key), bool)
        for key in ('row', 'col')
    ):
        raise ProgramLoadError("'pos' must be an object with integer 'row' and 'col'", function, index)
    return Position(row=value['row'], col=value['col'])


def dump_code(item: Code) -> Dict[str, Any]:
    """Convert a code item back to its Bril JSON object"""
    if isinstance(item, Label):
        result: Dict[str, Any] = {'label': item.label}
    elif isinstance(item, Constant):
        result = {'op': item.op, 'dest': item.dest, 'type': item.type, 'value': item.value}
    else:
        result = {'op': item.op}
        if isinstance(item, ValueOperation):
            result['dest'] = item.dest
            result['type'] = item.type
        for key in BrilLoader.OPERAND_FIELDS:
            names = getattr(item, key)
            if names:
                result[key] = list(names)
    if item.pos is not None:
        result['pos'] = {'row': item.pos.row, 'col': item.pos.col}
    return result


def load_program(source: Union[str, Path, IO[str], None] = None) -> Program:
    """Convenience function to load a program"""
    return BrilLoader().load(source)


def parse_code(item: Dict[str, Any]) -> Code:
    """Parse a single Bril code object"""
    return BrilLoader()._parse_code(item, '<anonymous>', 0)
