"""
Pytest configuration and fixtures for bril-cfg tests.
"""
import json

import pytest

from bril_cfg.ir import Constant, EffectOperation, Label, ValueOperation


def const(dest, value=1):
    return Constant(dest=dest, type='int', value=value)


def add(dest, *args):
    return ValueOperation(op='add', dest=dest, type='int', args=tuple(args))


def jmp(target):
    return EffectOperation(op='jmp', labels=(target,))


def br(cond, then, otherwise):
    return EffectOperation(op='br', args=(cond,), labels=(then, otherwise))


def ret(*args):
    return EffectOperation(op='ret', args=tuple(args))


def print_(*args):
    return EffectOperation(op='print', args=tuple(args))


def label(name):
    return Label(label=name)


BRANCH_PROGRAM = {
    "functions": [
        {
            "name": "main",
            "args": [{"name": "n", "type": "int"}],
            "instrs": [
                {"op": "const", "dest": "zero", "type": "int", "value": 0},
                {"op": "lt", "dest": "cond", "type": "bool", "args": ["n", "zero"]},
                {"op": "br", "args": ["cond"], "labels": ["neg", "pos"]},
                {"label": "neg"},
                {"op": "print", "args": ["zero"]},
                {"op": "jmp", "labels": ["end"]},
                {"label": "pos"},
                {"op": "print", "args": ["n"]},
                {"label": "end"},
                {"op": "ret"},
            ],
        },
        {
            "name": "helper",
            "instrs": [
                {"op": "const", "dest": "x", "type": "int", "value": 1},
                {"op": "const", "dest": "y", "type": "int", "value": 2},
            ],
        },
    ]
}

BRANCH_DOT = (
    "digraph main {\n"
    "\tb0;\n"
    "\tneg;\n"
    "\tb2;\n"
    "\tpos;\n"
    "\tend;\n"
    "\tb0 -> neg;\n"
    "\tb0 -> pos;\n"
    "\tneg -> b2;\n"
    "\tb2 -> end;\n"
    "\tpos -> end;\n"
    "}\n"
    "digraph helper {\n"
    "\tb0;\n"
    "}\n"
)


@pytest.fixture
def branch_program_dict():
    return json.loads(json.dumps(BRANCH_PROGRAM))


@pytest.fixture
def branch_program_file(tmp_path):
    path = tmp_path / "branch.json"
    path.write_text(json.dumps(BRANCH_PROGRAM), encoding='utf-8')
    return path
