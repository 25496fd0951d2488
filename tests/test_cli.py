"""Tests for the bril-cfg command line"""

import io
import json

import pytest
import yaml

from bril_cfg.cli import main

from conftest import BRANCH_DOT, BRANCH_PROGRAM


def test_default_command_renders_dot(branch_program_file, capsys):
    assert main([str(branch_program_file)]) == 0
    assert capsys.readouterr().out == BRANCH_DOT


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO(json.dumps(BRANCH_PROGRAM)))
    assert main([]) == 0
    assert capsys.readouterr().out == BRANCH_DOT


def test_dot_to_file(branch_program_file, tmp_path, capsys):
    out = tmp_path / 'graph.dot'
    assert main(['dot', str(branch_program_file), '-o', str(out)]) == 0
    assert out.read_text() == BRANCH_DOT
    assert capsys.readouterr().out == ''


def test_json_command_with_function_filter(branch_program_file, capsys):
    assert main(['json', str(branch_program_file), '--function', 'helper']) == 0
    data = json.loads(capsys.readouterr().out)
    assert list(data) == ['helper']
    assert data['helper']['blocks'][0]['label'] == 'b0'


def test_stats_json(branch_program_file, capsys):
    assert main(['stats', str(branch_program_file), '--json']) == 0
    stats = json.loads(capsys.readouterr().out)
    assert stats['main']['blocks'] == 5
    assert stats['helper']['edges'] == 0


def test_stats_text(tmp_path, capsys):
    program = {'functions': [{'name': 'f', 'instrs': [
        {'op': 'jmp', 'labels': ['end']},
        {'label': 'dead'},
        {'op': 'nop'},
        {'label': 'end'},
        {'op': 'jmp', 'labels': ['gone']},
    ]}]}
    path = tmp_path / 'f.json'
    path.write_text(json.dumps(program))

    assert main(['stats', str(path)]) == 0
    out = capsys.readouterr().out
    assert 'f:' in out
    assert 'unreachable: dead' in out
    assert 'dangling targets: gone' in out


def test_config_file_is_applied(branch_program_file, tmp_path, capsys):
    config_path = tmp_path / 'config.yaml'
    config_path.write_text(yaml.dump({'functions': ['helper']}))

    assert main(['dot', str(branch_program_file), '--config', str(config_path)]) == 0
    assert capsys.readouterr().out == "digraph helper {\n\tb0;\n}\n"


def test_config_generate(tmp_path, capsys):
    out = tmp_path / 'generated.yaml'
    assert main(['config', '--generate', '-o', str(out)]) == 0
    assert yaml.safe_load(out.read_text())['output_format'] == 'dot'


def test_invalid_program_exits_with_error(tmp_path, capsys):
    path = tmp_path / 'bad.json'
    path.write_text('{"functions": [{"name": "f", "instrs": [{"dest": "x"}]}]}')
    assert main([str(path)]) == 1
    assert capsys.readouterr().out == ''


def test_missing_file_exits_with_error(tmp_path):
    assert main([str(tmp_path / 'missing.json')]) == 1


def test_bad_option_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(['dot', '--n-jobs', 'many'])
    assert excinfo.value.code == 2


def _write_program(tmp_path, functions, name='prog.json'):
    path = tmp_path / name
    path.write_text(json.dumps({'functions': functions}))
    return path


@pytest.mark.parametrize('argv', [
    ['{path}', '--function', 'stats'],
    ['--function', 'stats', '{path}'],
])
def test_function_named_like_a_command_still_renders_dot(tmp_path, capsys, argv):
    path = _write_program(tmp_path, [
        {'name': 'main', 'instrs': [{'op': 'nop'}]},
        {'name': 'stats', 'instrs': [{'op': 'ret'}]},
    ])
    argv = [arg.format(path=path) for arg in argv]

    assert main(argv) == 0
    assert capsys.readouterr().out == "digraph stats {\n\tb0;\n}\n"


def test_bad_position_exits_with_error(tmp_path, capsys):
    path = _write_program(tmp_path, [
        {'name': 'f', 'instrs': [{'op': 'nop', 'pos': {'row': 'x'}}]},
    ])
    assert main([str(path)]) == 1
    assert capsys.readouterr().out == ''


def test_file_named_like_a_command_still_renders_dot(tmp_path, monkeypatch, capsys):
    _write_program(tmp_path, [{'name': 'main', 'instrs': [{'op': 'nop'}]}], name='stats')
    monkeypatch.chdir(tmp_path)

    assert main(['--log-level', 'ERROR', 'stats']) == 0
    assert capsys.readouterr().out == "digraph main {\n\tb0;\n}\n"


def test_help_after_command_is_command_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['stats', '--help'])
    assert excinfo.value.code == 0
    assert '--json' in capsys.readouterr().out
