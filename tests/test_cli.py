import io
import json

import pytest

from glox.__main__ import main
from glox.shell import Shell
from glox.interpreter import Interpreter


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


def test_runs_program_file(tmp_path, capsys):
    program = write(tmp_path, 'hello.lox', 'print "hi";\nprint 1 + 1;\n')
    main([str(program)])
    assert capsys.readouterr().out.splitlines() == ['hi', '2']


def test_runtime_error_exits_with_status_1(tmp_path, capsys):
    program = write(tmp_path, 'bad.lox', 'print "first";\nprint nope;\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(program)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ['first']
    assert 'unknown identifier nope' in captured.err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'absent.lox')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_emit_ast_then_run_it(tmp_path, capsys):
    program = write(tmp_path, 'loop.lox', 'for (var i = 0; i < 2; i = i + 1) print i;')
    main(['--emit-ast', str(program)])
    out_path = capsys.readouterr().out.strip()
    assert out_path.endswith('loop.lox.ast.json')
    with open(out_path, encoding='utf-8') as f:
        assert isinstance(json.load(f), list)
    main(['--ast', out_path])
    assert capsys.readouterr().out.splitlines() == ['0', '1']


def test_token_dump(tmp_path, capsys):
    program = write(tmp_path, 'tokens.lox', 'var x;')
    main(['--tokens', str(program)])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert "Type var 'var'" in lines[0]
    assert 'Type eof' in lines[-1]


def test_token_dump_reports_lex_errors(tmp_path, capsys):
    program = write(tmp_path, 'bad_tokens.lox', 'var x = ~;')
    with pytest.raises(SystemExit):
        main(['--tokens', str(program)])
    assert 'unexpected character: ~' in capsys.readouterr().err


def test_verbose_writes_debug_file(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    program = write(tmp_path, 'v.lox', 'var a = 2;')
    main(['-vv', str(program)])
    assert 'declare a: number = 2' in (tmp_path / 'debug.txt').read_text(encoding='utf-8')


def test_shell_keeps_state_between_lines(capsys):
    shell = Shell(Interpreter(), stdin=io.StringIO(''), stdout=io.StringIO())
    shell.onecmd('var x = 40;')
    shell.onecmd('x = x + 2;')
    shell.onecmd('print x;')
    assert capsys.readouterr().out.splitlines() == ['42']


def test_shell_continues_open_blocks_and_survives_errors(capsys):
    shell = Shell(Interpreter(), stdin=io.StringIO(''), stdout=io.StringIO())
    shell.onecmd('{')
    assert shell.prompt == shell.secondary_prompt
    shell.onecmd('print "inside";')
    shell.onecmd('}')
    assert shell.prompt == '> '
    shell.onecmd('print missing;')
    shell.onecmd('print "still alive";')
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ['inside', 'still alive']
    assert 'unknown identifier missing' in captured.err
    assert shell.onecmd('exit') is True


def test_invalid_utf8_in_program_file(tmp_path, capsys):
    program = tmp_path / 'binary.lox'
    program.write_bytes(b'print 1;\n\xff\xfe\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(program)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'unexpected character: \\xff' in captured.err
