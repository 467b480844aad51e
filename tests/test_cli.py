import json

import pytest

from boba.__main__ import main


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


def test_run_file(tmp_path, capsys):
    program = write(tmp_path, 'hello.boba', 'print("hi", 1 + 1)\n')
    main([str(program)])
    assert capsys.readouterr().out == 'hi 2\n'


def test_run_error_exits_with_diagnostic(tmp_path, capsys):
    program = write(tmp_path, 'bad.boba', 'print("before")\nprint(1 / 0)\nprint("after")\n')
    with pytest.raises(SystemExit) as info:
        main([str(program)])
    assert info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == 'before\n'
    assert captured.err.startswith('error[R-008]: Math Error\n')
    assert 'bad.boba:2:7' in captured.err


def test_parse_error_runs_nothing(tmp_path, capsys):
    program = write(tmp_path, 'bad.boba', 'print("before")\nlet = 3\n')
    with pytest.raises(SystemExit):
        main([str(program)])
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'error[C-006]' in captured.err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / 'nope.boba')])
    assert info.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_emit_and_run_ast(tmp_path, capsys):
    program = write(tmp_path, 'prog.boba', 'fn sq(n): n * n\nprint(sq(7))\n')
    main(['--emit-ast', str(program)])
    out_path = tmp_path / 'prog.boba.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    document = json.loads(out_path.read_text(encoding='utf-8'))
    assert document['label'] == str(program)

    main(['--ast', str(out_path)])
    assert capsys.readouterr().out == '49\n'


def test_ast_run_error_uses_stored_source(tmp_path, capsys):
    program = write(tmp_path, 'prog.boba', 'let a = 1\nmissing(a)\n')
    main(['--emit-ast', str(program)])
    capsys.readouterr()
    with pytest.raises(SystemExit):
        main(['--ast', str(tmp_path / 'prog.boba.ast.json')])
    err = capsys.readouterr().err
    assert 'error[R-001]: Unknown Function' in err
    assert '2 | missing(a)' in err


def test_repl_keeps_going_after_errors(monkeypatch, capsys):
    lines = iter(['let x = 2', 'y', 'fn f(n):', '    n * x', '', 'f(21)'])

    def fake_input(prompt=''):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr('builtins.input', fake_input)
    main([])
    captured = capsys.readouterr()
    assert '42' in captured.out.split('\n')
    assert 'error[R-002]: Unknown Variable' in captured.err
