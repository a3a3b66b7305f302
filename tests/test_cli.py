import builtins
import json

import pytest

from loxi.__main__ import main, EXIT_DATAERR, EXIT_NOINPUT, EXIT_USAGE


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return str(path)


def test_runs_script(tmp_path, capsys):
    script = write(tmp_path, 'ok.lox', 'for (var i = 0; i < 2; i = i + 1) print i;')
    main([script])
    assert capsys.readouterr().out == '0\n1\n'


def test_missing_file_exits_noinput(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'absent.lox')])
    assert excinfo.value.code == EXIT_NOINPUT
    assert "Couldn't read" in capsys.readouterr().err


def test_lex_error_aborts_before_parsing(tmp_path, capsys):
    script = write(tmp_path, 'bad.lox', 'print 1;\nprint $;')
    with pytest.raises(SystemExit) as excinfo:
        main([script])
    assert excinfo.value.code == EXIT_DATAERR
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.splitlines() == [
        '[line 2] Error: Unexpected character: $.',
        'Aborting due to error while lexing.',
    ]


def test_parse_error_aborts_before_running(tmp_path, capsys):
    script = write(tmp_path, 'bad.lox', 'print "start";\nprint 1')
    with pytest.raises(SystemExit) as excinfo:
        main([script])
    assert excinfo.value.code == EXIT_DATAERR
    captured = capsys.readouterr()
    assert captured.out == ''
    assert "Aborting due to error while parsing." in captured.err


def test_runtime_error_exit_code(tmp_path, capsys):
    script = write(tmp_path, 'bad.lox', 'print "start";\nprint -nil;')
    with pytest.raises(SystemExit) as excinfo:
        main([script])
    assert excinfo.value.code == EXIT_DATAERR
    captured = capsys.readouterr()
    assert captured.out == 'start\n'
    assert captured.err.strip() == "[line 2] Error at '-': Operand must be a number"


def test_too_many_arguments_is_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['one.lox', 'two.lox'])
    assert excinfo.value.code == EXIT_USAGE


def test_emit_ast_then_execute(tmp_path, capsys):
    script = write(tmp_path, 'prog.lox', 'var a = 2; print a * 21;')
    main(['--emit-ast', script])
    emitted = capsys.readouterr().out
    assert json.loads(emitted)[0]['type'] == 'Var'
    ast_file = write(tmp_path, 'prog.ast.json', emitted)
    main(['--ast', ast_file])
    assert capsys.readouterr().out == '42\n'


def test_prompt_echoes_values_and_survives_errors(monkeypatch, capsys):
    lines = iter([
        'var a = 1;',
        'a + 1;',
        'print "shown";',
        'print nope;',
        'print @;',
        '"text";',
        'a;',
    ])

    def fake_input(prompt=''):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr(builtins, 'input', fake_input)
    main([])
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ['2', 'shown', '"text"', '1', '']
    assert "Variable 'nope' doesn't exist." in captured.err
    assert 'Unexpected character: @.' in captured.err
