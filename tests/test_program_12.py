from pathlib import Path

import pytest

from loxi.errors import LoxRuntimeError
from loxi.interpreter import parse_program, Interpreter


def test_program_12_arity_mismatch_aborts(capsys):
    """Calling a zero-parameter function with one argument is a runtime
    error reported at the closing parenthesis. Output printed before the
    failing statement stays; the statement after it never runs."""
    path = Path(__file__).parent.parent / 'examples' / 'program_12.lox'
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    with pytest.raises(LoxRuntimeError):
        interp.interpret(ast)
    captured = capsys.readouterr()
    assert captured.out.strip().split('\n') == ['before']
    assert captured.err.strip() == "[line 3] Error at ')': Expected 0 arguments but got 1."
