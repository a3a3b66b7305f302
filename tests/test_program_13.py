from pathlib import Path

import pytest

from loxi.errors import LoxRuntimeError
from loxi.interpreter import parse_program, Interpreter


def test_program_13_mixed_plus_operands(capsys):
    path = Path(__file__).parent.parent / 'examples' / 'program_13.lox'
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    with pytest.raises(LoxRuntimeError):
        interp.interpret(ast)
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.strip() == "[line 1] Error at '+': Operands must be two numbers or two strings"
