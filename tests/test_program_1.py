from pathlib import Path

from loxi.interpreter import parse_program, Interpreter


def test_program_1(capsys):
    path = Path(__file__).parent.parent / 'examples' / 'program_1.lox'
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
