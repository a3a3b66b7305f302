from pathlib import Path

from loxi.interpreter import parse_program, Interpreter


def test_program_5_equality_without_coercion(capsys):
    path = Path(__file__).parent.parent / 'examples' / 'program_5.lox'
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['false', 'false', 'true', 'true', 'true', 'true']
