from pathlib import Path

from loxi.interpreter import parse_program, Interpreter


def test_program_3_assignment_reaches_outer(capsys):
    path = Path(__file__).parent.parent / 'examples' / 'program_3.lox'
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['2']
