from pathlib import Path

from loxi.interpreter import parse_program, Interpreter


def test_program_4_arithmetic(capsys):
    path = Path(__file__).parent.parent / 'examples' / 'program_4.lox'
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['3', 'foobar', '2.5', '5', '-3', '9', '-4']
