from pathlib import Path

from loxi.interpreter import parse_program, Interpreter


def test_program_6_truthiness(capsys):
    path = Path(__file__).parent.parent / 'examples' / 'program_6.lox'
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # 0 and the empty string are truthy; only nil and false are not
    assert out_lines == ['yes', 'empty string is truthy', 'nil is falsy', 'false', 'true']
