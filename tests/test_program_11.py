from pathlib import Path

from loxi.interpreter import parse_program, Interpreter


def test_program_11_call_site_scope(capsys):
    path = Path(__file__).parent.parent / 'examples' / 'program_11.lox'
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # show() resolves x through the frame of whoever called it
    assert out_lines == ['local', 'global']
