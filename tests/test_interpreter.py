import pytest

from loxi.errors import LoxRuntimeError
from loxi.interpreter import parse_program, Interpreter, run_program
from loxi.types import NIL


def run(source, interp=None):
    interp = interp or Interpreter()
    return interp.interpret(parse_program(source))


def run_error(source, capsys):
    interp = Interpreter()
    with pytest.raises(LoxRuntimeError):
        interp.interpret(parse_program(source))
    captured = capsys.readouterr()
    return captured.out, captured.err.strip()


def test_interpret_returns_last_statement_value():
    assert run('1 + 2;') == 3.0
    assert run('var a = "x"; a + "y";') == 'xy'
    assert run('print 1;') is NIL
    assert run('') is NIL


def test_run_program_helper(capsys):
    assert run_program('print "hi"; 40 + 2;') == 42.0
    assert capsys.readouterr().out == 'hi\n'


def test_comparisons_and_negation():
    assert run('1 < 2;') is True
    assert run('2 <= 2;') is True
    assert run('1 > 2;') is False
    assert run('3 >= 4;') is False
    assert run('-(-4);') == 4.0
    assert run('!true;') is False


def test_division_by_zero_is_not_an_error():
    assert run('1 / 0;') == float('inf')
    assert run('-1 / 0;') == float('-inf')


@pytest.mark.parametrize('source, message', [
    ('-"a";', "[line 1] Error at '-': Operand must be a number"),
    ('1 < "2";', "[line 1] Error at '<': Operands must be numbers"),
    ('nil * 2;', "[line 1] Error at '*': Operands must be numbers"),
    ('"a" + nil;', "[line 1] Error at '+': Operands must be two numbers or two strings"),
    ('print missing;', "[line 1] Error at 'missing': Variable 'missing' doesn't exist."),
    ('missing = 1;', "[line 1] Error at 'missing': Undefined variable 'missing'."),
    ('"text"();', "[line 1] Error at ')': Can only call functions and classes."),
    ('fun f(a, b) {}\nf(1);', "[line 2] Error at ')': Expected 2 arguments but got 1."),
])
def test_runtime_errors_are_reported(source, message, capsys):
    _, err = run_error(source, capsys)
    assert err == message


def test_error_aborts_remaining_statements(capsys):
    out, _ = run_error('print "one";\nprint nope;\nprint "three";', capsys)
    assert out == 'one\n'


def test_frame_is_restored_after_error(capsys):
    interp = Interpreter()
    with pytest.raises(LoxRuntimeError):
        run('var a = "global"; { var a = "inner"; print missing; }', interp)
    assert interp.environment is interp.global_env
    # the same interpreter keeps working, as it does in the prompt
    run('print a;', interp)
    assert capsys.readouterr().out == 'global\n'


def test_frame_is_restored_after_error_in_call(capsys):
    interp = Interpreter()
    with pytest.raises(LoxRuntimeError):
        run('fun f(x) { print x; print -x; } f("s");', interp)
    assert interp.environment is interp.global_env


def test_bindings_persist_between_interpret_calls(capsys):
    interp = Interpreter()
    run('var count = 1;', interp)
    run('count = count + 1;', interp)
    run('print count;', interp)
    assert capsys.readouterr().out == '2\n'


def test_function_call_yields_nil_and_binds_params(capsys):
    result = run('fun f(a, b) { print a + b; 99; } f(1, 2);')
    assert result is NIL
    assert capsys.readouterr().out == '3\n'


def test_function_sees_and_mutates_caller_scope(capsys):
    run('''
fun bump() { n = n + 1; }
fun outer() {
  var n = 10;
  bump();
  print n;
}
outer();
''')
    assert capsys.readouterr().out == '11\n'


def test_params_do_not_leak_after_call(capsys):
    out, err = run_error('fun f(p) {} f(1); print p;', capsys)
    assert err == "[line 1] Error at 'p': Variable 'p' doesn't exist."


def test_arguments_evaluated_left_to_right(capsys):
    run('fun show(x) { print x; } fun pair(a, b) {} pair(show("a"), show("b"));')
    assert capsys.readouterr().out == 'a\nb\n'


def test_clock_is_native_and_skips_arity_check():
    t = run('clock();')
    assert isinstance(t, float) and t > 0
    assert isinstance(run('clock(1, 2);'), float)


def test_native_binding_can_be_shadowed(capsys):
    run('var clock = "shadowed"; print clock;')
    assert capsys.readouterr().out == 'shadowed\n'


def test_functions_compare_by_identity_in_lox():
    assert run('fun f() {} var g = f; f == g;') is True
    assert run('fun f() {} fun h() {} f == h;') is False
    assert run('clock == clock;') is True


def test_debug_trace_written_to_file(tmp_path, capsys):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=3, debug_file=str(debug_file))
    try:
        run('var a = 1; fun f(x) {} f(a); if (a) a = 2;', interp)
    finally:
        interp.close()
    trace = debug_file.read_text(encoding='utf-8').splitlines()
    assert 'declare a: number = 1' in trace
    assert 'define function f/1' in trace
    assert 'call f(1) at depth 0' in trace
    assert 'if condition 1 -> True' in trace
    assert 'assign a = 2' in trace


def test_deep_recursion_runs(capsys):
    run('fun countdown(n) { if (n > 0) countdown(n - 1); } countdown(1000); print "done";')
    assert capsys.readouterr().out == 'done\n'


def test_unbounded_recursion_is_a_runtime_error(capsys):
    interp = Interpreter()
    with pytest.raises(LoxRuntimeError):
        run('fun forever() { forever(); }\nforever();', interp)
    assert capsys.readouterr().err.strip() == "[line 1] Error at ')': Stack overflow."
    assert interp.environment is interp.global_env


def test_native_arguments_are_evaluated(capsys):
    run('fun f() { print "ran"; } clock(f());')
    assert capsys.readouterr().out == 'ran\n'


def test_unknown_node_is_a_type_error():
    with pytest.raises(TypeError):
        Interpreter().execute(object())
    with pytest.raises(TypeError):
        Interpreter().evaluate(object())
