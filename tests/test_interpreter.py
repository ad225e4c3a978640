import io

import pytest

from glox.ast import Grouping, Literal, PrintStmt
from glox.errors import GloxRuntimeError, ParseError, ScanErrors
from glox.interpreter import Interpreter, parse_program, run_program


def output_of(source, capsys):
    run_program(source)
    return capsys.readouterr().out.splitlines()


@pytest.mark.parametrize('source, expected', [
    ('1 + 2 * 3', '7'),
    ('(1 + 2) * 3', '9'),
    ('2 * 3 - 4 / 8', '5.5'),
    ('10 - 4 - 3', '3'),
    ('64 / 4 / 2', '8'),
    ('2 * (3 + 4) * 5', '70'),
    ('-(2 - 5) * 2', '6'),
    ('0.1 + 0.2', '0.30000000000000004'),
])
def test_arithmetic(source, expected, capsys):
    assert output_of(f'print {source};', capsys) == [expected]


def test_string_concatenation(capsys):
    assert output_of('print "foo" + "bar";', capsys) == ['foobar']


def test_mixed_plus_is_a_type_error():
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('print "foo" + 1;')
    assert excinfo.value.kind == 'TypeError'
    assert excinfo.value.line == 1


@pytest.mark.parametrize('source', [
    '"a" - "b";', '1 * nil;', 'true / 2;', '"1" < 2;', '-"x";', '-true;',
])
def test_numeric_operators_reject_other_types(source):
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program(source)
    assert excinfo.value.kind == 'TypeError'


def test_division_by_zero():
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('print 1 / 0;')
    assert excinfo.value.kind == 'ZeroDivisionError'


def test_comparison_and_equality(capsys):
    source = '''
print 1 < 2;
print 2 <= 2;
print 3 > 4;
print 3 >= 4;
print nil == nil;
print nil == false;
print 1 == 1;
print "a" != "a";
print 1 == "1";
print true == 1;
print 0 == false;
'''
    assert output_of(source, capsys) == [
        'true', 'true', 'false', 'false', 'true', 'false',
        'true', 'false', 'false', 'false', 'false',
    ]


def test_truthiness(capsys):
    source = '''
print !nil;
print !false;
print !0;
print !"";
if 0 print "0 is truthy";
if "" print "empty string is truthy";
if nil print "unreachable"; else print "nil is falsy";
'''
    assert output_of(source, capsys) == [
        'true', 'true', 'false', 'false',
        '0 is truthy', 'empty string is truthy', 'nil is falsy',
    ]


def test_logical_operators_short_circuit(capsys):
    source = '''
print true and false;
print nil or "x";
print false and undefined_name;
print "left" or undefined_name;
print 1 and 2;
'''
    assert output_of(source, capsys) == ['false', 'x', 'false', 'left', '2']


def test_logical_right_operand_side_effects(capsys):
    source = '''
var calls = 0;
fun touch() { calls = calls + 1; return true; }
false and touch();
true or touch();
true and touch();
print calls;
'''
    assert output_of(source, capsys) == ['1']


def test_redeclaration_in_same_scope():
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('var x = 1; var x = 2;')
    assert excinfo.value.kind == 'RedeclarationError'
    with pytest.raises(GloxRuntimeError):
        run_program('{ var y; var y; }')
    with pytest.raises(GloxRuntimeError):
        run_program('var f = 1; fun f() {}')


def test_shadowing_in_nested_block(capsys):
    interp = Interpreter()
    interp.run(parse_program('var x = 1; { var x = 2; print x; }'))
    assert capsys.readouterr().out.splitlines() == ['2']
    assert interp.global_env.values['x'] == 1.0


def test_assignment_walks_outward(capsys):
    source = '''
var x = 1;
{
  { x = x + 10; }
}
print x;
print x = 3;
'''
    assert output_of(source, capsys) == ['11', '3']


def test_for_loop_prints_and_leaves_no_binding(capsys):
    interp = Interpreter()
    interp.run(parse_program('for (var i = 0; i < 3; i = i + 1) print i;'))
    assert capsys.readouterr().out.splitlines() == ['0', '1', '2']
    assert 'i' not in interp.global_env
    with pytest.raises(GloxRuntimeError) as excinfo:
        interp.run(parse_program('print i;'))
    assert excinfo.value.kind == 'NameError'


def test_for_with_outer_variable(capsys):
    source = '''
var i = 5;
for (; i > 3;) { print i; i = i - 1; }
print i;
'''
    assert output_of(source, capsys) == ['5', '4', '3']


def test_while_loop(capsys):
    source = '''
var n = 0;
while (n < 3) { n = n + 1; }
print n;
'''
    assert output_of(source, capsys) == ['3']


def test_assign_to_undeclared_name():
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('y = 1;')
    assert excinfo.value.kind == 'NameError'
    assert 'unknown variable y' in str(excinfo.value)


def test_reference_to_undeclared_name():
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('print 1 + nope;')
    assert excinfo.value.kind == 'NameError'
    assert 'unknown identifier nope' in str(excinfo.value)
    assert (excinfo.value.line, excinfo.value.column) == (1, 10)


def test_runtime_error_keeps_earlier_output(capsys):
    with pytest.raises(GloxRuntimeError):
        run_program('print "before"; print missing; print "after";')
    assert capsys.readouterr().out.splitlines() == ['before']


def test_syntax_error_runs_nothing(capsys):
    with pytest.raises(ParseError):
        run_program('print "before"; print (;')
    assert capsys.readouterr().out == ''


def test_lex_error_runs_nothing(capsys):
    with pytest.raises(ScanErrors):
        run_program('print "before"; print 1 ^ 2;')
    assert capsys.readouterr().out == ''


def test_function_parameters_are_isolated(capsys):
    source = '''
var a = 1;
fun bump(a) {
  a = a + 100;
  print a;
}
bump(5);
print a;
'''
    assert output_of(source, capsys) == ['105', '1']


def test_function_calls_yield_nil_without_return(capsys):
    source = '''
fun noop() {}
print noop();
'''
    assert output_of(source, capsys) == ['nil']


def test_return_value_and_recursion(capsys):
    source = '''
fun fact(n) {
  if n <= 1 return 1;
  return n * fact(n - 1);
}
print fact(10);
fun early() {
  while true { return "out"; }
}
print early();
'''
    assert output_of(source, capsys) == ['3628800', 'out']


def test_return_outside_function():
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('return 1;')
    assert excinfo.value.kind == 'ReturnError'


def test_call_site_scoping(capsys):
    # Function bodies resolve free names in the caller's scope, not the declaration's.
    source = '''
fun show() { print who; }
{
  var who = "first caller";
  show();
}
{
  var who = "second caller";
  show();
}
'''
    assert output_of(source, capsys) == ['first caller', 'second caller']


def test_arity_mismatch():
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('fun f(a, b) {} f(1);')
    assert excinfo.value.kind == 'ArityError'
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('clock(1);')
    assert excinfo.value.kind == 'ArityError'


def test_calling_a_non_function():
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('var x = "str"; x();')
    assert excinfo.value.kind == 'TypeError'


def test_runaway_recursion_is_reported():
    with pytest.raises(GloxRuntimeError) as excinfo:
        run_program('fun down(n) { down(n + 1); } down(0);')
    assert excinfo.value.kind == 'StackOverflowError'


def test_clock_builtin(capsys):
    source = '''
var t = clock();
print t > 0;
print clock;
'''
    assert output_of(source, capsys) == ['true', '<builtin fn clock>']


def test_printing_values(capsys):
    source = '''
fun f() {}
print f;
print nil;
print 3.0;
print -0.5;
print 1000000;
var unset;
print unset;
'''
    assert output_of(source, capsys) == ['<fn f>', 'nil', '3', '-0.5', '1000000', 'nil']


def test_output_stream_can_be_redirected(capsys):
    out = io.StringIO()
    interp = Interpreter(out=out)
    interp.interpret('print "redirected";')
    assert out.getvalue() == 'redirected\n'
    assert capsys.readouterr().out == ''


def test_bytes_source(capsys):
    assert output_of(b'print "bytes";', capsys) == ['bytes']


def test_debug_log_is_written(tmp_path):
    log = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=4, debug_file=str(log), out=io.StringIO())
    interp.interpret('var x = 1; if x print x;')
    interp.close()
    text = log.read_text(encoding='utf-8')
    assert 'parsed 2 statements' in text
    assert 'declare x: number = 1' in text
    assert 'if condition 1 -> True' in text
    assert '(var x 1)' in text


def test_negative_zero_keeps_its_sign(capsys):
    assert output_of('print -0; print 0; print 0 * -1;', capsys) == ['-0', '0', '-0']


def test_deeply_nested_tree_is_a_runtime_error():
    expr = Literal(1.0)
    for _ in range(5000):
        expr = Grouping(expr)
    interpreter = Interpreter(out=io.StringIO())
    with pytest.raises(GloxRuntimeError) as excinfo:
        interpreter.run([PrintStmt(expr)])
    assert excinfo.value.kind == 'StackOverflowError'
