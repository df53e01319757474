import io
import math

import pytest

from treelox.errors import LoxTypeError, UndefinedVariableError
from treelox.interpreter import Interpreter, divide
from treelox.parser import parse_program
from treelox.scanner import scan_tokens
from treelox.types import NIL, to_f32


def run(source, interp=None):
    interp = interp or Interpreter()
    statements, errors = parse_program(scan_tokens(source))
    assert errors == []
    return interp.execute_all(statements)


def test_number_addition():
    assert run('1 + 1;') == 2.0


def test_string_concatenation():
    assert run('"hello" + " there";') == 'hello there'


def test_number_plus_string_is_a_type_error():
    with pytest.raises(LoxTypeError) as excinfo:
        run('1 + "a";')
    assert (excinfo.value.expected, excinfo.value.actual) == ('number', 'string')


def test_string_plus_number_is_a_type_error():
    with pytest.raises(LoxTypeError) as excinfo:
        run('"a" + 1;')
    assert (excinfo.value.expected, excinfo.value.actual) == ('string', 'number')


def test_subtracting_a_string_reports_operator_line():
    with pytest.raises(LoxTypeError) as excinfo:
        run('3\n\n-\n"hello";')
    error = excinfo.value
    assert error.expected == 'number'
    assert error.actual == 'string'
    assert error.line == 3
    assert str(error) == 'Type error on line 3: expected number, got string'


@pytest.mark.parametrize('op', ['>', '>=', '<', '<=', '-', '*', '/'])
def test_numeric_operators_reject_strings(op):
    with pytest.raises(LoxTypeError) as excinfo:
        run(f'3 {op} "hello";')
    assert excinfo.value.expected == 'number'
    assert excinfo.value.actual == 'string'
    assert excinfo.value.line == 1


@pytest.mark.parametrize('source, expected', [
    ('1 < 2;', True),
    ('2 <= 2;', True),
    ('3 > 4;', False),
    ('4 >= 4;', True),
    ('6 / 4;', 1.5),
    ('2 * 3 - 1;', 5.0),
    ('-(1 + 2);', -3.0),
    ('(1 + 2) * 3;', 9.0),
])
def test_arithmetic_and_comparison(source, expected):
    assert run(source) == expected


def test_arithmetic_results_are_32_bit():
    assert run('0.1 + 0.2;') == to_f32(to_f32(0.1) + to_f32(0.2))


@pytest.mark.parametrize('source, expected', [
    ('1 == "1.0";', False),
    ('false == nil;', False),
    ('true == "true";', False),
    ('nil == nil;', True),
    ('1 == 1.00001;', True),
    ('1 == 1.1;', False),
    ('"a" == "a";', True),
    ('"a" != "b";', True),
    ('true != false;', True),
    ('1 == true;', False),
])
def test_equality_never_errors(source, expected):
    assert run(source) is expected


@pytest.mark.parametrize('source, expected', [
    ('!nil;', True),
    ('!true;', False),
    ('!false;', True),
    ('!!nil;', False),
])
def test_not_accepts_booleans_and_nil(source, expected):
    assert run(source) is expected


def test_not_rejects_numbers():
    with pytest.raises(LoxTypeError) as excinfo:
        run('!1;')
    assert excinfo.value.expected == 'boolean'
    assert excinfo.value.actual == 'number'


def test_negate_rejects_booleans():
    with pytest.raises(LoxTypeError) as excinfo:
        run('-true;')
    assert excinfo.value.actual == 'boolean'


def test_division_by_zero_follows_ieee():
    assert run('1 / 0;') == math.inf
    assert run('-1 / 0;') == -math.inf
    assert math.isnan(run('0 / 0;'))
    assert divide(2.0, -0.0) == -math.inf


def test_var_then_read_equals_expression():
    interp = Interpreter()
    run('var a = 1 + 2 * 3;', interp)
    assert run('a;', interp) == run('1 + 2 * 3;')


def test_uninitialized_variable_is_nil():
    assert run('var a; a;') is NIL


def test_redeclaring_a_global_replaces_it():
    assert run('var a = 1; var a = "two"; a;') == 'two'


def test_assignment_returns_the_value():
    assert run('var a; var b; a = b = 4;') == 4.0
    assert run('var a; var b; a = b = 4; a + b;') == 8.0


def test_assignment_never_defines():
    interp = Interpreter()
    with pytest.raises(UndefinedVariableError) as excinfo:
        run('foo = 3;', interp)
    assert excinfo.value.name == 'foo'
    assert excinfo.value.line == 1
    assert 'foo' not in interp.globals.values


def test_reading_an_undefined_variable():
    with pytest.raises(UndefinedVariableError) as excinfo:
        run('\nbar;')
    assert str(excinfo.value) == "Undefined variable 'bar' on line 2"


def test_block_declarations_do_not_leak():
    interp = Interpreter()
    run('{ var inner = 1; };', interp)
    with pytest.raises(UndefinedVariableError):
        run('inner;', interp)


def test_block_shadowing_keeps_outer_binding(capsys):
    interp = Interpreter()
    run('var a = "outer"; { var a = "inner"; print a; };', interp)
    assert capsys.readouterr().out == 'inner\n'
    assert run('a;', interp) == 'outer'


def test_block_assignment_mutates_outer_binding():
    interp = Interpreter()
    run('var a = 1; { { a = 2; }; };', interp)
    assert run('a;', interp) == 2.0


def test_scope_is_restored_after_an_error_in_a_block():
    interp = Interpreter()
    with pytest.raises(LoxTypeError):
        run('var a = "outer"; { var a = 1; a - "x"; };', interp)
    assert interp.env is interp.globals
    assert run('a;', interp) == 'outer'


def test_print_writes_display_text(capsys):
    run('print 1; print 2.5; print "s"; print true; print nil; print 1 / 3;')
    assert capsys.readouterr().out.splitlines() == ['1', '2.5', 's', 'true', 'nil', '0.33333334']


def test_print_to_given_output():
    out = io.StringIO()
    run('print "x" + "y";', Interpreter(output=out))
    assert out.getvalue() == 'xy\n'


def test_print_statement_value_is_nil():
    assert run('print 1;') is NIL


def test_execute_all_returns_last_value():
    assert run('1; 2; 3;') == 3.0
    assert run('') is NIL


def test_debug_trace_levels(tmp_path):
    path = tmp_path / 'debug.txt'
    interp = Interpreter(output=io.StringIO(), debug_level=3, debug_file=str(path))
    run('var a = 1; { a = a + 1; };', interp)
    interp.close()
    trace = path.read_text(encoding='utf-8').splitlines()
    assert trace == [
        'execute VarStmt',
        'define a: number = 1 (depth 0)',
        'execute Block',
        'enter block (depth 1)',
        '1 + 1 -> 2',
        'assign a = 2',
        'leave block (depth 0)',
    ]


def test_debug_level_one_traces_statements_only(capsys):
    interp = Interpreter(debug_level=1)
    run('var a = 1; a + 1;', interp)
    assert capsys.readouterr().out.splitlines() == ['execute VarStmt', 'execute ExprStmt']
