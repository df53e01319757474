import pytest

from treelox.ast import (
    Literal, Grouping, Unary, Binary, Variable, Assign,
    ExprStmt, PrintStmt, VarStmt, Block,
)
from treelox.errors import ParseError
from treelox.expr_printer import print_expr
from treelox.parser import Parser, parse, parse_program
from treelox.scanner import scan_tokens
from treelox.token import Token, TokenType
from treelox.types import NIL

T = TokenType


def program(source):
    statements, errors = parse_program(scan_tokens(source))
    assert errors == []
    return statements


def expression(source):
    stmt, errors = parse(scan_tokens(source + ';'))
    assert errors == []
    assert isinstance(stmt, ExprStmt)
    return stmt.expr


def messages(source):
    _, errors = parse_program(scan_tokens(source))
    return [str(e) for e in errors]


@pytest.mark.parametrize('source, printed', [
    ('1 + 2 * 3', '(+ 1 (* 2 3))'),
    ('1 * 2 + 3', '(+ (* 1 2) 3)'),
    ('1 - 2 - 3', '(- (- 1 2) 3)'),
    ('8 / 4 / 2', '(/ (/ 8 4) 2)'),
    ('(1 + 2) * 3', '(* (grouping (+ 1 2)) 3)'),
    ('-1 + 2', '(+ (- 1) 2)'),
    ('!!true', '(! (! true))'),
    ('1 < 2 == 3 >= 4', '(== (< 1 2) (>= 3 4))'),
    ('a != b == c', '(== (!= a b) c)'),
    ('"a" + nil', '(+ a nil)'),
])
def test_precedence_and_associativity(source, printed):
    assert print_expr(expression(source)) == printed


@pytest.mark.parametrize('op', ['+', '-', '*', '/', '==', '!=', '>', '>=', '<', '<='])
def test_every_binary_operator_prints_in_prefix_form(op):
    assert print_expr(expression(f'a {op} b')) == f'({op} a b)'


def test_literals():
    assert expression('true') == Literal(True)
    assert expression('false') == Literal(False)
    assert expression('nil') == Literal(NIL)
    assert expression('"hi"') == Literal('hi')
    assert expression('12.5') == Literal(12.5)


def test_literal_equality_respects_type():
    assert Literal(True) != Literal(1.0)
    assert Literal(NIL) != Literal(False)
    assert Literal(1.0) == Literal(1.00001)


def test_assignment_is_right_associative():
    expr = expression('a = b = 1')
    assert expr == Assign(
        Token(T.IDENTIFIER, 'a', 'a'),
        Assign(Token(T.IDENTIFIER, 'b', 'b'), Literal(1.0)),
    )


def test_grouping_node():
    expr = expression('(x)')
    assert expr == Grouping(Variable(Token(T.IDENTIFIER, 'x', 'x')))


def test_statements():
    statements = program('var a = 1; var b; print a; a; { var c = 2; };')
    assert [type(s) for s in statements] == [VarStmt, VarStmt, PrintStmt, ExprStmt, Block]
    assert statements[1].initializer is None
    assert statements[4].statements == [VarStmt(Token(T.IDENTIFIER, 'c', 'c'), Literal(2.0))]


def test_nested_blocks():
    statements = program('{ { print 1; }; };')
    assert statements == [Block([Block([PrintStmt(Literal(1.0))])])]


def test_empty_program():
    assert program('') == []
    assert program('// just a comment\n') == []


def test_block_requires_trailing_semicolon():
    assert messages('{ print 1; }') == ["Syntax error on line 1: Expect ';' after block."]


def test_unclosed_block():
    assert messages('{ print 1;') == ["Syntax error on line 1: Expect '}' after block."]


def test_missing_semicolons():
    assert messages('print 1') == ["Syntax error on line 1: Expect ';' after value."]
    assert messages('1 + 2') == ["Syntax error on line 1: Expect ';' after expression."]
    assert messages('var a = 1') == ["Syntax error on line 1: Expect ';' after variable declaration."]


def test_missing_variable_name():
    assert messages('var = 1;') == ['Syntax error on line 1: Expect variable name.']


def test_missing_expression():
    assert messages('print ;') == ['Syntax error on line 1: Expect expression.']


def test_unclosed_grouping_reports_the_opening_line():
    errors = messages('print (1 +\n2\n;')
    assert errors == ["Syntax error on line 1: Expect ')' after expression."]


@pytest.mark.parametrize('source', ['1 = 2;', 'a + b = 3;', '(a) = 3;', '-a = 1;'])
def test_invalid_assignment_target(source):
    _, errors = parse_program(scan_tokens(source))
    assert errors[0].message == 'Invalid assignment target.'


def test_recovery_collects_independent_errors():
    source = 'var = 1;\nprint (1 + 2;\nprint "ok";\n1 +;\n'
    statements, errors = parse_program(scan_tokens(source))
    assert [(e.line, e.message) for e in errors] == [
        (1, 'Expect variable name.'),
        (2, "Expect ')' after expression."),
        (4, 'Expect expression.'),
    ]
    assert statements == [PrintStmt(Literal('ok'))]


def test_recovery_resumes_at_statement_keyword():
    statements, errors = parse_program(scan_tokens('1 + + print 2;'))
    assert len(errors) == 1
    assert statements == [PrintStmt(Literal(2.0))]


def test_error_at_end_of_input_reported_once():
    _, errors = parse_program(scan_tokens('print'))
    assert len(errors) == 1
    assert errors[0].message == 'Expect expression.'


def test_parse_stops_at_first_declaration():
    stmt, errors = parse(scan_tokens('print 1; print 2;'))
    assert stmt == PrintStmt(Literal(1.0))
    assert errors == []


def test_parse_retries_after_errors():
    stmt, errors = parse(scan_tokens('var = 1; print 2;'))
    assert stmt == PrintStmt(Literal(2.0))
    assert len(errors) == 1


def test_parse_gives_nothing_when_every_attempt_fails():
    stmt, errors = parse(scan_tokens(') )'))
    assert stmt is None
    assert len(errors) == 1
    assert isinstance(errors[0], ParseError)


def test_comments_and_whitespace_do_not_change_the_tree():
    assert expression('1  //c\n+2') == expression('1+2')


def test_parser_accepts_tokens_without_eof():
    tokens = [Token(T.NUMBER, '1', 1.0, 1), Token.simple(T.SEMICOLON, 1)]
    stmt, errors = Parser(tokens).parse()
    assert stmt == ExprStmt(Literal(1.0))
    assert errors == []


def test_error_lines_follow_tokens():
    tokens = scan_tokens('var a = 1;\n\n\nvar = 2;')
    _, errors = parse_program(tokens)
    assert errors[0].line == 4


def test_binary_operator_token_keeps_its_line():
    expr = expression('1\n+\n2')
    assert isinstance(expr, Binary)
    assert expr.operator.line == 2


def test_unary_node():
    expr = expression('-x')
    assert expr == Unary(Token.simple(T.MINUS, 1), Variable(Token(T.IDENTIFIER, 'x', 'x')))
