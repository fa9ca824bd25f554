import pytest

from lox.ast import (
    Assign, Block, Expression, Grouping, Literal, Print, Unary, Var, Variable,
)
from lox.ast_printer import AstPrinter
from lox.errors import ErrorReporter
from lox.parser import parse_program
from lox.tokens import TokenType
from lox.types import NIL


def parse_ok(source):
    reporter = ErrorReporter()
    statements = parse_program(source, reporter)
    assert not reporter.had_error
    return statements


def parse_expr(source):
    statements = parse_ok(source + ';')
    assert len(statements) == 1
    assert isinstance(statements[0], Expression)
    return statements[0].expression


def show(source):
    return AstPrinter().print(parse_expr(source))


@pytest.mark.parametrize('literal, expected', [
    ('0', 0.0),
    ('7', 7.0),
    ('3.25', 3.25),
    ('0.1', 0.1),
    ('1234567.890125', 1234567.890125),
])
def test_number_literal_holds_exact_double(literal, expected):
    expr = parse_expr(literal)
    assert isinstance(expr, Literal)
    assert expr.value == expected
    assert type(expr.value) is float


def test_keyword_literals():
    assert parse_expr('true') == Literal(True)
    assert type(parse_expr('true').value) is bool
    assert parse_expr('false') == Literal(False)
    assert type(parse_expr('false').value) is bool
    assert parse_expr('nil').value is NIL
    assert parse_expr('"text"') == Literal('text')


def test_grouping_wraps_inner_expression():
    inner = parse_expr('1 + 2 * x')
    expr = parse_expr('(1 + 2 * x)')
    assert isinstance(expr, Grouping)
    assert expr.expression == inner


def test_precedence():
    assert show('1 + 2 * 3') == '(+ 1.0 (* 2.0 3.0))'
    assert show('(1 + 2) * 3') == '(* (group (+ 1.0 2.0)) 3.0)'
    assert show('1 < 2 == 3 >= 4') == '(== (< 1.0 2.0) (>= 3.0 4.0))'
    assert show('-a * !b') == '(* (- a) (! b))'


def test_binary_operators_are_left_associative():
    assert show('1 - 2 - 3') == '(- (- 1.0 2.0) 3.0)'
    assert show('8 / 4 / 2') == '(/ (/ 8.0 4.0) 2.0)'
    assert show('a == b != c') == '(!= (== a b) c)'


def test_unary_is_right_recursive():
    expr = parse_expr('!!true')
    assert isinstance(expr, Unary)
    assert isinstance(expr.right, Unary)
    assert expr.right.right == Literal(True)
    assert type(expr.right.right.value) is bool
    assert show('- -1') == '(- (- 1.0))'


def test_assignment_is_right_associative():
    expr = parse_expr('a = b = 1')
    assert isinstance(expr, Assign)
    assert expr.name.lexeme == 'a'
    assert isinstance(expr.value, Assign)
    assert expr.value.name.lexeme == 'b'
    assert expr.value.value == Literal(1.0)


def test_variable_reference():
    expr = parse_expr('answer')
    assert isinstance(expr, Variable)
    assert expr.name.type == TokenType.IDENTIFIER
    assert expr.name.lexeme == 'answer'


def test_statements():
    statements = parse_ok('var a = 1; var b; print a; { a; }')
    assert isinstance(statements[0], Var)
    assert statements[0].initializer == Literal(1.0)
    assert isinstance(statements[1], Var)
    assert statements[1].initializer is None
    assert isinstance(statements[2], Print)
    assert isinstance(statements[3], Block)
    assert isinstance(statements[3].statements[0], Expression)


def test_nested_blocks():
    statements = parse_ok('{ var x = 1; { print x; } }')
    outer = statements[0]
    assert isinstance(outer, Block)
    assert isinstance(outer.statements[0], Var)
    assert isinstance(outer.statements[1], Block)
    # blocks are immutable all the way down
    assert isinstance(outer.statements, tuple)
    assert hash(outer) == hash(parse_ok('{ var x = 1; { print x; } }')[0])


def test_empty_program():
    assert parse_ok('') == []
    assert parse_ok('// only a comment') == []


@pytest.mark.parametrize('source, message', [
    ('print 1', "[line 1] Error at end: Expect ';' after value."),
    ('1 + 2', "[line 1] Error at end: Expect ';' after expression."),
    ('var x = 1', "[line 1] Error at end: Expect ';' after variable declaration."),
    ('var 1;', "[line 1] Error at '1': Expect variable name."),
    ('(1 + 2;', "[line 1] Error at ';': Expect ')' after expression."),
    ('{ print 1;', "[line 1] Error at end: Expect '}' after block."),
    ('print;', "[line 1] Error at ';': Expect expression."),
])
def test_syntax_error_messages(capsys, source, message):
    reporter = ErrorReporter()
    parse_program(source, reporter)
    assert reporter.had_error
    assert capsys.readouterr().err.strip() == message


def test_invalid_assignment_target_does_not_abort_parse(capsys):
    reporter = ErrorReporter()
    statements = parse_program('1 + a = 2; print 3;', reporter)
    assert reporter.had_error
    assert capsys.readouterr().err.strip() == "[line 1] Error at '=': Invalid assignment target."
    # both statements are still produced
    assert len(statements) == 2
    assert isinstance(statements[1], Print)


def test_two_errors_give_two_diagnostics(capsys):
    reporter = ErrorReporter()
    statements = parse_program('print (1;\nvar x = 2;\nprint x +;\nprint x;', reporter)
    err_lines = capsys.readouterr().err.strip().split('\n')
    assert err_lines == [
        "[line 1] Error at ';': Expect ')' after expression.",
        "[line 3] Error at ';': Expect expression.",
    ]
    # the good statements around the errors are kept
    assert [type(s) for s in statements] == [Var, Print]


def test_synchronize_stops_before_statement_keyword(capsys):
    reporter = ErrorReporter()
    statements = parse_program('var = 1 print 2;', reporter)
    assert len(capsys.readouterr().err.strip().split('\n')) == 1
    assert statements == [Print(Literal(2.0))]


def test_error_inside_block_recovers_within_block(capsys):
    reporter = ErrorReporter()
    statements = parse_program('{ print ; print 1; }', reporter)
    assert reporter.had_error
    assert len(statements) == 1
    assert statements[0].statements == (Print(Literal(1.0)),)
    assert capsys.readouterr().err.count('Error') == 1


def test_deep_grouping_is_reported_not_raised(capsys):
    reporter = ErrorReporter()
    source = 'print ' + '(' * 2000 + '1' + ')' * 2000 + ';\nprint 2;'
    statements = parse_program(source, reporter)
    assert reporter.had_error
    err = capsys.readouterr().err
    assert err.count('Expression nested too deeply.') == 1
    assert err.startswith('[line 1] Error at ')
    # parsing resumes after the offending statement
    assert statements == [Print(Literal(2.0))]


def test_moderate_nesting_parses(capsys):
    expr = parse_expr('(' * 40 + '1' + ')' * 40)
    for _ in range(40):
        assert isinstance(expr, Grouping)
        expr = expr.expression
    assert expr == Literal(1.0)
