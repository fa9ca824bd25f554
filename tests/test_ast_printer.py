from lox.ast import Binary, Grouping, If, Literal, Print, Unary, While
from lox.ast_printer import AstPrinter
from lox.parser import parse_program
from lox.tokens import Token, TokenType


def test_hand_built_expression():
    expression = Binary(
        Unary(Token(TokenType.MINUS, '-', None, 1), Literal(123.0)),
        Token(TokenType.STAR, '*', None, 1),
        Grouping(Literal(45.67)),
    )
    assert AstPrinter().print(expression) == '(* (- 123.0) (group 45.67))'


def test_statements():
    statements = parse_program('var a = nil; var b; a = "s"; print true; { print a == b; }')
    assert AstPrinter().print(statements).split('\n') == [
        '(var a = nil)',
        '(var b)',
        '(; (= a s))',
        '(print true)',
        '(block (print (== a b)))',
    ]


def test_reserved_statement_shapes():
    printer = AstPrinter()
    body = Print(Literal(1.0))
    assert printer.print(If(Literal(True), body, None)) == '(if true (print 1.0))'
    assert printer.print(If(Literal(False), body, body)) == '(if-else false (print 1.0) (print 1.0))'
    assert printer.print(While(Literal(False), body)) == '(while false (print 1.0))'
