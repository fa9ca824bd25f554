"""Tree-walking interpreter for the Lox language.

Statements are executed and expressions evaluated directly from the AST
produced by the parser. Values are nil, booleans, numbers (always float)
and strings; see `lox.types` for truthiness, equality and display rules.

A runtime error aborts the remaining statements of the current `interpret`
call and is reported through the `ErrorReporter`. Bindings made before the
error stay in place, which lets the interactive prompt keep its state.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence

from .ast import (
    Assign, Binary, Block, Expr, Expression, Grouping, Literal, Print, Stmt,
    Unary, Var, Variable,
)
from .environment import Environment
from .errors import NESTING_TOO_DEEP, ErrorReporter, LoxRuntimeError
from .tokens import Token, TokenType
from .types import NIL, is_equal, is_number, is_string, is_truthy, stringify, type_name


class Interpreter:
    """Core interpreter that executes a Lox AST."""
    def __init__(self, reporter: Optional[ErrorReporter] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.globals = Environment()
        self.environment = self.globals
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, statements: List[Stmt]):
        try:
            for stmt in statements:
                self.execute(stmt)
        except LoxRuntimeError as e:
            self.debug(f"runtime error at line {e.token.line}: {e.message}")
            self.reporter.runtime_error(e)

    def execute_block(self, statements: Sequence[Stmt], env: Environment):
        previous = self.environment
        try:
            self.environment = env
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    def execute(self, node: Stmt):
        if isinstance(node, Expression):
            self.evaluate(node.expression)
            return
        if isinstance(node, Print):
            value = self.evaluate(node.expression)
            print(stringify(value))
            return
        if isinstance(node, Var):
            value = self.evaluate(node.initializer) if node.initializer is not None else NIL
            self.environment.define(node.name.lexeme, value)
            self.debug(f"define {node.name.lexeme} = {stringify(value)} ({type_name(value)}) "
                       f"at depth {self.environment.depth()}")
            return
        if isinstance(node, Block):
            env = Environment(parent=self.environment)
            self.debug(f"enter block at depth {env.depth()}", level=2)
            self.execute_block(node.statements, env)
            return
        # If and While have AST shapes but no evaluation rules
        raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")

    def evaluate(self, node: Expr) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression)
        if isinstance(node, Variable):
            return self.environment.get(node.name)
        if isinstance(node, Assign):
            try:
                value = self.evaluate(node.value)
            except RecursionError:
                raise LoxRuntimeError(node.name, NESTING_TOO_DEEP) from None
            self.environment.assign(node.name, value)
            self.debug(f"assign {node.name.lexeme} = {stringify(value)} ({type_name(value)})")
            return value
        if isinstance(node, Unary):
            try:
                right = self.evaluate(node.right)
            except RecursionError:
                raise LoxRuntimeError(node.operator, NESTING_TOO_DEEP) from None
            if node.operator.type == TokenType.MINUS:
                self.check_number_operand(node.operator, right)
                return -right
            if node.operator.type == TokenType.BANG:
                return not is_truthy(right)
            raise NotImplementedError(f"unsupported unary operator {node.operator.lexeme}")
        if isinstance(node, Binary):
            try:
                left = self.evaluate(node.left)
                right = self.evaluate(node.right)
            except RecursionError:
                # left-deep operator chains parse in a loop but evaluate recursively
                raise LoxRuntimeError(node.operator, NESTING_TOO_DEEP) from None
            return self.apply_binary_op(node.operator, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def check_number_operand(self, operator: Token, operand: Any):
        if is_number(operand):
            return
        raise LoxRuntimeError(operator, 'Operand must be a number.')

    def check_number_operands(self, operator: Token, left: Any, right: Any):
        if is_number(left) and is_number(right):
            return
        raise LoxRuntimeError(operator, 'Operands must be numbers.')

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if is_string(a) and is_string(b):
                return a + b
            # a string on either side concatenates the number's display form
            if is_string(a) and is_number(b):
                return a + stringify(b)
            if is_number(a) and is_string(b):
                return stringify(a) + b
            raise LoxRuntimeError(operator, 'Operands must be two numbers or two strings.')
        if op == TokenType.MINUS:
            self.check_number_operands(operator, a, b)
            return a - b
        if op == TokenType.STAR:
            self.check_number_operands(operator, a, b)
            return a * b
        if op == TokenType.SLASH:
            self.check_number_operands(operator, a, b)
            return divide(a, b)
        if op == TokenType.GREATER:
            self.check_number_operands(operator, a, b)
            return a > b
        if op == TokenType.GREATER_EQUAL:
            self.check_number_operands(operator, a, b)
            return a >= b
        if op == TokenType.LESS:
            self.check_number_operands(operator, a, b)
            return a < b
        if op == TokenType.LESS_EQUAL:
            self.check_number_operands(operator, a, b)
            return a <= b
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(a, b)
        raise NotImplementedError(f"unsupported binary operator {operator.lexeme}")


def divide(a: float, b: float) -> float:
    """IEEE division: x/0 is +-inf and 0/0 is nan instead of an exception."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b
