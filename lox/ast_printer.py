"""Debug printer rendering a Lox AST as parenthesized prefix text.

For example ``-123 * (45.67)`` prints as ``(* (- 123.0) (group 45.67))``.
"""

from __future__ import annotations

from typing import Any, List

from .ast import (
    Assign, Binary, Block, Expression, Grouping, If, Literal, Print, Unary,
    Var, Variable, While,
)
from .types import NIL


class AstPrinter:
    def print(self, node: Any) -> str:
        if isinstance(node, list):
            return '\n'.join(self.print(stmt) for stmt in node)
        # Expressions
        if isinstance(node, Binary):
            return self.parenthesize(node.operator.lexeme, node.left, node.right)
        if isinstance(node, Grouping):
            return self.parenthesize('group', node.expression)
        if isinstance(node, Literal):
            return self.literal(node.value)
        if isinstance(node, Unary):
            return self.parenthesize(node.operator.lexeme, node.right)
        if isinstance(node, Variable):
            return node.name.lexeme
        if isinstance(node, Assign):
            return self.parenthesize(f"= {node.name.lexeme}", node.value)
        # Statements
        if isinstance(node, Expression):
            return self.parenthesize(';', node.expression)
        if isinstance(node, Print):
            return self.parenthesize('print', node.expression)
        if isinstance(node, Var):
            if node.initializer is None:
                return f"(var {node.name.lexeme})"
            return self.parenthesize(f"var {node.name.lexeme} =", node.initializer)
        if isinstance(node, Block):
            return self.parenthesize('block', *node.statements)
        if isinstance(node, If):
            if node.else_branch is None:
                return self.parenthesize('if', node.condition, node.then_branch)
            return self.parenthesize('if-else', node.condition, node.then_branch, node.else_branch)
        if isinstance(node, While):
            return self.parenthesize('while', node.condition, node.body)
        raise NotImplementedError(f"print: unexpected node type {type(node)}")

    def literal(self, value: Any) -> str:
        if value is NIL or value is None:
            return 'nil'
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return str(value)

    def parenthesize(self, name: str, *parts: Any) -> str:
        pieces: List[str] = ['(' + name]
        for part in parts:
            pieces.append(' ' + self.print(part))
        pieces.append(')')
        return ''.join(pieces)
