"""Generate the Lox AST module from textual node descriptions.

Usage:
    python -m lox.tool.generate_ast <output_directory>

Every node family (``Expr``, ``Stmt``) is described as a list of lines of
the form ``Name : Type field, Type field``. Types may be generic, e.g.
``Tuple[Stmt, ...]`` or ``Optional[Expr]``. Each line is parsed with a small Lark
grammar and turned into a frozen dataclass deriving from the family's base
class. The result is written to ``ast.py`` in the output directory.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from lark import Lark, Transformer
from lark.exceptions import LarkError

from lox.errors import EX_USAGE


AST_FAMILIES: Dict[str, List[str]] = {
    'Expr': [
        'Assign   : Token name, Expr value',
        'Binary   : Expr left, Token operator, Expr right',
        'Grouping : Expr expression',
        'Literal  : Any value',
        'Unary    : Token operator, Expr right',
        'Variable : Token name',
    ],
    'Stmt': [
        'Block      : Tuple[Stmt, ...] statements',
        'Expression : Expr expression',
        'If         : Expr condition, Stmt then_branch, Optional[Stmt] else_branch',
        'Print      : Expr expression',
        'Var        : Token name, Optional[Expr] initializer',
        'While      : Expr condition, Stmt body',
    ],
}


MODULE_HEADER = '''"""Abstract Syntax Tree (AST) definitions for the Lox language.

Generated by lox.tool.generate_ast. Every node is an immutable dataclass
belonging to one of two closed families: expressions (Expr) and
statements (Stmt).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .tokens import Token
'''


DESCRIPTION_GRAMMAR = r"""
    start: NAME ":" field ("," field)*
    field: annotation NAME
    ?annotation: NAME
               | NAME "[" annotation ("," annotation)* "]"   -> generic
               | "..."   -> ellipsis

    NAME: /[A-Za-z_][A-Za-z0-9_]*/

    %import common.WS_INLINE
    %ignore WS_INLINE
"""


DESCRIPTION_PARSER = Lark(DESCRIPTION_GRAMMAR, parser='lalr')


class GrammarError(Exception):
    """Raised for a node description that cannot be parsed."""


@dataclass(frozen=True)
class NodeSpec:
    name: str
    fields: Tuple[Tuple[str, str], ...]  # (annotation, field name)


class DescriptionTransformer(Transformer):
    """Transforms the parse tree of one description line into a NodeSpec."""

    def start(self, items):
        name, *fields = items
        return NodeSpec(str(name), tuple(fields))

    def field(self, items):
        annotation, name = items
        return (str(annotation), str(name))

    def generic(self, items):
        outer, *args = items
        return f"{outer}[{', '.join(str(arg) for arg in args)}]"

    def ellipsis(self, items):
        return '...'


def parse_description(line: str) -> NodeSpec:
    try:
        tree = DESCRIPTION_PARSER.parse(line.strip())
    except LarkError as e:
        raise GrammarError(f"invalid node description {line!r}: {e}") from e
    return DescriptionTransformer().transform(tree)


def define_ast(base_name: str, descriptions: Sequence[str]) -> str:
    """Render the base class of one family followed by all of its nodes."""
    lines: List[str] = [
        '',
        '',
        '@dataclass(frozen=True)',
        f'class {base_name}:',
        f'    """Base class for all {base_name} nodes."""',
    ]
    for description in descriptions:
        spec = parse_description(description)
        lines.extend(['', '', '@dataclass(frozen=True)', f'class {spec.name}({base_name}):'])
        for annotation, name in spec.fields:
            lines.append(f'    {name}: {annotation}')
    return '\n'.join(lines) + '\n'


def generate_module(families: Dict[str, Sequence[str]]) -> str:
    seen = set()
    for base_name, descriptions in families.items():
        for description in descriptions:
            name = parse_description(description).name
            if name in seen or name in families:
                raise GrammarError(f"duplicate node name {name}")
            seen.add(name)
    return MODULE_HEADER + ''.join(
        define_ast(base_name, descriptions) for base_name, descriptions in families.items()
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print('Usage: generate_ast <output directory>', file=sys.stderr)
        sys.exit(EX_USAGE)
    output_dir = Path(args[0])
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / 'ast.py'
    with open(out_path, 'w', encoding='utf-8') as out:
        out.write(generate_module(AST_FAMILIES))
    print(str(out_path))


if __name__ == '__main__':
    main()
