import ast
from pathlib import Path

import pytest

import lox.ast
from lox.tool.generate_ast import (
    AST_FAMILIES, GrammarError, NodeSpec, define_ast, generate_module, main,
    parse_description,
)


def test_parse_description():
    spec = parse_description('Binary   : Expr left, Token operator, Expr right')
    assert spec == NodeSpec('Binary', (('Expr', 'left'), ('Token', 'operator'), ('Expr', 'right')))


def test_parse_generic_types():
    spec = parse_description('Var : Token name, Optional[Expr] initializer')
    assert spec.fields == (('Token', 'name'), ('Optional[Expr]', 'initializer'))
    spec = parse_description('Nested : List[Optional[Stmt]] items')
    assert spec.fields == (('List[Optional[Stmt]]', 'items'),)
    spec = parse_description('Block : Tuple[Stmt, ...] statements')
    assert spec.fields == (('Tuple[Stmt, ...]', 'statements'),)
    spec = parse_description('Pair : Dict[str,Expr] items, Token name')
    assert spec.fields == (('Dict[str, Expr]', 'items'), ('Token', 'name'))


@pytest.mark.parametrize('line', ['Broken : Token', 'no colon here', 'Bad : Expr a,', 'X : List[ a'])
def test_malformed_description(line):
    with pytest.raises(GrammarError):
        parse_description(line)


def test_define_ast_renders_dataclasses():
    text = define_ast('Expr', ['Grouping : Expr expression'])
    assert text == (
        '\n'
        '\n'
        '@dataclass(frozen=True)\n'
        'class Expr:\n'
        '    """Base class for all Expr nodes."""\n'
        '\n'
        '\n'
        '@dataclass(frozen=True)\n'
        'class Grouping(Expr):\n'
        '    expression: Expr\n'
    )


def test_duplicate_node_names_are_rejected():
    with pytest.raises(GrammarError):
        generate_module({'Expr': ['A : Token x'], 'Stmt': ['A : Expr y']})


def test_checked_in_ast_module_is_generated_output():
    source = Path(lox.ast.__file__).read_text(encoding='utf-8')
    assert source == generate_module(AST_FAMILIES)


def test_main_writes_module(tmp_path, capsys):
    main([str(tmp_path / 'out')])
    out_path = tmp_path / 'out' / 'ast.py'
    assert capsys.readouterr().out.strip() == str(out_path)
    tree = ast.parse(out_path.read_text(encoding='utf-8'))
    classes = {node.name: node for node in tree.body if isinstance(node, ast.ClassDef)}
    assert [base.id for base in classes['Assign'].bases] == ['Expr']
    assert [base.id for base in classes['While'].bases] == ['Stmt']
    binary_fields = [stmt.target.id for stmt in classes['Binary'].body]
    assert binary_fields == ['left', 'operator', 'right']


def test_main_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 64
    assert capsys.readouterr().err == 'Usage: generate_ast <output directory>\n'
