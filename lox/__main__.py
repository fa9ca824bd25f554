"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [--debug-file PATH] [script]
    python -m lox [-v...] --emit-ast <script>
    python -m lox [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Where debug output goes (default: debug.txt)
  --emit-ast    Parse the given script and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a script an interactive prompt is started. Exit codes: 64 for a
usage error, 65 when the script has a syntax error, 70 when it fails at
runtime.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_from_obj, ast_to_obj
from .errors import EX_DATAERR, EX_USAGE, NESTING_TOO_DEEP
from .runner import Lox


class LoxArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        print('Usage: lox [script]', file=sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        sys.exit(EX_USAGE)


def require_file(path: Path) -> Path:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    return path


def read_source(path: Path) -> str:
    with open(require_file(path), 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = LoxArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', default='debug.txt', help='file receiving debug output')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='?', help='Lox script to execute; omit for a prompt')
    args = parser.parse_args(argv)

    lox = Lox(debug_level=args.v, debug_file=args.debug_file)
    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            statements = lox.parse(read_source(program_file))
            code = lox.exit_code()
            if code:
                sys.exit(code)
            out_path = program_file.with_name(program_file.name + '.ast.json')
            try:
                text = json.dumps(ast_to_obj(statements), ensure_ascii=False, indent=2)
            except RecursionError:
                print(f"Error: {NESTING_TOO_DEEP}", file=sys.stderr)
                sys.exit(EX_DATAERR)
            with open(out_path, 'w', encoding='utf-8') as out:
                out.write(text)
            print(str(out_path))
            return

        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            try:
                statements = ast_from_obj(json.loads(read_source(ast_path)))
            except RecursionError:
                print(f"Error: {NESTING_TOO_DEEP}", file=sys.stderr)
                sys.exit(EX_DATAERR)
            code = lox.run_statements(statements)
            if code:
                sys.exit(code)
            return

        if args.script:
            code = lox.run_file(str(require_file(Path(args.script))))
            if code:
                sys.exit(code)
            return

        lox.run_prompt()
    finally:
        lox.close()


if __name__ == '__main__':
    main()
