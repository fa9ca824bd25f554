"""Driver tying the scanner, parser and interpreter together.

`Lox` owns one interpreter, so the global environment persists across
calls to `run`. That is what makes the interactive prompt stateful.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import Stmt
from .ast_printer import AstPrinter
from .errors import EX_DATAERR, EX_SOFTWARE, ErrorReporter
from .interpreter import Interpreter
from .parser import parse
from .scanner import scan

PROMPT = '> '


class Lox:
    def __init__(self, reporter: Optional[ErrorReporter] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.interpreter = Interpreter(self.reporter, debug_level=debug_level, debug_file=debug_file)

    def parse(self, source: str) -> List[Stmt]:
        tokens = scan(source, self.reporter)
        self.interpreter.debug(f"scanned {len(tokens)} tokens", level=2)
        if self.interpreter.debug_level >= 3:
            for token in tokens:
                self.interpreter.debug(f"  {token}", level=3)
        statements = parse(tokens, self.reporter)
        if self.interpreter.debug_level >= 2 and not self.reporter.had_error:
            self.interpreter.debug(self.render_ast(statements), level=2)
        return statements

    def render_ast(self, statements: List[Stmt]) -> str:
        try:
            return AstPrinter().print(statements)
        except RecursionError:
            return '<ast too deeply nested to print>'

    def run(self, source: str):
        statements = self.parse(source)
        # a program that failed to scan or parse is never executed
        if self.reporter.had_error:
            return
        self.interpreter.interpret(statements)

    def run_statements(self, statements: List[Stmt]) -> int:
        self.interpreter.interpret(statements)
        return self.exit_code()

    def exit_code(self) -> int:
        if self.reporter.had_error:
            return EX_DATAERR
        if self.reporter.had_runtime_error:
            return EX_SOFTWARE
        return 0

    def run_file(self, path: str) -> int:
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()
        self.run(source)
        return self.exit_code()

    def run_prompt(self):
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                print()
                break
            self.run(line)
            # an error on one line does not poison the next
            self.reporter.reset()

    def close(self):
        self.interpreter.close()


def run_program(source: str, reporter: Optional[ErrorReporter] = None,
                debug_level: int = 0) -> ErrorReporter:
    """Convenience function to scan, parse and run a Lox program from source string.

    Nothing is executed if the source has a scan or parse error. The
    returned reporter tells which kind of error, if any, occurred.
    """
    lox = Lox(reporter, debug_level=debug_level)
    try:
        lox.run(source)
    finally:
        lox.close()
    return lox.reporter
