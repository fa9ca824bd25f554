import sys
from typing import Optional, TextIO

from lox.tokens import Token, TokenType

# Process exit codes, following sysexits.h.
EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70

# Reported when the host call stack runs out while parsing or evaluating.
NESTING_TOO_DEEP = 'Expression nested too deeply.'


class ParseError(Exception):
    """Internal exception used by the parser to unwind to the nearest statement."""


class LoxRuntimeError(Exception):
    """Exception type used to propagate Lox runtime errors."""
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class ErrorReporter:
    """Collects static and runtime error status for one run of the pipeline.

    Scan and parse errors are printed as ``[line N] Error<where>: message``
    and set `had_error`. Runtime errors are printed as the message followed
    by ``[line N]`` and set `had_runtime_error`. The driver inspects both
    flags to choose an exit code.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.had_error = False
        self.had_runtime_error = False

    def _write(self, text: str):
        # resolve lazily so that redirected stderr is honoured
        stream = self.stream if self.stream is not None else sys.stderr
        print(text, file=stream)

    def report(self, line: int, where: str, message: str):
        self._write(f"[line {line}] Error{where}: {message}")
        self.had_error = True

    def error(self, line: int, message: str):
        self.report(line, '', message)

    def token_error(self, token: Token, message: str):
        if token.type == TokenType.EOF:
            self.report(token.line, ' at end', message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def runtime_error(self, err: LoxRuntimeError):
        self._write(f"{err.message}\n[line {err.token.line}]")
        self.had_runtime_error = True

    def reset(self):
        self.had_error = False
        self.had_runtime_error = False
