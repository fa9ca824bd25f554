# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import ErrorReporter, LoxRuntimeError
from .interpreter import Interpreter
from .parser import parse_program
from .runner import Lox, run_program
from .scanner import scan

__all__ = [
    'ErrorReporter',
    'Interpreter',
    'Lox',
    'LoxRuntimeError',
    'parse_program',
    'run_program',
    'scan',
]
