# Vyx language package
# This package provides a lexer, parser and tree-walking interpreter for the Vyx language.
from .errors import Diagnostic, ErrorReporter, VyxRuntimeError
from .interpreter import Interpreter, RunResult, parse_program, run_program
from .lexer import tokenize
from .parser import parse

__all__ = [
    'Diagnostic',
    'ErrorReporter',
    'Interpreter',
    'RunResult',
    'VyxRuntimeError',
    'parse',
    'parse_program',
    'run_program',
    'tokenize',
]
