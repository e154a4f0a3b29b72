# UtopiaScript language package
# This package provides a scanner, parser and tree-walking interpreter for UtopiaScript.
from .interpreter import run_source, run_file, Interpreter
from .parser import Parser, parse_program
from .scanner import scan
from .reporting import ErrorReporter
from .errors import UtopiaError, UtopiaRuntimeError, UtopiaSyntaxError

__all__ = [
    'run_source',
    'run_file',
    'Interpreter',
    'Parser',
    'parse_program',
    'scan',
    'ErrorReporter',
    'UtopiaError',
    'UtopiaRuntimeError',
    'UtopiaSyntaxError',
]
