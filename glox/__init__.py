# glox language package
# This package provides a scanner, parser and tree-walking interpreter for glox.
from .errors import GloxError, GloxRuntimeError, LexError, ParseError, ScanErrors
from .interpreter import Interpreter, parse_program, run_program

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'GloxError',
    'GloxRuntimeError',
    'LexError',
    'ParseError',
    'ScanErrors',
]
