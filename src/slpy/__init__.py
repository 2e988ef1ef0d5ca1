"""
SLPy: a straight-line subset of Python.

Pipeline: lex(source) -> TokenStream -> parse(tokens) -> Program, then
Program.run() to interpret or Program.render() to pretty-print.
"""

from .frontend import lex, parse, Token, TokenKind, TokenStream
from .shared import (
    SourceLocation, Program,
    SlpyError, SlpySourceError, SlpyLexError, SlpySyntaxError, SlpyRuntimeError,
)
from .runtime import Environment

__version__ = "0.1.0"

__all__ = [
    "lex", "parse", "Token", "TokenKind", "TokenStream",
    "SourceLocation", "Program", "Environment",
    "SlpyError", "SlpySourceError", "SlpyLexError", "SlpySyntaxError", "SlpyRuntimeError",
]
