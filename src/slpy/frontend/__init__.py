"""
SLPy front end: tokenizer, token stream and parser.
"""

from .tokens import Token, TokenKind, TokenStream
from .lexer import Tokenizer, TokenizerState, IncompleteOperatorError, lex
from .parser import Parser, parse

__all__ = [
    "Token", "TokenKind", "TokenStream",
    "Tokenizer", "TokenizerState", "IncompleteOperatorError", "lex",
    "Parser", "parse",
]
