"""
Back ends walking the SLPy AST: the interpreter and the pretty-printer.
"""

from .interpreter import Interpreter
from .printer import PrettyPrinter

__all__ = ["Interpreter", "PrettyPrinter"]
