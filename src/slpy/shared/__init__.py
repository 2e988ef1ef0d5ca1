"""
Shared components: locations, diagnostics and the AST.
"""

from .source_location import SourceLocation, NO_LOCATION
from .errors import (
    Error, ErrorReporter, format_terse,
    SlpyError, SlpySourceError, SlpyLexError, SlpySyntaxError, SlpyRuntimeError,
    UnboundVariableError, DivisionByZeroError, InputError,
)
from .types import BinaryOp
from .nodes import (
    ASTNode, Statement, Expression, NodeType,
    Program, Block, Assign, Print, Pass,
    BinaryExpression, IntLiteral, VariableRef, Input,
)
from .ast_visitor import ASTVisitor
