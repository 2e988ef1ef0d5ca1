"""
SLPy AST (Abstract Syntax Tree) Definitions

A program is one Block of Statements; statements hold Expression trees.
Nodes are immutable, own their children exclusively (a strict tree) and
carry the location of the first token consumed in producing them.

Visitor Pattern Support:
- All AST nodes have accept() methods for polymorphic dispatch
- ASTVisitor declares one abstract visit_* per node kind, so the set of
  node kinds is closed and every visitor covers all of them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, TextIO, Tuple, TypeVar, TYPE_CHECKING

from .source_location import SourceLocation, NO_LOCATION
from .types import BinaryOp

if TYPE_CHECKING:
    from .ast_visitor import ASTVisitor
    from ..runtime.environment import Environment

T = TypeVar('T')


class NodeType(Enum):
    """AST node types"""
    PROGRAM = "program"
    BLOCK = "block"
    ASSIGN = "assign"
    PRINT = "print"
    PASS = "pass"
    BINARY_OP = "binary_op"
    INT_LITERAL = "int_literal"
    VARIABLE_REF = "variable_ref"
    INPUT = "input"


class ASTNode:
    """
    Base class for all AST nodes.

    Subclasses are frozen dataclasses; `location` is always their last
    field and defaults to the "no location" sentinel for synthesized trees.
    """
    __slots__ = ()
    node_type: ClassVar[NodeType]

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")


class Statement(ASTNode):
    """Base class for statements (executed for effect)"""
    __slots__ = ()


class Expression(ASTNode):
    """Base class for integer-valued expressions"""
    __slots__ = ()


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    left <op> right

    Located at the operator token, so a division by zero points at `//`.
    """
    operator: BinaryOp
    left: Expression
    right: Expression
    location: SourceLocation = NO_LOCATION
    node_type: ClassVar[NodeType] = NodeType.BINARY_OP

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_binary_expression(self)


@dataclass(frozen=True)
class IntLiteral(Expression):
    value: int
    location: SourceLocation = NO_LOCATION
    node_type: ClassVar[NodeType] = NodeType.INT_LITERAL

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_int_literal(self)


@dataclass(frozen=True)
class VariableRef(Expression):
    name: str
    location: SourceLocation = NO_LOCATION
    node_type: ClassVar[NodeType] = NodeType.VARIABLE_REF

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_variable_ref(self)


@dataclass(frozen=True)
class Input(Expression):
    """input("prompt"): the prompt is stored decoded (escapes applied)."""
    prompt: str
    location: SourceLocation = NO_LOCATION
    node_type: ClassVar[NodeType] = NodeType.INPUT

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_input(self)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Assign(Statement):
    name: str
    expr: Expression
    location: SourceLocation = NO_LOCATION
    node_type: ClassVar[NodeType] = NodeType.ASSIGN

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_assign(self)


@dataclass(frozen=True)
class Print(Statement):
    expr: Expression
    location: SourceLocation = NO_LOCATION
    node_type: ClassVar[NodeType] = NodeType.PRINT

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_print(self)


@dataclass(frozen=True)
class Pass(Statement):
    location: SourceLocation = NO_LOCATION
    node_type: ClassVar[NodeType] = NodeType.PASS

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_pass(self)


@dataclass(frozen=True)
class Block(ASTNode):
    """Statements in execution order (at least one after a successful parse)."""
    statements: Tuple[Statement, ...] = field(default_factory=tuple)
    location: SourceLocation = NO_LOCATION
    node_type: ClassVar[NodeType] = NodeType.BLOCK

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_block(self)


@dataclass(frozen=True)
class Program(ASTNode):
    """The whole program: exactly one Block."""
    block: Block
    location: SourceLocation = NO_LOCATION
    node_type: ClassVar[NodeType] = NodeType.PROGRAM

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_program(self)

    def run(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> 'Environment':
        """
        Execute the program against a fresh, empty environment.

        Print output and input prompts go to `stdout`, input lines come
        from `stdin` (sys.stdout / sys.stdin when omitted). Returns the
        final environment; raises SlpyRuntimeError on failure.
        """
        from ..backends.interpreter import Interpreter
        interpreter = Interpreter(stdin=stdin, stdout=stdout)
        interpreter.run(self)
        return interpreter.env

    def render(self, out: Optional[TextIO] = None, indent: str = "") -> str:
        """Canonical source text for this program, one statement per line."""
        from ..backends.printer import PrettyPrinter
        text = PrettyPrinter(indent=indent).render(self)
        if out is not None:
            out.write(text)
        return text
