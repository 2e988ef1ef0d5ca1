"""
AST Serialization to S-Expressions
====================================

Converts an AST to a canonical S-expression for debugging (`--ast`) and
for structural comparison of trees: two trees serialized without
locations are equal exactly when they have the same node kinds,
operators, literal values, names and prompts.

    x = 1 + 2   ->   (program (block (assign "x" (binary add (int 1) (int 2)))))

Uses structured sexpr (nested lists + sexpdata.Symbol), then
pretty-prints for readable output.
"""

from typing import Any, List

import sexpdata

from .errors import SlpyError
from .nodes import (
    ASTNode, Program, Block, Assign, Print, Pass,
    BinaryExpression, IntLiteral, VariableRef, Input,
)
from .source_location import SourceLocation, NO_LOCATION
from .types import BinaryOp


class SerializationError(SlpyError):
    """Malformed S-expression handed to deserialize_ast."""


def _sym(s: str) -> sexpdata.Symbol:
    """Keyword symbol (no quotes in output)."""
    return sexpdata.Symbol(s)


def _sym_val(x: Any) -> str:
    # sexpdata.Symbol subclasses str
    return str(x)


def _pretty_dumps(sexpr: Any, indent: int = 0, indent_str: str = "  ", max_line: int = 80) -> str:
    """
    Pretty-print structured sexpr. Keeps short forms on one line; breaks only when needed.
    """
    # Check Symbol before str (sexpdata.Symbol subclasses str)
    if isinstance(sexpr, sexpdata.Symbol):
        return _sym_val(sexpr)
    if isinstance(sexpr, int):
        return str(sexpr)
    if isinstance(sexpr, str):
        escaped = sexpr.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(sexpr, list):
        if not sexpr:
            return "()"
        parts = [_pretty_dumps(e, indent + 1, indent_str, max_line) for e in sexpr]
        one_line = "(" + " ".join(parts) + ")"
        if len(one_line) <= max_line and "\n" not in one_line:
            return one_line
        prefix = indent_str * indent
        next_prefix = indent_str * (indent + 1)
        rest = "\n".join(next_prefix + p for p in parts[1:])
        inner = parts[0] + ("\n" + rest if rest else "")
        return f"({inner}\n{prefix})"
    return str(sexpr)


class ASTSerializer:
    """
    AST to structured S-expression serializer.

    Each node becomes `(kind field...)`, followed by `(loc "file" line col)`
    when locations are included.
    """

    def __init__(self, include_location: bool = False):
        self.include_location = include_location

    def serialize_to_sexpr(self, node: ASTNode) -> list:
        method = getattr(self, f"_serialize_{type(node).__name__}", None)
        if method is None:
            raise SerializationError(f"Cannot serialize {type(node).__name__}")
        sexpr = method(node)
        if self.include_location and node.location.is_known:
            loc = node.location
            sexpr.append([_sym("loc"), loc.file, loc.line, loc.column])
        return sexpr

    def _serialize_Program(self, node: Program) -> list:
        return [_sym("program"), self.serialize_to_sexpr(node.block)]

    def _serialize_Block(self, node: Block) -> list:
        return [_sym("block")] + [self.serialize_to_sexpr(s) for s in node.statements]

    def _serialize_Assign(self, node: Assign) -> list:
        return [_sym("assign"), node.name, self.serialize_to_sexpr(node.expr)]

    def _serialize_Print(self, node: Print) -> list:
        return [_sym("print"), self.serialize_to_sexpr(node.expr)]

    def _serialize_Pass(self, node: Pass) -> list:
        return [_sym("pass")]

    def _serialize_BinaryExpression(self, node: BinaryExpression) -> list:
        return [
            _sym("binary"),
            _sym(node.operator.name.lower()),
            self.serialize_to_sexpr(node.left),
            self.serialize_to_sexpr(node.right),
        ]

    def _serialize_IntLiteral(self, node: IntLiteral) -> list:
        return [_sym("int"), node.value]

    def _serialize_VariableRef(self, node: VariableRef) -> list:
        return [_sym("var"), node.name]

    def _serialize_Input(self, node: Input) -> list:
        return [_sym("input"), node.prompt]


def serialize_ast(node: ASTNode, include_location: bool = False, pretty: bool = True) -> str:
    """
    Serialize an AST node to an S-expression string.

    Args:
        node: AST node to serialize
        include_location: Include source location metadata
        pretty: Use pretty-printed format (default True). Set False for compact single-line.
    """
    sexpr = ASTSerializer(include_location=include_location).serialize_to_sexpr(node)
    if pretty:
        return _pretty_dumps(sexpr)
    return sexpdata.dumps(sexpr)


class ASTDeserializer:
    """Rebuilds AST nodes from the structured sexpr produced by ASTSerializer."""

    def deserialize(self, sexpr: Any) -> ASTNode:
        if not isinstance(sexpr, list) or not sexpr or not isinstance(sexpr[0], sexpdata.Symbol):
            raise SerializationError(f"Expected a node form, got {sexpr!r}")
        head = _sym_val(sexpr[0])
        args = list(sexpr[1:])
        location = NO_LOCATION
        if args and self._is_loc(args[-1]):
            location = self._parse_location(args.pop())
        method = getattr(self, f"_deserialize_{head}", None)
        if method is None:
            raise SerializationError(f"Unknown node kind '{head}'")
        try:
            return method(args, location)
        except (IndexError, KeyError, ValueError, TypeError) as e:
            raise SerializationError(f"Malformed '{head}' form: {e}") from e

    @staticmethod
    def _is_loc(x: Any) -> bool:
        return (isinstance(x, list) and len(x) == 4
                and isinstance(x[0], sexpdata.Symbol) and _sym_val(x[0]) == "loc")

    @staticmethod
    def _parse_location(x: list) -> SourceLocation:
        return SourceLocation(file=str(x[1]), line=int(x[2]), column=int(x[3]))

    def _deserialize_program(self, args: List[Any], location: SourceLocation) -> Program:
        block = self.deserialize(args[0])
        if not isinstance(block, Block):
            raise SerializationError("program must hold a block")
        return Program(block, location)

    def _deserialize_block(self, args: List[Any], location: SourceLocation) -> Block:
        return Block(tuple(self.deserialize(a) for a in args), location)

    def _deserialize_assign(self, args: List[Any], location: SourceLocation) -> Assign:
        return Assign(str(args[0]), self.deserialize(args[1]), location)

    def _deserialize_print(self, args: List[Any], location: SourceLocation) -> Print:
        return Print(self.deserialize(args[0]), location)

    def _deserialize_pass(self, args: List[Any], location: SourceLocation) -> Pass:
        return Pass(location)

    def _deserialize_binary(self, args: List[Any], location: SourceLocation) -> BinaryExpression:
        operator = BinaryOp[_sym_val(args[0]).upper()]
        return BinaryExpression(operator, self.deserialize(args[1]), self.deserialize(args[2]), location)

    def _deserialize_int(self, args: List[Any], location: SourceLocation) -> IntLiteral:
        return IntLiteral(int(args[0]), location)

    def _deserialize_var(self, args: List[Any], location: SourceLocation) -> VariableRef:
        return VariableRef(str(args[0]), location)

    def _deserialize_input(self, args: List[Any], location: SourceLocation) -> Input:
        return Input(str(args[0]), location)


def deserialize_ast(sexpr_str: str) -> ASTNode:
    """Deserialize an S-expression string to an AST node."""
    return ASTDeserializer().deserialize(sexpdata.loads(sexpr_str))
