"""
Pretty-printer

Reconstructs canonical SLPy source from an AST: one statement per line,
each prefixed by the caller's indent, every binary expression fully
parenthesized and input prompts re-escaped. Never touches an Environment.
"""

from typing import List

from ..shared.ast_visitor import ASTVisitor
from ..shared.nodes import (
    Program, Block, Assign, Print, Pass,
    BinaryExpression, IntLiteral, VariableRef, Input,
)
from ..utils.config import DEFAULT_RENDER_INDENT, STRING_QUOTE_CHAR
from ..utils.escapes import re_escape


class PrettyPrinter(ASTVisitor[str]):
    """Statements render to whole lines; expressions to inline text."""

    def __init__(self, indent: str = DEFAULT_RENDER_INDENT):
        self.indent = indent

    def render(self, node) -> str:
        return node.accept(self)

    def visit_program(self, node: Program) -> str:
        return node.block.accept(self)

    def visit_block(self, node: Block) -> str:
        lines: List[str] = [stmt.accept(self) for stmt in node.statements]
        return "".join(lines)

    def visit_assign(self, node: Assign) -> str:
        return f"{self.indent}{node.name} = {node.expr.accept(self)}\n"

    def visit_print(self, node: Print) -> str:
        return f"{self.indent}print({node.expr.accept(self)})\n"

    def visit_pass(self, node: Pass) -> str:
        return f"{self.indent}pass\n"

    def visit_binary_expression(self, node: BinaryExpression) -> str:
        return f"({node.left.accept(self)} {node.operator.symbol} {node.right.accept(self)})"

    def visit_int_literal(self, node: IntLiteral) -> str:
        return str(node.value)

    def visit_variable_ref(self, node: VariableRef) -> str:
        return node.name

    def visit_input(self, node: Input) -> str:
        return f"input({STRING_QUOTE_CHAR}{re_escape(node.prompt)}{STRING_QUOTE_CHAR})"
