"""
Interpreter

Tree-walking evaluator for SLPy programs. Statements execute in source
order against one Environment; binary operators evaluate the left
operand before the right, so input prompts appear in source order.
"""

import logging
import re
import sys
from typing import Optional, TextIO

from typing_extensions import assert_never

from ..runtime.environment import Environment
from ..shared.ast_visitor import ASTVisitor
from ..shared.errors import DivisionByZeroError, InputError
from ..shared.nodes import (
    Program, Block, Assign, Print, Pass,
    BinaryExpression, IntLiteral, VariableRef, Input,
)
from ..shared.types import BinaryOp

logger = logging.getLogger(__name__)

_INTEGER_INPUT = re.compile(r"[+-]?[0-9]+")


def _truncating_divide(numerator: int, denominator: int) -> int:
    """Integer quotient rounded toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


class Interpreter(ASTVisitor[Optional[int]]):
    """
    Executes statements (visit returns None) and evaluates expressions
    (visit returns the integer value).
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 env: Optional[Environment] = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.env = env if env is not None else Environment()

    def run(self, program: Program) -> Environment:
        logger.debug(f"Running program with {len(program.block.statements)} statements")
        program.accept(self)
        logger.debug(f"Program finished with {len(self.env)} variables bound")
        return self.env

    def evaluate(self, expr) -> int:
        return expr.accept(self)

    # -- program structure --------------------------------------------------

    def visit_program(self, node: Program) -> None:
        node.block.accept(self)

    def visit_block(self, node: Block) -> None:
        for stmt in node.statements:
            stmt.accept(self)

    # -- statements -----------------------------------------------------------

    def visit_assign(self, node: Assign) -> None:
        self.env.set_value(node.name, self.evaluate(node.expr))

    def visit_print(self, node: Print) -> None:
        value = self.evaluate(node.expr)
        self.stdout.write(f"{value}\n")

    def visit_pass(self, node: Pass) -> None:
        pass

    # -- expressions ----------------------------------------------------------

    def visit_binary_expression(self, node: BinaryExpression) -> int:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        op = node.operator
        if op is BinaryOp.ADD:
            return left + right
        elif op is BinaryOp.SUB:
            return left - right
        elif op is BinaryOp.MUL:
            return left * right
        elif op is BinaryOp.IDIV:
            if right == 0:
                raise DivisionByZeroError(
                    "Run-time error: integer division by zero.",
                    node.location,
                    label="division by zero",
                )
            return _truncating_divide(left, right)
        else:
            assert_never(op)

    def visit_int_literal(self, node: IntLiteral) -> int:
        return node.value

    def visit_variable_ref(self, node: VariableRef) -> int:
        return self.env.get_value(node.name, node.location)

    def visit_input(self, node: Input) -> int:
        self.stdout.write(node.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise InputError(
                "Run-time error: input ended before a number was entered.",
                node.location,
            )
        text = line.strip()
        if not _INTEGER_INPUT.fullmatch(text):
            raise InputError(
                f"Run-time error: expected an integer as input but got {text!r}.",
                node.location,
                label="input read here",
            )
        return int(text)
