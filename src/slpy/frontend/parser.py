"""
Parser

Recursive descent over a TokenStream, one method per grammar production:

    program        := block
    block          := statement EOLN { statement EOLN }
    statement      := name '=' expression
                    | 'print' '(' expression ')'
                    | 'pass'
    expression     := additive
    additive       := multiplicative { ('+'|'-') multiplicative }
    multiplicative := leaf { ('*'|'//') leaf }
    leaf           := '(' expression ')'
                    | 'input' '(' string ')'
                    | 'int' '(' expression ')'
                    | number
                    | name

Every node is located at the first token consumed in producing it;
binary expressions are located at their operator token.
"""

import logging
from typing import List

from ..shared.errors import SlpySyntaxError
from ..shared.nodes import (
    Program, Block, Statement, Assign, Print, Pass,
    Expression, BinaryExpression, IntLiteral, VariableRef, Input,
)
from ..shared.types import ADDITIVE_OPS, MULTIPLICATIVE_OPS
from .tokens import TokenStream

logger = logging.getLogger(__name__)


class Parser:
    """Builds a Program from a TokenStream, consuming it left to right."""

    def __init__(self, tokens: TokenStream):
        self.tokens = tokens

    def parse(self) -> Program:
        program = self.parse_program()
        self.tokens.eat_end_of_stream()
        logger.debug(f"Parsed {len(program.block.statements)} statements from {self.tokens.source_name}")
        return program

    # -- program structure --------------------------------------------------

    def parse_program(self) -> Program:
        location = self.tokens.locate()
        return Program(self.parse_block(), location)

    def parse_block(self) -> Block:
        location = self.tokens.locate()
        statements: List[Statement] = []
        while True:
            if self.tokens.at_indent():
                # Indentation carries no meaning in a straight-line program.
                self.tokens.advance()
            statements.append(self.parse_statement())
            self.tokens.eat_end_of_line()
            if self.tokens.at_end_of_stream():
                break
        return Block(tuple(statements), location)

    def parse_statement(self) -> Statement:
        location = self.tokens.locate()
        if self.tokens.at("print"):
            self.tokens.eat("print")
            self.tokens.eat("(")
            expr = self.parse_expression()
            self.tokens.eat(")")
            return Print(expr, location)
        if self.tokens.at("pass"):
            self.tokens.eat("pass")
            return Pass(location)
        name = self.tokens.eat_name()
        self.tokens.eat("=")
        expr = self.parse_expression()
        return Assign(name, expr, location)

    # -- expressions ----------------------------------------------------------

    def parse_expression(self) -> Expression:
        return self.parse_additive()

    def parse_additive(self) -> Expression:
        return self._parse_binary_layer(ADDITIVE_OPS, self.parse_multiplicative)

    def parse_multiplicative(self) -> Expression:
        return self._parse_binary_layer(MULTIPLICATIVE_OPS, self.parse_leaf)

    def _parse_binary_layer(self, operators, parse_operand) -> Expression:
        """operand { op operand }, folded to the left."""
        left = parse_operand()
        while True:
            operator = next((op for op in operators if self.tokens.at(op.symbol)), None)
            if operator is None:
                return left
            location = self.tokens.eat(operator.symbol).location
            right = parse_operand()
            left = BinaryExpression(operator, left, right, location)

    def parse_leaf(self) -> Expression:
        location = self.tokens.locate()
        if self.tokens.at("("):
            self.tokens.eat("(")
            expr = self.parse_expression()
            self.tokens.eat(")")
            return expr
        if self.tokens.at("input"):
            self.tokens.eat("input")
            self.tokens.eat("(")
            prompt = self.tokens.eat_string()
            self.tokens.eat(")")
            return Input(prompt, location)
        if self.tokens.at("int"):
            # Every value is already an integer: int(e) is just e.
            self.tokens.eat("int")
            self.tokens.eat("(")
            expr = self.parse_expression()
            self.tokens.eat(")")
            return expr
        if self.tokens.at_number():
            return IntLiteral(self.tokens.eat_number(), location)
        if self.tokens.at_name():
            return VariableRef(self.tokens.eat_name(), location)
        found = self.tokens.current().display_text()
        raise SlpySyntaxError(
            f"Syntax error: unexpected '{found}' while parsing an expression.",
            location,
            found=found,
            label="expected an expression",
        )


def parse(tokens: TokenStream) -> Program:
    """Parse a whole program; raises SlpySyntaxError on any mismatch."""
    return Parser(tokens).parse()
