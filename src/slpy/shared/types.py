"""
Shared enums for the SLPy front end and back ends.
"""

from enum import Enum


class BinaryOp(Enum):
    """Binary operators - closed set, value is the source spelling"""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    IDIV = "//"

    @property
    def symbol(self) -> str:
        return self.value


# Precedence layers, lowest binding first
ADDITIVE_OPS = (BinaryOp.ADD, BinaryOp.SUB)
MULTIPLICATIVE_OPS = (BinaryOp.MUL, BinaryOp.IDIV)
