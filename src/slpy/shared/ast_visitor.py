"""
AST Visitor Pattern

Design:
- Abstract base class with one visit_* method per AST node kind
- Every visit_* is abstract: a visitor that forgets a node kind cannot be
  instantiated, so adding a node kind forces every back end to handle it
- Type-safe (mypy can check the result type T)
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, TYPE_CHECKING

if TYPE_CHECKING:
    from .nodes import (
        Program, Block, Assign, Print, Pass,
        BinaryExpression, IntLiteral, VariableRef, Input,
    )

T = TypeVar('T')


class ASTVisitor(ABC, Generic[T]):
    """
    Base AST visitor over the closed set of SLPy node kinds.

    Usage:
        class MyPass(ASTVisitor[str]):
            def visit_int_literal(self, node) -> str:
                return str(node.value)
            ...

        result = program.accept(MyPass())
    """

    # Program structure
    @abstractmethod
    def visit_program(self, node: 'Program') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_program()")

    @abstractmethod
    def visit_block(self, node: 'Block') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_block()")

    # Statements
    @abstractmethod
    def visit_assign(self, node: 'Assign') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_assign()")

    @abstractmethod
    def visit_print(self, node: 'Print') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_print()")

    @abstractmethod
    def visit_pass(self, node: 'Pass') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_pass()")

    # Expressions
    @abstractmethod
    def visit_binary_expression(self, node: 'BinaryExpression') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_binary_expression()")

    @abstractmethod
    def visit_int_literal(self, node: 'IntLiteral') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_int_literal()")

    @abstractmethod
    def visit_variable_ref(self, node: 'VariableRef') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_variable_ref()")

    @abstractmethod
    def visit_input(self, node: 'Input') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_input()")
