"""
SLPy compiler driver.
"""

from .driver import CompilerDriver, CompilationResult

__all__ = ["CompilerDriver", "CompilationResult"]
