"""
SLPy runtime: the environment and the execution wrapper.
"""

from .environment import Environment
from .runtime import SlpyRuntime, ExecutionResult

__all__ = ["Environment", "SlpyRuntime", "ExecutionResult"]
