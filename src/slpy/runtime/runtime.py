"""
Runtime

Thin layer over Program.run: executes a parsed program and packages the
outcome (final variables or the fatal error) as an ExecutionResult.
"""

import logging
from typing import Dict, Optional, TextIO

from ..shared.errors import SlpyRuntimeError
from ..shared.nodes import Program

logger = logging.getLogger(__name__)


class ExecutionResult:
    """Execution result: the final bindings, or the error that aborted the run."""
    def __init__(
        self,
        variables: Optional[Dict[str, int]] = None,
        error: Optional[SlpyRuntimeError] = None,
    ):
        self.variables = variables if variables is not None else {}
        self.error = error

    @property
    def success(self) -> bool:
        """Whether execution succeeded (no error)"""
        return self.error is None

    @property
    def errors(self) -> list:
        if self.error:
            return [str(self.error)]
        return []


class SlpyRuntime:
    """
    Runs programs against the given input/output streams.

    Runtime errors are captured into the result rather than raised; a
    run never continues past its first error.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout

    def execute(
        self,
        program: Program,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        source_code: Optional[str] = None,
    ) -> ExecutionResult:
        stdin = stdin if stdin is not None else self.stdin
        stdout = stdout if stdout is not None else self.stdout
        try:
            env = program.run(stdin=stdin, stdout=stdout)
        except SlpyRuntimeError as e:
            if e.source_code is None:
                e.source_code = source_code
            logger.debug(f"Run aborted: {e.message}")
            return ExecutionResult(error=e)
        return ExecutionResult(variables=env.as_dict())
