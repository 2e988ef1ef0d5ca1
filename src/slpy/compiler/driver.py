"""
Compiler Driver

Runs the front end (lex, then parse) over one source text and collects
any fatal diagnostic into an ErrorReporter.
"""

import logging
from typing import Optional

from ..frontend.lexer import lex
from ..frontend.parser import parse
from ..frontend.tokens import TokenStream
from ..shared.errors import ErrorReporter, SlpySourceError
from ..shared.nodes import Program
from ..utils.config import DEFAULT_SOURCE_NAME

logger = logging.getLogger(__name__)


class CompilationResult:
    """Compilation result"""
    def __init__(
        self,
        program: Optional[Program] = None,
        tokens: Optional[TokenStream] = None,
        reporter: Optional[ErrorReporter] = None,
        error: Optional[SlpySourceError] = None,
    ):
        self.program = program
        self.tokens = tokens
        self.reporter = reporter
        self.error = error

    @property
    def success(self) -> bool:
        return self.program is not None and self.error is None

    def has_errors(self) -> bool:
        """True if compilation reported errors."""
        if self.reporter:
            return self.reporter.has_errors()
        return not self.success

    def get_errors(self) -> list:
        if self.reporter and self.reporter.has_errors():
            return [self.reporter.format_all_errors(color=False)]
        return []


class CompilerDriver:
    """
    Orchestrates the front-end phases.

    Phases:
    1. Lexing (source -> TokenStream)
    2. Parsing (TokenStream -> Program)

    Either phase aborts on its first error; there is no partial result.
    The token stream is kept on the result when lexing succeeded, even if
    parsing then failed, so `--tokens` can still show it.
    """

    def compile(self, source: str, source_file: str = DEFAULT_SOURCE_NAME) -> CompilationResult:
        reporter = ErrorReporter({source_file: source})
        tokens: Optional[TokenStream] = None
        try:
            tokens = lex(source, source_file)
            tokens.reset()
            program = parse(tokens)
        except SlpySourceError as e:
            if e.source_code is None:
                e.source_code = source
            logger.debug(f"{e.category} error in {source_file}: {e.message}")
            reporter.report_exception(e)
            return CompilationResult(tokens=tokens, reporter=reporter, error=e)
        return CompilationResult(program=program, tokens=tokens, reporter=reporter)
