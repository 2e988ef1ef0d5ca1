"""
Error Reporting

Diagnostics for lexical, syntax and runtime errors in SLPy programs.
Every error carries a structured SourceLocation; formatting (verbose
rustc-style snippet or a terse one-liner) is left to the caller.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional, List, Dict

from .source_location import SourceLocation
from ..utils.config import COLOR_ENV_VAR, NO_COLOR_ENV_VAR


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get(NO_COLOR_ENV_VAR):
        return False
    explicit = os.environ.get(COLOR_ENV_VAR, "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Error dataclass
# ---------------------------------------------------------------------------

@dataclass
class Error:
    """A single diagnostic, independent of how it gets printed."""
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None
    note: Optional[str] = None
    label: Optional[str] = None


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def _format_diagnostic(
    error: Error,
    source_files: Dict[str, str],
    color: bool = False,
) -> str:
    """
    Render a single diagnostic in rustc style.

    Example output (plain, no color)::

        error[E0302]: integer division by zero
         --> prog.slpy:3:9
          |
        3 | print(5 // 0)
          |         ^^ division by zero
    """
    out: List[str] = []

    code_str = f"[{error.code}]" if error.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    if error.location is None or not error.location.is_known:
        where = error.location.file if error.location is not None and error.location.file else "<unknown location>"
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + where)
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    loc = error.location

    source = source_files.get(loc.file)
    if source is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + str(loc))
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    src_lines = source.split("\n")
    gw = max(len(str(loc.line)), 1)

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + str(loc))
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))

    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    # Columns are tab-expanded, so the snippet has to be as well.
    code_line = code_line.expandtabs(8)
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)

    col_start = loc.column - 1
    span_len = _guess_span(code_line, col_start)
    carets = " " * col_start + "^" * span_len
    label_suffix = f" {error.label}" if error.label else ""
    out.append(
        _style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color)
        + _style(carets + label_suffix, _BOLD, _RED, color=color)
    )

    _append_annotations(out, error, gw, color)

    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length from the source line."""
    if col_start >= len(code_line):
        return 1
    rest = code_line[col_start:]
    if rest[0] in "()=+-*":
        return 1
    if rest.startswith("//"):
        return 2
    length = 0
    for ch in rest:
        if ch in (" ", "\t", "(", ")", "=", "+", "-", "*", "/", "#"):
            break
        length += 1
    return max(1, length)


def _append_annotations(
    out: List[str],
    error: Error,
    gw: int,
    color: bool,
) -> None:
    if not (error.help or error.note):
        return
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    pad = " " * (gw + 1)
    if error.help:
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("help: ", _BOLD, color=color)
            + error.help
        )
    if error.note:
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("note: ", _BOLD, color=color)
            + error.note
        )


def format_terse(error: "SlpyError") -> str:
    """One-line `file:line:column: message` form of an error."""
    if error.location is not None and str(error.location):
        return f"{error.location}: {error.message}"
    return error.message


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """
    Collects diagnostics and formats them against the known source texts.
    """

    def __init__(self, source_files: Dict[str, str]):
        self.source_files = source_files
        self.errors: List[Error] = []

    def report_error(
        self,
        message: str,
        location: Optional[SourceLocation],
        code: Optional[str] = None,
        help: Optional[str] = None,
        note: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        self.errors.append(Error(
            message=message,
            location=location,
            code=code,
            help=help,
            note=note,
            label=label,
        ))

    def report_exception(self, exc: "SlpySourceError") -> None:
        self.report_error(
            exc.message,
            exc.location,
            code=exc.error_code,
            help=exc.help_text,
            note=exc.note_text,
            label=exc.label_text,
        )

    def format_error(self, error: Error, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, self.source_files, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        parts = [self.format_error(e, color=color) for e in self.errors]
        use_color = color if color is not None else _use_color()
        count = len(self.errors)
        summary = f"aborting due to {count} previous error{'s' if count != 1 else ''}"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def print_errors(self, stream=None) -> None:
        stream = stream if stream is not None else sys.stderr
        color = _use_color()
        for error in self.errors:
            print(self.format_error(error, color=color), file=stream)
        count = len(self.errors)
        if count:
            summary = f"aborting due to {count} previous error{'s' if count != 1 else ''}"
            msg = (
                _style("error", _BOLD, _RED, color=color)
                + _style(f": {summary}", _BOLD, color=color)
            )
            print(f"\n{msg}", file=stream)


# ============================================================================
# Exception Classes
# ============================================================================

class SlpyError(Exception):
    """Base exception for all SLPy errors"""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        return format_terse(self)


class SlpySourceError(SlpyError):
    """
    Error in SLPy source code with rich rustc-style formatting.

    Subclasses fix the category and error code; every instance is fatal
    to the phase that raised it.
    """
    category = "source"
    default_code = "E0001"

    def __init__(self,
                 message: str,
                 location: Optional[SourceLocation] = None,
                 error_code: Optional[str] = None,
                 source_code: Optional[str] = None,
                 help: Optional[str] = None,
                 note: Optional[str] = None,
                 label: Optional[str] = None):
        super().__init__(message, location)
        self.error_code = error_code or self.default_code
        self.source_code = source_code
        self.help_text = help
        self.note_text = note
        self.label_text = label

    def to_error(self) -> Error:
        return Error(
            message=self.message,
            location=self.location,
            code=self.error_code,
            help=self.help_text,
            note=self.note_text,
            label=self.label_text,
        )

    def render(self, color: Optional[bool] = None) -> str:
        """Full diagnostic, with a snippet when the source text is attached."""
        source_files: Dict[str, str] = {}
        if self.source_code is not None and self.location is not None:
            source_files[self.location.file] = self.source_code
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(self.to_error(), source_files, color=use_color)


class SlpyLexError(SlpySourceError):
    """Malformed characters or literals, unterminated constructs."""
    category = "lexical"
    default_code = "E0100"


class SlpySyntaxError(SlpySourceError):
    """Grammar mismatch, missing terminator or unconsumed trailing tokens."""
    category = "syntax"
    default_code = "E0200"

    def __init__(self, message: str, location: Optional[SourceLocation] = None,
                 expected: Optional[str] = None, found: Optional[str] = None, **kwargs):
        super().__init__(message, location, **kwargs)
        self.expected = expected
        self.found = found


class SlpyRuntimeError(SlpySourceError):
    """Fatal error raised while executing a program."""
    category = "runtime"
    default_code = "E0300"


class UnboundVariableError(SlpyRuntimeError):
    default_code = "E0301"


class DivisionByZeroError(SlpyRuntimeError):
    default_code = "E0302"


class InputError(SlpyRuntimeError):
    """Interactive input was missing or not an integer."""
    default_code = "E0303"
