"""
Source Location

Anchors tokens, AST nodes and diagnostics to a place in a source file.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location (file, line, column).

    Lines and columns are 1-based. Columns follow tab expansion to the
    next multiple of 8, so they match what an editor shows.
    Immutable (frozen) for hashability.
    """
    file: str
    line: int
    column: int

    @property
    def is_known(self) -> bool:
        """False for the synthesized "no location" sentinel."""
        return self.line > 0 and self.column > 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        if not self.is_known:
            return self.file
        return f"{self.file}:{self.line}:{self.column}"


NO_LOCATION = SourceLocation(file="", line=0, column=0)
