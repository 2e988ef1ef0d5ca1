"""
Tokens and the TokenStream consumed by the parser.

Each token's category is decided once, when the tokenizer issues it.
The stream is append-only while lexing, then rewound once and consumed
left to right by the parser through the at_*/eat_* operations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from ..shared.errors import SlpySyntaxError
from ..shared.source_location import SourceLocation
from ..utils.config import TAB_STOP, TOKEN_DUMP_RULE
from ..utils.escapes import de_escape


class TokenKind(Enum):
    NAME = "name"
    KEYWORD = "keyword"
    NUMBER = "number"
    STRING = "string"
    OPERATOR = "operator"
    END_OF_LINE = "end_of_line"
    INDENT = "indent"
    END_OF_STREAM = "end_of_stream"


_MARKER_KINDS = (TokenKind.END_OF_LINE, TokenKind.INDENT, TokenKind.END_OF_STREAM)


@dataclass(frozen=True)
class Token:
    """A lexeme plus the location of its first character."""
    kind: TokenKind
    text: str
    location: SourceLocation

    def describe(self) -> str:
        """Debug form used by the token dump, e.g. `x:1:1` or `[NEWLINE]:1:6`."""
        if self.kind is TokenKind.END_OF_LINE:
            shown = "[NEWLINE]"
        elif self.kind is TokenKind.END_OF_STREAM:
            shown = "[EOF]"
        elif self.kind is TokenKind.INDENT:
            shown = f"[INDENT-{indent_width(self.text)}]"
        else:
            shown = self.text
        return f"{shown}:{self.location.line}:{self.location.column}"

    def display_text(self) -> str:
        """How the token is quoted in syntax error messages."""
        if self.kind is TokenKind.END_OF_LINE:
            return "end-of-line"
        if self.kind is TokenKind.END_OF_STREAM:
            return "end of input"
        if self.kind is TokenKind.INDENT:
            return "indentation"
        return self.text


def indent_width(whitespace: str) -> int:
    """Width of leading whitespace with tabs expanded to the next tab stop."""
    width = 0
    for ch in whitespace:
        if ch == "\t":
            width += TAB_STOP - (width % TAB_STOP)
        else:
            width += 1
    return width


class TokenStream:
    """
    Indexed, rewindable sequence of tokens with a cursor.

    Invariant: 0 <= cursor <= len(tokens); cursor == len(tokens) is
    end-of-stream. At end-of-stream `current()` yields a synthesized
    END_OF_STREAM token (never stored) located just past the input.
    """

    def __init__(self, source_name: str):
        self.source_name = source_name
        self.tokens: List[Token] = []
        self.cursor = 0
        self.end_location = SourceLocation(source_name, 1, 1)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    # -- building ---------------------------------------------------------

    def append(self, token: Token) -> None:
        self.tokens.append(token)

    def mark_end(self, location: SourceLocation) -> None:
        self.end_location = location

    def reset(self) -> None:
        """Put the cursor back at the front for parsing."""
        self.cursor = 0

    # -- reading ----------------------------------------------------------

    def current(self) -> Token:
        if self.cursor < len(self.tokens):
            return self.tokens[self.cursor]
        return Token(TokenKind.END_OF_STREAM, "", self.end_location)

    def locate(self) -> SourceLocation:
        return self.current().location

    def advance(self) -> None:
        if self.cursor >= len(self.tokens):
            raise SlpySyntaxError(
                "Syntax error: unexpected end of input.",
                self.end_location,
                found="end of input",
            )
        self.cursor += 1

    def at(self, text: str) -> bool:
        """True if the current token's text is `text`; markers (end-of-line, indentation, end) never match."""
        token = self.current()
        return token.kind not in _MARKER_KINDS and token.text == text

    def at_name(self) -> bool:
        return self.current().kind is TokenKind.NAME

    def at_keyword(self) -> bool:
        return self.current().kind is TokenKind.KEYWORD

    def at_number(self) -> bool:
        return self.current().kind is TokenKind.NUMBER

    def at_string(self) -> bool:
        return self.current().kind is TokenKind.STRING

    def at_indent(self) -> bool:
        return self.current().kind is TokenKind.INDENT

    def at_end_of_line(self) -> bool:
        return self.current().kind is TokenKind.END_OF_LINE

    def at_end_of_stream(self) -> bool:
        return self.cursor >= len(self.tokens)

    # -- consuming --------------------------------------------------------

    def _mismatch(self, expected: str, quoted: bool = True) -> SlpySyntaxError:
        found = self.current().display_text()
        shown = f"'{expected}'" if quoted else expected
        return SlpySyntaxError(
            f"Syntax error: expected {shown} but saw '{found}' instead.",
            self.locate(),
            expected=expected,
            found=found,
            label=f"expected {shown}",
        )

    def eat(self, text: str) -> Token:
        if not self.at(text):
            raise self._mismatch(text)
        token = self.current()
        self.advance()
        return token

    def eat_name(self) -> str:
        if not self.at_name():
            raise self._mismatch("an identifier", quoted=False)
        name = self.current().text
        self.advance()
        return name

    def eat_number(self) -> int:
        if not self.at_number():
            raise self._mismatch("an integer constant", quoted=False)
        value = int(self.current().text)
        self.advance()
        return value

    def eat_string(self) -> str:
        """Consume a string literal; returns its decoded value without quotes."""
        if not self.at_string():
            raise self._mismatch("a string literal", quoted=False)
        raw = self.current().text
        self.advance()
        return de_escape(raw[1:-1])

    def eat_end_of_line(self) -> None:
        if not self.at_end_of_line():
            raise self._mismatch("end-of-line", quoted=False)
        self.advance()

    def eat_end_of_stream(self) -> None:
        if not self.at_end_of_stream():
            found = self.current().display_text()
            raise SlpySyntaxError(
                f"Syntax error: unexpected '{found}' after the end of the program.",
                self.locate(),
                expected="end of input",
                found=found,
            )

    # -- debugging --------------------------------------------------------

    def dump(self, include_rules: bool = True) -> str:
        """The token dump: `#tok:r:c#tok:r:c#...#`, framed by rule lines."""
        body = "#" + "".join(f"{token.describe()}#" for token in self.tokens)
        if not include_rules:
            return body
        return f"{TOKEN_DUMP_RULE}\n{body}\n{TOKEN_DUMP_RULE}"
