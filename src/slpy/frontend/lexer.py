"""
Lexer

A state-machine tokenizer for SLPy source text. `lex` consumes the text
one character at a time, building the current lexeme until it can be
issued as a Token, and appends issued tokens to a TokenStream.

Typical use:

    tokens = lex(source_text, "prog.slpy")
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, TextIO, Union

from ..shared.errors import SlpyLexError, SlpySyntaxError
from ..shared.source_location import SourceLocation
from ..utils.config import (
    TAB_STOP, STRING_QUOTE_CHAR, ESCAPE_CHAR, COMMENT_CHAR, NEWLINE_CHAR,
    INDENT_CHARS, SINGLE_CHAR_OPERATORS, RESERVED_WORDS, DEFAULT_SOURCE_NAME,
)
from .tokens import Token, TokenKind, TokenStream

logger = logging.getLogger(__name__)


class IncompleteOperatorError(SlpyLexError, SlpySyntaxError):
    """A lone `/`: caught while lexing, reported as a syntax error."""
    category = "syntax"
    default_code = "E0200"


class TokenizerState(Enum):
    LINE_START = "line_start"                  # at the start of a line, no token yet
    IN_LINE = "in_line"                        # seen at least one token on this line
    INDENT = "indent"                          # consuming leading spaces/tabs
    COMMENT_LINE_START = "comment_line_start"  # skipping a comment, then back to LINE_START
    COMMENT_IN_LINE = "comment_in_line"        # skipping a comment, then back to IN_LINE
    NUMBER = "number"                          # digits after a leading 1-9
    ZERO_LITERAL = "zero_literal"              # just consumed a leading 0
    STRING_BODY = "string_body"
    STRING_ESCAPE = "string_escape"            # after a backslash inside a string
    SLASH_SLASH = "slash_slash"                # after one `/`
    IDENTIFIER = "identifier"
    HALT = "halt"


def _is_digit(ch: Optional[str]) -> bool:
    return ch is not None and "0" <= ch <= "9"


def _is_letter(ch: Optional[str]) -> bool:
    return ch is not None and (("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_")


class Tokenizer:
    """
    Converts source text into a TokenStream in one pass, with no
    backtracking over characters.

    `curr_char` is None once the input is exhausted. Row and column
    track `curr_char` exactly: a newline starts the next row at column
    1 and a tab moves to the next multiple of 8, plus 1.
    """

    def __init__(self, source: Union[str, TextIO], source_name: str = DEFAULT_SOURCE_NAME):
        self.text = source if isinstance(source, str) else source.read()
        self.source_name = source_name
        self.pos = 0
        self.row = 1
        self.column = 1
        self.curr_char: Optional[str] = self.text[0] if self.text else None
        self.state = TokenizerState.LINE_START
        self.tokenstream = TokenStream(source_name)
        self._lexeme: List[str] = []
        self._start_row = 1
        self._start_column = 1
        self._handlers: Dict[TokenizerState, Callable[[], None]] = {
            TokenizerState.LINE_START: self._lex_line,
            TokenizerState.IN_LINE: self._lex_line,
            TokenizerState.INDENT: self._lex_indent,
            TokenizerState.COMMENT_LINE_START: self._lex_comment,
            TokenizerState.COMMENT_IN_LINE: self._lex_comment,
            TokenizerState.NUMBER: self._lex_number,
            TokenizerState.ZERO_LITERAL: self._lex_zero,
            TokenizerState.STRING_BODY: self._lex_string,
            TokenizerState.STRING_ESCAPE: self._lex_escape,
            TokenizerState.SLASH_SLASH: self._lex_slash,
            TokenizerState.IDENTIFIER: self._lex_identifier,
        }

    # ------------------------------------------------------------------
    # Character and lexeme bookkeeping
    # ------------------------------------------------------------------

    def _here(self) -> SourceLocation:
        return SourceLocation(self.source_name, self.row, self.column)

    def _token_start(self) -> SourceLocation:
        return SourceLocation(self.source_name, self._start_row, self._start_column)

    def _advance_char(self) -> None:
        if self.curr_char == "\n":
            self.row += 1
            self.column = 1
        elif self.curr_char == "\t":
            self.column += TAB_STOP - (self.column - 1) % TAB_STOP
        else:
            self.column += 1
        self.pos += 1
        self.curr_char = self.text[self.pos] if self.pos < len(self.text) else None

    def _start_fresh_token(self) -> None:
        """Mark where the next token starts and drop anything consumed so far."""
        self._start_row = self.row
        self._start_column = self.column
        self._lexeme = []

    def _consume_char(self) -> None:
        self._lexeme.append(self.curr_char)
        self._advance_char()

    def _issue_token(self, kind: TokenKind) -> None:
        text = "".join(self._lexeme)
        if kind is TokenKind.NAME and text in RESERVED_WORDS:
            kind = TokenKind.KEYWORD
        self.tokenstream.append(Token(kind, text, self._token_start()))
        self._start_fresh_token()

    def _consume_then_issue(self, kind: TokenKind) -> None:
        self._consume_char()
        self._issue_token(kind)

    def _bail(self, message: str, location: Optional[SourceLocation] = None, error=SlpyLexError,
              help: Optional[str] = None) -> None:
        raise error(message, location if location is not None else self._here(),
                    source_code=self.text, help=help)

    # ------------------------------------------------------------------
    # The state machine
    # ------------------------------------------------------------------

    def lex(self) -> TokenStream:
        """Run the state machine to completion; returns the rewound TokenStream."""
        while self.state is not TokenizerState.HALT:
            self._handlers[self.state]()
        self.tokenstream.mark_end(self._here())
        self.tokenstream.reset()
        logger.debug(f"Lexed {len(self.tokenstream)} tokens from {self.source_name}")
        return self.tokenstream

    def _lex_line(self) -> None:
        ch = self.curr_char
        at_line_start = self.state is TokenizerState.LINE_START

        if ch is None:
            self.state = TokenizerState.HALT

        elif "1" <= ch <= "9":
            self._start_fresh_token()
            self.state = TokenizerState.NUMBER

        elif ch == "0":
            self._start_fresh_token()
            self._consume_char()
            self.state = TokenizerState.ZERO_LITERAL

        elif ch == STRING_QUOTE_CHAR:
            self._start_fresh_token()
            self._consume_char()
            self.state = TokenizerState.STRING_BODY

        elif _is_letter(ch):
            self._start_fresh_token()
            self.state = TokenizerState.IDENTIFIER

        elif ch == NEWLINE_CHAR:
            if at_line_start:
                # Blank line: no token.
                self._advance_char()
            else:
                self._start_fresh_token()
                self._consume_then_issue(TokenKind.END_OF_LINE)
            self.state = TokenizerState.LINE_START

        elif ch == COMMENT_CHAR:
            self.state = (TokenizerState.COMMENT_LINE_START if at_line_start
                          else TokenizerState.COMMENT_IN_LINE)

        elif ch in INDENT_CHARS:
            if at_line_start:
                self._start_fresh_token()
                self.state = TokenizerState.INDENT
            else:
                self._advance_char()

        elif ch in SINGLE_CHAR_OPERATORS:
            self._start_fresh_token()
            self._consume_then_issue(TokenKind.OPERATOR)
            self.state = TokenizerState.IN_LINE

        elif ch == "/":
            self._start_fresh_token()
            self._consume_char()
            self.state = TokenizerState.SLASH_SLASH

        else:
            self._bail(f"Unexpected character: {ch!r}")

    def _lex_indent(self) -> None:
        ch = self.curr_char
        if ch is not None and ch in INDENT_CHARS:
            self._consume_char()
        elif ch is None or ch == COMMENT_CHAR or ch == NEWLINE_CHAR:
            # Whitespace-only or comment-only line: the indentation means nothing.
            self._start_fresh_token()
            self.state = TokenizerState.LINE_START
        else:
            self._issue_token(TokenKind.INDENT)
            self.state = TokenizerState.IN_LINE

    def _lex_comment(self) -> None:
        if self.curr_char is None or self.curr_char == NEWLINE_CHAR:
            self.state = (TokenizerState.LINE_START
                          if self.state is TokenizerState.COMMENT_LINE_START
                          else TokenizerState.IN_LINE)
        else:
            self._advance_char()

    def _lex_number(self) -> None:
        if _is_digit(self.curr_char):
            self._consume_char()
        else:
            self._issue_token(TokenKind.NUMBER)
            self.state = TokenizerState.IN_LINE

    def _lex_zero(self) -> None:
        if _is_digit(self.curr_char):
            self._bail("Non-zero integer literal starts with zero digit.",
                       help="drop the leading zeros")
        self._issue_token(TokenKind.NUMBER)
        self.state = TokenizerState.IN_LINE

    def _lex_string(self) -> None:
        ch = self.curr_char
        if ch is None:
            self._bail("Input ended within string literal.", self._token_start())
        elif ch == STRING_QUOTE_CHAR:
            self._consume_then_issue(TokenKind.STRING)
            self.state = TokenizerState.IN_LINE
        elif ch == ESCAPE_CHAR:
            self._consume_char()
            self.state = TokenizerState.STRING_ESCAPE
        elif ch == NEWLINE_CHAR:
            self._bail("Line ended within string literal.")
        elif ch == "\t":
            self._bail("Tab seen within string literal.")
        else:
            self._consume_char()

    def _lex_escape(self) -> None:
        if self.curr_char is None:
            self._bail("Input ended within string literal.", self._token_start())
        # Kept verbatim; escapes are decoded when the parser eats the string.
        self._consume_char()
        self.state = TokenizerState.STRING_BODY

    def _lex_slash(self) -> None:
        if self.curr_char == "/":
            self._consume_then_issue(TokenKind.OPERATOR)
            self.state = TokenizerState.IN_LINE
        else:
            self._bail("Expected a // operator.", self._token_start(), error=IncompleteOperatorError,
                       help="integer division is written //")

    def _lex_identifier(self) -> None:
        if _is_letter(self.curr_char) or _is_digit(self.curr_char):
            self._consume_char()
        else:
            self._issue_token(TokenKind.NAME)
            self.state = TokenizerState.IN_LINE


def lex(source: Union[str, TextIO], source_name: str = DEFAULT_SOURCE_NAME) -> TokenStream:
    """Tokenize SLPy source; raises SlpyLexError on malformed input."""
    return Tokenizer(source, source_name).lex()
