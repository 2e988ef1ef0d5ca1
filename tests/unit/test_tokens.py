#!/usr/bin/env python3
"""
Tests for Token and the TokenStream cursor operations the parser relies on.
"""

import pytest

from slpy.frontend.lexer import lex
from slpy.frontend.tokens import Token, TokenKind, TokenStream, indent_width
from slpy.shared.errors import SlpySyntaxError
from slpy.shared.source_location import SourceLocation


def _loc(line: int, column: int) -> SourceLocation:
    return SourceLocation("t", line, column)


@pytest.mark.unit
class TestTokenDescribe:

    def test_plain_token(self):
        assert Token(TokenKind.NAME, "x", _loc(1, 1)).describe() == "x:1:1"

    def test_end_of_line(self):
        assert Token(TokenKind.END_OF_LINE, "\n", _loc(2, 6)).describe() == "[NEWLINE]:2:6"

    def test_indent_shows_width(self):
        assert Token(TokenKind.INDENT, "    ", _loc(1, 1)).describe() == "[INDENT-4]:1:1"
        assert Token(TokenKind.INDENT, " \t", _loc(1, 1)).describe() == "[INDENT-8]:1:1"

    def test_display_text(self):
        assert Token(TokenKind.END_OF_LINE, "\n", _loc(1, 1)).display_text() == "end-of-line"
        assert Token(TokenKind.END_OF_STREAM, "", _loc(1, 1)).display_text() == "end of input"
        assert Token(TokenKind.OPERATOR, "+", _loc(1, 1)).display_text() == "+"

    def test_indent_width(self):
        assert indent_width("") == 0
        assert indent_width("  ") == 2
        assert indent_width("\t") == 8
        assert indent_width("\t  \t") == 16


@pytest.mark.unit
class TestTokenDump:

    def test_dump_without_rules(self):
        assert lex("x = 1\n", "t").dump(include_rules=False) == "#x:1:1#=:1:3#1:1:5#[NEWLINE]:1:6#"

    def test_dump_with_rules(self):
        lines = lex("pass\n", "t").dump().split("\n")
        assert len(lines) == 3
        assert lines[0] == lines[2]
        assert set(lines[0]) == {"-"}
        assert lines[1] == "#pass:1:1#[NEWLINE]:1:5#"

    def test_dump_of_indented_line(self):
        assert lex("  x = 1\n", "t").dump(include_rules=False).startswith("#[INDENT-2]:1:1#x:1:3#")

    def test_dump_of_empty_stream(self):
        assert lex("", "t").dump(include_rules=False) == "#"


@pytest.mark.unit
class TestTokenStreamCursor:

    def test_starts_at_front(self):
        tokens = lex("x = 1\n")
        assert tokens.cursor == 0
        assert tokens.at_name()

    def test_advance_moves_one_token(self):
        tokens = lex("x = 1\n")
        tokens.advance()
        assert tokens.at("=")

    def test_advance_past_end_is_a_syntax_error(self):
        tokens = lex("pass\n")
        tokens.advance()
        tokens.advance()
        assert tokens.at_end_of_stream()
        with pytest.raises(SlpySyntaxError):
            tokens.advance()

    def test_current_at_end_is_end_of_stream_token(self):
        tokens = lex("pass\n", "t")
        tokens.advance()
        tokens.advance()
        token = tokens.current()
        assert token.kind is TokenKind.END_OF_STREAM
        assert token.location == _loc(2, 1)
        assert tokens.locate() == _loc(2, 1)

    def test_reset_rewinds(self):
        tokens = lex("x = 1\n")
        tokens.advance()
        tokens.advance()
        tokens.reset()
        assert tokens.cursor == 0
        assert tokens.current().text == "x"

    def test_empty_stream_is_at_end(self):
        tokens = TokenStream("t")
        assert tokens.at_end_of_stream()
        assert tokens.current().location == _loc(1, 1)

    def test_at_compares_raw_token_text(self):
        tokens = lex('print("print")\n')
        assert tokens.at("print")
        tokens.eat("print")
        tokens.eat("(")
        assert tokens.at_string()
        assert not tokens.at("print")
        assert tokens.at('"print"')

    def test_at_matches_names_and_numbers(self):
        tokens = lex("x = 10\n")
        assert tokens.at("x")
        tokens.advance()
        tokens.advance()
        assert tokens.at("10")
        assert not tokens.at("1")

    def test_at_never_matches_markers(self):
        tokens = lex("  x\n")
        assert not tokens.at("  ")
        tokens.advance()
        tokens.advance()
        assert not tokens.at("\n")
        tokens.advance()
        assert not tokens.at("")

    def test_category_predicates(self):
        tokens = lex('  x\n')
        assert tokens.at_indent()
        tokens.advance()
        assert tokens.at_name() and not tokens.at_keyword()
        tokens.advance()
        assert tokens.at_end_of_line()


@pytest.mark.unit
class TestTokenStreamEat:

    def test_eat_returns_token(self):
        tokens = lex("x = 1\n", "t")
        tokens.advance()
        token = tokens.eat("=")
        assert token.text == "="
        assert token.location == _loc(1, 3)

    def test_eat_mismatch_message(self):
        tokens = lex("x 1\n", "t")
        tokens.advance()
        with pytest.raises(SlpySyntaxError) as exc:
            tokens.eat("=")
        assert exc.value.message == "Syntax error: expected '=' but saw '1' instead."
        assert exc.value.location == _loc(1, 3)
        assert exc.value.expected == "="
        assert exc.value.found == "1"

    def test_eat_name(self):
        tokens = lex("abc\n")
        assert tokens.eat_name() == "abc"
        assert tokens.at_end_of_line()

    def test_eat_name_rejects_keyword(self):
        tokens = lex("pass\n")
        with pytest.raises(SlpySyntaxError) as exc:
            tokens.eat_name()
        assert "an identifier" in exc.value.message

    def test_eat_number_converts(self):
        assert lex("120\n").eat_number() == 120

    def test_eat_number_mismatch(self):
        with pytest.raises(SlpySyntaxError) as exc:
            lex("x\n").eat_number()
        assert "an integer constant" in exc.value.message

    def test_eat_string_decodes_escapes(self):
        assert lex('"a\\tb\\n\\\\\\""\n').eat_string() == 'a\tb\n\\"'

    def test_eat_string_drops_unknown_escape(self):
        assert lex('"a\\qb"\n').eat_string() == "ab"

    def test_eat_string_mismatch(self):
        with pytest.raises(SlpySyntaxError):
            lex("x\n").eat_string()

    def test_eat_end_of_line(self):
        tokens = lex("\n\nx\n")
        tokens.advance()
        tokens.eat_end_of_line()
        assert tokens.at_end_of_stream()

    def test_eat_end_of_line_mismatch_names_found_token(self):
        tokens = lex("x y\n", "t")
        tokens.advance()
        with pytest.raises(SlpySyntaxError) as exc:
            tokens.eat_end_of_line()
        assert exc.value.message == "Syntax error: expected end-of-line but saw 'y' instead."

    def test_eat_end_of_line_at_end_of_input(self):
        tokens = lex("x", "t")
        tokens.advance()
        with pytest.raises(SlpySyntaxError) as exc:
            tokens.eat_end_of_line()
        assert "end of input" in exc.value.message
        assert exc.value.location == _loc(1, 2)

    def test_eat_end_of_stream(self):
        tokens = lex("x\n")
        with pytest.raises(SlpySyntaxError):
            tokens.eat_end_of_stream()
        tokens.advance()
        tokens.advance()
        tokens.eat_end_of_stream()
