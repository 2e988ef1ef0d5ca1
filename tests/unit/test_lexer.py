#!/usr/bin/env python3
"""
Tests for the state-machine tokenizer: token categories, exact
row/column tracking, indentation, comments and every lexical failure.
"""

import pytest

from slpy.frontend.lexer import lex, Tokenizer, IncompleteOperatorError
from slpy.frontend.tokens import TokenKind
from slpy.shared.errors import SlpyLexError, SlpySyntaxError
from slpy.shared.source_location import SourceLocation


def _kinds_and_texts(source: str):
    return [(t.kind, t.text) for t in lex(source, "t.slpy")]


def _positions(source: str):
    return [(t.text, t.location.line, t.location.column) for t in lex(source, "t.slpy")]


@pytest.mark.unit
class TestTokenCategories:

    def test_assignment_line(self):
        assert _kinds_and_texts("x = 3\n") == [
            (TokenKind.NAME, "x"),
            (TokenKind.OPERATOR, "="),
            (TokenKind.NUMBER, "3"),
            (TokenKind.END_OF_LINE, "\n"),
        ]

    def test_reserved_words_are_keywords(self):
        kinds = _kinds_and_texts("print pass input int printer _int\n")
        assert kinds[:4] == [
            (TokenKind.KEYWORD, "print"),
            (TokenKind.KEYWORD, "pass"),
            (TokenKind.KEYWORD, "input"),
            (TokenKind.KEYWORD, "int"),
        ]
        assert kinds[4] == (TokenKind.NAME, "printer")
        assert kinds[5] == (TokenKind.NAME, "_int")

    def test_identifiers_with_digits_and_underscores(self):
        assert _kinds_and_texts("_a1 = B_2\n")[0] == (TokenKind.NAME, "_a1")
        assert _kinds_and_texts("_a1 = B_2\n")[2] == (TokenKind.NAME, "B_2")

    def test_operators(self):
        texts = [text for kind, text in _kinds_and_texts("( ) = + - * //\n") if kind is TokenKind.OPERATOR]
        assert texts == ["(", ")", "=", "+", "-", "*", "//"]

    def test_operators_without_spaces(self):
        assert [text for _, text in _kinds_and_texts("x=1+2*3//4\n")] == \
            ["x", "=", "1", "+", "2", "*", "3", "//", "4", "\n"]

    def test_zero_is_a_single_number_token(self):
        assert _kinds_and_texts("0") == [(TokenKind.NUMBER, "0")]
        assert _kinds_and_texts("x = 0\n")[2] == (TokenKind.NUMBER, "0")

    def test_zero_followed_by_name_splits(self):
        assert _kinds_and_texts("0x\n")[:2] == [(TokenKind.NUMBER, "0"), (TokenKind.NAME, "x")]

    def test_multi_digit_number(self):
        assert _kinds_and_texts("1234567890\n")[0] == (TokenKind.NUMBER, "1234567890")

    def test_string_literal_keeps_quotes_and_raw_escapes(self):
        tokens = list(lex('input("a\\n\\"b")\n'))
        assert tokens[2].kind is TokenKind.STRING
        assert tokens[2].text == '"a\\n\\"b"'

    def test_no_token_is_empty(self):
        source = "  x = 1 # note\n\n\tprint(input(\"\"))\npass\n"
        assert all(t.text for t in lex(source))


@pytest.mark.unit
class TestLocations:

    def test_rows_and_columns(self):
        assert _positions("x = 3\ny = 4\n") == [
            ("x", 1, 1), ("=", 1, 3), ("3", 1, 5), ("\n", 1, 6),
            ("y", 2, 1), ("=", 2, 3), ("4", 2, 5), ("\n", 2, 6),
        ]

    def test_tab_indentation_advances_to_next_tab_stop(self):
        positions = _positions("\tx = 1\n")
        assert positions[0] == ("\t", 1, 1)
        assert positions[1] == ("x", 1, 9)

    def test_tab_after_spaces(self):
        positions = _positions("  \tx = 1\n")
        assert positions[1] == ("x", 1, 9)

    def test_mid_line_tab(self):
        positions = _positions("x\t= 1\n")
        assert positions[1] == ("=", 1, 9)

    def test_blank_lines_only_move_rows(self):
        assert _positions("\n\nx = 1\n")[0] == ("x", 3, 1)

    def test_location_carries_source_name(self):
        token = next(iter(lex("x = 1\n", "prog.slpy")))
        assert token.location == SourceLocation("prog.slpy", 1, 1)

    def test_end_location_is_just_past_input(self):
        assert lex("x = 1\n", "t").end_location == SourceLocation("t", 2, 1)
        assert lex("x = 1", "t").end_location == SourceLocation("t", 1, 6)


@pytest.mark.unit
class TestLinesCommentsIndentation:

    def test_blank_lines_produce_no_tokens(self):
        assert _kinds_and_texts("\n\n\n") == []

    def test_comment_line_produces_no_tokens(self):
        assert _kinds_and_texts("# just a comment\n") == []

    def test_trailing_comment_keeps_end_of_line(self):
        tokens = list(lex("x = 1 # hi\n"))
        assert [t.kind for t in tokens][-1] is TokenKind.END_OF_LINE
        assert tokens[-1].location.column == 11

    def test_comment_at_end_of_input(self):
        assert _kinds_and_texts("x = 1 # no newline")[-1] == (TokenKind.NUMBER, "1")

    def test_indentation_issues_indent_token(self):
        tokens = list(lex("    x = 1\n"))
        assert tokens[0].kind is TokenKind.INDENT
        assert tokens[0].text == "    "

    def test_whitespace_only_line_is_discarded(self):
        assert _kinds_and_texts("   \n\t\n") == []

    def test_indented_comment_is_discarded(self):
        assert _kinds_and_texts("   # c\n") == []

    def test_line_of_only_operators_ends_with_end_of_line(self):
        assert _kinds_and_texts("(\n")[-1] == (TokenKind.END_OF_LINE, "\n")

    def test_missing_final_newline_issues_no_end_of_line(self):
        kinds = [t.kind for t in lex("print(1)")]
        assert TokenKind.END_OF_LINE not in kinds

    def test_empty_source(self):
        tokens = lex("")
        assert len(tokens) == 0
        assert tokens.at_end_of_stream()


@pytest.mark.unit
class TestLexicalErrors:

    def test_leading_zero(self):
        with pytest.raises(SlpyLexError) as exc:
            lex("x = 00\n", "t")
        assert exc.value.location == SourceLocation("t", 1, 6)
        assert "zero" in exc.value.message

    def test_leading_zero_multi_digit(self):
        with pytest.raises(SlpyLexError):
            lex("x = 0123\n")

    def test_unexpected_character(self):
        with pytest.raises(SlpyLexError) as exc:
            lex("x = 1 % 2\n", "t")
        assert exc.value.location == SourceLocation("t", 1, 7)
        assert "'%'" in exc.value.message

    def test_carriage_return_is_unexpected(self):
        with pytest.raises(SlpyLexError):
            lex("x = 1\r\n")

    def test_single_slash(self):
        with pytest.raises(SlpyLexError) as exc:
            lex("x = 1 / 2\n", "t")
        assert exc.value.location == SourceLocation("t", 1, 7)

    def test_single_slash_is_also_a_syntax_error(self):
        with pytest.raises(SlpySyntaxError) as exc:
            lex("x = 1 /\n")
        assert isinstance(exc.value, IncompleteOperatorError)

    def test_single_slash_diagnostic_has_hint(self):
        with pytest.raises(IncompleteOperatorError) as exc:
            lex("x = 1 / 2\n", "t")
        assert exc.value.help_text == "integer division is written //"
        rendered = exc.value.render(color=False)
        assert rendered.startswith("error[E0200]")
        assert "= help: integer division is written //" in rendered

    def test_leading_zero_diagnostic_has_hint(self):
        with pytest.raises(SlpyLexError) as exc:
            lex("x = 007\n", "t")
        assert "= help: drop the leading zeros" in exc.value.render(color=False)

    def test_slash_at_end_of_input(self):
        with pytest.raises(IncompleteOperatorError):
            lex("x = 1 /")

    def test_newline_inside_string(self):
        with pytest.raises(SlpyLexError) as exc:
            lex('x = "ab\n"\n', "t")
        assert exc.value.location == SourceLocation("t", 1, 8)
        assert "Line ended" in exc.value.message

    def test_tab_inside_string(self):
        with pytest.raises(SlpyLexError) as exc:
            lex('x = input("a\tb")\n')
        assert "Tab" in exc.value.message

    def test_unterminated_string_points_at_opening_quote(self):
        with pytest.raises(SlpyLexError) as exc:
            lex('print(input("abc', "t")
        assert exc.value.location == SourceLocation("t", 1, 13)

    def test_end_of_input_after_escape(self):
        with pytest.raises(SlpyLexError):
            lex('x = input("abc\\')

    def test_error_location_within_input(self):
        source = 'y = 1\nx = "never closed'
        with pytest.raises(SlpyLexError) as exc:
            lex(source)
        loc = exc.value.location
        lines = source.split("\n")
        assert 1 <= loc.line <= len(lines)
        assert 1 <= loc.column <= len(lines[loc.line - 1])

    def test_error_carries_source_text(self):
        with pytest.raises(SlpyLexError) as exc:
            lex("x = 1 $\n")
        assert exc.value.source_code == "x = 1 $\n"


@pytest.mark.unit
class TestTokenizerInput:

    def test_reads_from_text_stream(self):
        import io
        tokens = Tokenizer(io.StringIO("x = 1\n"), "s").lex()
        assert [t.text for t in tokens] == ["x", "=", "1", "\n"]

    def test_deterministic(self):
        source = "x = 1\n  y = x * (2 // 3)\nprint(input(\"n\\t\"))\n"
        assert _positions(source) == _positions(source)
