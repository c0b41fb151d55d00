# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the schema lexical scanner."""

import pytest

from protoidl.parser.dialect import Dialect
from protoidl.parser.lexer import LexerError, SourceError, Token, TokenType, iter_tokens, tokenize

# ###############
# Test Helpers
# ###############


def _tokens(source: str, dialect: Dialect = Dialect.STRICT) -> list[Token]:
    """Return all tokens including the terminal EOF."""
    return tokenize(source, dialect)


def _tokens_no_eof(source: str, dialect: Dialect = Dialect.STRICT) -> list[Token]:
    """Return all tokens except the terminal EOF token."""
    result = tokenize(source, dialect)
    assert result[-1].type == TokenType.EOF
    return result[:-1]


def _types(source: str, dialect: Dialect = Dialect.STRICT) -> list[TokenType]:
    """Return the token types for all tokens except EOF."""
    return [tok.type for tok in _tokens_no_eof(source, dialect)]


def _values(source: str, dialect: Dialect = Dialect.STRICT) -> list[str]:
    """Return the token values for all tokens except EOF."""
    return [tok.value for tok in _tokens_no_eof(source, dialect)]


# ###############
# EOF Handling
# ###############


class TestEof:
    def test_empty_string_produces_eof(self) -> None:
        tokens = _tokens("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].value == ""

    def test_eof_at_line_1_column_1_for_empty_input(self) -> None:
        tokens = _tokens("")
        assert (tokens[0].line, tokens[0].column) == (1, 1)

    def test_spaces_and_tabs_only_produce_eof(self) -> None:
        assert _types("  \t \t ") == []


# ###############
# Keywords and Identifiers
# ###############


class TestKeywords:
    @pytest.mark.parametrize(
        ("source", "expected_type"),
        [
            ("syntax", TokenType.SYNTAX),
            ("package", TokenType.PACKAGE),
            ("import", TokenType.IMPORT),
            ("public", TokenType.PUBLIC),
            ("option", TokenType.OPTION),
            ("message", TokenType.MESSAGE),
            ("enum", TokenType.ENUM),
            ("required", TokenType.REQUIRED),
            ("optional", TokenType.OPTIONAL),
            ("repeated", TokenType.REPEATED),
            ("map", TokenType.MAP),
            ("int32", TokenType.INT32),
            ("int64", TokenType.INT64),
            ("string", TokenType.STRING_TYPE),
            ("boolean", TokenType.BOOLEAN),
            ("true", TokenType.TRUE),
            ("false", TokenType.FALSE),
        ],
    )
    def test_keyword(self, source: str, expected_type: TokenType) -> None:
        tokens = _tokens_no_eof(source)
        assert len(tokens) == 1
        assert tokens[0].type == expected_type
        assert tokens[0].value == source

    def test_keywords_are_case_sensitive(self) -> None:
        assert _types("Message") == [TokenType.IDENTIFIER]

    def test_keyword_prefix_is_identifier(self) -> None:
        assert _types("int32x") == [TokenType.IDENTIFIER]
        assert _types("messages") == [TokenType.IDENTIFIER]


class TestIdentifiers:
    def test_simple_identifier(self) -> None:
        tokens = _tokens_no_eof("first_name")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "first_name"

    def test_underscore_prefix_identifier(self) -> None:
        assert _values("_private") == ["_private"]

    def test_identifier_with_digits(self) -> None:
        assert _values("field2") == ["field2"]

    def test_identifier_cannot_start_with_digit(self) -> None:
        assert _types("2field") == [TokenType.INTEGER, TokenType.IDENTIFIER]

    def test_dotted_path_is_split(self) -> None:
        assert _types("foo.bar") == [TokenType.IDENTIFIER, TokenType.DOT, TokenType.IDENTIFIER]


# ###############
# Symbols
# ###############


class TestSymbols:
    @pytest.mark.parametrize(
        ("source", "expected_type"),
        [
            ("{", TokenType.LBRACE),
            ("}", TokenType.RBRACE),
            ("[", TokenType.LBRACKET),
            ("]", TokenType.RBRACKET),
            ("(", TokenType.LPAREN),
            (")", TokenType.RPAREN),
            ("<", TokenType.LANGLE),
            (">", TokenType.RANGLE),
            ("=", TokenType.EQUALS),
            (";", TokenType.SEMICOLON),
            (",", TokenType.COMMA),
            (".", TokenType.DOT),
        ],
    )
    def test_single_char_symbol(self, source: str, expected_type: TokenType) -> None:
        tokens = _tokens_no_eof(source)
        assert len(tokens) == 1
        assert tokens[0].type == expected_type
        assert tokens[0].value == source

    def test_map_type(self) -> None:
        assert _types("map<int32,string>") == [
            TokenType.MAP,
            TokenType.LANGLE,
            TokenType.INT32,
            TokenType.COMMA,
            TokenType.STRING_TYPE,
            TokenType.RANGLE,
        ]

    @pytest.mark.parametrize("source", ["-", "+", "@", "/", "*", "#", "'"])
    def test_illegal_character_raises(self, source: str) -> None:
        with pytest.raises(LexerError, match="Unexpected character"):
            tokenize(source)

    def test_negative_number_is_illegal(self) -> None:
        with pytest.raises(LexerError):
            tokenize("x = -1;")


# ###############
# Literals
# ###############


class TestIntegers:
    def test_integer(self) -> None:
        tokens = _tokens_no_eof("42")
        assert tokens[0].type == TokenType.INTEGER
        assert tokens[0].value == "42"

    def test_leading_zeros_preserved_in_token(self) -> None:
        assert _values("007") == ["007"]

    def test_decimal_point_is_separate_token(self) -> None:
        assert _types("1.5") == [TokenType.INTEGER, TokenType.DOT, TokenType.INTEGER]


class TestStrings:
    def test_simple_string(self) -> None:
        tokens = _tokens_no_eof('"proto3"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "proto3"

    def test_empty_string(self) -> None:
        assert _values('""') == [""]

    def test_string_with_spaces_and_slashes(self) -> None:
        assert _values('"hello // world"') == ["hello // world"]

    def test_backslash_is_kept_verbatim(self) -> None:
        assert _values(r'"a\nb"') == [r"a\nb"]

    def test_backslash_does_not_escape_quote(self) -> None:
        assert _types(r'"a\" b') == [TokenType.STRING, TokenType.IDENTIFIER]

    def test_unterminated_string_raises(self) -> None:
        with pytest.raises(LexerError, match="Unterminated string literal"):
            tokenize('"abc')

    def test_string_cannot_span_lines(self) -> None:
        with pytest.raises(LexerError, match="Unterminated string literal"):
            tokenize('"abc\ndef"')

    def test_string_token_position_is_opening_quote(self) -> None:
        tokens = _tokens_no_eof('x = "v"')
        assert tokens[2].column == 5


# ###############
# Newlines
# ###############


class TestNewlines:
    def test_newline_is_a_token(self) -> None:
        assert _types("a\nb") == [TokenType.IDENTIFIER, TokenType.NEWLINE, TokenType.IDENTIFIER]

    def test_crlf_is_single_newline(self) -> None:
        assert _types("a\r\nb") == [TokenType.IDENTIFIER, TokenType.NEWLINE, TokenType.IDENTIFIER]

    def test_lone_carriage_return_is_newline(self) -> None:
        assert _types("a\rb") == [TokenType.IDENTIFIER, TokenType.NEWLINE, TokenType.IDENTIFIER]

    def test_each_line_break_is_a_token(self) -> None:
        assert _types("\n\n\n") == [TokenType.NEWLINE] * 3

    def test_line_and_column_tracking(self) -> None:
        tokens = _tokens_no_eof("message A {\n  int32 x = 1;\n}")
        int_tok = next(t for t in tokens if t.type == TokenType.INT32)
        assert (int_tok.line, int_tok.column) == (2, 3)
        rbrace = tokens[-1]
        assert (rbrace.line, rbrace.column) == (3, 1)

    def test_tab_counts_as_one_column(self) -> None:
        tokens = _tokens_no_eof("\tfoo")
        assert tokens[0].column == 2


# ###############
# Comments
# ###############


class TestCommentsStrict:
    def test_comment_keeps_newline_token(self) -> None:
        assert _types("a // note\nb", Dialect.STRICT) == [
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
            TokenType.IDENTIFIER,
        ]

    def test_comment_at_eof_without_newline_raises(self) -> None:
        with pytest.raises(LexerError, match="Unterminated comment") as exc_info:
            tokenize("a // note", Dialect.STRICT)
        assert (exc_info.value.line, exc_info.value.column) == (1, 3)

    def test_comment_only_line(self) -> None:
        assert _types("// just a comment\n", Dialect.STRICT) == [TokenType.NEWLINE]


class TestCommentsLegacy:
    def test_comment_swallows_newline(self) -> None:
        assert _types("a // note\nb", Dialect.LEGACY) == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_comment_at_eof_without_newline_is_allowed(self) -> None:
        assert _types("a // note", Dialect.LEGACY) == [TokenType.IDENTIFIER]

    def test_comment_swallows_crlf(self) -> None:
        assert _types("a // note\r\nb", Dialect.LEGACY) == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_following_lines_keep_their_numbers(self) -> None:
        tokens = _tokens_no_eof("// one\n// two\nfoo", Dialect.LEGACY)
        assert tokens[0].line == 3


class TestCommentsBothDialects:
    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_single_slash_is_illegal(self, dialect: Dialect) -> None:
        with pytest.raises(LexerError):
            tokenize("a / b\n", dialect)

    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_comment_content_is_ignored(self, dialect: Dialect) -> None:
        assert _types('x // "unterminated @ #\n', dialect)[0] == TokenType.IDENTIFIER


# ###############
# Laziness and Error Types
# ###############


class TestLaziness:
    def test_tokens_before_error_are_yielded(self) -> None:
        stream = iter_tokens("foo @")
        first = next(stream)
        assert first.value == "foo"
        with pytest.raises(LexerError):
            next(stream)

    def test_lexer_error_is_source_error(self) -> None:
        with pytest.raises(SourceError) as exc_info:
            tokenize("\n  $")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 3
        assert str(exc_info.value).startswith("Line 2, column 3:")
