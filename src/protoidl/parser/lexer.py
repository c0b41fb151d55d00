# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for schema files.

Converts raw source text into tokens for the parser. Spaces, tabs and
``//`` comments are skipped; line breaks are significant and produced as
NEWLINE tokens.
"""

import enum
from collections.abc import Iterator
from dataclasses import dataclass

from protoidl.parser.dialect import Dialect, DialectRules, rules_for

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the lexer."""

    # Statement keywords
    SYNTAX = "syntax"
    PACKAGE = "package"
    IMPORT = "import"
    PUBLIC = "public"
    OPTION = "option"
    MESSAGE = "message"
    ENUM = "enum"

    # Field modifiers
    REQUIRED = "required"
    OPTIONAL = "optional"
    REPEATED = "repeated"

    # Type keywords
    MAP = "map"
    INT32 = "int32"
    INT64 = "int64"
    STRING_TYPE = "string"
    BOOLEAN = "boolean"

    # Boolean literals
    TRUE = "true"
    FALSE = "false"

    # Symbols
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    LPAREN = "("
    RPAREN = ")"
    LANGLE = "<"
    RANGLE = ">"
    EQUALS = "="
    SEMICOLON = ";"
    COMMA = ","
    DOT = "."

    # Literals
    STRING = "STRING"
    INTEGER = "INTEGER"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # Layout
    NEWLINE = "NEWLINE"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token. For STRING tokens, the text between
            the quotes.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


class SourceError(Exception):
    """Base class for errors tied to a position in the source text.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


class LexerError(SourceError):
    """Raised on an illegal character or an unterminated string or comment."""


def tokenize(source: str, dialect: Dialect = Dialect.STRICT) -> list[Token]:
    """Tokenize schema source text.

    Args:
        source: The full text of a schema file.
        dialect: Grammar dialect; decides how comments treat line ends.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On unexpected characters, unterminated string literals,
            or (STRICT dialect) a comment not terminated by a newline.
    """
    return list(iter_tokens(source, dialect))


def iter_tokens(source: str, dialect: Dialect = Dialect.STRICT) -> Iterator[Token]:
    """Yield tokens one at a time; errors surface when the bad text is reached."""
    return _Lexer(source, rules_for(dialect)).tokens()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "syntax": TokenType.SYNTAX,
    "package": TokenType.PACKAGE,
    "import": TokenType.IMPORT,
    "public": TokenType.PUBLIC,
    "option": TokenType.OPTION,
    "message": TokenType.MESSAGE,
    "enum": TokenType.ENUM,
    "required": TokenType.REQUIRED,
    "optional": TokenType.OPTIONAL,
    "repeated": TokenType.REPEATED,
    "map": TokenType.MAP,
    "int32": TokenType.INT32,
    "int64": TokenType.INT64,
    "string": TokenType.STRING_TYPE,
    "boolean": TokenType.BOOLEAN,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    "=": TokenType.EQUALS,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
}

_LINE_BREAKS = "\r\n"


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str, rules: DialectRules) -> None:
        self._source = source
        self._rules = rules
        self._pos = 0
        self._line = 1
        self._column = 1

    def tokens(self) -> Iterator[Token]:
        """Run the scanner, yielding every token including the terminal EOF."""
        while True:
            self._skip_blanks_and_comments()
            if self._pos >= len(self._source):
                break
            yield self._scan_token()
        yield Token(TokenType.EOF, "", self._line, self._column)

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        """Return the character one position ahead, or '' at end of input."""
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        """Consume one character that is not a line break."""
        ch = self._source[self._pos]
        self._pos += 1
        self._column += 1
        return ch

    def _consume_line_break(self) -> None:
        """Consume '\\n', '\\r\\n' or a lone '\\r' as a single line break."""
        if self._current() == "\r" and self._peek() == "\n":
            self._pos += 1
        self._pos += 1
        self._line += 1
        self._column = 1

    # ------------------------------------------------------------------
    # Blank and comment skipping
    # ------------------------------------------------------------------

    def _skip_blanks_and_comments(self) -> None:
        """Skip spaces, tabs and comments. Line breaks are left in place."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch in " \t":
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line_comment()
            else:
                break

    def _skip_line_comment(self) -> None:
        """Consume a '//' comment according to the dialect's line-end rule."""
        start_line = self._line
        start_col = self._column
        while self._pos < len(self._source) and self._current() not in _LINE_BREAKS:
            self._advance()
        if self._pos >= len(self._source):
            if not self._rules.comment_consumes_newline:
                raise LexerError("Unterminated comment (missing newline)", start_line, start_col)
            return
        if self._rules.comment_consumes_newline:
            self._consume_line_break()

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> Token:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column

        if ch in _LINE_BREAKS:
            self._consume_line_break()
            return Token(TokenType.NEWLINE, "\n", line, col)
        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(_SINGLE_CHAR_TOKENS[ch], ch, line, col)
        if ch == '"':
            return self._scan_string(line, col)
        if _is_digit(ch):
            return self._scan_integer(line, col)
        if _is_ident_start(ch):
            return self._scan_identifier_or_keyword(line, col)
        raise LexerError(f"Unexpected character: {ch!r}", line, col)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, line: int, col: int) -> Token:
        """Scan a double-quoted string. Backslashes have no special meaning."""
        self._advance()  # opening "
        start = self._pos
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                value = self._source[start : self._pos]
                self._advance()  # closing "
                return Token(TokenType.STRING, value, line, col)
            if ch in _LINE_BREAKS:
                break
            self._advance()
        raise LexerError("Unterminated string literal", line, col)

    def _scan_integer(self, line: int, col: int) -> Token:
        """Scan a run of ASCII digits. Signs, points and exponents are not part of it."""
        start = self._pos
        while self._pos < len(self._source) and _is_digit(self._current()):
            self._advance()
        return Token(TokenType.INTEGER, self._source[start : self._pos], line, col)

    def _scan_identifier_or_keyword(self, line: int, col: int) -> Token:
        """Scan an identifier and map it to a keyword token type if applicable."""
        start = self._pos
        while self._pos < len(self._source) and (
            _is_ident_start(self._current()) or _is_digit(self._current())
        ):
            self._advance()
        value = self._source[start : self._pos]
        return Token(_KEYWORDS.get(value, TokenType.IDENTIFIER), value, line, col)
