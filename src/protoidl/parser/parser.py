# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for schema files.

Pulls tokens from the scanner on demand and builds the Document AST
directly. Alternatives are tried in order and the first that matches wins;
a failing alternative rewinds to where it started. When nothing matches,
the error reports the furthest token any alternative reached and every
terminal that was expected there.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, NoReturn, TypeVar

from protoidl.model.entities import (
    Document,
    EnumDef,
    EnumValue,
    FieldDef,
    FieldModifier,
    Import,
    ImportModifier,
    MessageDef,
    Option,
    PackageDecl,
    SyntaxDecl,
)
from protoidl.model.types import (
    BooleanConstant,
    Constant,
    MapTypeRef,
    NamedTypeRef,
    NumericConstant,
    PrimitiveType,
    PrimitiveTypeRef,
    StringConstant,
    TypeRef,
)
from protoidl.parser.dialect import Dialect, DialectRules, rules_for
from protoidl.parser.lexer import SourceError, Token, TokenType, iter_tokens

if TYPE_CHECKING:
    from protoidl.config import ParserConfig

# ###############
# Public Interface
# ###############


class ParseError(SourceError):
    """Raised when the token stream matches none of the grammar's alternatives.

    Attributes:
        line: 1-based line number of the furthest position reached.
        column: 1-based column number of the furthest position reached.
        expected: Descriptions of every terminal tried at that position.
        found: Description of the token actually found there.
    """

    def __init__(self, expected: tuple[str, ...], found: str, line: int, column: int) -> None:
        super().__init__(f"Expected {_describe_choices(expected)}, got {found}", line, column)
        self.expected = expected
        self.found = found


class ProtoParser:
    """Parser bound to one grammar dialect.

    Instances hold no per-parse state and may be shared between threads.
    """

    def __init__(self, dialect: Dialect = Dialect.STRICT) -> None:
        self._dialect = dialect
        self._rules = rules_for(dialect)

    @classmethod
    def from_config(cls, config: ParserConfig) -> ProtoParser:
        """Create a parser for the dialect selected in *config*."""
        return cls(config.dialect)

    @property
    def dialect(self) -> Dialect:
        """The grammar dialect this parser applies."""
        return self._dialect

    def parse(self, source: str) -> Document:
        """Parse schema source text into a Document.

        Raises:
            LexerError: If the source contains invalid characters or
                unterminated literals or comments.
            ParseError: If the source is syntactically invalid.
        """
        return _Parser(iter_tokens(source, self._dialect), self._rules).parse()


def parse(source: str, dialect: Dialect = Dialect.STRICT) -> Document:
    """Parse schema source text into a Document.

    Args:
        source: The full text of a schema file.
        dialect: The grammar dialect to apply.

    Returns:
        The immutable Document AST.

    Raises:
        LexerError: If the source contains invalid characters or unterminated
            literals or comments.
        ParseError: If the source is syntactically invalid.
    """
    return ProtoParser(dialect).parse(source)


# ################
# Implementation
# ################

_T = TypeVar("_T")

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_IMPORT_PATH_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:[./][A-Za-z_][A-Za-z0-9_]*)*")

# Keywords are reserved only where the grammar expects them; any of them may
# serve as a name.
_NAME_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.SYNTAX,
        TokenType.PACKAGE,
        TokenType.IMPORT,
        TokenType.PUBLIC,
        TokenType.OPTION,
        TokenType.MESSAGE,
        TokenType.ENUM,
        TokenType.REQUIRED,
        TokenType.OPTIONAL,
        TokenType.REPEATED,
        TokenType.MAP,
        TokenType.INT32,
        TokenType.INT64,
        TokenType.STRING_TYPE,
        TokenType.BOOLEAN,
        TokenType.TRUE,
        TokenType.FALSE,
    }
)

_PRIMITIVE_TYPES: dict[TokenType, PrimitiveType] = {
    TokenType.INT32: PrimitiveType.INT32,
    TokenType.INT64: PrimitiveType.INT64,
    TokenType.STRING_TYPE: PrimitiveType.STRING,
    TokenType.BOOLEAN: PrimitiveType.BOOLEAN,
}

_FIELD_MODIFIERS: dict[TokenType, FieldModifier] = {
    TokenType.REQUIRED: FieldModifier.REQUIRED,
    TokenType.OPTIONAL: FieldModifier.OPTIONAL,
    TokenType.REPEATED: FieldModifier.REPEATED,
}

_TOKEN_DESCRIPTIONS: dict[TokenType, str] = {
    TokenType.STRING: "string literal",
    TokenType.INTEGER: "integer",
    TokenType.IDENTIFIER: "identifier",
    TokenType.NEWLINE: "newline",
    TokenType.EOF: "end of input",
}


def _describe(token_type: TokenType) -> str:
    return _TOKEN_DESCRIPTIONS.get(token_type, repr(token_type.value))


def _describe_found(tok: Token) -> str:
    if tok.type in (TokenType.NEWLINE, TokenType.EOF):
        return _describe(tok.type)
    if tok.type == TokenType.STRING:
        return f'"{tok.value}"'
    return repr(tok.value)


def _describe_choices(expected: tuple[str, ...]) -> str:
    if len(expected) == 1:
        return expected[0]
    return "one of " + ", ".join(expected)


class _NoMatch(Exception):
    """Internal signal: the current alternative does not match."""


class _Parser:
    """Backtracking recursive-descent parser over a lazily filled token buffer."""

    def __init__(self, tokens: Iterator[Token], rules: DialectRules) -> None:
        self._source_tokens = tokens
        self._tokens: list[Token] = []
        self._pos = 0
        self._rules = rules
        self._furthest = 0
        self._expected: set[str] = set()

    def parse(self) -> Document:
        """Parse the complete input, raising ParseError on the first failure."""
        try:
            statements = self._parse_document()
        except _NoMatch:
            raise self._error() from None
        return Document(statements=tuple(statements))

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current (un-consumed) token, scanning ahead if needed."""
        while self._pos >= len(self._tokens):
            self._tokens.append(next(self._source_tokens))
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._current()
        if tok.type != TokenType.EOF:
            self._pos += 1
        return tok

    def _note(self, *expected: str) -> None:
        """Record terminals expected at the current position."""
        if self._pos > self._furthest:
            self._furthest = self._pos
            self._expected = set(expected)
        elif self._pos == self._furthest:
            self._expected.update(expected)

    def _fail(self, *expected: str) -> NoReturn:
        self._note(*expected)
        raise _NoMatch

    def _accept(self, *types: TokenType) -> Token | None:
        """Consume the current token if it matches any of *types*, else return None."""
        tok = self._current()
        if tok.type in types:
            return self._advance()
        self._note(*(_describe(t) for t in types))
        return None

    def _expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches any of *types*, else fail."""
        tok = self._accept(*types)
        if tok is None:
            raise _NoMatch
        return tok

    def _expect_name(self) -> str:
        """Consume an identifier. Keywords are accepted in name positions."""
        if self._current().type not in _NAME_TYPES:
            self._fail(_describe(TokenType.IDENTIFIER))
        return self._advance().value

    def _attempt(self, production: Callable[[], _T]) -> _T | None:
        """Run *production*; on failure rewind and return None."""
        start = self._pos
        try:
            return production()
        except _NoMatch:
            self._pos = start
            return None

    def _choice(self, *productions: Callable[[], _T]) -> _T | None:
        """Ordered choice: return the result of the first production that matches."""
        for production in productions:
            result = self._attempt(production)
            if result is not None:
                return result
        return None

    def _error(self) -> ParseError:
        tok = self._tokens[self._furthest]
        return ParseError(tuple(sorted(self._expected)), _describe_found(tok), tok.line, tok.column)

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def _parse_document(self) -> list:
        """Parse: ((top_level_statement NEWLINE?) | NEWLINE)* EOF"""
        statements: list = []
        matched_any = False
        while True:
            if self._accept(TokenType.NEWLINE):
                matched_any = True
                continue
            statement = self._choice(
                self._parse_syntax,
                self._parse_package,
                self._parse_import,
                self._parse_option_statement,
                self._parse_message,
                self._parse_enum,
            )
            if statement is None:
                break
            statements.append(statement)
            matched_any = True
        if not matched_any and not self._rules.allow_empty_document:
            raise _NoMatch
        self._expect(TokenType.EOF)
        return statements

    # ------------------------------------------------------------------
    # Top-level statements
    # ------------------------------------------------------------------

    def _parse_syntax(self) -> SyntaxDecl:
        """Parse: syntax = "<value>" ;"""
        self._expect(TokenType.SYNTAX)
        self._expect(TokenType.EQUALS)
        value_pos = self._pos
        value_tok = self._expect(TokenType.STRING)
        allowed = self._rules.syntax_values
        if allowed is None:
            if not _IDENTIFIER_RE.fullmatch(value_tok.value):
                self._pos = value_pos
                self._fail("identifier")
        elif value_tok.value not in allowed:
            self._pos = value_pos
            self._fail(*(f'"{value}"' for value in sorted(allowed)))
        self._expect(TokenType.SEMICOLON)
        return SyntaxDecl(value=value_tok.value)

    def _parse_package(self) -> PackageDecl:
        """Parse: package <dotted-path> ;"""
        self._expect(TokenType.PACKAGE)
        name = self._parse_path()
        self._expect(TokenType.SEMICOLON)
        return PackageDecl(name=name)

    def _parse_import(self) -> Import:
        """Parse: import [public] "<path>" ;"""
        self._expect(TokenType.IMPORT)
        modifier: ImportModifier | None = None
        if self._accept(TokenType.PUBLIC):
            modifier = ImportModifier.PUBLIC
            if self._rules.repeatable_import_modifier:
                while self._accept(TokenType.PUBLIC):
                    pass
        path_pos = self._pos
        path_tok = self._expect(TokenType.STRING)
        if not _IMPORT_PATH_RE.fullmatch(path_tok.value):
            self._pos = path_pos
            self._fail("import path")
        self._expect(TokenType.SEMICOLON)
        return Import(path=path_tok.value, modifier=modifier)

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def _parse_option_statement(self) -> Option:
        """Parse: option <key> = <constant> ;"""
        self._expect(TokenType.OPTION)
        option = self._parse_option_body()
        self._expect(TokenType.SEMICOLON)
        return option

    def _parse_option_body(self) -> Option:
        """Parse: (<name> | "(" <name> ")" ("." <name>)*) = <constant>"""
        field_path: str | None = None
        if self._accept(TokenType.LPAREN):
            name = self._expect_name()
            self._expect(TokenType.RPAREN)
            is_extension = True
            suffix: list[str] = []
            while self._accept(TokenType.DOT):
                suffix.append(self._expect_name())
            if suffix:
                field_path = ".".join(suffix)
        else:
            name = self._expect_name()
            is_extension = False
        self._expect(TokenType.EQUALS)
        value = self._parse_constant()
        return Option(name=name, is_extension=is_extension, field_path=field_path, value=value)

    def _parse_field_options(self, enabled: bool) -> tuple[Option, ...]:
        """Parse zero or more bracket groups, each holding exactly one option body."""
        if not enabled:
            return ()
        options: list[Option] = []
        while self._accept(TokenType.LBRACKET):
            options.append(self._parse_option_body())
            self._expect(TokenType.RBRACKET)
        return tuple(options)

    def _parse_constant(self) -> Constant:
        """Parse: <integer> | "<string>" | true | false"""
        tok = self._expect(TokenType.INTEGER, TokenType.STRING, TokenType.TRUE, TokenType.FALSE)
        if tok.type == TokenType.INTEGER:
            return NumericConstant(value=int(tok.value))
        if tok.type == TokenType.STRING:
            return StringConstant(value=tok.value)
        return BooleanConstant(value=tok.type == TokenType.TRUE)

    # ------------------------------------------------------------------
    # Enum definitions
    # ------------------------------------------------------------------

    def _parse_enum(self) -> EnumDef:
        """Parse: enum <Name> { ((option | enum_value) NEWLINE? | NEWLINE)* }"""
        self._expect(TokenType.ENUM)
        name = self._expect_name()
        self._expect(TokenType.LBRACE)
        body: list = []
        while True:
            if self._accept(TokenType.NEWLINE):
                continue
            item = self._choice(self._parse_option_statement, self._parse_enum_value)
            if item is None:
                break
            body.append(item)
        self._expect(TokenType.RBRACE)
        return EnumDef(name=name, body=tuple(body))

    def _parse_enum_value(self) -> EnumValue:
        """Parse: <NAME> = <tag> [field_option]* ;"""
        name = self._expect_name()
        self._expect(TokenType.EQUALS)
        tag = self._parse_tag()
        options = self._parse_field_options(self._rules.enum_value_options)
        self._expect(TokenType.SEMICOLON)
        return EnumValue(name=name, tag=tag, options=options)

    def _parse_tag(self) -> int:
        """Parse a tag number, canonicalized so that '007' becomes 7."""
        return int(self._expect(TokenType.INTEGER).value)

    # ------------------------------------------------------------------
    # Message definitions
    # ------------------------------------------------------------------

    def _parse_message(self) -> MessageDef:
        """Parse: message <Name> { ((option | message | enum | field) NEWLINE? | NEWLINE)* }"""
        self._expect(TokenType.MESSAGE)
        name = self._expect_name()
        self._expect(TokenType.LBRACE)
        alternatives: list[Callable[[], object]] = [self._parse_option_statement, self._parse_message]
        if self._rules.nested_enums:
            alternatives.append(self._parse_enum)
        alternatives.append(self._parse_field)
        body: list = []
        while True:
            if self._accept(TokenType.NEWLINE):
                continue
            item = self._choice(*alternatives)
            if item is None:
                break
            body.append(item)
        self._expect(TokenType.RBRACE)
        return MessageDef(name=name, body=tuple(body))

    def _parse_field(self) -> FieldDef:
        """Parse: [required|optional|repeated] <type> <name> = <tag> [field_option]* ;"""
        modifier_tok = self._accept(*_FIELD_MODIFIERS)
        modifier = _FIELD_MODIFIERS[modifier_tok.type] if modifier_tok else None
        field_type = self._parse_type_ref()
        name = self._expect_name()
        self._expect(TokenType.EQUALS)
        tag = self._parse_tag()
        options = self._parse_field_options(self._rules.field_options)
        self._expect(TokenType.SEMICOLON)
        return FieldDef(modifier=modifier, type=field_type, name=name, tag=tag, options=options)

    # ------------------------------------------------------------------
    # Type references
    # ------------------------------------------------------------------

    def _parse_type_ref(self) -> TypeRef:
        """Parse a primitive keyword, a map<K, V>, or a dotted type path, in that order."""
        primitive_tok = self._accept(*_PRIMITIVE_TYPES)
        if primitive_tok is not None:
            return PrimitiveTypeRef(primitive=_PRIMITIVE_TYPES[primitive_tok.type])
        map_ref = self._attempt(self._parse_map_type)
        if map_ref is not None:
            return map_ref
        return NamedTypeRef(name=self._parse_path())

    def _parse_map_type(self) -> MapTypeRef:
        """Parse: map < <type> , <type> >"""
        self._expect(TokenType.MAP)
        self._expect(TokenType.LANGLE)
        key_type = self._parse_type_ref()
        self._expect(TokenType.COMMA)
        value_type = self._parse_type_ref()
        self._expect(TokenType.RANGLE)
        return MapTypeRef(key_type=key_type, value_type=value_type)

    def _parse_path(self) -> str:
        """Parse: <name> ("." <name>)*"""
        parts = [self._expect_name()]
        while self._accept(TokenType.DOT):
            parts.append(self._expect_name())
        return ".".join(parts)
