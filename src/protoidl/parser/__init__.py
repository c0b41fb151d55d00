# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for schema files."""

from protoidl.parser.dialect import Dialect, DialectRules, rules_for
from protoidl.parser.lexer import LexerError, SourceError, Token, TokenType, tokenize
from protoidl.parser.parser import ParseError, ProtoParser, parse

__all__ = [
    "parse",
    "ProtoParser",
    "Dialect",
    "DialectRules",
    "rules_for",
    "tokenize",
    "Token",
    "TokenType",
    "SourceError",
    "LexerError",
    "ParseError",
]
