# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""ProtoIDL: parser and AST builder for a Protocol-Buffers-style schema language."""

from protoidl.model import Document
from protoidl.parser import Dialect, LexerError, ParseError, ProtoParser, SourceError, parse

__all__ = [
    "Dialect",
    "Document",
    "LexerError",
    "ParseError",
    "ProtoParser",
    "SourceError",
    "parse",
]
