# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Grammar dialects and the divergence points between them."""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class Dialect(enum.Enum):
    """The grammar variants understood by the parser."""

    LEGACY = "legacy"
    STRICT = "strict"


@dataclass(frozen=True)
class DialectRules:
    """Every point at which the two grammars diverge.

    Attributes:
        syntax_values: Literal values accepted by ``syntax = "..."``, or None
            when any identifier is accepted.
        allow_empty_document: Whether a document may contain no statements
            and no newlines at all.
        comment_consumes_newline: Whether a ``//`` comment swallows its
            terminating newline. When False the newline stays significant
            and must be present, so a comment cannot end the file.
        repeatable_import_modifier: Whether ``public`` may appear more than
            once in an import statement.
        nested_enums: Whether enum definitions may appear in message bodies.
        field_options: Whether fields may carry bracketed options.
        enum_value_options: Whether enum values may carry bracketed options.
    """

    syntax_values: frozenset[str] | None
    allow_empty_document: bool
    comment_consumes_newline: bool
    repeatable_import_modifier: bool
    nested_enums: bool
    field_options: bool
    enum_value_options: bool


def rules_for(dialect: Dialect) -> DialectRules:
    """Return the divergence rules for *dialect*."""
    return _RULES[dialect]


# ################
# Implementation
# ################

_RULES: dict[Dialect, DialectRules] = {
    Dialect.LEGACY: DialectRules(
        syntax_values=None,
        allow_empty_document=True,
        comment_consumes_newline=True,
        repeatable_import_modifier=False,
        nested_enums=True,
        field_options=True,
        enum_value_options=True,
    ),
    Dialect.STRICT: DialectRules(
        syntax_values=frozenset({"proto2", "proto3"}),
        allow_empty_document=False,
        comment_consumes_newline=False,
        repeatable_import_modifier=True,
        nested_enums=False,
        field_options=False,
        enum_value_options=False,
    ),
}
