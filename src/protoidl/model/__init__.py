# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Immutable AST for schema documents (messages, enums, fields, options)."""

from protoidl.model.entities import (
    Definition,
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

__all__ = [
    # Types and constants
    "PrimitiveType",
    "PrimitiveTypeRef",
    "MapTypeRef",
    "NamedTypeRef",
    "TypeRef",
    "NumericConstant",
    "StringConstant",
    "BooleanConstant",
    "Constant",
    # Statements and definitions
    "Option",
    "FieldModifier",
    "FieldDef",
    "EnumValue",
    "EnumDef",
    "MessageDef",
    "Definition",
    "ImportModifier",
    "Import",
    "SyntaxDecl",
    "PackageDecl",
    "Document",
]
