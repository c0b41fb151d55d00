# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Statements and definitions of the schema AST.

Every body (document, message, enum) is a single ordered sequence of
heterogeneous items so that declaration order survives parsing. The
per-kind accessors are views over that sequence.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import Field as _Field

from protoidl.model.types import Constant, FrozenModel, TypeRef

# ###############
# Public Interface
# ###############


class Option(FrozenModel):
    """A ``key = constant`` option, standalone or in brackets.

    Attributes:
        name: The bare identifier, or the identifier inside parentheses for
            extension options.
        is_extension: True for the parenthesized ``(name)`` form.
        field_path: The ``.``-joined identifiers following an extension
            name, e.g. ``"a.b"`` for ``(name).a.b``.
        value: The assigned constant.
    """

    kind: Literal["option"] = "option"
    name: str
    is_extension: bool = False
    field_path: str | None = None
    value: Constant

    @property
    def key(self) -> str:
        """The option key as written in source."""
        if not self.is_extension:
            return self.name
        if self.field_path is None:
            return f"({self.name})"
        return f"({self.name}).{self.field_path}"


class FieldModifier(Enum):
    """Cardinality label preceding a field type."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    REPEATED = "repeated"


class FieldDef(FrozenModel):
    """A message field: ``[modifier] type name = tag [options];``."""

    kind: Literal["field"] = "field"
    modifier: FieldModifier | None = None
    type: TypeRef
    name: str
    tag: int
    options: tuple[Option, ...] = ()


class EnumValue(FrozenModel):
    """A named enum constant: ``NAME = tag [options];``."""

    kind: Literal["enum_value"] = "enum_value"
    name: str
    tag: int
    options: tuple[Option, ...] = ()


EnumItem = Annotated[Option | EnumValue, _Field(discriminator="kind")]


class EnumDef(FrozenModel):
    """An enumeration definition."""

    kind: Literal["enum"] = "enum"
    name: str
    body: tuple[EnumItem, ...] = ()

    @property
    def options(self) -> list[Option]:
        return [item for item in self.body if isinstance(item, Option)]

    @property
    def values(self) -> list[EnumValue]:
        return [item for item in self.body if isinstance(item, EnumValue)]


class MessageDef(FrozenModel):
    """A message definition. Nested definitions are owned by their parent."""

    kind: Literal["message"] = "message"
    name: str
    body: tuple[MessageItem, ...] = ()

    @property
    def options(self) -> list[Option]:
        return [item for item in self.body if isinstance(item, Option)]

    @property
    def fields(self) -> list[FieldDef]:
        return [item for item in self.body if isinstance(item, FieldDef)]

    @property
    def definitions(self) -> list[Definition]:
        """Nested messages and enums in declaration order."""
        return [item for item in self.body if isinstance(item, MessageDef | EnumDef)]

    @property
    def messages(self) -> list[MessageDef]:
        return [item for item in self.body if isinstance(item, MessageDef)]

    @property
    def enums(self) -> list[EnumDef]:
        return [item for item in self.body if isinstance(item, EnumDef)]


MessageItem = Annotated[
    Option | MessageDef | EnumDef | FieldDef,
    _Field(discriminator="kind"),
]

Definition = MessageDef | EnumDef


class ImportModifier(Enum):
    """Visibility label between ``import`` and the path."""

    PUBLIC = "public"


class Import(FrozenModel):
    """An ``import [public] "path";`` statement. Duplicates are kept."""

    kind: Literal["import"] = "import"
    path: str
    modifier: ImportModifier | None = None


class SyntaxDecl(FrozenModel):
    """A ``syntax = "value";`` statement."""

    kind: Literal["syntax"] = "syntax"
    value: str


class PackageDecl(FrozenModel):
    """A ``package dotted.name;`` statement."""

    kind: Literal["package"] = "package"
    name: str


Statement = Annotated[
    SyntaxDecl | PackageDecl | Import | Option | MessageDef | EnumDef,
    _Field(discriminator="kind"),
]


class Document(FrozenModel):
    """Root of a parsed schema file."""

    kind: Literal["document"] = "document"
    statements: tuple[Statement, ...] = ()

    @property
    def syntax(self) -> str | None:
        """Value of the last ``syntax`` statement, if any."""
        value = None
        for statement in self.statements:
            if isinstance(statement, SyntaxDecl):
                value = statement.value
        return value

    @property
    def package(self) -> str | None:
        """Name from the last ``package`` statement, if any."""
        name = None
        for statement in self.statements:
            if isinstance(statement, PackageDecl):
                name = statement.name
        return name

    @property
    def imports(self) -> list[Import]:
        return [s for s in self.statements if isinstance(s, Import)]

    @property
    def options(self) -> list[Option]:
        return [s for s in self.statements if isinstance(s, Option)]

    @property
    def definitions(self) -> list[Definition]:
        """Top-level messages and enums in declaration order."""
        return [s for s in self.statements if isinstance(s, MessageDef | EnumDef)]


# Resolve forward references in self-referential models.
MessageDef.model_rebuild()
Document.model_rebuild()
