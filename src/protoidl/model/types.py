# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type references and constant values for the schema AST."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class FrozenModel(BaseModel):
    """Base for all AST nodes: immutable, compared by value, no extra keys."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class PrimitiveType(Enum):
    """Built-in scalar types."""

    INT32 = "int32"
    INT64 = "int64"
    STRING = "string"
    BOOLEAN = "boolean"


class PrimitiveTypeRef(FrozenModel):
    """Reference to a built-in scalar type."""

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveType


class MapTypeRef(FrozenModel):
    """Reference to a ``map<K, V>`` type. Keys and values nest freely."""

    kind: Literal["map"] = "map"
    key_type: TypeRef
    value_type: TypeRef


class NamedTypeRef(FrozenModel):
    """Unresolved reference to a message or enum by dotted path."""

    kind: Literal["named"] = "named"
    name: str


# The `kind` discriminator keeps (de)serialization unambiguous.
TypeRef = Annotated[
    PrimitiveTypeRef | MapTypeRef | NamedTypeRef,
    _Field(discriminator="kind"),
]


class NumericConstant(FrozenModel):
    """An unsigned integer written as a run of ASCII digits."""

    kind: Literal["numeric"] = "numeric"
    value: int


class StringConstant(FrozenModel):
    """The raw text between double quotes. Escapes are not interpreted."""

    kind: Literal["string"] = "string"
    value: str


class BooleanConstant(FrozenModel):
    kind: Literal["boolean"] = "boolean"
    value: bool


Constant = Annotated[
    NumericConstant | StringConstant | BooleanConstant,
    _Field(discriminator="kind"),
]


# Resolve forward references for models that use TypeRef.
MapTypeRef.model_rebuild()
