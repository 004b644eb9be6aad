# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema definitions: a field table plus key fields and a generated key.

A schema decodes nothing by itself. The views in :mod:`rtshape.schema.views`
wrap it and differ only in which fields are visible and how each field's
presence is policed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from rtshape.types.base import Type
from rtshape.types.validator import Validator

# ###############
# Public Interface
# ###############


class SchemaDefinitionError(ValueError):
    """Raised when a schema is constructed with an inconsistent definition."""


@dataclass(frozen=True)
class FieldDesc:
    """A schema field backed by a type descriptor.

    Attributes:
        type: Descriptor used to decode and validate the field.
        valid: Extra field-level validators, run after the descriptor's own
            chain and only for present values. A single callable is accepted.
        description: Free-text description used by :func:`describe_schema`.
    """

    type: Type[Any]
    valid: tuple[Validator, ...] = ()
    description: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, Type):
            raise SchemaDefinitionError(f"FieldDesc.type must be a type descriptor, got {self.type!r}")
        if callable(self.valid):
            object.__setattr__(self, "valid", (self.valid,))
        else:
            object.__setattr__(self, "valid", tuple(self.valid))

    def accepts_absent(self) -> bool:
        return self.type.accepts_absent()

    def accepts_null(self) -> bool:
        return self.type.accepts_null()


@dataclass(frozen=True)
class SubSchema:
    """A schema field holding an embedded record (or a list of them).

    Views only check the embedded value shallowly: an object, or a list of
    objects when *multiple* is set. Deep checks belong to the embedded
    schema's own views.

    Attributes:
        schema: The embedded schema.
        multiple: The field holds a list of records.
        optional: The field may be absent.
        description: Free-text description used by :func:`describe_schema`.
    """

    schema: Schema
    multiple: bool = False
    optional: bool = False
    description: str | None = None

    def accepts_absent(self) -> bool:
        return self.optional

    def accepts_null(self) -> bool:
        return False


FieldEntry = Union[FieldDesc, SubSchema]


@dataclass(frozen=True)
class Schema:
    """An ordered field table with identifying key fields.

    Attributes:
        fields: Field entries in declaration order.
        keys: Names of the identifying fields, in declaration order.
        generated_key: The server-assigned key field, excluded from
            create-time input. Must be one of *keys*.
    """

    fields: Mapping[str, FieldEntry]
    keys: tuple[str, ...] = ()
    generated_key: str | None = None

    def __post_init__(self) -> None:
        for name, entry in self.fields.items():
            if not isinstance(entry, (FieldDesc, SubSchema)):
                raise SchemaDefinitionError(f"schema field '{name}' must be a FieldDesc or SubSchema, got {entry!r}")
        keys = tuple(self.keys)
        for key in keys:
            if key not in self.fields:
                raise SchemaDefinitionError(f"key '{key}' is not a field of the schema")
            if isinstance(self.fields[key], SubSchema):
                raise SchemaDefinitionError(f"key '{key}' cannot be a sub-schema field")
        if self.generated_key is not None and self.generated_key not in keys:
            raise SchemaDefinitionError(f"generated key '{self.generated_key}' must be one of the keys")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "keys", keys)

    def is_key(self, name: str) -> bool:
        return name in self.keys


def schema(
    fields: Mapping[str, FieldEntry | Type[Any]],
    keys: Iterable[str] = (),
    generated_key: str | None = None,
) -> Schema:
    """Build a schema from a field table.

    Bare type descriptors in *fields* are wrapped in :class:`FieldDesc`.

    Raises:
        SchemaDefinitionError: If a key or the generated key is not a field,
            the generated key is not a key, or a field entry has the wrong kind.
    """
    entries: dict[str, FieldEntry] = {
        name: FieldDesc(entry) if isinstance(entry, Type) else entry for name, entry in fields.items()
    }
    return Schema(entries, tuple(keys), generated_key)


def field(
    type_: Type[Any],
    valid: Validator | Iterable[Validator] = (),
    description: str | None = None,
) -> FieldDesc:
    """Shorthand for :class:`FieldDesc`."""
    return FieldDesc(type_, valid, description)


def sub_schema(
    embedded: Schema,
    *,
    multiple: bool = False,
    optional: bool = False,
    description: str | None = None,
) -> SubSchema:
    """Shorthand for :class:`SubSchema`."""
    return SubSchema(embedded, multiple=multiple, optional=optional, description=description)
