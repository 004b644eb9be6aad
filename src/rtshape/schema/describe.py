# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Plain-data descriptions of schemas for documentation tooling."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from rtshape.schema.model import FieldDesc, Schema
from rtshape.schema.views import schema_strict

# ###############
# Public Interface
# ###############


class FieldDescription(BaseModel):
    """A field backed by a type descriptor, with its printed signature."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    kind: Literal["field"] = "field"
    name: str
    type: str
    description: str | None = None


class SubSchemaDescription(BaseModel):
    """A field holding an embedded schema, described recursively."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    kind: Literal["sub-schema"] = "sub-schema"
    name: str
    type: str
    multiple: bool = False
    optional: bool = False
    description: str | None = None
    entries: list[EntryDescription] = _Field(alias="schema", default_factory=list)


# One entry of a schema description; `kind` tells the two shapes apart.
EntryDescription = Annotated[FieldDescription | SubSchemaDescription, _Field(discriminator="kind")]


def describe_fields(schema: Schema) -> list[FieldDescription | SubSchemaDescription]:
    """Describe every field of *schema* in declaration order."""
    descriptions: list[FieldDescription | SubSchemaDescription] = []
    for name, entry in schema.fields.items():
        if isinstance(entry, FieldDesc):
            descriptions.append(FieldDescription(name=name, type=entry.type.print(), description=entry.description))
        else:
            signature = schema_strict(entry.schema).print()
            descriptions.append(
                SubSchemaDescription(
                    name=name,
                    type=signature + "[]" if entry.multiple else signature,
                    multiple=entry.multiple,
                    optional=entry.optional,
                    description=entry.description,
                    entries=describe_fields(entry.schema),
                )
            )
    return descriptions


def describe_schema(schema: Schema) -> list[dict[str, Any]]:
    """Describe *schema* as a list of plain dicts, one per field.

    Field entries carry ``name``, ``type`` (the printed signature) and
    ``description``. Sub-schema entries additionally carry ``multiple``,
    ``optional`` and a nested ``schema`` list.
    """
    return [description.model_dump(by_alias=True) for description in describe_fields(schema)]


# Resolve the forward reference to EntryDescription.
SubSchemaDescription.model_rebuild()
