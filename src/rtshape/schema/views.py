# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema views: descriptors exposing one presence policy over a schema.

Every view decodes through the shared :func:`decode_object` loop. A view only
chooses which fields are visible (and so which input keys count as unknown)
and how each visible field treats the absent and null markers.
"""

from __future__ import annotations

import enum
from abc import abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from rtshape.core.markers import ABSENT
from rtshape.core.options import DEFAULT_OPTIONS, DecodeOptions
from rtshape.core.result import DecodeError, Err, Result, err, ok
from rtshape.schema.model import FieldDesc, FieldEntry, Schema, SubSchema
from rtshape.types.base import Type, gather_child_errors
from rtshape.types.struct import decode_object, print_fields
from rtshape.types.validator import run_validators

# ###############
# Public Interface
# ###############


class ViewKind(enum.Enum):
    """The presence policies a schema can be viewed through."""

    STRICT = "strict"
    PARTIAL = "partial"
    PATCH = "patch"
    POST = "post"
    POST_PARTIAL = "post-partial"
    KEYS = "keys"


class Presence(enum.Enum):
    """How a single visible field treats the absent and null markers.

    ``STRICT`` hands every value to the field's descriptor. ``OPTIONAL``
    accepts absence outright. ``PATCH`` accepts absence outright and accepts
    null only where the field itself may be absent.
    """

    STRICT = "strict"
    OPTIONAL = "optional"
    PATCH = "patch"


@dataclass(frozen=True, eq=False)
class SchemaView(Type[dict[str, Any]]):
    """Base class of the schema views.

    Attributes:
        schema: The underlying schema.
    """

    schema: Schema

    kind: ClassVar[ViewKind]

    @abstractmethod
    def presence(self, name: str) -> Presence:
        """Return the presence policy of the visible field *name*."""

    def visible_fields(self) -> list[str]:
        """Return the names of the fields this view decodes, in declaration order."""
        return list(self.schema.fields)

    def print(self) -> str:
        return print_fields(self._print_entry(name) for name in self.visible_fields())

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[dict[str, Any]]:
        visible = self.visible_fields()
        return decode_object(
            value,
            visible,
            lambda name, raw: self._decode_field(name, raw, opts),
            frozenset(visible),
            opts,
        )

    async def validate(self, value: dict[str, Any], opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[dict[str, Any]]:
        children = []
        for name in self.visible_fields():
            item = value.get(name, ABSENT)
            if item is ABSENT:
                continue
            if item is None and self.presence(name) is Presence.PATCH:
                continue
            children.append((name, _validate_entry(self.schema.fields[name], item, opts)))
        errors = await gather_child_errors(children)
        if errors:
            return Err(tuple(errors))
        return await run_validators(self.validators, value)

    def _decode_field(self, name: str, raw: Any, opts: DecodeOptions) -> Result[Any]:
        entry = self.schema.fields[name]
        presence = self.presence(name)
        if raw is ABSENT and presence is not Presence.STRICT:
            return ok(ABSENT)
        if raw is None and presence is Presence.PATCH and entry.accepts_absent():
            return ok(None)
        return _decode_entry(entry, raw, opts)

    def _print_entry(self, name: str) -> tuple[str, bool, str]:
        entry = self.schema.fields[name]
        presence = self.presence(name)
        signature = _entry_signature(entry)
        if presence is Presence.STRICT:
            return name, entry.accepts_absent(), signature
        if presence is Presence.PATCH and entry.accepts_absent() and not entry.accepts_null():
            signature += " | null"
        return name, True, signature


@dataclass(frozen=True, eq=False)
class SchemaStrict(SchemaView):
    """Full records: every field as declared."""

    kind = ViewKind.STRICT

    def presence(self, name: str) -> Presence:
        return Presence.STRICT


@dataclass(frozen=True, eq=False)
class SchemaPartial(SchemaView):
    """Any subset of the fields, keys included."""

    kind = ViewKind.PARTIAL

    def presence(self, name: str) -> Presence:
        return Presence.OPTIONAL


@dataclass(frozen=True, eq=False)
class SchemaPatch(SchemaView):
    """Updates addressed by key: keys required, other fields may be omitted.

    ``None`` clears a field, and is only accepted for fields that may be
    absent in a full record.
    """

    kind = ViewKind.PATCH

    def presence(self, name: str) -> Presence:
        return Presence.STRICT if self.schema.is_key(name) else Presence.PATCH


@dataclass(frozen=True, eq=False)
class SchemaPost(SchemaView):
    """Create-time records: the generated key is not part of the input."""

    kind = ViewKind.POST

    def presence(self, name: str) -> Presence:
        return Presence.STRICT

    def visible_fields(self) -> list[str]:
        return [name for name in self.schema.fields if name != self.schema.generated_key]


@dataclass(frozen=True, eq=False)
class SchemaPostPartial(SchemaView):
    """Any subset of the create-time fields."""

    kind = ViewKind.POST_PARTIAL

    def presence(self, name: str) -> Presence:
        return Presence.OPTIONAL

    def visible_fields(self) -> list[str]:
        return [name for name in self.schema.fields if name != self.schema.generated_key]


@dataclass(frozen=True, eq=False)
class SchemaKeys(SchemaView):
    """Only the key fields; anything else is unknown."""

    kind = ViewKind.KEYS

    def presence(self, name: str) -> Presence:
        return Presence.STRICT

    def visible_fields(self) -> list[str]:
        return list(self.schema.keys)


def schema_strict(schema: Schema) -> SchemaStrict:
    return SchemaStrict(schema)


def schema_partial(schema: Schema) -> SchemaPartial:
    return SchemaPartial(schema)


def schema_patch(schema: Schema) -> SchemaPatch:
    return SchemaPatch(schema)


def schema_post(schema: Schema) -> SchemaPost:
    return SchemaPost(schema)


def schema_post_partial(schema: Schema) -> SchemaPostPartial:
    return SchemaPostPartial(schema)


def schema_keys(schema: Schema) -> SchemaKeys:
    return SchemaKeys(schema)


def schema_view(schema: Schema, kind: ViewKind | str) -> SchemaView:
    """Build the view of *schema* selected by *kind*.

    Args:
        schema: The underlying schema.
        kind: A :class:`ViewKind` or its string value, e.g. ``"post-partial"``.

    Raises:
        ValueError: If *kind* is not a known view kind.
    """
    return _VIEWS[ViewKind(kind)](schema)


async def validate_schema(
    schema: Schema,
    kind: ViewKind | str,
    value: Any,
    opts: DecodeOptions | None = None,
) -> Result[dict[str, Any]]:
    """Decode *value* through the selected view of *schema*, then validate it.

    Field-level ``valid`` validators run after the field descriptor's own
    chain, and only for fields present in the decoded value.
    """
    view = schema_view(schema, kind)
    opts = opts or DEFAULT_OPTIONS
    result = view.decode(value, opts)
    if isinstance(result, Err):
        return result
    return await view.validate(result.value, opts)


# ################
# Implementation
# ################

_VIEWS: dict[ViewKind, type[SchemaView]] = {
    ViewKind.STRICT: SchemaStrict,
    ViewKind.PARTIAL: SchemaPartial,
    ViewKind.PATCH: SchemaPatch,
    ViewKind.POST: SchemaPost,
    ViewKind.POST_PARTIAL: SchemaPostPartial,
    ViewKind.KEYS: SchemaKeys,
}


def _entry_signature(entry: FieldEntry) -> str:
    if isinstance(entry, SubSchema):
        signature = schema_strict(entry.schema).print()
        return signature + "[]" if entry.multiple else signature
    return entry.type.print()


def _decode_entry(entry: FieldEntry, raw: Any, opts: DecodeOptions) -> Result[Any]:
    if isinstance(entry, FieldDesc):
        return entry.type.decode(raw, opts)
    if raw is ABSENT and entry.optional:
        return ok(ABSENT)
    if not entry.multiple:
        return ok(dict(raw)) if isinstance(raw, Mapping) else err("expected object")
    if not isinstance(raw, (list, tuple)):
        return err("expected Array")
    errors = [
        DecodeError((index,), "expected object") for index, item in enumerate(raw) if not isinstance(item, Mapping)
    ]
    if errors:
        return Err(tuple(errors))
    return ok([dict(item) for item in raw])


async def _validate_entry(entry: FieldEntry, item: Any, opts: DecodeOptions) -> Result[Any]:
    # Sub-schema values are only checked shallowly.
    if isinstance(entry, SubSchema):
        return ok(item)
    result = await entry.type.validate(item, opts)
    if isinstance(result, Err):
        return result
    if item is None and entry.accepts_null():
        return result
    return await run_validators(entry.valid, item)
