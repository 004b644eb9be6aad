# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Keyed-struct descriptors and the shared object decoding loop.

The loop in :func:`decode_object` is also used by every schema view, which
only differ from a plain struct in which fields are visible and how each
field's presence is policed.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Container, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from rtshape.core.markers import ABSENT
from rtshape.core.options import DEFAULT_OPTIONS, DecodeOptions, UnknownFields
from rtshape.core.result import DecodeError, Err, Result, err, ok, prefix_errors
from rtshape.types.base import DescriptorError, Type, gather_child_errors
from rtshape.types.validator import check, run_validators

# ###############
# Public Interface
# ###############

FieldDecoder = Callable[[str, Any], Result[Any]]
FieldValidator = Callable[[str, Any], Awaitable[Result[Any]]]


@dataclass(frozen=True, eq=False)
class StructType(Type[dict[str, Any]]):
    """An object with an ordered table of named fields.

    Absent input fields still go through their descriptor, so optional,
    nullable and default fields decide for themselves what absence means.
    Fields that decode to the absent marker are omitted from the output.
    """

    fields: Mapping[str, Type[Any]]

    def __post_init__(self) -> None:
        for name, type_ in self.fields.items():
            if not isinstance(type_, Type):
                raise DescriptorError(f"struct field '{name}' must be a type descriptor, got {type_!r}")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def print(self) -> str:
        return print_fields((name, type_.accepts_absent(), type_.print()) for name, type_ in self.fields.items())

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[dict[str, Any]]:
        return decode_object(
            value,
            self.fields,
            lambda name, raw: self.fields[name].decode(raw, opts),
            self.fields,
            opts,
        )

    async def validate(self, value: dict[str, Any], opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[dict[str, Any]]:
        return await validate_object(
            value,
            self.fields,
            lambda name, item: self.fields[name].validate(item, opts),
            self.validators,
        )


@dataclass(frozen=True, eq=False)
class KeyOfType(Type[str]):
    """Accepts the field names of a struct."""

    struct: StructType

    def print(self) -> str:
        return " | ".join(json.dumps(name) for name in self.struct.fields)

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[str]:
        if isinstance(value, str) and value in self.struct.fields:
            return ok(value)
        return err(f"expected {self.print()}")

    def one_of(self, *names: str) -> KeyOfType:
        message = "must be one of [" + ", ".join(json.dumps(name) for name in names) + "]"
        return self.add_validator(check(lambda v: v in names, message))


def struct(fields: Mapping[str, Type[Any]]) -> StructType:
    """Build a struct descriptor from an ordered mapping of field descriptors."""
    return StructType(fields)


def key_of(struct_type: StructType) -> KeyOfType:
    """Build a descriptor accepting the field names of *struct_type*."""
    return KeyOfType(struct_type)


def print_fields(entries: Iterable[tuple[str, bool, str]]) -> str:
    """Render ``(name, optional, signature)`` entries as an object signature."""
    parts = [f"{name}{'?' if is_optional else ''}: {signature}" for name, is_optional, signature in entries]
    if not parts:
        return "{}"
    return "{ " + ", ".join(parts) + " }"


def decode_object(
    value: Any,
    field_names: Iterable[str],
    decode_field: FieldDecoder,
    known_fields: Container[str],
    opts: DecodeOptions,
) -> Result[dict[str, Any]]:
    """Decode a mapping field by field, collecting every error.

    Args:
        value: The raw input.
        field_names: Fields to decode, in declaration order.
        decode_field: Called with ``(name, raw)`` for each field; ``raw`` is
            ``ABSENT`` when the input has no such key.
        known_fields: Field names that are not "unknown" for the
            unknown-field policy.
        opts: Decode options; ``unknown_fields`` selects the policy.

    Returns:
        ``Ok`` with a fresh dict, or ``Err`` with field errors first and
        unknown-field errors after them, in input key order.
    """
    if not isinstance(value, Mapping):
        return err("expected object")

    output: dict[str, Any] = dict(value) if opts.unknown_fields is UnknownFields.DISCARD else {}
    errors: list[DecodeError] = []

    for name in field_names:
        result = decode_field(name, value.get(name, ABSENT))
        if isinstance(result, Err):
            errors.extend(prefix_errors(name, result.errors))
        elif result.value is ABSENT:
            output.pop(name, None)
        else:
            output[name] = result.value

    if opts.unknown_fields is UnknownFields.REJECT:
        errors.extend(DecodeError((key,), "unknown field") for key in value if key not in known_fields)

    if errors:
        return Err(tuple(errors))
    return ok(output)


async def validate_object(
    value: Mapping[str, Any],
    field_names: Iterable[str],
    validate_field: FieldValidator,
    validators: Iterable[Any],
) -> Result[dict[str, Any]]:
    """Validate every present field concurrently, then run the object's own validators."""
    errors = await gather_child_errors(
        [(name, validate_field(name, value[name])) for name in field_names if name in value]
    )
    if errors:
        return Err(tuple(errors))
    return await run_validators(validators, value)
