# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Union, intersection, and tagged-union combinators."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from rtshape.core.markers import ABSENT
from rtshape.core.options import DEFAULT_OPTIONS, DecodeOptions
from rtshape.core.result import Err, Ok, Result, err, merge_errors
from rtshape.types.base import DescriptorError, Type, embed
from rtshape.types.struct import StructType
from rtshape.types.validator import run_validators

# ###############
# Public Interface
# ###############


@dataclass(frozen=True, eq=False)
class UnionType(Type[Any]):
    """Tries each member in declared order and keeps the first success.

    When no member matches, a single root error is reported; the individual
    member rejections are not surfaced.
    """

    members: tuple[Type[Any], ...]

    def __post_init__(self) -> None:
        if not self.members:
            raise DescriptorError("union() requires at least one member")

    def print(self) -> str:
        return " | ".join(member.print() for member in self.members)

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        for member in self.members:
            result = member.decode(value, opts)
            if isinstance(result, Ok):
                return result
        return err(f"no union member matched, expected {self.print()}")

    async def validate(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        # Passes when any member accepting the decoded value validates it;
        # otherwise the first member failure is reported.
        failures: list[Err] = []
        for member in self._matches(value, opts):
            result = await member.validate(value, opts)
            if not isinstance(result, Err):
                return await run_validators(self.validators, value)
            failures.append(result)
        if failures:
            return failures[0]
        return await run_validators(self.validators, value)

    def accepts_absent(self) -> bool:
        return any(member.accepts_absent() for member in self.members)

    def accepts_null(self) -> bool:
        return any(member.accepts_null() for member in self.members)

    def _matches(self, value: Any, opts: DecodeOptions) -> list[Type[Any]]:
        return [member for member in self.members if isinstance(member.decode(value, opts), Ok)]


@dataclass(frozen=True, eq=False)
class IntersectionType(Type[Any]):
    """Requires both operands to decode; errors from both sides are merged.

    The decoded value is the left operand's.
    """

    left: Type[Any]
    right: Type[Any]

    def print(self) -> str:
        return embed(self.left.print()) + " & " + embed(self.right.print())

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        left = self.left.decode(value, opts)
        right = self.right.decode(value, opts)
        errors = merge_errors(left, right)
        if errors:
            return Err(tuple(errors))
        return left

    async def validate(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        left, right = await asyncio.gather(self.left.validate(value, opts), self.right.validate(value, opts))
        errors = merge_errors(left, right)
        if errors:
            return Err(tuple(errors))
        return await run_validators(self.validators, value)

    def accepts_absent(self) -> bool:
        return self.left.accepts_absent() and self.right.accepts_absent()

    def accepts_null(self) -> bool:
        return self.left.accepts_null() and self.right.accepts_null()


@dataclass(frozen=True, eq=False)
class IntersectionStructType(StructType):
    """The merge of two structs: one struct over the union of their fields.

    A field declared by both operands is the intersection of its two
    descriptors, unless both hold the very same descriptor. Unknown fields
    are judged against the merged field set.
    """

    left: StructType
    right: StructType

    def print(self) -> str:
        return self.left.print() + " & " + self.right.print()


@dataclass(frozen=True, eq=False)
class TaggedUnionType(Type[Any]):
    """Selects a member by the exact value of one tag field.

    A missing tag and an unknown tag value are reported at the tag's path;
    once a member is selected, its own decode errors are returned as-is.
    """

    tag: str
    members: Mapping[Any, Type[Any]]

    def __post_init__(self) -> None:
        if not isinstance(self.members, Mapping):
            raise DescriptorError(f"tagged_union('{self.tag}') members must be a mapping, got {self.members!r}")
        if not self.members:
            raise DescriptorError(f"tagged_union('{self.tag}') requires at least one member")
        for tag_value, member in self.members.items():
            if not isinstance(member, Type):
                raise DescriptorError(f"tagged_union('{self.tag}') member {tag_value!r} must be a type descriptor")
        object.__setattr__(self, "members", MappingProxyType(dict(self.members)))

    def print(self) -> str:
        return " | ".join(member.print() for member in self.members.values())

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        if not isinstance(value, Mapping):
            return err("expected object")

        tag_value = value.get(self.tag, ABSENT)
        if tag_value is ABSENT or tag_value is None:
            return err("missing tag", (self.tag,))
        member = self._member(tag_value)
        if member is None:
            return err(f"unknown tag {tag_value!r}", (self.tag,))
        return member.decode(value, opts)

    async def validate(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        member = self._member(value.get(self.tag))
        if member is not None:
            result = await member.validate(value, opts)
            if isinstance(result, Err):
                return result
        return await run_validators(self.validators, value)

    def _member(self, tag_value: Any) -> Type[Any] | None:
        if not isinstance(tag_value, Hashable) or isinstance(tag_value, bool):
            return None
        return self.members.get(tag_value)


def union(*members: Type[Any]) -> UnionType:
    """Build a first-match union of *members*."""
    return UnionType(tuple(members))


def intersection(left: Type[Any], right: Type[Any]) -> Type[Any]:
    """Build the intersection of two descriptors.

    Two structs are merged into a single struct (see
    :class:`IntersectionStructType`); anything else yields an
    :class:`IntersectionType` that checks both operands independently.
    """
    if isinstance(left, StructType) and isinstance(right, StructType):
        fields: dict[str, Type[Any]] = {}
        for name, type_ in left.fields.items():
            other = right.fields.get(name)
            if other is None or other is type_:
                fields[name] = type_
            else:
                fields[name] = intersection(type_, other)
        for name, type_ in right.fields.items():
            fields.setdefault(name, type_)
        return IntersectionStructType(
            fields,
            left=left,
            right=right,
            validators=(*left.validators, *right.validators),
        )
    return IntersectionType(left, right)


def tagged_union(tag: str) -> Callable[[Mapping[Any, Type[Any]]], TaggedUnionType]:
    """Return a builder that creates a union discriminated by the *tag* field.

    Example::

        shape = tagged_union("type")({"num": struct({...}), "str": struct({...})})
    """

    def _build(members: Mapping[Any, Type[Any]]) -> TaggedUnionType:
        return TaggedUnionType(tag, members)

    return _build
