# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Container descriptors: arrays, fixed-arity tuples, and string-keyed records.

Each collects every element error (not just the first) and re-paths it with
the element's index or key.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from rtshape.core.options import DEFAULT_OPTIONS, DecodeOptions
from rtshape.core.result import DecodeError, Err, Result, err, ok, prefix_errors
from rtshape.types.base import DescriptorError, Type, embed, gather_child_errors
from rtshape.types.validator import check, run_validators

# ###############
# Public Interface
# ###############

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class ArrayType(Type[list[T]]):
    """A list whose every element decodes against one member descriptor."""

    member: Type[T]

    def print(self) -> str:
        return embed(self.member.print()) + "[]"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[list[T]]:
        if not isinstance(value, (list, tuple)):
            return err("expected Array")

        decoded: list[T] = []
        errors: list[DecodeError] = []
        for index, element in enumerate(value):
            result = self.member.decode(element, opts)
            if isinstance(result, Err):
                errors.extend(prefix_errors(index, result.errors))
            else:
                decoded.append(result.value)

        if errors:
            return Err(tuple(errors))
        return ok(decoded)

    async def validate(self, value: list[T], opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[list[T]]:
        errors = await gather_child_errors(
            [(index, self.member.validate(element, opts)) for index, element in enumerate(value)]
        )
        if errors:
            return Err(tuple(errors))
        return await run_validators(self.validators, value)

    def length(self, length: int, max_length: int | None = None) -> ArrayType[T]:
        """Require an exact length, or a length in ``[length, max_length]``."""
        if max_length is None:
            return self.add_validator(check(lambda v: len(v) == length, f"length must be {length}"))
        return self.add_validator(
            check(
                lambda v: length <= len(v) <= max_length,
                f"length must be between {length} and {max_length}",
            )
        )

    def min_length(self, length: int) -> ArrayType[T]:
        return self.add_validator(check(lambda v: len(v) >= length, f"length must be at least {length}"))

    def max_length(self, length: int) -> ArrayType[T]:
        return self.add_validator(check(lambda v: len(v) <= length, f"length must be at most {length}"))


@dataclass(frozen=True, eq=False)
class TupleType(Type[list[Any]]):
    """A fixed-length list with one descriptor per position."""

    members: tuple[Type[Any], ...]

    def __post_init__(self) -> None:
        if not self.members:
            raise DescriptorError("tuple_of() requires at least one member")

    def print(self) -> str:
        return "[" + ", ".join(member.print() for member in self.members) + "]"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[list[Any]]:
        if not isinstance(value, (list, tuple)):
            return err("expected Array")
        if len(value) != len(self.members):
            return err(f"tuple length must be {len(self.members)}")

        decoded: list[Any] = []
        errors: list[DecodeError] = []
        for index, (member, element) in enumerate(zip(self.members, value)):
            result = member.decode(element, opts)
            if isinstance(result, Err):
                errors.extend(prefix_errors(index, result.errors))
            else:
                decoded.append(result.value)

        if errors:
            return Err(tuple(errors))
        return ok(decoded)

    async def validate(self, value: list[Any], opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[list[Any]]:
        errors = await gather_child_errors(
            [(index, member.validate(element, opts)) for index, (member, element) in enumerate(zip(self.members, value))]
        )
        if errors:
            return Err(tuple(errors))
        return await run_validators(self.validators, value)


@dataclass(frozen=True, eq=False)
class RecordType(Type[dict[str, T]]):
    """A mapping whose every value decodes against one member descriptor."""

    member: Type[T]

    def print(self) -> str:
        return f"Record<string, {embed(self.member.print())}>"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[dict[str, T]]:
        if not isinstance(value, Mapping):
            return err("expected Record")

        decoded: dict[str, T] = {}
        errors: list[DecodeError] = []
        for key, item in value.items():
            result = self.member.decode(item, opts)
            if isinstance(result, Err):
                errors.extend(prefix_errors(str(key), result.errors))
            else:
                decoded[key] = result.value

        if errors:
            return Err(tuple(errors))
        return ok(decoded)

    async def validate(self, value: dict[str, T], opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[dict[str, T]]:
        errors = await gather_child_errors(
            [(str(key), self.member.validate(item, opts)) for key, item in value.items()]
        )
        if errors:
            return Err(tuple(errors))
        return await run_validators(self.validators, value)


def array(member: Type[T]) -> ArrayType[T]:
    """Build a descriptor for a list of *member* values."""
    return ArrayType(member)


def tuple_of(*members: Type[Any]) -> TupleType:
    """Build a descriptor for a fixed-length list, one descriptor per position."""
    return TupleType(tuple(members))


def record(member: Type[T]) -> RecordType[T]:
    """Build a descriptor for a string-keyed mapping of *member* values."""
    return RecordType(member)
