# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""The abstract type descriptor and the top-level decode/validate entry points.

Descriptors are immutable. Attaching a validator or a presence modifier
returns a new descriptor and leaves the receiver untouched, so a descriptor
can be shared between any number of parents and schema views.
"""

from __future__ import annotations

import asyncio
import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from rtshape.core.options import DEFAULT_OPTIONS, DecodeOptions
from rtshape.core.result import DecodeError, Err, PathSegment, Result, prefix_errors
from rtshape.types.validator import Validator, run_validators

if TYPE_CHECKING:
    from rtshape.types.presence import DefaultType, NullableType, OptionalType

# ###############
# Public Interface
# ###############

T = TypeVar("T")
D = TypeVar("D", bound="Type[Any]")


class DescriptorError(ValueError):
    """Raised when a descriptor is constructed with invalid arguments."""


class _NoValue:
    def __repr__(self) -> str:
        return "<no value>"


NO_VALUE: Any = _NoValue()


@dataclass(frozen=True, eq=False)
class Type(ABC, Generic[T]):
    """Base class of every type descriptor.

    Attributes:
        validators: Semantic validators attached to this descriptor, run in
            attachment order by :meth:`validate`.
    """

    validators: tuple[Validator, ...] = field(default=(), kw_only=True)

    @abstractmethod
    def print(self) -> str:
        """Return the canonical, human-readable signature of this descriptor."""

    @abstractmethod
    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[T]:
        """Structurally check *value*, coercing scalars when *opts* allows it.

        Never runs semantic validators and never suspends.
        """

    async def validate(self, value: T, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[T]:
        """Run semantic validators against an already decoded *value*.

        Compound descriptors validate their children first and only run their
        own chain when every child passes.
        """
        return await run_validators(self.validators, value)

    def accepts_absent(self) -> bool:
        """Return True if decoding the absent marker succeeds."""
        return False

    def accepts_null(self) -> bool:
        """Return True if decoding the null marker succeeds."""
        return False

    def add_validator(self: D, validator: Validator) -> D:
        """Return a copy of this descriptor with *validator* appended to its chain."""
        return dataclasses.replace(self, validators=(*self.validators, validator))

    def optional(self) -> OptionalType[T]:
        """Return this descriptor wrapped so that the absent marker is accepted."""
        from rtshape.types.presence import optional

        return optional(self)

    def nullable(self) -> NullableType[T]:
        """Return this descriptor wrapped so that absent and null are accepted."""
        from rtshape.types.presence import nullable

        return nullable(self)

    def default(self, value: Any = NO_VALUE, *, factory: Callable[[], T] | None = None) -> DefaultType[T]:
        """Return this descriptor wrapped so that absent decodes to a default."""
        from rtshape.types.presence import default

        return default(self, value, factory=factory)

    def __str__(self) -> str:
        return self.print()


def decode(type_: Type[T], value: Any, opts: DecodeOptions | None = None) -> Result[T]:
    """Structurally decode *value* against *type_*."""
    return type_.decode(value, opts or DEFAULT_OPTIONS)


async def validate(type_: Type[T], value: Any, opts: DecodeOptions | None = None) -> Result[T]:
    """Decode *value* against *type_*, then run its semantic validators."""
    opts = opts or DEFAULT_OPTIONS
    result = type_.decode(value, opts)
    if isinstance(result, Err):
        return result
    return await type_.validate(result.value, opts)


def embed(signature: str) -> str:
    """Parenthesize *signature* if it has a top-level ``|``, ``&`` or ``=`` operator."""
    depth = 0
    in_string = False
    escaped = False
    for char in signature:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "([{<":
            depth += 1
        elif char in ")]}>":
            depth -= 1
        elif char in "|&=" and depth == 0:
            return "(" + signature + ")"
    return signature


async def gather_child_errors(
    children: Sequence[tuple[PathSegment, Awaitable[Result[Any]]]],
) -> list[DecodeError]:
    """Await every child validation concurrently and collect re-pathed errors.

    Errors are ordered by the position of the child in *children*, not by the
    order in which the validations complete.
    """
    results = await asyncio.gather(*(awaitable for _, awaitable in children))
    errors: list[DecodeError] = []
    for (segment, _), result in zip(children, results):
        if isinstance(result, Err):
            errors.extend(prefix_errors(segment, result.errors))
    return errors
