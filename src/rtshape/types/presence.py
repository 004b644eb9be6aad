# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Presence modifiers: optional, nullable, and default-value wrappers.

All three wrap exactly one inner descriptor and form the closed
:class:`WrapperType` family that structural transforms recurse through.
"""

from __future__ import annotations

import copy
import dataclasses
import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from rtshape.core.markers import ABSENT
from rtshape.core.options import DEFAULT_OPTIONS, DecodeOptions
from rtshape.core.result import Err, Result, ok
from rtshape.types.base import NO_VALUE, DescriptorError, Type, embed
from rtshape.types.validator import run_validators

# ###############
# Public Interface
# ###############

T = TypeVar("T")
W = TypeVar("W", bound="WrapperType[Any]")


@dataclass(frozen=True, eq=False)
class WrapperType(Type[T]):
    """A descriptor that adjusts presence handling around one inner descriptor."""

    inner: Type[Any]

    def rewrap(self: W, inner: Type[Any]) -> W:
        """Return the same wrapper, validators included, around a different inner descriptor."""
        return dataclasses.replace(self, inner=inner)

    async def _validate_present(self, value: Any, opts: DecodeOptions) -> Result[Any]:
        result = await self.inner.validate(value, opts)
        if isinstance(result, Err):
            return result
        return await run_validators(self.validators, value)


@dataclass(frozen=True, eq=False)
class OptionalType(WrapperType[T]):
    """Passes the absent marker through; anything else goes to the inner descriptor."""

    def print(self) -> str:
        return _operand(self.inner) + " | undefined"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        if value is ABSENT:
            return ok(ABSENT)
        return self.inner.decode(value, opts)

    async def validate(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        if value is ABSENT:
            return ok(value)
        return await self._validate_present(value, opts)

    def accepts_absent(self) -> bool:
        return True

    def accepts_null(self) -> bool:
        return self.inner.accepts_null()


@dataclass(frozen=True, eq=False)
class NullableType(WrapperType[T]):
    """Passes the absent and null markers through unchanged."""

    def print(self) -> str:
        if self.inner.accepts_absent() and not isinstance(self.inner, DefaultType):
            return _operand(self.inner) + " | null"
        return _operand(self.inner) + " | null | undefined"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        if value is ABSENT or value is None:
            return ok(value)
        return self.inner.decode(value, opts)

    async def validate(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        if value is ABSENT or value is None:
            return ok(value)
        return await self._validate_present(value, opts)

    def accepts_absent(self) -> bool:
        return True

    def accepts_null(self) -> bool:
        return True


@dataclass(frozen=True, eq=False)
class DefaultType(WrapperType[T]):
    """Substitutes a default for the absent marker.

    A fixed value is deep-copied on every decode; a factory is called on every
    decode. Neither is touched by :meth:`accepts_absent`.

    Attributes:
        value: The fixed default, or ``NO_VALUE`` when a factory is used.
        factory: Zero-argument callable producing the default, or ``None``.
    """

    value: Any = NO_VALUE
    factory: Callable[[], Any] | None = None

    def print(self) -> str:
        if self.factory is not None:
            shown = "<factory>"
        else:
            try:
                shown = json.dumps(self.value)
            except (TypeError, ValueError):
                shown = repr(self.value)
        return f"{embed(self.inner.print())} = {shown}"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        if value is ABSENT:
            return ok(self.produce())
        return self.inner.decode(value, opts)

    async def validate(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        return await self._validate_present(value, opts)

    def produce(self) -> Any:
        """Return a freshly produced default value."""
        if self.factory is not None:
            return self.factory()
        return copy.deepcopy(self.value)

    def accepts_absent(self) -> bool:
        return True

    def accepts_null(self) -> bool:
        return self.inner.accepts_null()


def optional(type_: Type[T]) -> OptionalType[T]:
    """Accept the absent marker in addition to whatever *type_* accepts."""
    return OptionalType(type_)


def nullable(type_: Type[T]) -> NullableType[T]:
    """Accept the absent and null markers in addition to whatever *type_* accepts."""
    return NullableType(type_)


def default(type_: Type[T], value: Any = NO_VALUE, *, factory: Callable[[], T] | None = None) -> DefaultType[T]:
    """Decode the absent marker to *value*, or to the result of *factory*.

    Raises:
        DescriptorError: If both or neither of *value* and *factory* are given.
    """
    if (value is NO_VALUE) == (factory is None):
        raise DescriptorError("default() requires exactly one of a value or a factory")
    return DefaultType(type_, value=value, factory=factory)


def unwrap(type_: Type[Any]) -> Type[Any]:
    """Strip every presence wrapper and return the innermost descriptor."""
    while isinstance(type_, WrapperType):
        type_ = type_.inner
    return type_


# ################
# Implementation
# ################


def _operand(type_: Type[Any]) -> str:
    """Render *type_* as the left operand of a presence alternative."""
    signature = type_.print()
    return f"({signature})" if isinstance(type_, DefaultType) else signature
