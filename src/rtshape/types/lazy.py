# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lazy descriptors for recursive structures."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass
from functools import cached_property
from typing import Any, TypeVar

from rtshape.core.options import DEFAULT_OPTIONS, DecodeOptions
from rtshape.core.result import Err, Result
from rtshape.types.base import Type
from rtshape.types.validator import run_validators

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class LazyType(Type[T]):
    """Defers building a descriptor until it is first used.

    The supplier is called once and its result memoized, which lets a
    descriptor refer to itself (for example a tree node whose children are
    nodes). When printing reaches the same lazy descriptor again, *name* is
    printed instead of recursing forever.

    Attributes:
        supplier: Zero-argument callable returning the real descriptor.
        name: Label printed at the point of recursion.
    """

    supplier: Callable[[], Type[T]]
    name: str = "lazy"

    @cached_property
    def resolved(self) -> Type[T]:
        """The descriptor produced by the supplier."""
        type_ = self.supplier()
        logger.debug("Resolved lazy descriptor '%s' to %s", self.name, type(type_).__name__)
        return type_

    def print(self) -> str:
        printing = _PRINTING.get()
        if id(self) in printing:
            return self.name
        token = _PRINTING.set(printing | {id(self)})
        try:
            return self.resolved.print()
        finally:
            _PRINTING.reset(token)

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[T]:
        return self.resolved.decode(value, opts)

    async def validate(self, value: T, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[T]:
        result = await self.resolved.validate(value, opts)
        if isinstance(result, Err):
            return result
        return await run_validators(self.validators, value)

    def accepts_absent(self) -> bool:
        return self.resolved.accepts_absent()

    def accepts_null(self) -> bool:
        return self.resolved.accepts_null()


def lazy(supplier: Callable[[], Type[T]], name: str = "lazy") -> LazyType[T]:
    """Build a descriptor resolved from *supplier* on first use."""
    return LazyType(supplier, name)


# ################
# Implementation
# ################

_PRINTING: ContextVar[frozenset[int]] = ContextVar("_PRINTING", default=frozenset())
