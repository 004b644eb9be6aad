# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the optional, nullable and default presence modifiers."""

from datetime import datetime

import pytest

from rtshape.core.markers import ABSENT
from rtshape.core.result import err, ok
from rtshape.types.base import DescriptorError, validate
from rtshape.types.combinators import union
from rtshape.types.presence import DefaultType, NullableType, OptionalType, default, nullable, optional, unwrap
from rtshape.types.scalar import boolean, date, number, string

# ###############
# Public Interface
# ###############


def test_optional_passes_absent_through() -> None:
    """optional(d) accepts ABSENT for any d and delegates everything else."""
    for inner in (string, number, boolean, date):
        assert optional(inner).decode(ABSENT) == ok(ABSENT)
    assert optional(number).decode(1) == ok(1)
    assert optional(number).decode(None) == err("expected number")


def test_nullable_passes_absent_and_null_through() -> None:
    """nullable(d) accepts ABSENT and None for any d."""
    for inner in (string, number, boolean, date):
        assert nullable(inner).decode(None) == ok(None)
        assert nullable(inner).decode(ABSENT) == ok(ABSENT)
    assert nullable(number).decode("x") == err("expected number")


def test_presence_signatures() -> None:
    """Presence wrappers extend the inner signature."""
    assert optional(number).print() == "number | undefined"
    assert nullable(number).print() == "number | null | undefined"
    assert default(number, 0).print() == "number = 0"
    assert default(string, "N/A").print() == 'string = "N/A"'
    assert default(date, factory=datetime.now).print() == "Date = <factory>"
    assert default(union(number, string), 1).print() == "(number | string) = 1"
    assert nullable(optional(boolean)).print() == "boolean | undefined | null"
    assert optional(default(number, 5)).print() == "(number = 5) | undefined"
    assert nullable(default(number, 5)).print() == "(number = 5) | null | undefined"


def test_fluent_presence_methods() -> None:
    """The fluent methods build the same wrappers as the functions."""
    assert isinstance(number.optional(), OptionalType)
    assert isinstance(number.nullable(), NullableType)
    assert isinstance(number.default(3), DefaultType)
    assert number.default(3).decode(ABSENT) == ok(3)


def test_presence_capabilities() -> None:
    """accepts_absent and accepts_null reflect the wrapper stack."""
    assert optional(number).accepts_absent()
    assert not optional(number).accepts_null()
    assert nullable(number).accepts_null()
    assert default(number, 0).accepts_absent()
    assert not default(number, 0).accepts_null()
    assert default(nullable(number), 0).accepts_null()
    assert optional(nullable(number)).accepts_null()


def test_default_value_is_substituted() -> None:
    """A fixed default replaces ABSENT; present values are decoded as usual."""
    assert default(number, 0).decode(ABSENT) == ok(0)
    assert default(number, 0).decode(5) == ok(5)
    assert default(number, 0).decode("x") == err("expected number")


def test_default_value_is_copied_per_decode() -> None:
    """Mutable fixed defaults are never shared between decodes."""
    tags = default(string, ["a"])
    first = tags.decode(ABSENT).value
    first.append("b")
    assert tags.decode(ABSENT) == ok(["a"])


def test_default_factory_called_on_every_decode() -> None:
    """A factory is re-invoked on each decode of ABSENT."""
    calls: list[int] = []

    def produce() -> list[int]:
        calls.append(1)
        return [len(calls)]

    descriptor = default(string, factory=produce)
    first = descriptor.decode(ABSENT).value
    second = descriptor.decode(ABSENT).value

    assert first == [1]
    assert second == [2]
    assert first is not second


def test_presence_queries_do_not_call_factory() -> None:
    """Checking presence capabilities never runs the default factory."""
    calls: list[int] = []
    descriptor = default(number, factory=lambda: calls.append(1) or 0)

    assert descriptor.accepts_absent()
    descriptor.accepts_null()
    descriptor.print()

    assert calls == []


def test_default_requires_exactly_one_source() -> None:
    """default() needs either a value or a factory, not both or neither."""
    with pytest.raises(DescriptorError):
        default(number)
    with pytest.raises(DescriptorError):
        default(number, 1, factory=lambda: 2)


def test_unwrap_strips_every_wrapper() -> None:
    """unwrap returns the innermost descriptor."""
    assert unwrap(optional(nullable(default(number, 1)))) is number
    assert unwrap(string) is string


@pytest.mark.asyncio
async def test_wrappers_skip_validation_of_markers() -> None:
    """Validators of the inner descriptor never see ABSENT or None."""
    positive = number.positive()
    assert await validate(optional(positive), ABSENT) == ok(ABSENT)
    assert await validate(nullable(positive), None) == ok(None)
    assert await validate(optional(positive), -1) == err("must be positive")


@pytest.mark.asyncio
async def test_default_value_is_validated() -> None:
    """A substituted default goes through the inner validators."""
    assert await validate(default(number.positive(), -1), ABSENT) == err("must be positive")
    assert await validate(default(number.positive(), 1), ABSENT) == ok(1)


@pytest.mark.asyncio
async def test_wrapper_own_validators_run_after_inner() -> None:
    """Validators attached to a wrapper run for present values only."""
    wrapped = optional(number).add_validator(lambda v: err("never") if v == 13 else ok(v))
    assert await validate(wrapped, 13) == err("never")
    assert await validate(wrapped, ABSENT) == ok(ABSENT)
