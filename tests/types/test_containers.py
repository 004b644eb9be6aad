# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the array, tuple and record descriptors."""

import asyncio

import pytest

from rtshape.core.result import DecodeError, Err, err, ok
from rtshape.types.base import DescriptorError, validate
from rtshape.types.combinators import union
from rtshape.types.containers import array, record, tuple_of
from rtshape.types.presence import default, optional
from rtshape.types.scalar import number, string

# ###############
# Public Interface
# ###############


def test_container_signatures() -> None:
    """Containers print their members, parenthesizing compound signatures."""
    assert array(number).print() == "number[]"
    assert array(union(number, string)).print() == "(number | string)[]"
    assert array(optional(number)).print() == "(number | undefined)[]"
    assert array(array(string)).print() == "string[][]"
    assert array(default(number, 5)).print() == "(number = 5)[]"
    assert tuple_of(number, string).print() == "[number, string]"
    assert record(number).print() == "Record<string, number>"
    assert record(union(number, string)).print() == "Record<string, (number | string)>"


def test_array_decode() -> None:
    """array decodes every element and returns a fresh list."""
    source = [1, 2, 3]
    result = array(number).decode(source)
    assert result == ok([1, 2, 3])
    assert result.value is not source
    assert array(number).decode((1, 2)) == ok([1, 2])
    assert array(number).decode({"a": 1}) == err("expected Array")
    assert array(number).decode("abc") == err("expected Array")


def test_array_collects_every_element_error() -> None:
    """Element errors are all reported, each under its index."""
    result = array(number).decode([1, "a", 3, None])
    assert result == Err(
        (
            DecodeError((1,), "expected number"),
            DecodeError((3,), "expected number"),
        )
    )


def test_tuple_decode() -> None:
    """tuple_of checks the length and each position."""
    pair = tuple_of(number, string)
    assert pair.decode([1, "a"]) == ok([1, "a"])
    assert pair.decode([1]) == err("tuple length must be 2")
    assert pair.decode(["a", 1]) == Err(
        (
            DecodeError((0,), "expected number"),
            DecodeError((1,), "expected string"),
        )
    )
    assert pair.decode("xy") == err("expected Array")


def test_tuple_requires_members() -> None:
    """tuple_of() without members is a programming error."""
    with pytest.raises(DescriptorError):
        tuple_of()


def test_record_decode() -> None:
    """record decodes every value and reports errors under their keys."""
    scores = record(number)
    assert scores.decode({"a": 1, "b": 2}) == ok({"a": 1, "b": 2})
    assert scores.decode({}) == ok({})
    assert scores.decode({"a": "x", "b": 2}) == err("expected number", ("a",))
    assert scores.decode([1, 2]) == err("expected Record")


@pytest.mark.asyncio
async def test_array_validators() -> None:
    """Length validators apply to the whole array."""
    assert await validate(array(number).length(2), [1]) == err("length must be 2")
    assert await validate(array(number).min_length(1), []) == err("length must be at least 1")
    assert await validate(array(number).max_length(1), [1, 2]) == err("length must be at most 1")
    assert await validate(array(number).length(1, 2), [1, 2]) == ok([1, 2])


@pytest.mark.asyncio
async def test_array_element_validation_errors_in_index_order() -> None:
    """Element validation runs concurrently but errors follow index order."""

    async def slow_positive(value: float) -> object:
        # Earlier elements finish later.
        await asyncio.sleep(0.01 / (value if value > 0 else -value))
        return ok(value) if value > 0 else err("must be positive")

    result = await validate(array(number.add_validator(slow_positive)), [-1, 5, -100])

    assert result == Err(
        (
            DecodeError((0,), "must be positive"),
            DecodeError((2,), "must be positive"),
        )
    )


@pytest.mark.asyncio
async def test_array_own_chain_runs_after_elements() -> None:
    """The array's own validators only run when every element passes."""
    calls: list[object] = []

    def track(value: object) -> object:
        calls.append(value)
        return ok(value)

    descriptor = array(number.positive()).add_validator(track)

    assert await validate(descriptor, [1, -1]) == err("must be positive", (1,))
    assert calls == []
    assert await validate(descriptor, [1, 2]) == ok([1, 2])
    assert calls == [[1, 2]]


@pytest.mark.asyncio
async def test_tuple_and_record_validation() -> None:
    """Tuple positions and record values are validated with their paths."""
    assert await validate(tuple_of(number.positive(), string), [-1, "a"]) == err("must be positive", (0,))
    assert await validate(record(string.min_length(2)), {"k": "a"}) == err("length must be at least 2", ("k",))


@pytest.mark.asyncio
async def test_record_error_paths_use_string_keys() -> None:
    """Decode and validation errors name a non-string key the same way."""
    assert record(number).decode({1: "x"}) == err("expected number", ("1",))
    assert await validate(record(number.positive()), {1: -1}) == err("must be positive", ("1",))
