# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for union, intersection and tagged-union descriptors."""

import pytest

from rtshape.core.markers import ABSENT
from rtshape.core.options import DecodeOptions
from rtshape.core.result import DecodeError, Err, Ok, err, ok
from rtshape.types.base import DescriptorError, validate
from rtshape.types.combinators import IntersectionStructType, IntersectionType, intersection, tagged_union, union
from rtshape.types.presence import nullable, optional
from rtshape.types.scalar import bigint, literal, number, string
from rtshape.types.struct import struct

# ###############
# Public Interface
# ###############

_TAGGED = tagged_union("type")(
    {
        "num": struct({"type": literal("num"), "n": number}),
        "str": struct({"type": literal("str"), "s": string}),
    }
)


# -------- union --------


def test_union_signature() -> None:
    """Union members are joined with '|'."""
    assert union(number, string).print() == "number | string"


def test_union_first_match_wins() -> None:
    """The first member that decodes successfully determines the value."""
    assert union(number, string).decode(1) == ok(1)
    assert union(number, string).decode("a") == ok("a")


def test_union_no_match_is_a_single_root_error() -> None:
    """When nothing matches, one coarse error names the expected signature."""
    assert union(number, string).decode(True) == err("no union member matched, expected number | string")


def test_union_presence() -> None:
    """A union accepts absent or null if any member does."""
    assert union(number, optional(string)).accepts_absent()
    assert not union(number, string).accepts_absent()
    assert union(nullable(number), string).accepts_null()


def test_union_requires_members() -> None:
    """union() without members is a programming error."""
    with pytest.raises(DescriptorError):
        union()


@pytest.mark.asyncio
async def test_union_validates_with_matching_member() -> None:
    """Validation uses the validators of the member that decoded the value."""
    descriptor = union(number.positive(), string.min_length(2))
    assert await validate(descriptor, -1) == err("must be positive")
    assert await validate(descriptor, "a") == err("length must be at least 2")
    assert await validate(descriptor, "ab") == ok("ab")


@pytest.mark.asyncio
async def test_union_validates_value_filled_in_by_a_later_member() -> None:
    """A default filled in by a later member is validated by that member."""
    descriptor = union(struct({"a": number.max(0)}), struct({"a": number.min(4).default(5)}))
    assert descriptor.decode({}) == ok({"a": 5})
    assert await validate(descriptor, {}) == ok({"a": 5})
    assert await validate(descriptor, {"a": 3}) == err("must be <= 0", ("a",))


@pytest.mark.asyncio
async def test_union_validates_coerced_value() -> None:
    """A value coerced by a later member is accepted when that member validates it."""
    descriptor = union(bigint.max(1), number.min(0))
    opts = DecodeOptions(coerce_scalar=True)
    assert descriptor.decode("5", opts) == ok(5)
    assert await validate(descriptor, "5", opts) == ok(5)
    assert await validate(descriptor, -1.5, opts) == err("must be >= 0")


# -------- intersection --------


def test_intersection_of_structs_is_merged() -> None:
    """Two structs intersect into one struct over both field sets."""
    merged = intersection(struct({"a": number}), struct({"b": string}))

    assert isinstance(merged, IntersectionStructType)
    assert merged.print() == "{ a: number } & { b: string }"
    assert merged.decode({"a": 1, "b": "x"}) == ok({"a": 1, "b": "x"})
    assert merged.decode({"a": 1}) == err("expected string", ("b",))
    assert merged.decode({"a": 1, "b": "x", "c": 0}) == err("unknown field", ("c",))


def test_intersection_shared_fields_intersect() -> None:
    """A field declared on both sides must satisfy both descriptors."""
    merged = intersection(
        struct({"v": union(number, string)}),
        struct({"v": union(number, literal(True))}),
    )
    assert merged.decode({"v": 1}) == ok({"v": 1})
    assert isinstance(merged.decode({"v": "x"}), Err)
    assert isinstance(merged.decode({"v": True}), Err)


def test_intersection_shared_identical_field_is_kept() -> None:
    """A field holding the same descriptor on both sides is not wrapped."""
    merged = intersection(struct({"a": number}), struct({"a": number, "b": string}))
    assert merged.fields["a"] is number


def test_intersection_of_non_structs() -> None:
    """Other descriptors must both decode; errors from both sides are merged."""
    both = intersection(union(number, string), union(number, literal(True)))

    assert isinstance(both, IntersectionType)
    assert both.print() == "(number | string) & (number | true)"
    assert both.decode(2) == ok(2)
    result = both.decode(None)
    assert isinstance(result, Err)
    assert len(result.errors) == 2


def test_intersection_presence() -> None:
    """An intersection accepts absent only if both sides do."""
    assert intersection(optional(number), optional(number)).accepts_absent()
    assert not intersection(optional(number), number).accepts_absent()


@pytest.mark.asyncio
async def test_intersection_validates_both_sides() -> None:
    """Validators of both operands apply."""
    both = intersection(number.min(0), number.max(10))
    assert await validate(both, -1) == err("must be >= 0")
    assert await validate(both, 11) == err("must be <= 10")
    assert await validate(both, 5) == ok(5)


@pytest.mark.asyncio
async def test_merged_struct_keeps_both_object_validators() -> None:
    """Object-level validators of both structs run on the merged struct."""
    left = struct({"a": number}).add_validator(lambda v: ok(v) if v["a"] > 0 else err("a must be > 0"))
    right = struct({"b": number}).add_validator(lambda v: ok(v) if v["b"] > 0 else err("b must be > 0"))
    merged = intersection(left, right)

    assert await validate(merged, {"a": 1, "b": -1}) == err("b must be > 0")
    assert await validate(merged, {"a": 1, "b": 1}) == ok({"a": 1, "b": 1})


# -------- tagged union --------


def test_tagged_union_selects_member() -> None:
    """The tag value selects the member used for decoding."""
    assert _TAGGED.decode({"type": "num", "n": 42}) == ok({"type": "num", "n": 42})
    assert _TAGGED.decode({"type": "str", "s": "x"}) == ok({"type": "str", "s": "x"})


def test_tagged_union_unknown_tag() -> None:
    """An unrecognized tag is reported at the tag's path."""
    result = _TAGGED.decode({"type": "bool"})
    assert result == err("unknown tag 'bool'", ("type",))


def test_tagged_union_missing_tag() -> None:
    """A missing or null tag is reported at the tag's path."""
    assert _TAGGED.decode({"n": 1}) == err("missing tag", ("type",))
    assert _TAGGED.decode({"type": None}) == err("missing tag", ("type",))
    assert _TAGGED.decode("num") == err("expected object")


def test_tagged_union_reports_member_errors() -> None:
    """Once a member is selected, its own errors are returned."""
    result = _TAGGED.decode({"type": "num", "s": "x"})
    assert result == Err(
        (
            DecodeError(("n",), "expected number"),
            DecodeError(("s",), "unknown field"),
        )
    )


def test_tagged_union_unhashable_tag() -> None:
    """An unhashable tag value is an unknown tag, not a crash."""
    assert _TAGGED.decode({"type": ["num"]}) == err("unknown tag ['num']", ("type",))


def test_tagged_union_signature() -> None:
    """The signature lists every member."""
    assert _TAGGED.print() == '{ type: "num", n: number } | { type: "str", s: string }'


def test_tagged_union_requires_a_mapping_of_descriptors() -> None:
    """Malformed member tables are programming errors."""
    with pytest.raises(DescriptorError):
        tagged_union("type")([struct({"type": literal("a")})])
    with pytest.raises(DescriptorError):
        tagged_union("type")({})
    with pytest.raises(DescriptorError):
        tagged_union("type")({"a": "not a descriptor"})


@pytest.mark.asyncio
async def test_tagged_union_validates_selected_member() -> None:
    """Validation runs the selected member's validators."""
    tagged = tagged_union("kind")(
        {
            "circle": struct({"kind": literal("circle"), "radius": number.positive()}),
            "square": struct({"kind": literal("square"), "side": number.positive()}),
        }
    )
    assert await validate(tagged, {"kind": "square", "side": -2}) == err("must be positive", ("side",))
    result = await validate(tagged, {"kind": "circle", "radius": 1})
    assert isinstance(result, Ok)


def test_tagged_union_absent_value() -> None:
    """ABSENT is not an object."""
    assert _TAGGED.decode(ABSENT) == err("expected object")
