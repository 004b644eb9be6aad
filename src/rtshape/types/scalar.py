# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scalar leaf descriptors and their fluent semantic validators."""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Union

from rtshape.core.markers import ABSENT
from rtshape.core.options import DEFAULT_OPTIONS, DecodeOptions
from rtshape.core.result import Result, err, ok
from rtshape.types.base import DescriptorError, Type
from rtshape.types.validator import check

# ###############
# Public Interface
# ###############

Scalar = Union[str, int, float, bool]

EMAIL_PATTERN = re.compile(
    r"^(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))@"
    r"((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$"
)


@dataclass(frozen=True, eq=False)
class StringType(Type[str]):
    """Accepts ``str`` values."""

    def print(self) -> str:
        return "string"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[str]:
        if isinstance(value, str):
            return ok(value)
        if opts.number_to_string and _is_number(value) and not _is_nan(value):
            return ok(_number_to_string(value))
        return err("expected string")

    def one_of(self, *values: str) -> StringType:
        return self.add_validator(check(lambda v: v in values, _one_of_message(values)))

    def length(self, length: int, max_length: int | None = None) -> StringType:
        """Require an exact length, or a length in ``[length, max_length]``."""
        if max_length is None:
            return self.add_validator(check(lambda v: len(v) == length, f"length must be {length}"))
        return self.add_validator(
            check(
                lambda v: length <= len(v) <= max_length,
                f"length must be between {length} and {max_length}",
            )
        )

    def min_length(self, length: int) -> StringType:
        return self.add_validator(check(lambda v: len(v) >= length, f"length must be at least {length}"))

    def max_length(self, length: int) -> StringType:
        return self.add_validator(check(lambda v: len(v) <= length, f"length must be at most {length}"))

    def matches(self, pattern: str | re.Pattern[str]) -> StringType:
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        return self.add_validator(
            check(lambda v: compiled.search(v) is not None, f"must match pattern {compiled.pattern!r}")
        )

    def email(self) -> StringType:
        return self.add_validator(check(lambda v: EMAIL_PATTERN.match(v) is not None, "must be a valid email"))


@dataclass(frozen=True, eq=False)
class NumberType(Type[float]):
    """Accepts ``int`` and ``float`` values (never ``bool``); NaN only on request."""

    def print(self) -> str:
        return "number"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[float]:
        if _is_number(value):
            if _is_nan(value) and not opts.accept_nan:
                return err("expected number")
            return ok(value)
        if opts.string_to_number and isinstance(value, str):
            parsed = _parse_number(value)
            if parsed is not None and (not _is_nan(parsed) or opts.accept_nan):
                return ok(parsed)
        return err("expected number")

    def one_of(self, *values: float) -> NumberType:
        return self.add_validator(check(lambda v: v in values, _one_of_message(values)))

    def integer(self) -> NumberType:
        return self.add_validator(check(_is_integral, "must be an integer"))

    def positive(self) -> NumberType:
        return self.add_validator(check(lambda v: v >= 0, "must be positive"))

    def negative(self) -> NumberType:
        return self.add_validator(check(lambda v: v <= 0, "must be negative"))

    def min(self, minimum: float) -> NumberType:
        return self.add_validator(check(lambda v: v >= minimum, f"must be >= {minimum}"))

    def max(self, maximum: float) -> NumberType:
        return self.add_validator(check(lambda v: v <= maximum, f"must be <= {maximum}"))

    def between(self, minimum: float, maximum: float) -> NumberType:
        return self.add_validator(
            check(lambda v: minimum <= v <= maximum, f"must be between {minimum} and {maximum}")
        )


@dataclass(frozen=True, eq=False)
class IntegerType(NumberType):
    """A number without a fractional part. Inherits the number validators."""

    def print(self) -> str:
        return "integer"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[float]:
        if _is_number(value) and _is_integral(value):
            return ok(value)
        if opts.string_to_number and isinstance(value, str):
            parsed = _parse_number(value)
            if parsed is not None and _is_integral(parsed):
                return ok(parsed)
        return err("expected integer")


@dataclass(frozen=True, eq=False)
class BooleanType(Type[bool]):
    """Accepts ``bool`` values."""

    def print(self) -> str:
        return "boolean"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[bool]:
        if isinstance(value, bool):
            return ok(value)
        if opts.number_to_boolean and _is_number(value) and not _is_nan(value):
            return ok(value != 0)
        return err("expected boolean")

    def true(self) -> BooleanType:
        return self.add_validator(check(lambda v: v is True, "must be true"))

    def false(self) -> BooleanType:
        return self.add_validator(check(lambda v: v is False, "must be false"))


@dataclass(frozen=True, eq=False)
class DateType(Type[datetime]):
    """Accepts ``datetime`` values.

    With coercion enabled, ISO-8601 strings and epoch milliseconds are
    converted. Numeric timestamps produce timezone-aware UTC datetimes.
    """

    def print(self) -> str:
        return "Date"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[datetime]:
        if isinstance(value, datetime):
            return ok(value)
        if opts.string_to_date and isinstance(value, str):
            parsed = _parse_iso_datetime(value)
            if parsed is not None:
                return ok(parsed)
        if opts.number_to_date and _is_number(value) and not _is_nan(value):
            try:
                return ok(datetime.fromtimestamp(value / 1000, tz=timezone.utc))
            except (OverflowError, OSError, ValueError):
                pass
        return err("expected date")

    def min(self, minimum: datetime | None = None) -> DateType:
        """Require the date to be at or after *minimum* (default: now, at validation time)."""
        return self.add_validator(
            check(lambda v: _as_aware(v) >= _as_aware(minimum or _now()), f"must not be before {minimum or 'now'}")
        )

    def max(self, maximum: datetime | None = None) -> DateType:
        """Require the date to be at or before *maximum* (default: now, at validation time)."""
        return self.add_validator(
            check(lambda v: _as_aware(v) <= _as_aware(maximum or _now()), f"must not be after {maximum or 'now'}")
        )


@dataclass(frozen=True, eq=False)
class BigIntType(Type[int]):
    """Accepts ``int`` values of any magnitude (never ``bool`` or ``float``)."""

    def print(self) -> str:
        return "bigint"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[int]:
        if isinstance(value, int) and not isinstance(value, bool):
            return ok(value)
        if opts.string_to_bigint and isinstance(value, str) and _INTEGER_STRING.fullmatch(value.strip()):
            return ok(int(value.strip()))
        if opts.number_to_bigint and isinstance(value, float) and _is_integral(value):
            return ok(int(value))
        return err("expected bigint")

    def min(self, minimum: int) -> BigIntType:
        return self.add_validator(check(lambda v: v >= minimum, f"must be >= {minimum}"))

    def max(self, maximum: int) -> BigIntType:
        return self.add_validator(check(lambda v: v <= maximum, f"must be <= {maximum}"))

    def between(self, minimum: int, maximum: int) -> BigIntType:
        return self.add_validator(
            check(lambda v: minimum <= v <= maximum, f"must be between {minimum} and {maximum}")
        )


@dataclass(frozen=True, eq=False)
class LiteralType(Type[Scalar]):
    """Accepts only scalar values from a fixed allow-list.

    Matching is kind-aware: ``True`` never matches ``1`` and ``"1"`` never
    matches ``1``.
    """

    values: tuple[Scalar, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise DescriptorError("literal() requires at least one value")
        for value in self.values:
            if not _is_scalar(value):
                raise DescriptorError(f"literal() values must be str, int, float or bool, got {value!r}")

    def print(self) -> str:
        return " | ".join(json.dumps(value) for value in self.values)

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Scalar]:
        if _is_scalar(value) and any(_same_scalar(value, allowed) for allowed in self.values):
            return ok(value)
        return err(f"expected {self.print()}")

    def one_of(self, *values: Scalar) -> LiteralType:
        return self.add_validator(
            check(lambda v: any(_same_scalar(v, allowed) for allowed in values), _one_of_message(values))
        )


@dataclass(frozen=True, eq=False)
class ConstantType(Type[Any]):
    """Accepts exactly one marker value: ABSENT, None, True or False."""

    value: Any

    def __post_init__(self) -> None:
        if not any(self.value is allowed for allowed in (ABSENT, None, True, False)):
            raise DescriptorError(f"constant value must be ABSENT, None, True or False, got {self.value!r}")

    def print(self) -> str:
        if self.value is ABSENT:
            return "undefined"
        return json.dumps(self.value)

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        if value is self.value:
            return ok(value)
        return err(f"expected {self.print()}")

    def accepts_absent(self) -> bool:
        return self.value is ABSENT

    def accepts_null(self) -> bool:
        return self.value is None


@dataclass(frozen=True, eq=False)
class AnyType(Type[Any]):
    """Accepts every value, including the absent and null markers."""

    def print(self) -> str:
        return "any"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        return ok(value)

    def accepts_absent(self) -> bool:
        return True

    def accepts_null(self) -> bool:
        return True


@dataclass(frozen=True, eq=False)
class UnknownType(Type[Any]):
    """Accepts every value except the absent and null markers."""

    def print(self) -> str:
        return "unknown"

    def decode(self, value: Any, opts: DecodeOptions = DEFAULT_OPTIONS) -> Result[Any]:
        if value is ABSENT or value is None:
            return err("expected unknown")
        return ok(value)


def literal(*values: Scalar) -> LiteralType:
    """Build a descriptor accepting only the given scalar values."""
    return LiteralType(tuple(values))


string = StringType()
number = NumberType()
integer = IntegerType()
boolean = BooleanType()
date = DateType()
bigint = BigIntType()
any_value = AnyType()
unknown = UnknownType()

undefined_value = ConstantType(ABSENT)
null_value = ConstantType(None)
true_value = ConstantType(True)
false_value = ConstantType(False)


# ################
# Implementation
# ################

_INTEGER_STRING = re.compile(r"[+-]?[0-9]+")
_NUMBER_STRING = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _is_integral(value: Any) -> bool:
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int) and not isinstance(value, bool)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _same_scalar(a: Scalar, b: Scalar) -> bool:
    """Compare two scalars without letting bool, number and str mix."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, str) or isinstance(b, str):
        return isinstance(a, str) and isinstance(b, str) and a == b
    return a == b


def _number_to_string(value: float) -> str:
    """Render a number the way a JSON encoder would (``42.0`` becomes ``"42"``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_number(text: str) -> float | None:
    """Parse a plain decimal or exponent number, or ``NaN``; anything else is ``None``."""
    stripped = text.strip()
    if stripped.lower() == "nan":
        return math.nan
    if not _NUMBER_STRING.fullmatch(stripped):
        return None
    if _INTEGER_STRING.fullmatch(stripped):
        return int(stripped)
    return float(stripped)


def _parse_iso_datetime(text: str) -> datetime | None:
    stripped = text.strip()
    if stripped.endswith(("Z", "z")):
        stripped = stripped[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(stripped)
    except ValueError:
        return None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _one_of_message(values: tuple[Any, ...]) -> str:
    return "must be one of [" + ", ".join(json.dumps(value) for value in values) + "]"
