# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Result model returned by every decode and validate operation.

A result is either :class:`Ok` carrying the decoded value, or :class:`Err`
carrying a non-empty, ordered tuple of :class:`DecodeError` entries. Each
error is tagged with the structural path from the decode root to the point of
failure.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

# ###############
# Public Interface
# ###############

T = TypeVar("T")

PathSegment = Union[str, int]
Path = tuple[PathSegment, ...]


@dataclass(frozen=True)
class DecodeError:
    """A single structural or semantic error.

    Attributes:
        path: Field names and array indices leading from the decode root to
            the failing value. Empty at the root.
        message: Human-readable description of the error.
    """

    path: Path
    message: str

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return ".".join(str(segment) for segment in self.path) + ": " + self.message


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome holding the decoded value."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed outcome holding every error found, in declaration order."""

    errors: tuple[DecodeError, ...]

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("Err requires at least one error")

    @property
    def messages(self) -> list[str]:
        """Return the rendered ``path: message`` form of each error."""
        return [str(error) for error in self.errors]


Result = Union[Ok[T], Err]


def ok(value: T) -> Ok[T]:
    """Wrap *value* in a successful result."""
    return Ok(value)


def err(message: str, path: Iterable[PathSegment] = ()) -> Err:
    """Build a failed result holding a single error."""
    return Err((DecodeError(tuple(path), message),))


def is_ok(result: Result[T]) -> bool:
    """Return True if *result* is an :class:`Ok`."""
    return isinstance(result, Ok)


def is_err(result: Result[T]) -> bool:
    """Return True if *result* is an :class:`Err`."""
    return isinstance(result, Err)


def prefix_errors(segment: PathSegment, errors: Iterable[DecodeError]) -> list[DecodeError]:
    """Re-path child errors under *segment*, keeping each child's relative path."""
    return [DecodeError((segment, *error.path), error.message) for error in errors]


def merge_errors(*results: Result[object]) -> list[DecodeError]:
    """Concatenate the errors of every failed result, in argument order."""
    merged: list[DecodeError] = []
    for result in results:
        if isinstance(result, Err):
            merged.extend(result.errors)
    return merged
