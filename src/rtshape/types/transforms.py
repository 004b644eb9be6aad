# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Struct-level transforms: partial, patch, pick, omit, and their deep variants.

Every transform returns a new plain :class:`StructType`. Field descriptors
keep their own validators; the source struct's object-level validators are
not carried over, since they were written against the full shape.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from rtshape.types.base import DescriptorError, Type
from rtshape.types.presence import DefaultType, WrapperType, nullable, optional
from rtshape.types.struct import StructType

# ###############
# Public Interface
# ###############


def partial(struct_type: StructType) -> StructType:
    """Make every field optional.

    An omitted field stays omitted: defaulted fields no longer fill in their
    default.
    """
    return StructType({name: _as_optional(type_) for name, type_ in struct_type.fields.items()})


def patch(struct_type: StructType) -> StructType:
    """Make required fields optional, and optional fields nullable.

    In the result, omitting a field means "leave unchanged", and ``None`` is
    only accepted where the source field could be absent (i.e. cleared).
    """
    return StructType({name: _as_patch(type_) for name, type_ in struct_type.fields.items()})


def pick(struct_type: StructType, *names: str) -> StructType:
    """Keep only the named fields, in the struct's declaration order.

    Raises:
        DescriptorError: If a name is not a field of *struct_type*.
    """
    _check_names(struct_type, names, "pick")
    return StructType({name: type_ for name, type_ in struct_type.fields.items() if name in names})


def omit(struct_type: StructType, *names: str) -> StructType:
    """Drop the named fields.

    Raises:
        DescriptorError: If a name is not a field of *struct_type*.
    """
    _check_names(struct_type, names, "omit")
    return StructType({name: type_ for name, type_ in struct_type.fields.items() if name not in names})


def deep_partial(struct_type: StructType) -> StructType:
    """Apply :func:`partial` to this struct and every directly nested struct.

    Nested structs are reached through optional, nullable and default
    wrappers. Array, record, tuple and union members are left untouched.
    """
    return StructType(
        {name: _as_optional(_descend(type_, deep_partial)) for name, type_ in struct_type.fields.items()}
    )


def deep_patch(struct_type: StructType) -> StructType:
    """Apply :func:`patch` to this struct and every directly nested struct.

    Recursion follows the same rules as :func:`deep_partial`.
    """
    return StructType({name: _as_patch(_descend(type_, deep_patch)) for name, type_ in struct_type.fields.items()})


# ################
# Implementation
# ################


def _as_optional(type_: Type[Any]) -> Type[Any]:
    if isinstance(type_, DefaultType) or not type_.accepts_absent():
        return optional(type_)
    return type_


def _as_patch(type_: Type[Any]) -> Type[Any]:
    if not type_.accepts_absent():
        return optional(type_)
    return type_ if type_.accepts_null() else nullable(type_)


def _descend(type_: Type[Any], transform: Callable[[StructType], StructType]) -> Type[Any]:
    """Apply *transform* to a nested struct, looking through presence wrappers."""
    if isinstance(type_, StructType):
        return transform(type_)
    if isinstance(type_, WrapperType):
        return type_.rewrap(_descend(type_.inner, transform))
    return type_


def _check_names(struct_type: StructType, names: tuple[str, ...], operation: str) -> None:
    unknown = [name for name in names if name not in struct_type.fields]
    if unknown:
        raise DescriptorError(f"{operation}() got unknown field(s): {', '.join(unknown)}")
