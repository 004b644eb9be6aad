# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptors: scalars, containers, structs, combinators, and presence modifiers."""

from rtshape.types.base import DescriptorError, Type, decode, validate
from rtshape.types.combinators import (
    IntersectionStructType,
    IntersectionType,
    TaggedUnionType,
    UnionType,
    intersection,
    tagged_union,
    union,
)
from rtshape.types.containers import ArrayType, RecordType, TupleType, array, record, tuple_of
from rtshape.types.lazy import LazyType, lazy
from rtshape.types.presence import (
    DefaultType,
    NullableType,
    OptionalType,
    WrapperType,
    default,
    nullable,
    optional,
    unwrap,
)
from rtshape.types.scalar import (
    AnyType,
    BigIntType,
    BooleanType,
    ConstantType,
    DateType,
    IntegerType,
    LiteralType,
    NumberType,
    StringType,
    UnknownType,
    any_value,
    bigint,
    boolean,
    date,
    false_value,
    integer,
    literal,
    null_value,
    number,
    string,
    true_value,
    undefined_value,
    unknown,
)
from rtshape.types.struct import KeyOfType, StructType, key_of, struct
from rtshape.types.transforms import deep_partial, deep_patch, omit, partial, patch, pick
from rtshape.types.validator import Validator, check, run_validators

__all__ = [
    # Base
    "DescriptorError",
    "Type",
    "decode",
    "validate",
    # Validators
    "Validator",
    "check",
    "run_validators",
    # Scalars
    "AnyType",
    "BigIntType",
    "BooleanType",
    "ConstantType",
    "DateType",
    "IntegerType",
    "LiteralType",
    "NumberType",
    "StringType",
    "UnknownType",
    "any_value",
    "bigint",
    "boolean",
    "date",
    "false_value",
    "integer",
    "literal",
    "null_value",
    "number",
    "string",
    "true_value",
    "undefined_value",
    "unknown",
    # Presence
    "DefaultType",
    "NullableType",
    "OptionalType",
    "WrapperType",
    "default",
    "nullable",
    "optional",
    "unwrap",
    # Containers
    "ArrayType",
    "RecordType",
    "TupleType",
    "array",
    "record",
    "tuple_of",
    # Structs
    "KeyOfType",
    "StructType",
    "key_of",
    "struct",
    # Combinators
    "IntersectionStructType",
    "IntersectionType",
    "TaggedUnionType",
    "UnionType",
    "intersection",
    "tagged_union",
    "union",
    # Lazy
    "LazyType",
    "lazy",
    # Transforms
    "deep_partial",
    "deep_patch",
    "omit",
    "partial",
    "patch",
    "pick",
]
