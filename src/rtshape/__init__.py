# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime schema and validation engine.

Descriptors decode untrusted, already-parsed values (``dict``, ``list`` and
scalars) synchronously into a :class:`Result`, and validate decoded values
asynchronously against attached semantic rules.
"""

from rtshape.core import (
    ABSENT,
    DEFAULT_OPTIONS,
    DecodeError,
    DecodeOptions,
    DecodeOptionsError,
    Err,
    Ok,
    Result,
    UnknownFields,
    err,
    is_absent,
    is_err,
    is_ok,
    load_decode_options,
    ok,
)
from rtshape.schema import (
    FieldDesc,
    Schema,
    SchemaDefinitionError,
    SubSchema,
    ViewKind,
    describe_schema,
    field,
    schema,
    schema_keys,
    schema_partial,
    schema_patch,
    schema_post,
    schema_post_partial,
    schema_strict,
    schema_view,
    sub_schema,
    validate_schema,
)
from rtshape.types import (
    DescriptorError,
    Type,
    Validator,
    any_value,
    array,
    bigint,
    boolean,
    check,
    date,
    decode,
    deep_partial,
    deep_patch,
    default,
    false_value,
    integer,
    intersection,
    key_of,
    lazy,
    literal,
    null_value,
    nullable,
    number,
    omit,
    optional,
    partial,
    patch,
    pick,
    record,
    string,
    struct,
    tagged_union,
    true_value,
    tuple_of,
    undefined_value,
    union,
    unknown,
    validate,
)

__all__ = [
    # Results and options
    "ABSENT",
    "DEFAULT_OPTIONS",
    "DecodeError",
    "DecodeOptions",
    "DecodeOptionsError",
    "Err",
    "Ok",
    "Result",
    "UnknownFields",
    "err",
    "is_absent",
    "is_err",
    "is_ok",
    "load_decode_options",
    "ok",
    # Descriptors
    "DescriptorError",
    "Type",
    "Validator",
    "any_value",
    "array",
    "bigint",
    "boolean",
    "check",
    "date",
    "decode",
    "deep_partial",
    "deep_patch",
    "default",
    "false_value",
    "integer",
    "intersection",
    "key_of",
    "lazy",
    "literal",
    "null_value",
    "nullable",
    "number",
    "omit",
    "optional",
    "partial",
    "patch",
    "pick",
    "record",
    "string",
    "struct",
    "tagged_union",
    "true_value",
    "tuple_of",
    "undefined_value",
    "union",
    "unknown",
    "validate",
    # Schemas
    "FieldDesc",
    "Schema",
    "SchemaDefinitionError",
    "SubSchema",
    "ViewKind",
    "describe_schema",
    "field",
    "schema",
    "schema_keys",
    "schema_partial",
    "schema_patch",
    "schema_post",
    "schema_post_partial",
    "schema_strict",
    "schema_view",
    "sub_schema",
    "validate_schema",
]
