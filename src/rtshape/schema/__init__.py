# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schemas, their presence-policy views, and schema descriptions."""

from rtshape.schema.describe import FieldDescription, SubSchemaDescription, describe_fields, describe_schema
from rtshape.schema.model import FieldDesc, Schema, SchemaDefinitionError, SubSchema, field, schema, sub_schema
from rtshape.schema.views import (
    Presence,
    SchemaKeys,
    SchemaPartial,
    SchemaPatch,
    SchemaPost,
    SchemaPostPartial,
    SchemaStrict,
    SchemaView,
    ViewKind,
    schema_keys,
    schema_partial,
    schema_patch,
    schema_post,
    schema_post_partial,
    schema_strict,
    schema_view,
    validate_schema,
)

__all__ = [
    # Model
    "FieldDesc",
    "Schema",
    "SchemaDefinitionError",
    "SubSchema",
    "field",
    "schema",
    "sub_schema",
    # Views
    "Presence",
    "SchemaKeys",
    "SchemaPartial",
    "SchemaPatch",
    "SchemaPost",
    "SchemaPostPartial",
    "SchemaStrict",
    "SchemaView",
    "ViewKind",
    "schema_keys",
    "schema_partial",
    "schema_patch",
    "schema_post",
    "schema_post_partial",
    "schema_strict",
    "schema_view",
    "validate_schema",
    # Descriptions
    "FieldDescription",
    "SubSchemaDescription",
    "describe_fields",
    "describe_schema",
]
