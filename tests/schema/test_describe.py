# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for schema descriptions."""

from rtshape.schema.describe import FieldDescription, SubSchemaDescription, describe_fields, describe_schema
from rtshape.schema.model import field, schema, sub_schema
from rtshape.types.presence import optional
from rtshape.types.scalar import number, string

# ###############
# Public Interface
# ###############

_LINE = schema({"sku": field(string, description="stock keeping unit"), "qty": number})

_ORDER = schema(
    {
        "id": field(string, description="order id"),
        "comment": optional(string),
        "lines": sub_schema(_LINE, multiple=True, description="ordered items"),
    },
    keys=["id"],
)


def test_describe_fields_models() -> None:
    """describe_fields returns one model per field in declaration order."""
    descriptions = describe_fields(_ORDER)

    assert [description.name for description in descriptions] == ["id", "comment", "lines"]
    assert isinstance(descriptions[0], FieldDescription)
    assert isinstance(descriptions[2], SubSchemaDescription)
    assert descriptions[1].type == "string | undefined"
    assert descriptions[2].type == "{ sku: string, qty: number }[]"


def test_describe_schema_plain_data() -> None:
    """describe_schema produces plain dicts with nested sub-schema descriptions."""
    assert describe_schema(_ORDER) == [
        {"kind": "field", "name": "id", "type": "string", "description": "order id"},
        {"kind": "field", "name": "comment", "type": "string | undefined", "description": None},
        {
            "kind": "sub-schema",
            "name": "lines",
            "type": "{ sku: string, qty: number }[]",
            "multiple": True,
            "optional": False,
            "description": "ordered items",
            "schema": [
                {"kind": "field", "name": "sku", "type": "string", "description": "stock keeping unit"},
                {"kind": "field", "name": "qty", "type": "number", "description": None},
            ],
        },
    ]


def test_describe_empty_schema() -> None:
    """An empty schema has an empty description."""
    assert describe_schema(schema({})) == []


def test_description_round_trips_through_model() -> None:
    """A dumped description validates back into the same models."""
    dumped = describe_schema(_ORDER)[2]
    restored = SubSchemaDescription.model_validate(dumped)
    assert restored.entries[0].name == "sku"
    assert isinstance(restored.entries[1], FieldDescription)
