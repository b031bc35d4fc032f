"""
Tests for schema gate and formatting.
"""

from __future__ import annotations

from typing import Any

import pytest

from pdfschema.config.errors import ErrorCode, InvalidSchemaError

from .validator import format_schema_for_openai, is_full_schema, validate_schema

FULL_SCHEMA = {
    "type": "object",
    "properties": {
        "invoiceNumber": {"type": "string"},
        "lineItems": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {"amount": {"type": "number"}},
                "required": ["amount"],
            },
        },
    },
    "required": ["invoiceNumber"],
}


def test_full_schema_unchanged() -> None:
    assert is_full_schema(FULL_SCHEMA)
    assert format_schema_for_openai(FULL_SCHEMA) is FULL_SCHEMA


def test_shorthand_schema_wrapped() -> None:
    shorthand = {"name": {"type": "string"}, "total": {"type": "number"}}
    assert format_schema_for_openai(shorthand) == {
        "type": "object",
        "properties": shorthand,
        "required": ["name", "total"],
        "additionalProperties": False,
    }


@pytest.mark.parametrize(
    "schema",
    [
        FULL_SCHEMA,
        {"invoiceNumber": {"type": "string"}},
        {"value": {"type": ["string", "number"]}},
        {"status": {"type": "string", "enum": ["paid", "due"]}},
    ],
)
def test_valid_schemas(schema: dict[str, Any]) -> None:
    assert validate_schema(schema) is True


@pytest.mark.parametrize("schema", [None, "schema", 42, ["type", "object"]])
def test_non_object_schema(schema: Any) -> None:
    with pytest.raises(InvalidSchemaError, match="Schema must be a non-null object"):
        validate_schema(schema)


def test_empty_schema() -> None:
    with pytest.raises(InvalidSchemaError, match="Schema cannot be empty") as exc_info:
        validate_schema({})
    assert exc_info.value.code == ErrorCode.REQUEST_INVALID_SCHEMA


@pytest.mark.parametrize(
    "schema",
    [
        {"name": {"type": "invalidType"}},
        {"type": "object", "properties": "not an object"},
        {"type": "object", "required": "not an array"},
        {"type": "array", "items": "not an object"},
    ],
)
def test_meta_schema_violations(schema: dict[str, Any]) -> None:
    with pytest.raises(InvalidSchemaError, match="Schema validation failed"):
        validate_schema(schema)
