"""
Schema Gate - Syntactic validation of caller-supplied extraction schemas.

Two schema shapes are accepted:

- A full JSON schema whose top-level ``type`` is ``"object"``.
- A shorthand property map, e.g. ``{"invoiceNumber": {"type": "string"}}``,
  which is wrapped into an object schema with every key required.

Validation checks the (formatted) schema against the Draft 7 meta-schema.
Instances are not validated here.
"""

from __future__ import annotations

import logging
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from pdfschema.config.errors import InvalidSchemaError

logger = logging.getLogger(__name__)

__all__ = ["format_schema_for_openai", "is_full_schema", "validate_schema"]


def is_full_schema(schema: dict[str, Any]) -> bool:
    """Whether a schema is already a top-level object schema."""
    return schema.get("type") == "object"


def format_schema_for_openai(schema: dict[str, Any]) -> dict[str, Any]:
    """
    Shape a schema for the structured-output ``json_schema`` response format.

    Args:
        schema: Full object schema or shorthand property map

    Returns:
        The schema unchanged if already an object schema, otherwise the
        property map wrapped with all keys required and no extra properties
    """
    if is_full_schema(schema):
        return schema

    return {
        "type": "object",
        "properties": schema,
        "required": list(schema.keys()),
        "additionalProperties": False,
    }


def validate_schema(schema: Any) -> bool:
    """
    Check that a schema is usable for extraction.

    Returns:
        True if valid

    Raises:
        InvalidSchemaError: Schema is not an object, is empty, or fails the
            JSON Schema meta-schema check
    """
    if not isinstance(schema, dict):
        raise InvalidSchemaError("Schema must be a non-null object")

    if not schema:
        raise InvalidSchemaError("Schema cannot be empty")

    try:
        Draft7Validator.check_schema(format_schema_for_openai(schema))
    except SchemaError as e:
        path = "/".join(str(p) for p in e.path)
        logger.debug("Schema rejected at '%s': %s", path, e.message)
        raise InvalidSchemaError(
            f"Schema validation failed: {e.message}", {"path": path}
        ) from e

    return True
