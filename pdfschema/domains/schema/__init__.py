"""
Schema Domain - Extraction schema validation and formatting.
"""

from .validator import format_schema_for_openai, is_full_schema, validate_schema

__all__ = ["format_schema_for_openai", "is_full_schema", "validate_schema"]
