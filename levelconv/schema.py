"""
JSON Schema contracts for converter inputs.

Each input document is checked against its schema before it is decoded
into typed structures. The checks are pure predicates over the generic
JSON value tree returned by ``json.loads``; nothing here touches numpy
or the decoded volume types.

Schemas:
- DENSE_VOLUME_SCHEMA: 3-level nested array of integers [x][y][z]
- STRUCTURE_SCHEMA: paletted structure document (size, indices, palette)
- BLOCK_DICTIONARY_SCHEMA: {"minecraft:<identifier>": <block id>, ...}
"""

import json
from typing import Any, Dict, List, Union

from jsonschema import Draft7Validator

from levelconv.errors import SchemaError

BLOCK_NAME_PATTERN = r"^minecraft:[a-z0-9_.\-/]+$"

# Block ids and palette indices are stored as int64 arrays
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

BLOCK_ID_SCHEMA: Dict[str, Any] = {
    "type": "integer",
    "minimum": INT64_MIN,
    "maximum": INT64_MAX,
}

DENSE_VOLUME_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "array",
        "items": {
            "type": "array",
            "items": BLOCK_ID_SCHEMA,
        },
    },
}

STRUCTURE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["size", "structure"],
    "properties": {
        "size": {
            "type": "array",
            "items": {"type": "integer", "minimum": 1},
            "minItems": 3,
            "maxItems": 3,
        },
        "structure": {
            "type": "object",
            "required": ["block_indices", "palette"],
            "properties": {
                "block_indices": {
                    "type": "array",
                    "minItems": 1,
                    "items": {
                        "type": "array",
                        "minItems": 1,
                        "items": BLOCK_ID_SCHEMA,
                    },
                },
                "palette": {
                    "type": "object",
                    "required": ["default"],
                    "properties": {
                        "default": {
                            "type": "object",
                            "required": ["block_palette"],
                            "properties": {
                                "block_palette": {
                                    "type": "array",
                                    "minItems": 1,
                                    "items": {
                                        "type": "object",
                                        "required": ["name"],
                                        "properties": {
                                            "name": {"type": "string"},
                                        },
                                    },
                                },
                            },
                        },
                    },
                },
            },
        },
    },
}

BLOCK_DICTIONARY_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "propertyNames": {"pattern": BLOCK_NAME_PATTERN},
    "additionalProperties": BLOCK_ID_SCHEMA,
}


def _format_error(error) -> str:
    path = "/".join(str(p) for p in error.absolute_path) or "<root>"
    return f"{path}: {error.message}"


def validate_document(document: Any, schema: Dict[str, Any]) -> List[str]:
    """
    Check a decoded JSON value against a schema.

    Args:
        document: Value tree as returned by json.loads
        schema: One of the schema documents in this module

    Returns:
        List of violation messages, ordered by document path
        (empty if valid)
    """
    validator = Draft7Validator(schema)
    errors = sorted(
        validator.iter_errors(document),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    return [_format_error(e) for e in errors]


def is_valid(document: Any, schema: Dict[str, Any]) -> bool:
    """Return True if the document satisfies the schema."""
    return Draft7Validator(schema).is_valid(document)


def load_json(raw: Union[bytes, str], what: str = "input") -> Any:
    """
    Decode raw UTF-8 JSON.

    Raises:
        SchemaError: If the bytes are not valid UTF-8 JSON
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchemaError(f"{what} is not valid UTF-8", [str(e)]) from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise SchemaError(f"{what} is not valid JSON", [str(e)]) from e


def require_valid(document: Any, schema: Dict[str, Any], what: str = "input") -> None:
    """
    Raise SchemaError unless the document satisfies the schema.

    The exception message is the generic "<what> is not valid"; the
    individual violations are kept on ``SchemaError.errors``.
    """
    errors = validate_document(document, schema)
    if errors:
        raise SchemaError(f"{what} is not valid", errors)
