"""
OpenAPI schema to canonical type mapping.

Pure functions over schema mappings; nothing here touches the filesystem.
"""

import json
from typing import Any, Dict, List, Optional

from ...core import model

AGGREGATE_EXTENSION = "x-aggregate"
REF_KEY = "$ref"

STRING_FORMATS = {
    "uuid": model.IDENTITY,
    "date": model.TIME,
    "date-time": model.TIME,
    "byte": model.BYTES,
    "binary": model.BYTES,
}

INTEGER_FORMATS = {
    "int32": model.INT32,
    "int64": model.INT64,
}

NUMBER_FORMATS = {
    "float": model.FLOAT32,
    "double": model.FLOAT64,
}

ARRAY_ITEM_TYPES = {
    "string": model.STRING,
    "integer": model.INT,
    "number": model.FLOAT64,
    "boolean": model.BOOL,
}

VALIDATED_FORMATS = ("email", "uri")


def schema_type(schema: Dict[str, Any]) -> Optional[str]:
    """
    The schema's ``type`` keyword.

    OpenAPI 3.1 allows a list of types; the first non-``null`` entry wins.
    """
    value = schema.get("type")
    if isinstance(value, list):
        for entry in value:
            if entry != "null":
                return entry
        return None
    return value


def is_aggregate(schema: Any) -> bool:
    """True for object schemas marked ``x-aggregate: true`` (bool or string)."""
    if not isinstance(schema, dict) or schema_type(schema) != "object":
        return False

    marker = schema.get(AGGREGATE_EXTENSION)
    if isinstance(marker, bool):
        return marker
    if isinstance(marker, str):
        return marker.lower() == "true"
    return False


def reference_of(schema: Dict[str, Any]) -> Optional[str]:
    """
    The ``$ref`` a property points at, if any.

    A single-entry ``allOf`` wrapping a reference is treated the same as a
    bare reference.
    """
    ref = schema.get(REF_KEY)
    if isinstance(ref, str):
        return ref

    all_of = schema.get("allOf")
    if isinstance(all_of, list) and len(all_of) == 1 and isinstance(all_of[0], dict):
        ref = all_of[0].get(REF_KEY)
        if isinstance(ref, str):
            return ref
    return None


def reference_name(ref: str) -> str:
    """Last path segment of a reference (``#/components/schemas/User`` -> ``User``)."""
    return ref.rstrip("/").split("/")[-1]


def scalar_type(schema: Dict[str, Any]) -> str:
    """Canonical type of a non-reference, non-array schema."""
    kind = schema_type(schema)
    fmt = schema.get("format")

    if kind == "string":
        return STRING_FORMATS.get(fmt, model.STRING)
    if kind == "integer":
        return INTEGER_FORMATS.get(fmt, model.INT)
    if kind == "number":
        return NUMBER_FORMATS.get(fmt, model.FLOAT64)
    if kind == "boolean":
        return model.BOOL
    if kind == "object":
        return model.MAP
    return model.ANY


def array_item_type(items: Any) -> str:
    """Canonical slice type for a primitive ``items`` schema."""
    if not isinstance(items, dict):
        return model.slice_of(model.ANY)
    return model.slice_of(ARRAY_ITEM_TYPES.get(schema_type(items), model.ANY))


def format_scalar(value: Any) -> str:
    """
    String-encode a schema value.

    Booleans are lower-cased and integral floats lose their decimals, so
    ``1.0`` becomes ``1``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True)
    return str(value)


def string_validation(schema: Dict[str, Any]) -> List[str]:
    """Validation tokens for a string schema, in a fixed order."""
    tokens = []

    min_length = schema.get("minLength")
    if isinstance(min_length, int) and min_length > 0:
        tokens.append(f"min={min_length}")

    max_length = schema.get("maxLength")
    if isinstance(max_length, int) and max_length > 0:
        tokens.append(f"max={max_length}")

    pattern = schema.get("pattern")
    if pattern:
        tokens.append(f"regexp={pattern}")

    fmt = schema.get("format")
    if fmt in VALIDATED_FORMATS:
        tokens.append(fmt)

    return tokens


def numeric_validation(schema: Dict[str, Any]) -> List[str]:
    """Validation tokens for an integer or number schema."""
    tokens = []
    for keyword, token in (("minimum", "min"), ("maximum", "max")):
        value = schema.get(keyword)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            tokens.append(f"{token}={format_scalar(value)}")
    return tokens


def validation_rule(schema: Dict[str, Any]) -> Optional[str]:
    """Comma-joined validation rule for a property schema, or None."""
    kind = schema_type(schema)
    if kind == "string":
        tokens = string_validation(schema)
    elif kind in ("integer", "number"):
        tokens = numeric_validation(schema)
    else:
        tokens = []
    return ",".join(tokens) if tokens else None
