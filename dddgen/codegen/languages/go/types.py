"""
Go-specific type system for code generation.

Maps canonical model types to Go types and derives the zero values,
struct tags and imports the templates need.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional

from ...core import model
from ...core.model import Property
from ...core.naming import to_snake_case


KSUID_IMPORT = "github.com/segmentio/ksuid"
TIME_IMPORT = "time"


@dataclass(frozen=True)
class GoType:
    """
    Immutable representation of a Go type with the imports it needs.
    """

    name: str
    imports_needed: FrozenSet[str] = field(default_factory=frozenset)
    zero_value: Optional[str] = None

    @property
    def is_nilable(self) -> bool:
        return self.name.startswith(("*", "[]", "map["))


# Canonical type -> Go type
GO_TYPES: Dict[str, GoType] = {
    model.STRING: GoType("string", zero_value='""'),
    model.INT: GoType("int", zero_value="0"),
    model.INT32: GoType("int32", zero_value="0"),
    model.INT64: GoType("int64", zero_value="0"),
    model.UINT32: GoType("uint32", zero_value="0"),
    model.UINT64: GoType("uint64", zero_value="0"),
    model.FLOAT32: GoType("float32", zero_value="0.0"),
    model.FLOAT64: GoType("float64", zero_value="0.0"),
    model.BOOL: GoType("bool", zero_value="false"),
    model.TIME: GoType("time.Time", frozenset({TIME_IMPORT}), "time.Time{}"),
    model.IDENTITY: GoType("ksuid.KSUID", frozenset({KSUID_IMPORT}), "ksuid.KSUID{}"),
    model.BYTES: GoType("[]byte", zero_value="nil"),
    model.MAP: GoType("map[string]interface{}", zero_value="nil"),
    model.ANY: GoType("interface{}", zero_value="nil"),
}

# Generic aliases accepted by go_type in addition to the canonical names
_ALIASES = {
    "text": model.STRING,
    "integer": model.INT,
    "long": model.INT64,
    "float": model.FLOAT64,
    "double": model.FLOAT64,
    "boolean": model.BOOL,
    "uuid": model.IDENTITY,
    "guid": model.IDENTITY,
    "datetime": model.TIME,
    "timestamp": model.TIME,
    "date": model.TIME,
}


def resolve_go_type(type_name: str) -> GoType:
    """Resolve a canonical (or already Go) type name to a GoType."""
    if model.is_slice(type_name):
        inner = resolve_go_type(model.element_type(type_name))
        return GoType(f"[]{inner.name}", inner.imports_needed, "nil")

    canonical = _ALIASES.get(type_name.lower(), type_name)
    if canonical in GO_TYPES:
        return GO_TYPES[canonical]

    # Already a Go type or a reference to another entity
    for go_type in GO_TYPES.values():
        if go_type.name == type_name:
            return go_type
    if type_name.startswith(("*", "map[")):
        return GoType(type_name, zero_value="nil")
    return GoType(type_name, zero_value=f"{type_name}{{}}")


def go_type(type_name: str) -> str:
    """Go spelling of a canonical type."""
    return resolve_go_type(type_name).name


def zero_value(type_name: str) -> str:
    """Go zero-value literal for a canonical type."""
    return resolve_go_type(type_name).zero_value


_SAMPLE_VALUES = {
    model.STRING: '"test-{name}"',
    model.INT: "1",
    model.INT32: "1",
    model.INT64: "1",
    model.UINT32: "1",
    model.UINT64: "1",
    model.FLOAT32: "1.5",
    model.FLOAT64: "1.5",
    model.BOOL: "true",
    model.TIME: "time.Now()",
    model.IDENTITY: "ksuid.New()",
    model.BYTES: '[]byte("test")',
    model.MAP: "map[string]interface{}{}",
    model.ANY: '"test"',
}


def sample_value(prop: Property) -> str:
    """Non-zero Go literal used by generated tests to populate a field."""
    sample = _SAMPLE_VALUES.get(prop.type)
    if sample is None:
        return zero_value(prop.type)
    if prop.type == model.STRING:
        return sample.format(name=to_snake_case(prop.name))
    return sample


def json_tag(field_name: str, required: bool) -> str:
    """JSON struct tag; optional fields get omitempty."""
    json_name = to_snake_case(field_name)
    if required:
        return f'json:"{json_name}"'
    return f'json:"{json_name},omitempty"'


def validation_tag(prop: Property) -> str:
    """Validation struct tag, ``required`` first, then stored rules."""
    validations = []
    if prop.required:
        validations.append("required")
    if prop.validation:
        validations.append(prop.validation)

    if not validations:
        return ""
    return f'validate:"{",".join(validations)}"'


def struct_tags(prop: Property) -> str:
    """Complete backtick-quoted tag string for an entity struct field."""
    parts = [json_tag(prop.tags.get("json", prop.name), prop.required)]
    validate = validation_tag(prop)
    if validate:
        parts.append(validate)
    return "`" + " ".join(parts) + "`"


def go_imports(properties: Iterable[Property], extra: Iterable[str] = ()) -> List[str]:
    """Sorted import paths needed by a set of properties."""
    imports = set(extra)
    for prop in properties:
        imports.update(resolve_go_type(prop.type).imports_needed)
    return sorted(imports)
