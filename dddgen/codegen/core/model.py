"""
Canonical domain model shared by every format adapter and generator.

Adapters normalize their input documents into these structures; the
component factory renders them. No behavior beyond small invariant helpers.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum


# Canonical type vocabulary
STRING = "string"
INT = "int"
INT32 = "int32"
INT64 = "int64"
UINT32 = "uint32"
UINT64 = "uint64"
FLOAT32 = "float32"
FLOAT64 = "float64"
BOOL = "bool"
TIME = "time"
IDENTITY = "identity"
BYTES = "bytes"
MAP = "map"
ANY = "any"

PRIMITIVE_TYPES = frozenset(
    {
        STRING,
        INT,
        INT32,
        INT64,
        UINT32,
        UINT64,
        FLOAT32,
        FLOAT64,
        BOOL,
        TIME,
        IDENTITY,
        BYTES,
        MAP,
        ANY,
    }
)

SLICE_PREFIX = "[]"


def slice_of(type_name: str) -> str:
    """Canonical slice type for an element type."""
    return f"{SLICE_PREFIX}{type_name}"


def is_slice(type_name: str) -> bool:
    return type_name.startswith(SLICE_PREFIX)


def element_type(type_name: str) -> str:
    """Element type of a slice, or the type itself."""
    if is_slice(type_name):
        return type_name[len(SLICE_PREFIX) :]
    return type_name


def is_reference(type_name: str) -> bool:
    """True when the type names another schema/message rather than a primitive."""
    return element_type(type_name) not in PRIMITIVE_TYPES


class RelationType(Enum):
    """Kinds of relationship between entities."""

    ONE_TO_ONE = "one_to_one"
    ONE_TO_MANY = "one_to_many"
    MANY_TO_MANY = "many_to_many"

    @property
    def cardinality(self) -> str:
        return _CARDINALITIES[self]


_CARDINALITIES = {
    RelationType.ONE_TO_ONE: "1:1",
    RelationType.ONE_TO_MANY: "1:N",
    RelationType.MANY_TO_MANY: "N:M",
}


@dataclass
class Property:
    """A single entity attribute with its canonical type."""

    name: str
    type: str
    required: bool = False
    default_value: Optional[str] = None
    validation: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_identity(self) -> bool:
        return self.name.lower() == "id"


@dataclass
class Parameter:
    name: str
    type: str


@dataclass
class Method:
    """A domain behavior to stub on the generated entity."""

    name: str
    description: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)
    return_type: Optional[str] = None


@dataclass
class Entity:
    """A named domain concept (aggregate root)."""

    name: str
    properties: List[Property] = field(default_factory=list)
    methods: List[Method] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Seed the standard lifecycle events ahead of any custom ones."""
        defaults = default_events(self.name)
        self.events = defaults + [event for event in self.events if event not in defaults]

    def add_property(self, prop: Property) -> None:
        self.properties.append(prop)

    def get_property(self, name: str) -> Optional[Property]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    @property
    def identity_property(self) -> Optional[Property]:
        for prop in self.properties:
            if prop.is_identity:
                return prop
        return None


def default_events(entity_name: str) -> List[str]:
    return [f"{entity_name}Created", f"{entity_name}Updated", f"{entity_name}Deleted"]


def identity_property() -> Property:
    """The canonical identity property injected into entities without one."""
    return Property(name="Id", type=IDENTITY, required=True, tags={"json": "id"})


def ensure_identity(entity: Entity) -> Entity:
    """
    Return an entity guaranteed to carry exactly one identity property.

    The input is never mutated; a copy with the canonical identity
    property prepended is returned when none is present.
    """
    if entity.identity_property is not None:
        return entity
    return replace(entity, properties=[identity_property()] + list(entity.properties))


@dataclass
class Relation:
    """Directed relationship inferred from a reference-typed property."""

    from_entity: str
    to_entity: str
    type: RelationType = RelationType.ONE_TO_ONE
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def cardinality(self) -> str:
        return self.type.cardinality


@dataclass(frozen=True)
class DomainModel:
    """Format-agnostic result of one adapter invocation."""

    project_name: str
    entities: Tuple[Entity, ...] = ()
    relations: Tuple[Relation, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "entities", tuple(self.entities))
        object.__setattr__(self, "relations", tuple(self.relations))

    def get_entity(self, name: str) -> Optional[Entity]:
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None

    @property
    def entity_names(self) -> List[str]:
        return [entity.name for entity in self.entities]


@dataclass(frozen=True)
class GeneratedFile:
    """A rendered artifact; replaced or skipped as a whole, never merged."""

    path: str
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def artifact_type(self) -> Optional[str]:
        return self.metadata.get("type")
