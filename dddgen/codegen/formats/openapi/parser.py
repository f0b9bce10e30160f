"""
OpenAPI format adapter.

Converts the aggregate-marked object schemas of an OpenAPI (or Swagger)
document into canonical entities. Non-aggregate schemas only ever show
up as relation targets.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from ....logging_config import get_logger
from ....utils import load_document
from ...core.errors import NoEntitiesError, ParseError
from ...core.model import DomainModel, Entity, Property, Relation, RelationType, slice_of
from ...core.naming import project_slug
from ...core.parser import DomainParser
from . import types

logger = get_logger(__name__)


class OpenAPIParser(DomainParser):
    """Adapter for OpenAPI 3.x and Swagger 2.0 documents in YAML or JSON."""

    def supported_extensions(self) -> Set[str]:
        return {".yaml", ".yml", ".json"}

    def format_name(self) -> str:
        return "OpenAPI"

    def validate(self, file_path: Union[str, Path]) -> None:
        path = self._check_path(file_path)
        document = self._load(path)
        self._aggregate_schemas(document, path)

    def parse(self, file_path: Union[str, Path]) -> DomainModel:
        path = self._check_path(file_path)
        document = self._load(path)
        aggregates = self._aggregate_schemas(document, path)

        entities = []
        relations: List[Relation] = []
        for name, schema in aggregates:
            entity, entity_relations = self._convert_schema(name, schema)
            entities.append(entity)
            relations.extend(entity_relations)

        info = document.get("info") if isinstance(document.get("info"), dict) else {}
        model = DomainModel(
            project_name=project_slug(info.get("title")) or path.stem,
            entities=entities,
            relations=relations,
            metadata={
                "source_format": "openapi",
                "source_file": str(path),
                "openapi_info": info,
            },
        )
        logger.info(
            "Parsed %d entities and %d relations from %s",
            len(model.entities),
            len(model.relations),
            path,
        )
        return model

    # Validation stages

    def _load(self, path: Path) -> Dict[str, Any]:
        document = load_document(path)
        if not isinstance(document, dict):
            raise ParseError(f"OpenAPI document must be a mapping: {path}")
        if "openapi" not in document and "swagger" not in document:
            raise ParseError(f"not an OpenAPI document (missing openapi version): {path}")
        return document

    def _schemas(self, document: Dict[str, Any], path: Path) -> Dict[str, Any]:
        if "swagger" in document and "openapi" not in document:
            schemas = document.get("definitions")
        else:
            components = document.get("components")
            schemas = components.get("schemas") if isinstance(components, dict) else None

        if not isinstance(schemas, dict):
            raise ParseError(f"OpenAPI file must contain a components.schemas section: {path}")
        return schemas

    def _aggregate_schemas(self, document: Dict[str, Any], path: Path) -> List[Tuple[str, Dict[str, Any]]]:
        aggregates = [
            (name, schema)
            for name, schema in self._schemas(document, path).items()
            if types.is_aggregate(schema)
        ]
        if not aggregates:
            raise NoEntitiesError(
                f"nothing to generate: no object schema with "
                f"{types.AGGREGATE_EXTENSION}: true in {path}"
            )
        return aggregates

    # Conversion

    def _convert_schema(self, name: str, schema: Dict[str, Any]) -> Tuple[Entity, List[Relation]]:
        required = set(schema.get("required") or [])
        entity = Entity(name=name, metadata={"openapi_schema": schema})
        relations = []

        properties = schema.get("properties") or {}
        for prop_name, prop_schema in properties.items():
            if not isinstance(prop_schema, dict):
                continue
            prop, relation = self._convert_property(name, prop_name, prop_schema)
            prop.required = prop_name in required
            entity.add_property(prop)
            if relation is not None:
                relations.append(relation)

        logger.debug("Converted schema %s with %d properties", name, len(entity.properties))
        return entity, relations

    def _convert_property(
        self, entity_name: str, name: str, schema: Dict[str, Any]
    ) -> Tuple[Property, Optional[Relation]]:
        relation = None
        validation = None

        ref = types.reference_of(schema)
        if ref is not None:
            prop_type = types.reference_name(ref)
            relation = self._relation(entity_name, name, ref, RelationType.ONE_TO_ONE)
        elif types.schema_type(schema) == "array":
            items = schema.get("items")
            item_ref = types.reference_of(items) if isinstance(items, dict) else None
            if item_ref is not None:
                prop_type = slice_of(types.reference_name(item_ref))
                relation = self._relation(entity_name, name, item_ref, RelationType.ONE_TO_MANY)
            else:
                prop_type = types.array_item_type(items)
        else:
            prop_type = types.scalar_type(schema)
            validation = types.validation_rule(schema)

        tags = {"json": name}
        if validation:
            tags["validate"] = validation

        default = schema.get("default")
        prop = Property(
            name=name,
            type=prop_type,
            default_value=types.format_scalar(default) if default is not None else None,
            validation=validation,
            tags=tags,
            metadata={"openapi_schema": schema},
        )
        return prop, relation

    def _relation(self, entity_name: str, prop_name: str, ref: str, kind: RelationType) -> Relation:
        return Relation(
            from_entity=entity_name,
            to_entity=types.reference_name(ref),
            type=kind,
            metadata={"property_name": prop_name, "reference": ref},
        )
