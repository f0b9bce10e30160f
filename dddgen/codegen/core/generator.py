"""
Component factory: renders the canonical model into Go artifacts.

Each entity produces a fixed, ordered batch of files spread over the
domain, application and infrastructure layers. Project scaffold files are
rendered separately from project metadata only.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import GenerationError
from .model import INT, DomainModel, Entity, GeneratedFile, Property, ensure_identity, identity_property
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)

DEFAULT_MODULE = "example.com/project"

DOMAIN = "domain"
APPLICATION = "application"
INFRASTRUCTURE = "infrastructure"


@dataclass(frozen=True)
class Artifact:
    """One entry of the per-entity artifact sequence."""

    type: str
    template: str
    layer: str
    suffix: str
    is_test: bool = False

    def path_for(self, entity_name: str, layer_dir: str) -> str:
        return str(PurePosixPath(layer_dir) / f"{entity_name.lower()}{self.suffix}")


ENTITY_ARTIFACTS = (
    Artifact("entity", "entity.go", DOMAIN, ".go"),
    Artifact("events", "entity_events.go", DOMAIN, "_events.go"),
    Artifact("repository_interface", "repository_interface.go", DOMAIN, "_repository.go"),
    Artifact("repository_implementation", "repository_implementation.go", INFRASTRUCTURE, "_repository.go"),
    Artifact("commands", "commands.go", APPLICATION, "_commands.go"),
    Artifact("queries", "queries.go", APPLICATION, "_queries.go"),
    Artifact("command_handlers", "command_handlers.go", APPLICATION, "_command_handlers.go"),
    Artifact("query_handlers", "query_handlers.go", APPLICATION, "_query_handlers.go"),
    Artifact("service", "service.go", APPLICATION, "_service.go"),
    Artifact("entity_test", "entity_test.go", DOMAIN, "_test.go", is_test=True),
    Artifact("events_test", "events_test.go", DOMAIN, "_events_test.go", is_test=True),
    Artifact("repository_test", "repository_test.go", INFRASTRUCTURE, "_repository_test.go", is_test=True),
    Artifact("handlers_test", "handlers_test.go", APPLICATION, "_handlers_test.go", is_test=True),
    Artifact("service_test", "service_test.go", APPLICATION, "_service_test.go", is_test=True),
)

ARTIFACTS_BY_TYPE = {artifact.type: artifact for artifact in ENTITY_ARTIFACTS}


@dataclass
class Operation:
    """A command or query shape handed to the templates."""

    name: str
    description: str
    properties: List[Property]
    return_type: Optional[str] = None


def create_commands(entity: Entity) -> List[Operation]:
    """Create/Update/Delete command shapes for an entity."""
    lower = entity.name.lower()
    required = [p for p in entity.properties if p.required and not p.is_identity]
    return [
        Operation(f"Create{entity.name}Command", f"create a new {lower}", required),
        Operation(f"Update{entity.name}Command", f"update an existing {lower}", list(entity.properties)),
        Operation(f"Delete{entity.name}Command", f"delete a {lower}", [identity_property()]),
    ]


def create_queries(entity: Entity) -> List[Operation]:
    """GetById/List query shapes for an entity."""
    lower = entity.name.lower()
    return [
        Operation(
            f"Get{entity.name}ByIdQuery",
            f"get a {lower} by ID",
            [identity_property()],
            f"*{entity.name}",
        ),
        Operation(
            f"List{entity.name}Query",
            f"list all {lower}",
            [
                Property("Limit", INT, default_value="10", tags={"json": "limit"}),
                Property("Offset", INT, default_value="0", tags={"json": "offset"}),
            ],
            f"[]{entity.name}",
        ),
    ]


class ComponentFactory:
    """Renders per-entity artifact batches and project scaffold files."""

    def __init__(
        self,
        engine: Optional[TemplateEngine] = None,
        config: Optional[GeneratorConfig] = None,
    ):
        self.engine = engine or create_template_engine()
        self.config = config or GeneratorConfig()

    # Entity artifacts

    def generate_entity_files(self, entity: Entity, project_name: str = "") -> List[GeneratedFile]:
        """
        Render the full artifact batch for one entity.

        The entity gets an identity property first when it has none. Any
        render failure discards the whole batch.

        Raises:
            GenerationError: Naming the entity and the failing artifact type
        """
        entity = ensure_identity(entity)
        context = self._entity_context(entity, project_name)
        logger.debug("Generating components for entity: %s", entity.name)

        files = []
        for artifact in ENTITY_ARTIFACTS:
            if artifact.is_test and not self.config.generate_tests:
                continue
            files.append(self._render_artifact(entity, artifact, context))
        return files

    def generate_artifact(self, entity: Entity, artifact_type: str, project_name: str = "") -> GeneratedFile:
        """Render a single artifact of the per-entity sequence."""
        artifact = ARTIFACTS_BY_TYPE.get(artifact_type)
        if artifact is None:
            raise GenerationError(f"unknown artifact type: {artifact_type}")
        entity = ensure_identity(entity)
        return self._render_artifact(entity, artifact, self._entity_context(entity, project_name))

    def generate_entity(self, entity: Entity, project_name: str = "") -> GeneratedFile:
        return self.generate_artifact(entity, "entity", project_name)

    def generate_commands(self, entity: Entity, project_name: str = "") -> GeneratedFile:
        return self.generate_artifact(entity, "commands", project_name)

    def generate_queries(self, entity: Entity, project_name: str = "") -> GeneratedFile:
        return self.generate_artifact(entity, "queries", project_name)

    def generate_model(self, model: DomainModel, workers: Optional[int] = None) -> List[GeneratedFile]:
        """
        Render every entity of a model, batches concatenated in entity order.

        Args:
            model: Parsed domain model
            workers: Thread count; defaults to the configured value
        """
        workers = workers or self.config.workers

        def render(entity: Entity) -> List[GeneratedFile]:
            return self.generate_entity_files(entity, model.project_name)

        if workers > 1 and len(model.entities) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                batches = list(pool.map(render, model.entities))
        else:
            batches = [render(entity) for entity in model.entities]

        files = [generated for batch in batches for generated in batch]
        logger.info(
            "Generated %d files for %d entities", len(files), len(model.entities)
        )
        return files

    # Project scaffold

    def generate_project_files(self, model: DomainModel) -> List[GeneratedFile]:
        """Render main.go, go.mod, README.md, Makefile and config.yaml.example."""
        project = model.project_name
        logger.debug("Generating project files for: %s", project)
        context = self._project_context(model)

        files = [
            self._render_project(project, "main.go", f"cmd/{project}/main.go", "main", context),
            self._render_project(project, "go.mod", "go.mod", "module", context),
            self._render_project(project, "README.md", "README.md", "documentation", context),
            self.generate_makefile(project),
            self._render_project(project, "config.yaml", "config.yaml.example", "configuration", context),
        ]
        return files

    def generate_makefile(self, project_name: str) -> GeneratedFile:
        context = {
            "project_name": project_name,
            "has_database": True,
            "module": self.config.module_for(project_name) or DEFAULT_MODULE,
        }
        return self._render_project(project_name, "Makefile", "Makefile", "makefile", context)

    # Helpers

    def _render_artifact(self, entity: Entity, artifact: Artifact, context: Dict[str, Any]) -> GeneratedFile:
        try:
            content = self.engine.render(artifact.template, context)
        except Exception as e:
            raise GenerationError(
                f"failed to generate {artifact.type} for entity {entity.name}", e
            ) from e

        path = artifact.path_for(entity.name, self._layer_dir(artifact.layer))
        logger.debug("Rendered %s -> %s", artifact.template, path)
        return GeneratedFile(
            path=path,
            content=content,
            metadata={"type": artifact.type, "entity": entity.name},
        )

    def _render_project(
        self, project: str, template: str, path: str, file_type: str, context: Dict[str, Any]
    ) -> GeneratedFile:
        try:
            content = self.engine.render(template, context)
        except Exception as e:
            raise GenerationError(f"failed to generate {path} for {project}", e) from e
        return GeneratedFile(path=path, content=content, metadata={"type": file_type, "project": project})

    def _layer_dir(self, layer: str) -> str:
        return {
            DOMAIN: self.config.domain_dir,
            APPLICATION: self.config.application_dir,
            INFRASTRUCTURE: self.config.infrastructure_dir,
        }[layer]

    def _base_context(self, project_name: str) -> Dict[str, Any]:
        module = self.config.module_for(project_name) or DEFAULT_MODULE
        return {
            "project_name": project_name,
            "module": module,
            "framework": self.config.framework_module,
            "go_version": self.config.go_version,
            "domain_dir": self.config.domain_dir,
            "application_dir": self.config.application_dir,
            "infrastructure_dir": self.config.infrastructure_dir,
            "domain_package": PurePosixPath(self.config.domain_dir).name,
            "application_package": PurePosixPath(self.config.application_dir).name,
            "infrastructure_package": PurePosixPath(self.config.infrastructure_dir).name,
            "domain_import": f"{module}/{self.config.domain_dir}",
            "application_import": f"{module}/{self.config.application_dir}",
            "infrastructure_import": f"{module}/{self.config.infrastructure_dir}",
            "custom": dict(self.config.custom),
        }

    def _entity_context(self, entity: Entity, project_name: str) -> Dict[str, Any]:
        context = self._base_context(project_name)
        context.update(
            {
                "entity": entity,
                "name": entity.name,
                "properties": entity.properties,
                "identity": entity.identity_property,
                "events": entity.events,
                "methods": entity.methods,
                "commands": create_commands(entity),
                "queries": create_queries(entity),
            }
        )
        return context

    def _project_context(self, model: DomainModel) -> Dict[str, Any]:
        context = self._base_context(model.project_name)
        context.update(
            {
                "model": model,
                "entities": model.entities,
                "metadata": model.metadata,
            }
        )
        return context
