"""
Domain-driven code generation module.

Turns OpenAPI and Protocol Buffers documents into Go aggregate scaffolding.
Format adapters live in ``dddgen.codegen.formats`` and are looked up through
``dddgen.codegen.registry``.
"""

from .core import (
    CliError,
    ComponentFactory,
    DomainModel,
    DomainParser,
    Entity,
    GeneratedFile,
    GeneratorConfig,
    Property,
    TemplateEngine,
    create_template_engine,
    load_config,
    preserve_existing_files,
)

__all__ = [
    "CliError",
    "ComponentFactory",
    "DomainModel",
    "DomainParser",
    "Entity",
    "GeneratedFile",
    "GeneratorConfig",
    "Property",
    "TemplateEngine",
    "create_template_engine",
    "load_config",
    "preserve_existing_files",
]
