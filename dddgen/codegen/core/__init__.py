"""
Core code generation components.

Canonical model, naming and template helpers, the format adapter contract,
the component factory and the merge policy shared by every format.
"""

from .errors import (
    ArgumentError,
    CliError,
    ErrorType,
    FileSystemError,
    GenerationError,
    NetworkError,
    NoEntitiesError,
    ParseError,
    TemplateError,
    ValidationError,
)
from .model import (
    DomainModel,
    Entity,
    GeneratedFile,
    Method,
    Parameter,
    Property,
    Relation,
    RelationType,
    ensure_identity,
)
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, create_template_engine
from .parser import DomainParser
from .merge import MergeResult, preserve_existing_files
from .generator import ComponentFactory, ENTITY_ARTIFACTS

__all__ = [
    # Error hierarchy
    "CliError",
    "ErrorType",
    "ValidationError",
    "ParseError",
    "NoEntitiesError",
    "GenerationError",
    "TemplateError",
    "FileSystemError",
    "NetworkError",
    "ArgumentError",
    # Canonical model
    "DomainModel",
    "Entity",
    "Property",
    "Method",
    "Parameter",
    "Relation",
    "RelationType",
    "GeneratedFile",
    "ensure_identity",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "create_template_engine",
    # Adapters, generation and merging
    "DomainParser",
    "ComponentFactory",
    "ENTITY_ARTIFACTS",
    "MergeResult",
    "preserve_existing_files",
]
