"""
Configuration management for code generation.

Handles loading and merging configuration from JSON or YAML files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ...logging_config import get_logger
from .errors import ValidationError

logger = get_logger(__name__)


class ConfigError(ValidationError):
    """Exception raised for configuration-related errors."""
    pass


DEFAULT_FRAMEWORK_MODULE = "github.com/akeemphilbert/pericarp"


@dataclass
class GeneratorConfig:
    """Settings for the component factory and project scaffold."""

    # Go module path of the generated project; project name when empty
    module_path: str = ""
    framework_module: str = DEFAULT_FRAMEWORK_MODULE
    go_version: str = "1.21"

    # Layer directories
    domain_dir: str = "internal/domain"
    application_dir: str = "internal/application"
    infrastructure_dir: str = "internal/infrastructure"

    generate_tests: bool = True
    workers: int = 1

    # Custom settings (template-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def module_for(self, project_name: str) -> str:
        return self.module_path or project_name


class ConfigManager:
    """Manages configuration loading and merging."""

    SUPPORTED_SUFFIXES = {".json", ".yaml", ".yml"}

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON or YAML configuration file

        Returns:
            Defaults merged with file settings, then overrides
        """
        base_config: Dict[str, Any] = {}

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from a JSON or YAML file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in self.SUPPORTED_SUFFIXES:
            raise ConfigError(f"Configuration file must be JSON or YAML: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if suffix == ".json":
                    config = json.load(f)
                else:
                    config = yaml.safe_load(f) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Invalid configuration file {path}", e) from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}", e) from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig; unknown keys go into custom."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to a JSON or YAML file."""
        path = Path(output_path)
        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                if path.suffix.lower() == ".json":
                    json.dump(config_dict, f, indent=2, ensure_ascii=False)
                else:
                    yaml.safe_dump(config_dict, f, sort_keys=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}", e) from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        for name in ("domain_dir", "application_dir", "infrastructure_dir"):
            value = getattr(config, name)
            if not value or Path(value).is_absolute() or ".." in Path(value).parts:
                warnings.append(f"Invalid {name}: {value!r} must be a relative path")

        if config.workers < 1:
            warnings.append(f"Invalid workers: {config.workers}")

        if config.module_path and " " in config.module_path:
            warnings.append(f"Invalid Go module path: {config.module_path}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON or YAML configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)
