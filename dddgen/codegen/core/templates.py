"""
Template engine wrapper for code generation.

Loads the fixed template library once and renders named templates with
the helper library exposed as Jinja2 filters and globals.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
)

from ...logging_config import get_logger
from .errors import TemplateError
from .model import Property
from . import naming

logger = get_logger(__name__)

TEMPLATE_SUFFIX = ".j2"


def filter_required(properties: List[Property]) -> List[Property]:
    return [prop for prop in properties if prop.required]


def filter_optional(properties: List[Property]) -> List[Property]:
    return [prop for prop in properties if not prop.required]


def is_identity(prop: Property) -> bool:
    return prop.is_identity


def _default_helpers() -> Dict[str, Callable]:
    from ..languages.go import naming as go_naming
    from ..languages.go import types as go_types

    return {
        "lower": lambda value: str(value).lower(),
        "upper": lambda value: str(value).upper(),
        "camel_case": naming.to_camel_case,
        "pascal_case": naming.to_pascal_case,
        "snake_case": naming.to_snake_case,
        "kebab_case": naming.to_kebab_case,
        "plural": naming.pluralize,
        "singular": naming.singularize,
        "zero_value": go_types.zero_value,
        "sample_value": go_types.sample_value,
        "go_type": go_types.go_type,
        "json_tag": go_types.json_tag,
        "validation_tag": go_types.validation_tag,
        "struct_tags": go_types.struct_tags,
        "go_imports": go_types.go_imports,
        "filter_required": filter_required,
        "filter_optional": filter_optional,
        "is_identity": is_identity,
        "param_name": go_naming.param_name,
        "receiver": go_naming.receiver_name,
        "indent_lines": _indent_filter,
        "comment": _comment_filter,
    }


def _indent_filter(value: str, spaces: int = 4) -> str:
    """Indent all non-blank lines in a string."""
    indent = " " * spaces
    lines = str(value).split("\n")
    return "\n".join(indent + line if line.strip() else line for line in lines)


def _comment_filter(value: str, style: str = "//") -> str:
    """Add comment markers to each line."""
    lines = str(value).split("\n")
    return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        templates: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing ``*.j2`` template files
            templates: Additional in-memory templates keyed by name
        """
        self._overrides: Dict[str, str] = dict(templates or {})
        loaders = [DictLoader(self._overrides)]
        if template_dir is not None:
            if not template_dir.is_dir():
                raise TemplateError(
                    str(template_dir), f"template directory not found: {template_dir}"
                )
            loaders.append(FileSystemLoader(str(template_dir)))

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        for name, helper in _default_helpers().items():
            self._env.filters[name] = helper
            self._env.globals[name] = helper

        logger.debug("Template engine ready with %d templates", len(self.list_templates()))

    def render(self, template_name: str, data: Any = None) -> str:
        """
        Render a named template.

        Args:
            template_name: Stable template identifier (e.g. ``entity.go``)
            data: Mapping whose keys become template variables; any other
                value is exposed as ``data``

        Returns:
            Rendered template content

        Raises:
            TemplateError: Unknown template or execution failure
        """
        if isinstance(data, Mapping):
            context = dict(data)
        else:
            context = {"data": data}

        try:
            template = self._env.get_template(self._resolve(template_name))
        except TemplateNotFound as e:
            raise TemplateError(template_name, f"template not found: {template_name}", e) from e
        except TemplateSyntaxError as e:
            raise TemplateError(template_name, f"invalid template {template_name}", e) from e

        try:
            return template.render(**context)
        except Exception as e:
            raise TemplateError(
                template_name, f"failed to execute template {template_name}", e
            ) from e

    def render_string(self, template_string: str, data: Any = None) -> str:
        """Render an ad-hoc template string with the same helpers."""
        context = dict(data) if isinstance(data, Mapping) else {"data": data}
        try:
            return self._env.from_string(template_string).render(**context)
        except Exception as e:
            raise TemplateError("<string>", "failed to render template string", e) from e

    def has_template(self, template_name: str) -> bool:
        return template_name in self.list_templates()

    def list_templates(self) -> List[str]:
        names = set()
        for name in self._env.list_templates():
            if name in self._overrides:
                names.add(name)
            elif name.endswith(TEMPLATE_SUFFIX):
                names.add(name[: -len(TEMPLATE_SUFFIX)])
        return sorted(names)

    def _resolve(self, template_name: str) -> str:
        """Map a template identifier to its loader name; files carry the ``.j2`` suffix."""
        if template_name in self._overrides:
            return template_name
        return template_name + TEMPLATE_SUFFIX


def get_go_template_directory() -> Path:
    """Directory holding the bundled Go templates."""
    return Path(__file__).resolve().parent.parent / "languages" / "go" / "templates"


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create an engine over ``template_dir`` (the bundled Go templates by default)."""
    return TemplateEngine(template_dir or get_go_template_directory())
