"""
Parser registry for managing available input formats.

Maps file extensions (and short format names) to format adapters. A
registry is an explicit value; build one with :func:`default_registry`.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..logging_config import get_logger
from .core.errors import ArgumentError, CliError, ValidationError
from .core.parser import DomainParser
from .formats.openapi import OpenAPIParser
from .formats.protobuf import ProtobufParser

logger = get_logger(__name__)


class ParserRegistry:
    """Registry for managing available format adapters."""

    def __init__(self):
        """Initialize empty registry."""
        self._parsers: Dict[str, DomainParser] = {}
        self._aliases: Dict[str, DomainParser] = {}
        self._order: List[DomainParser] = []

    def register(self, parser: DomainParser, aliases: Optional[List[str]] = None) -> None:
        """
        Register an adapter under each of its extensions.

        Args:
            parser: Adapter instance
            aliases: Short format names accepted by ``get_parser_for_type``

        Raises:
            ArgumentError: If the adapter declares an empty extension
        """
        extensions = parser.supported_extensions()
        for extension in extensions:
            if not extension or not extension.strip():
                raise ArgumentError(
                    f"{parser.format_name()} declares an empty file extension"
                )

        for extension in extensions:
            self._parsers[extension.lower()] = parser

        for alias in aliases or []:
            self._aliases[alias.lower()] = parser

        if parser not in self._order:
            self._order.append(parser)

        logger.debug(
            "Registered %s for %s", parser.format_name(), ", ".join(sorted(extensions))
        )

    def get_parser(self, file_path: Union[str, Path]) -> DomainParser:
        """
        Get the adapter for a file by its extension.

        Raises:
            ValidationError: If no adapter handles the extension
        """
        extension = Path(file_path).suffix.lower()
        parser = self._parsers.get(extension)
        if parser is None:
            available = ", ".join(sorted(self._parsers))
            raise ValidationError(
                f"no parser registered for extension {extension or '(none)'!r}. "
                f"Available: {available}"
            )
        return parser

    def get_parser_for_type(self, input_type: str) -> DomainParser:
        """
        Get an adapter by short format name (e.g. ``openapi``, ``proto``).

        Raises:
            ArgumentError: If the name is unknown
        """
        parser = self._aliases.get(input_type.lower())
        if parser is None:
            available = ", ".join(sorted(self._aliases))
            raise ArgumentError(
                f"unsupported input type: {input_type}. Available: {available}"
            )
        return parser

    def list_formats(self) -> List[str]:
        """Format names in registration order, without duplicates."""
        names = []
        for parser in self._order:
            name = parser.format_name()
            if name not in names:
                names.append(name)
        return names

    def list_extensions(self, format_name: str) -> List[str]:
        return sorted(
            extension
            for extension, parser in self._parsers.items()
            if parser.format_name() == format_name
        )

    def list_aliases(self, format_name: str) -> List[str]:
        return sorted(
            alias
            for alias, parser in self._aliases.items()
            if parser.format_name() == format_name
        )

    def is_supported(self, file_path: Union[str, Path]) -> bool:
        return Path(file_path).suffix.lower() in self._parsers

    def detect_format(self, file_path: Union[str, Path]) -> DomainParser:
        """
        Find the first adapter, in registration order, whose validation accepts a file.

        When every adapter rejects the file, the failure reported by the
        adapter registered for its extension is raised.

        Raises:
            ValidationError: If no adapter handles the extension
            FileSystemError, ParseError: From the adapter for the extension
        """
        failures: Dict[int, CliError] = {}
        for parser in self._order:
            try:
                parser.validate(file_path)
            except CliError as e:
                logger.debug("%s rejected %s: %s", parser.format_name(), file_path, e)
                failures[id(parser)] = e
                continue
            logger.debug("Detected %s format for %s", parser.format_name(), file_path)
            return parser

        raise failures[id(self.get_parser(file_path))]


def default_registry() -> ParserRegistry:
    """Registry with the OpenAPI and Protocol Buffers adapters."""
    registry = ParserRegistry()
    registry.register(OpenAPIParser(), aliases=["openapi", "swagger"])
    registry.register(ProtobufParser(), aliases=["proto", "protobuf"])
    return registry
