"""
Error taxonomy for the generation pipeline.

Every error raised inside the core carries its kind, a human-readable
message naming the offending entity/template/path and an optional cause.
"""

from enum import Enum
from typing import Optional


class ErrorType(Enum):
    """Categories of pipeline failures."""

    VALIDATION = "validation"
    PARSE = "parse"
    GENERATION = "generation"
    FILESYSTEM = "filesystem"
    NETWORK = "network"
    ARGUMENT = "argument"


_EXIT_CODES = {
    ErrorType.ARGUMENT: 2,
    ErrorType.VALIDATION: 3,
    ErrorType.PARSE: 4,
    ErrorType.GENERATION: 5,
    ErrorType.FILESYSTEM: 6,
    ErrorType.NETWORK: 7,
}


class CliError(Exception):
    """Base exception for all categorized pipeline errors."""

    error_type: ErrorType = ErrorType.GENERATION

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        error_type: Optional[ErrorType] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if error_type is not None:
            self.error_type = error_type

    def __str__(self) -> str:
        text = f"{self.error_type.value}: {self.message}"
        if self.cause is not None:
            text += f" (caused by: {self.cause})"
        return text

    @property
    def exit_code(self) -> int:
        """Process exit code for this error."""
        return _EXIT_CODES.get(self.error_type, 1)


class ValidationError(CliError):
    """Malformed or unsupported input shape."""

    error_type = ErrorType.VALIDATION


class ParseError(CliError):
    """Structurally invalid document."""

    error_type = ErrorType.PARSE


class NoEntitiesError(ParseError):
    """Well-formed document that contains nothing to generate."""

    pass


class GenerationError(CliError):
    """Template lookup or execution failure."""

    error_type = ErrorType.GENERATION


class TemplateError(GenerationError):
    """Exception raised for template-related errors."""

    def __init__(self, template_name: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, cause)
        self.template_name = template_name


class FileSystemError(CliError):
    """Collaborator-reported I/O failure."""

    error_type = ErrorType.FILESYSTEM


class NetworkError(CliError):
    """Remote repository retrieval failure."""

    error_type = ErrorType.NETWORK


class ArgumentError(CliError):
    """Invalid caller-supplied argument."""

    error_type = ErrorType.ARGUMENT
