"""
Format adapter contract.

Every input format implements :class:`DomainParser`: validate a document
in stages, then convert it to the canonical :class:`DomainModel`.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Set, Union

from .errors import FileSystemError, ValidationError
from .model import DomainModel


class DomainParser(ABC):
    """Abstract base class for input format adapters."""

    @abstractmethod
    def supported_extensions(self) -> Set[str]:
        """File extensions (with leading dot) this adapter accepts."""
        pass

    @abstractmethod
    def format_name(self) -> str:
        """Human-readable format name."""
        pass

    @abstractmethod
    def validate(self, file_path: Union[str, Path]) -> None:
        """
        Validate a document without building a model.

        Raises:
            ValidationError: Empty path or unsupported extension
            FileSystemError: Missing file or not a regular file
            ParseError: Content does not parse, or nothing to generate
        """
        pass

    @abstractmethod
    def parse(self, file_path: Union[str, Path]) -> DomainModel:
        """
        Validate and convert a document to the canonical model.

        Never returns a partial model; the first failure is raised.
        """
        pass

    def _check_path(self, file_path: Union[str, Path]) -> Path:
        """Run the path and extension stages shared by every adapter."""
        if not file_path or not str(file_path).strip():
            raise ValidationError("file path cannot be empty")

        path = Path(file_path)
        if not path.exists():
            raise FileSystemError(f"file does not exist: {path}")
        if not path.is_file():
            raise FileSystemError(f"not a regular file: {path}")

        extension = path.suffix.lower()
        if extension not in self.supported_extensions():
            supported = ", ".join(sorted(self.supported_extensions()))
            raise ValidationError(
                f"unsupported file extension {extension or '(none)'!r} for "
                f"{self.format_name()} (expected one of: {supported})"
            )
        return path
