"""Input validation for command-line arguments.

Checks project names, input files and destination directories before any
generation work starts, raising :class:`ValidationError` or
:class:`FileSystemError` with a message fit for the terminal.
"""

import os
import re
from pathlib import Path

from .codegen.core.errors import FileSystemError, ValidationError
from .logging_config import get_logger

logger = get_logger(__name__)

MAX_PROJECT_NAME_LENGTH = 100

# Characters allowed in a Go module path element
_PROJECT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._~/-]+$")
_EDGE_SEPARATORS = "/.-_"


class InputValidator:
    """Validate user-supplied names and paths."""

    def validate_project_name(self, name: str) -> str:
        """Check that a project name can be used as a Go module path.

        Args:
            name: Proposed project name.

        Returns:
            The stripped name.

        Raises:
            ValidationError: If the name is empty, too long or malformed.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("project name cannot be empty")

        if len(name) > MAX_PROJECT_NAME_LENGTH:
            raise ValidationError(
                f"project name is too long ({len(name)} > {MAX_PROJECT_NAME_LENGTH} characters)"
            )

        if not _PROJECT_NAME_PATTERN.match(name):
            raise ValidationError(
                f"invalid project name {name!r}: only letters, digits and . _ ~ / - are allowed"
            )

        if name[0] in _EDGE_SEPARATORS or name[-1] in _EDGE_SEPARATORS:
            raise ValidationError(
                f"invalid project name {name!r}: cannot start or end with a separator"
            )

        if "//" in name:
            raise ValidationError(f"invalid project name {name!r}: empty path element")

        logger.debug("Project name is valid: %s", name)
        return name

    def validate_input_file(self, file_path: str | Path) -> Path:
        """Check that an input document exists and can be read.

        Raises:
            ValidationError: If the path is empty.
            FileSystemError: If the file is missing, not a file or unreadable.
        """
        if not file_path or not str(file_path).strip():
            raise ValidationError("input file path cannot be empty")

        path = Path(file_path)
        if not path.exists():
            raise FileSystemError(f"input file does not exist: {path}")
        if not path.is_file():
            raise FileSystemError(f"input path is not a file: {path}")
        if not os.access(path, os.R_OK):
            raise FileSystemError(f"input file is not readable: {path}")

        logger.debug("Input file is valid: %s", path)
        return path

    def validate_destination(self, destination: str | Path) -> Path:
        """Check that files can be written under a destination directory.

        A destination that does not exist yet is accepted when its nearest
        existing parent is a writable directory.

        Raises:
            ValidationError: If the path is empty.
            FileSystemError: If the destination cannot be written to.
        """
        if not destination or not str(destination).strip():
            raise ValidationError("destination path cannot be empty")

        path = Path(destination)
        if path.exists():
            if not path.is_dir():
                raise FileSystemError(f"destination is not a directory: {path}")
            if not os.access(path, os.W_OK):
                raise FileSystemError(f"destination is not writable: {path}")
            return path

        parent = path.absolute().parent
        while not parent.exists():
            parent = parent.parent
        if not parent.is_dir() or not os.access(parent, os.W_OK):
            raise FileSystemError(f"cannot create destination {path}: {parent} is not writable")

        logger.debug("Destination will be created: %s", path)
        return path
