"""Fetching an existing repository to generate into.

Wraps the ``git`` command line. Generated files are then filtered against
the clone so that nothing already in the repository is overwritten.
"""

import shutil
import subprocess
from pathlib import Path
from typing import Iterable

from .codegen.core.errors import FileSystemError, NetworkError, ValidationError
from .codegen.core.merge import MergeResult, preserve_existing_files
from .codegen.core.model import GeneratedFile
from .logging_config import get_logger

logger = get_logger(__name__)


class RepositoryCloner:
    """Clone git repositories and protect their files from regeneration."""

    def __init__(self, git: str = "git", timeout: int = 300) -> None:
        self.git = git
        self.timeout = timeout

    def check_git_available(self) -> bool:
        """Return True when the git executable is on PATH."""
        return shutil.which(self.git) is not None

    def clone(self, url: str, destination: str | Path) -> Path:
        """Clone ``url`` into ``destination``.

        Raises:
            ValidationError: If the URL is empty.
            FileSystemError: If the destination exists and is not empty.
            NetworkError: If git is missing or the clone fails.
        """
        if not url or not url.strip():
            raise ValidationError("repository URL cannot be empty")

        target = Path(destination)
        if target.exists() and any(target.iterdir()):
            raise FileSystemError(f"clone destination is not empty: {target}")

        if not self.check_git_available():
            raise NetworkError("git is not installed or not on PATH")

        logger.info("Cloning %s into %s", url, target)
        try:
            result = subprocess.run(
                [self.git, "clone", url, str(target)],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise NetworkError(f"timed out cloning {url}", e) from e
        except OSError as e:
            raise NetworkError(f"failed to run git for {url}", e) from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise NetworkError(f"failed to clone {url}: {detail}")

        self.validate_repository(target)
        return target

    def validate_repository(self, path: str | Path) -> Path:
        """Check that ``path`` is a git working tree.

        Raises:
            FileSystemError: If the directory or its ``.git`` is missing.
        """
        path = Path(path)
        if not path.is_dir():
            raise FileSystemError(f"repository directory does not exist: {path}")
        if not (path / ".git").exists():
            raise FileSystemError(f"not a git repository (no .git): {path}")
        return path

    def preserve_existing_files(
        self, path: str | Path, files: Iterable[GeneratedFile]
    ) -> MergeResult:
        """Drop generated files that already exist in the repository."""
        return preserve_existing_files(path, files)
