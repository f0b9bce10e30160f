"""End-to-end code generation workflows.

:class:`CodeGenerationPipeline` wires the parser registry, component
factory, merge policy and file executor together for the two user-facing
operations: generating components from a document and scaffolding a new
project.
"""

import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from . import __version__
from .cloner import RepositoryCloner
from .codegen.core.generator import ComponentFactory
from .codegen.core.merge import preserve_existing_files
from .codegen.core.model import DomainModel, GeneratedFile
from .codegen.registry import ParserRegistry, default_registry
from .executor import FileExecutor
from .logging_config import get_logger
from .utils import fetch_document, is_url
from .validator import InputValidator

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one pipeline run."""

    written: List[Path] = field(default_factory=list)
    preserved: List[str] = field(default_factory=list)
    entity_count: int = 0

    @property
    def written_count(self) -> int:
        return len(self.written)

    @property
    def preserved_count(self) -> int:
        return len(self.preserved)


class CodeGenerationPipeline:
    """Parse, render, filter and write in one call."""

    def __init__(
        self,
        registry: Optional[ParserRegistry] = None,
        factory: Optional[ComponentFactory] = None,
        executor: Optional[FileExecutor] = None,
        cloner: Optional[RepositoryCloner] = None,
        validator: Optional[InputValidator] = None,
    ) -> None:
        self.registry = registry or default_registry()
        self.factory = factory or ComponentFactory()
        self.executor = executor or FileExecutor()
        self.cloner = cloner or RepositoryCloner()
        self.validator = validator or InputValidator()

    def generate(
        self,
        input_file: str | Path,
        destination: str | Path = ".",
        input_type: Optional[str] = None,
        dry_run: bool = False,
        preserve_existing: bool = True,
        cancel: Optional[threading.Event] = None,
    ) -> PipelineResult:
        """Generate entity components from an OpenAPI or proto document.

        Args:
            input_file: Local path or http(s) URL of the document.
            destination: Root of the target tree.
            input_type: Format name (``openapi``, ``proto``); detected by
                validating with each registered adapter when omitted.
            dry_run: List the files instead of writing them.
            preserve_existing: Skip files that already exist under
                ``destination``.
            cancel: Checked by the executor between file writes.

        Raises:
            CliError: Any validation, parse, generation or filesystem failure.
        """
        if is_url(input_file):
            with tempfile.TemporaryDirectory(prefix="dddgen-") as tmp:
                local = fetch_document(str(input_file), tmp)
                return self._generate_from_file(
                    local, destination, input_type, dry_run, preserve_existing, cancel
                )
        return self._generate_from_file(
            input_file, destination, input_type, dry_run, preserve_existing, cancel
        )

    def create_project(
        self,
        project_name: str,
        destination: Optional[str | Path] = None,
        dry_run: bool = False,
        preserve_existing: bool = False,
        repo_url: Optional[str] = None,
        cancel: Optional[threading.Event] = None,
    ) -> PipelineResult:
        """Scaffold a new project (main.go, go.mod, README, Makefile, config).

        When ``repo_url`` is given the repository is cloned into the
        destination first and its files are always preserved.

        Raises:
            CliError: Any validation, network or filesystem failure.
        """
        project_name = self.validator.validate_project_name(project_name)
        target = Path(destination) if destination else Path(project_name)
        self.validator.validate_destination(target)

        if repo_url:
            if dry_run:
                logger.info("Dry run: would clone %s into %s", repo_url, target)
            else:
                self.cloner.clone(repo_url, target)
            preserve_existing = True

        model = DomainModel(
            project_name=project_name,
            metadata={"generated_by": "dddgen", "version": __version__},
        )
        files = self.factory.generate_project_files(model)
        result = self._write(files, target, dry_run, preserve_existing, cancel)

        if not dry_run:
            logger.info("Created project %s in %s", project_name, target)
        return result

    def _generate_from_file(
        self,
        input_file: str | Path,
        destination: str | Path,
        input_type: Optional[str],
        dry_run: bool,
        preserve_existing: bool,
        cancel: Optional[threading.Event],
    ) -> PipelineResult:
        path = self.validator.validate_input_file(input_file)
        self.validator.validate_destination(destination)

        if input_type:
            parser = self.registry.get_parser_for_type(input_type)
        else:
            parser = self.registry.detect_format(path)
        logger.info("Generating code from %s file: %s", parser.format_name(), path)

        model = parser.parse(path)
        files = self.factory.generate_model(model)

        result = self._write(files, destination, dry_run, preserve_existing, cancel)
        result.entity_count = len(model.entities)
        return result

    def _write(
        self,
        files: List[GeneratedFile],
        destination: str | Path,
        dry_run: bool,
        preserve_existing: bool,
        cancel: Optional[threading.Event],
    ) -> PipelineResult:
        preserved: List[str] = []
        if preserve_existing:
            merge = preserve_existing_files(destination, files)
            files = merge.safe
            preserved = merge.preserved

        written = self.executor.execute(files, destination, dry_run=dry_run, cancel=cancel)
        return PipelineResult(written=written, preserved=preserved)
