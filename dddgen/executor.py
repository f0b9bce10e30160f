"""Writing generated files to disk.

The executor is the only component that touches the target tree. In dry
run mode it prints what would be written instead.
"""

import threading
from pathlib import Path
from typing import Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .codegen.core.errors import FileSystemError, GenerationError
from .codegen.core.model import GeneratedFile
from .logging_config import get_logger

logger = get_logger(__name__)


class FileExecutor:
    """Write a batch of generated files under a destination directory."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def execute(
        self,
        files: Iterable[GeneratedFile],
        destination: str | Path,
        dry_run: bool = False,
        cancel: Optional[threading.Event] = None,
    ) -> List[Path]:
        """Write files in order, or list them when ``dry_run`` is set.

        Args:
            files: Files to write; paths are relative to ``destination``.
            destination: Root of the target tree, created when missing.
            dry_run: Only print the files.
            cancel: Checked before each write.

        Returns:
            Paths written (or that would have been written).

        Raises:
            GenerationError: If ``cancel`` is set before all files are written.
            FileSystemError: If a directory or file cannot be written.
        """
        root = Path(destination)
        files = list(files)

        if dry_run:
            self._print_plan(files, root)
            return [root / generated.path for generated in files]

        written = []
        for generated in files:
            if cancel is not None and cancel.is_set():
                raise GenerationError(
                    f"generation cancelled after {len(written)} of {len(files)} files"
                )

            target = root / generated.path
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(generated.content, encoding="utf-8")
            except OSError as e:
                raise FileSystemError(f"failed to write {target}", e) from e

            logger.debug("Wrote %s", target)
            written.append(target)

        logger.info("Wrote %d files to %s", len(written), root)
        return written

    def _print_plan(self, files: List[GeneratedFile], root: Path) -> None:
        table = Table(
            title=f"Dry run: {len(files)} file(s) under {root}",
            box=box.ROUNDED,
            title_style="bold cyan",
        )
        table.add_column("Path", style="bold green")
        table.add_column("Type", style="cyan")
        table.add_column("Size", style="dim", justify="right")

        for generated in files:
            table.add_row(
                generated.path,
                generated.artifact_type or "-",
                f"{len(generated.content)} B",
            )

        self.console.print(table)
        logger.info("Dry run: %d files not written", len(files))
