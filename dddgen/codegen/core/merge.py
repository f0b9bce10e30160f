"""
Non-destructive merge policy for pre-existing target trees.

A candidate file is kept only when nothing exists at its target path,
including a dangling symlink.
Existing files are never read, compared, merged or deleted.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Union

from ...logging_config import get_logger
from .model import GeneratedFile

logger = get_logger(__name__)


@dataclass
class MergeResult:
    """Partition of a candidate batch."""

    safe: List[GeneratedFile] = field(default_factory=list)
    preserved: List[str] = field(default_factory=list)

    @property
    def preserved_count(self) -> int:
        return len(self.preserved)


def preserve_existing_files(
    target: Union[str, Path], candidates: Iterable[GeneratedFile]
) -> MergeResult:
    """
    Drop every candidate whose path already exists under ``target``.

    Args:
        target: Root of the (possibly non-existent) target tree
        candidates: Generated files in write order

    Returns:
        MergeResult with the safe files in their original order and the
        relative paths of preserved files
    """
    root = Path(target)
    result = MergeResult()

    for candidate in candidates:
        if os.path.lexists(root / candidate.path):
            logger.warning("Preserving existing file: %s", candidate.path)
            result.preserved.append(candidate.path)
        else:
            result.safe.append(candidate)

    if result.preserved:
        logger.info(
            "Preserved %d existing file(s), %d file(s) safe to write",
            result.preserved_count,
            len(result.safe),
        )
    return result
