"""Cross-reference the resolved tree against the files on disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from ..errors import FileAccessError
from ..models import Folder
from .paths import is_document, normalize

logger = logging.getLogger(__name__)


@dataclass
class DirCheck:
    """Drift between the nav and the source directory.

    unused: documents on disk that no nav reaches
    extra: files on disk that are not documents at all
    """

    unused: set[Path] = field(default_factory=set)
    extra: set[Path] = field(default_factory=set)

    @property
    def clean(self) -> bool:
        return not self.unused and not self.extra


def check(root_directory: Path, root: Folder) -> DirCheck:
    """Walk `root_directory` and report files the tree does not account for."""
    logger.debug("dir check dir=%s", root_directory)

    nav_paths = {page.path for page in root.iter_pages()}
    result = DirCheck()

    def visit(path: Path) -> None:
        if not is_document(path):
            logger.debug("found extra file: %s", path)
            result.extra.add(path)
        elif path not in nav_paths:
            logger.debug("found unused file: %s", path)
            result.unused.add(path)

    walk_files(normalize(Path(root_directory)), visit)

    logger.debug("dir check: %d unused, %d extra", len(result.unused), len(result.extra))
    return result


def walk_files(directory: Path, callback: Callable[[Path], None]) -> None:
    """Call `callback` for every non-directory entry below `directory`."""
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        raise FileAccessError(f"couldn't read directory: {exc.strerror or exc}", directory, "list") from exc

    for path in entries:
        if path.is_dir():
            walk_files(path, callback)
        else:
            callback(path)
