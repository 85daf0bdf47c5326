"""Path conventions shared by the codec, resolver and checker."""

import os
from pathlib import Path

DOC_SUFFIX = ".md"
INDEX_FILENAME = "index" + DOC_SUFFIX


def join(directory: Path, relative: str) -> Path:
    """Join a nav path onto a directory and normalize it.

    Normalizing here means the resolver and the directory walk agree on
    path identity without touching the file system.
    """
    return Path(os.path.normpath(directory / relative))


def normalize(path: Path) -> Path:
    return Path(os.path.normpath(path))


def is_document(path: Path) -> bool:
    return path.suffix == DOC_SUFFIX


def is_index(path: Path) -> bool:
    return path.name == INDEX_FILENAME
