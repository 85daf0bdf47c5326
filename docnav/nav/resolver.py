"""Resolve nav metadata against the file system into a page tree.

Resolution starts at a folder's index document, decodes its nav, and walks
each entry in order, recursing into sub-folders. The first error anywhere
aborts the whole resolution.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import ContentError, DecodeError, FileAccessError, StructuralError
from ..models import Category, Folder, Node, Page
from .frontmatter import render_metadata, split_metadata
from .markdown import Canonicalizer, MarkdownCanonicalizer
from .paths import INDEX_FILENAME, is_document, is_index, join, normalize
from .entries import (
    CategoryEntry,
    FileEntry,
    FolderEntry,
    IncludeEntry,
    NavEntry,
    TaggedIndexEntry,
)

logger = logging.getLogger(__name__)


def read_document(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileAccessError(f"could not read file: {exc.strerror or exc}", path, "read") from exc
    except UnicodeDecodeError as exc:
        raise FileAccessError(f"file is not valid UTF-8: {exc.reason}", path, "read") from exc


class Resolver:
    """Builds one page tree. Not reusable across trees.

    Every page is registered when built so a document reached twice (directly,
    through an include, or through a reference cycle) is rejected.
    """

    def __init__(self, canonicalizer: Canonicalizer | None = None):
        self.canonicalizer = canonicalizer or MarkdownCanonicalizer()
        self._seen: set[Path] = set()

    def resolve_folder(self, directory: Path, name: str | None = None, index_filename: str = INDEX_FILENAME) -> Folder:
        directory = normalize(directory)
        logger.debug("resolve_folder dir=%s index=%s name=%r", directory, index_filename, name)

        index = self.process_page(directory / index_filename, name)

        if index.metadata is None:
            raise StructuralError("index page has no metadata block", directory / index_filename)
        if not index.nav:
            raise StructuralError("index page is missing nav", directory / index_filename)

        children = tuple(self.process_item(entry, directory) for entry in index.nav)
        return Folder(index=index, children=children)

    def process_item(self, entry: NavEntry, directory: Path) -> Node:
        logger.debug("process_item dir=%s entry=%r", directory, entry)

        if isinstance(entry, FileEntry):
            return self._ensure_no_nav(self.process_page(join(directory, entry.path), entry.name))
        if isinstance(entry, FolderEntry):
            return self.resolve_folder(join(directory, entry.path), entry.name)
        if isinstance(entry, TaggedIndexEntry):
            index_path = join(directory, entry.path)
            return self.resolve_folder(index_path.parent, entry.name, index_path.name)
        if isinstance(entry, IncludeEntry):
            return self.process_include(join(directory, entry.path), entry.name)
        if isinstance(entry, CategoryEntry):
            return self.process_category(directory, entry.name, entry.entries)
        raise TypeError(f"not a nav entry: {entry!r}")

    def process_page(self, path: Path, name: str | None = None) -> Page:
        """Read one document and resolve its display name.

        Name precedence: metadata `name`, then the nav entry's name, then the
        leading h1. Setting both a metadata name and a nav name is an error.
        """
        path = normalize(path)
        if path in self._seen:
            raise StructuralError("page is included more than once", path)
        self._seen.add(path)

        raw = read_document(path)
        try:
            metadata, body = split_metadata(raw)
        except DecodeError as exc:
            raise exc.at(path) from exc

        fixed = render_metadata(metadata) + self.canonicalizer.canonicalize(body)

        try:
            title = self.canonicalizer.extract_heading(body)
        except ContentError as exc:
            raise ContentError(f"all files must have an h1 title: {exc.message}", path) from exc

        if metadata is not None and metadata.name is not None:
            if name is not None:
                raise StructuralError(f"cannot specify both a metadata name and a nav name ({name!r})", path)
            resolved_name = metadata.name
        else:
            resolved_name = name if name is not None else title

        return Page(
            path=path,
            name=resolved_name,
            metadata=metadata,
            raw_content=raw,
            fixed_content=fixed,
        )

    def process_include(self, directory: Path, name: str) -> Category:
        """Expand `Name: dir/*` into a category of every document in `dir`.

        Sub-directories, non-document files and index.md are skipped. Pages are
        ordered by display name.
        """
        directory = normalize(directory)
        if is_index(directory):
            raise StructuralError(f"cannot include/* an index file ({name})", directory)

        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            raise FileAccessError(f"couldn't read include/* directory {name}", directory, "list") from exc

        pages = []
        for path in entries:
            if path.is_dir():
                logger.debug("skipping included/* directory %s", path)
                continue
            if not is_document(path):
                logger.debug("skipping included/* non-document file %s", path)
                continue
            if is_index(path):
                logger.debug("skipping included/* index file %s", path)
                continue
            pages.append(self._ensure_no_nav(self.process_page(path)))

        pages.sort(key=lambda page: (page.name, str(page.path)))
        return Category(name=name, children=tuple(pages))

    def process_category(self, directory: Path, name: str, entries: tuple[NavEntry, ...]) -> Category:
        # category children resolve against the same directory
        children = tuple(self.process_item(entry, directory) for entry in entries)
        return Category(name=name, children=children)

    @staticmethod
    def _ensure_no_nav(page: Page) -> Page:
        if page.nav:
            raise StructuralError("non index page cannot have nav", page.path)
        return page


def resolve_folder(
    directory: Path,
    name: str | None = None,
    *,
    index_filename: str = INDEX_FILENAME,
    canonicalizer: Canonicalizer | None = None,
) -> Folder:
    """Resolve the folder rooted at `directory` and everything its nav reaches."""
    return Resolver(canonicalizer).resolve_folder(Path(directory), name, index_filename)
