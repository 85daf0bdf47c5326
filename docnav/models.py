"""Data models for the resolved page tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

from .nav.entries import NavEntry
from .nav.frontmatter import FrontMatter


@dataclass(frozen=True)
class Page:
    """A single document, e.g. `example.md`."""

    path: Path
    name: str  # resolved display name
    metadata: FrontMatter | None  # None when the file has no metadata block
    raw_content: str  # exactly as read from disk
    fixed_content: str  # metadata re-rendered + canonical body

    @property
    def nav(self) -> list[NavEntry]:
        """Nav entries declared by this page (non-empty only for index pages)."""
        return self.metadata.nav if self.metadata else []

    @property
    def needs_fix(self) -> bool:
        return self.fixed_content != self.raw_content


@dataclass(frozen=True)
class Folder:
    """An index page plus the children its nav declares.

    The index may not be literally `index.md` when it came from `!index`.
    """

    index: Page
    children: tuple[Node, ...]

    @property
    def name(self) -> str:
        return self.index.name

    def iter_pages(self) -> Iterator[Page]:
        return iter_pages(self)


@dataclass(frozen=True)
class Category:
    """A named group with no index page of its own."""

    name: str
    children: tuple[Node, ...]


Node = Union[Page, Folder, Category]


def iter_pages(node: Node) -> Iterator[Page]:
    """Yield every page under `node`, depth first, in nav order.

    A folder's index page comes before its children.
    """
    if isinstance(node, Page):
        yield node
    elif isinstance(node, Folder):
        yield node.index
        for child in node.children:
            yield from iter_pages(child)
    elif isinstance(node, Category):
        for child in node.children:
            yield from iter_pages(child)
    else:
        raise TypeError(f"not a nav node: {node!r}")
