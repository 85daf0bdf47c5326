"""Nav language, metadata blocks and markdown helpers.

The resolver and checker import the page tree models, so import them from
their own modules (`docnav.nav.resolver`, `docnav.nav.dircheck`).
"""

from .entries import (
    CategoryEntry,
    FileEntry,
    FolderEntry,
    IncludeEntry,
    NavEntry,
    Tagged,
    TaggedIndexEntry,
    decode,
    encode,
)
from .frontmatter import FrontMatter, render_metadata, split_metadata
from .markdown import Canonicalizer, MarkdownCanonicalizer, canonicalize, extract_heading

__all__ = [
    "FrontMatter",
    "render_metadata",
    "split_metadata",
    "Canonicalizer",
    "MarkdownCanonicalizer",
    "canonicalize",
    "extract_heading",
    "CategoryEntry",
    "FileEntry",
    "FolderEntry",
    "IncludeEntry",
    "NavEntry",
    "Tagged",
    "TaggedIndexEntry",
    "decode",
    "encode",
]
