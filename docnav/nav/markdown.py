"""Markdown canonicalization and title extraction.

Canonical style is whatever mdformat produces with the options below; running
it twice gives the same text. Titles come from the markdown-it token stream.
"""

from __future__ import annotations

from typing import Iterable, Protocol

import mdformat
from markdown_it import MarkdownIt
from mdit_py_plugins.footnote import footnote_plugin

from ..errors import ContentError

DEFAULT_EXTENSIONS = ("tables", "footnote")

FORMAT_OPTIONS = {
    "wrap": "keep",
    "number": False,  # every ordered list item keeps the first number
    "end_of_line": "lf",
}

# token types allowed inside the h1 used as a title
TITLE_TOKEN_TYPES = ("text", "code_inline")


class Canonicalizer(Protocol):
    """What the resolver needs from a markdown formatter."""

    def canonicalize(self, body: str) -> str: ...

    def extract_heading(self, body: str) -> str: ...


class MarkdownCanonicalizer:
    """mdformat for canonical text, markdown-it-py for titles."""

    def __init__(self, extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        self.extensions = tuple(extensions)
        self._md = MarkdownIt("commonmark")
        if "tables" in self.extensions:
            self._md.enable("table")
        if "footnote" in self.extensions:
            self._md.use(footnote_plugin)

    def canonicalize(self, body: str) -> str:
        return mdformat.text(body, options=FORMAT_OPTIONS, extensions=self.extensions)

    def extract_heading(self, body: str) -> str:
        """Return the text of the leading h1.

        Raises:
            ContentError: the document is empty, does not open with an h1, or
                the h1 holds anything besides plain text and inline code.
        """
        tokens = self._md.parse(body)
        if not tokens:
            raise ContentError("document is empty")

        first = tokens[0]
        if first.type != "heading_open" or first.tag != "h1":
            raise ContentError(f"expecting h1 heading, got: {first.type} ({first.tag or first.content!r})")

        inline = tokens[1]
        children = inline.children or []
        if not children:
            raise ContentError("h1 heading is empty")

        unexpected = [child.type for child in children if child.type not in TITLE_TOKEN_TYPES]
        if unexpected:
            raise ContentError(f"h1 heading must be plain text or inline code, found: {', '.join(unexpected)}")

        return "".join(child.content for child in children)


_default = MarkdownCanonicalizer()


def canonicalize(body: str) -> str:
    return _default.canonicalize(body)


def extract_heading(body: str) -> str:
    return _default.extract_heading(body)
