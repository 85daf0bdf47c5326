"""Shared first step of every command: resolve the tree and check for drift."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from ..config import Config
from ..models import Folder
from ..nav.dircheck import DirCheck, check
from ..nav.markdown import MarkdownCanonicalizer
from ..nav.resolver import resolve_folder


def load_source(config: Config, console: Console) -> tuple[Folder, DirCheck]:
    """Resolve every page reachable from the source index and check the tree.

    Unused documents are reported here so every mode warns about them.
    """
    source = config.build.source
    console.print(f"Resolving nav from {source}...", style="dim")

    root = resolve_folder(source, canonicalizer=MarkdownCanonicalizer(config.extensions))
    drift = check(source, root)

    for path in sorted(drift.unused):
        console.print(f"⚠ Unused file: {escape(str(path))}", style="yellow")

    return root, drift
