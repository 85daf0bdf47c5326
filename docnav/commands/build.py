"""Build command placeholder.

Rendering a site from the resolved tree is not implemented yet; this only
reports what a build would consume.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from ..config import Config
from ..models import Folder
from ..nav.dircheck import DirCheck


def run_build(root: Folder, drift: DirCheck, config: Config, console: Console | None = None) -> int:
    console = console or Console(stderr=True)

    pages = sum(1 for _ in root.iter_pages())
    console.print(f"{escape(config.metadata.name)}: {pages} page(s), {len(drift.extra)} extra file(s)", style="dim")
    console.print(f"Nothing written to {escape(str(config.build.output))} (build is a no-op)", style="dim")
    return 0
