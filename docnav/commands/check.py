"""Check command: report pages that are not in canonical form."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from ..nav.dircheck import DirCheck
from ..models import Folder


def run_check(root: Folder, drift: DirCheck, console: Console | None = None) -> int:
    """Validate without writing anything.

    Unused documents are already listed by the shared load step; extra files
    are listed here.

    Returns:
        Exit code (0 = every page canonical and no drift, 1 otherwise)
    """
    console = console or Console(stderr=True)

    total = 0
    fails = 0
    for page in root.iter_pages():
        total += 1
        if page.needs_fix:
            console.print(f"Fix: {escape(str(page.path))}", style="red")
            fails += 1

    for path in sorted(drift.extra):
        console.print(f"⚠ Extra file: {escape(str(path))}", style="yellow")

    if drift.unused:
        console.print(f"⚠️  {len(drift.unused)} unused file(s)", style="yellow")
    if drift.extra:
        console.print(f"⚠️  {len(drift.extra)} extra file(s)", style="yellow")

    if fails:
        console.print(f"❌ {fails}/{total} files need fixing", style="bold red")
        return 1
    if not drift.clean:
        return 1

    console.print(f"✅ All {total} files look good!", style="bold green")
    return 0
