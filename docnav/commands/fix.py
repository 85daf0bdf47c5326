"""Fix command: write canonical text back to the source tree."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from ..errors import FileAccessError
from ..models import Folder

logger = logging.getLogger(__name__)


def run_fix(root: Folder, console: Console | None = None) -> int:
    """Rewrite every page whose content is not canonical.

    Returns:
        Exit code (always 0; write failures raise FileAccessError)
    """
    console = console or Console(stderr=True)

    total = 0
    fixed = 0
    for page in root.iter_pages():
        total += 1
        if not page.needs_fix:
            logger.debug("pass: %s", page.path)
            continue

        try:
            page.path.write_text(page.fixed_content, encoding="utf-8")
        except OSError as exc:
            raise FileAccessError(f"write error while fixing file: {exc.strerror or exc}", page.path, "write") from exc
        console.print(f"Fixed: {escape(str(page.path))}", style="dim")
        fixed += 1

    if fixed:
        console.print(f"Fixed {fixed}/{total} files", style="bold green")
    else:
        console.print(f"✅ All {total} files look good!", style="bold green")
    return 0
