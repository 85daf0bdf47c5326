"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest

from docnav.models import Folder
from docnav.nav.resolver import resolve_folder


@pytest.fixture
def write_doc(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a file under tmp_path, creating parent directories."""

    def write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write


@pytest.fixture
def docs_source(tmp_path: Path, write_doc) -> Path:
    """A small source tree exercising every nav form."""
    write_doc(
        "src/index.md",
        "\n".join(
            [
                "---",
                "name: Home",
                "nav:",
                "  - intro.md",
                "  - Guides: guides/",
                "  - Reference: ref/*",
                "  - Extras:",
                "      - extras.md",
                "      - Special: !index special/start.md",
                "---",
                "",
                "# Welcome",
                "",
            ]
        ),
    )
    write_doc("src/intro.md", "# Introduction\n\nHello.\n")
    write_doc("src/guides/index.md", "---\nnav:\n  - setup.md\n---\n\n# Guides\n")
    write_doc("src/guides/setup.md", "# Setup\n")
    write_doc("src/ref/b.md", "# Beta\n")
    write_doc("src/ref/a.md", "# Alpha\n")
    write_doc("src/ref/index.md", "# Reference index\n")
    write_doc("src/ref/notes.txt", "not a document\n")
    write_doc("src/extras.md", "# Extras\n")
    write_doc("src/special/start.md", "---\nnav:\n  - one.md\n---\n\n# Special start\n")
    write_doc("src/special/one.md", "# One\n")
    write_doc("src/orphan.md", "# Orphan\n")
    write_doc("src/img.png", "png")
    return tmp_path / "src"


@pytest.fixture
def docs_root(docs_source: Path) -> Folder:
    """The resolved tree of docs_source."""
    return resolve_folder(docs_source)
