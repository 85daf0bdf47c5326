"""Tests for the check/fix/build/tree commands and the CLI."""

from io import StringIO
from pathlib import Path

import pytest
from click.testing import CliRunner
from rich.console import Console

from docnav.cli import cli
from docnav.commands.check import run_check
from docnav.commands.fix import run_fix
from docnav.commands.tree import build_tree
from docnav.nav.dircheck import check
from docnav.nav.frontmatter import FrontMatter, render_metadata
from docnav.nav.resolver import resolve_folder
from docnav.nav.entries import FileEntry, FolderEntry

CONFIG = """
version = ">=0.1"

[metadata]
name = "Example Docs"

[build]
source = "src"
"""


def _console() -> Console:
    return Console(file=StringIO(), width=200)


def _output(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture
def canonical_source(tmp_path: Path, write_doc) -> Path:
    """A source tree that is already in canonical form with nothing unused."""
    index_fm = FrontMatter(name="Home", nav=[FileEntry("intro.md"), FolderEntry("guides", "Guides")])
    write_doc("src/index.md", render_metadata(index_fm) + "# Welcome\n")
    write_doc("src/intro.md", "# Introduction\n\nHello.\n")
    write_doc("src/guides/index.md", render_metadata(FrontMatter(nav=[FileEntry("setup.md")])) + "# Guides\n")
    write_doc("src/guides/setup.md", "# Setup\n\n- one\n- two\n")
    write_doc("docnav.toml", CONFIG)
    return tmp_path / "src"


def test_check_passes_on_canonical_tree(canonical_source: Path):
    root = resolve_folder(canonical_source)
    console = _console()

    assert run_check(root, check(canonical_source, root), console) == 0
    assert "All 4 files look good!" in _output(console)


def test_check_fails_on_non_canonical_page(canonical_source: Path):
    (canonical_source / "intro.md").write_text("Introduction\n============\n\nHello.\n", encoding="utf-8")
    root = resolve_folder(canonical_source)
    console = _console()

    assert run_check(root, check(canonical_source, root), console) == 1
    output = _output(console)
    assert f"Fix: {canonical_source / 'intro.md'}" in output
    assert "1/4 files need fixing" in output


def test_check_fails_on_unused_document(canonical_source: Path):
    (canonical_source / "draft.md").write_text("# Draft\n", encoding="utf-8")
    root = resolve_folder(canonical_source)
    console = _console()

    assert run_check(root, check(canonical_source, root), console) == 1
    assert "1 unused file(s)" in _output(console)


def test_check_fails_on_extra_file(canonical_source: Path):
    (canonical_source / "logo.png").write_text("png", encoding="utf-8")
    root = resolve_folder(canonical_source)
    console = _console()

    assert run_check(root, check(canonical_source, root), console) == 1
    output = _output(console)
    assert f"Extra file: {canonical_source / 'logo.png'}" in output
    assert "1 extra file(s)" in output
    assert "look good" not in output


def test_check_prints_paths_verbatim(canonical_source: Path, write_doc):
    index_fm = FrontMatter(name="Home", nav=[FileEntry("intro.md"), FolderEntry("guides", "Guides"), FileEntry("x[b].md")])
    write_doc("src/index.md", render_metadata(index_fm) + "# Welcome\n")
    write_doc("src/x[b].md", "Odd\n===\n")
    root = resolve_folder(canonical_source)
    console = _console()

    assert run_check(root, check(canonical_source, root), console) == 1
    assert f"Fix: {canonical_source / 'x[b].md'}" in _output(console)


def test_fix_rewrites_non_canonical_pages(canonical_source: Path):
    intro = canonical_source / "intro.md"
    intro.write_text("Introduction\n============\n\n\n\nHello.", encoding="utf-8")
    console = _console()

    assert run_fix(resolve_folder(canonical_source), console) == 0
    assert intro.read_text(encoding="utf-8") == "# Introduction\n\nHello.\n"
    assert "Fixed 1/4 files" in _output(console)

    root = resolve_folder(canonical_source)
    assert not any(page.needs_fix for page in root.iter_pages())


def test_fix_normalizes_metadata(canonical_source: Path):
    index = canonical_source / "guides" / "index.md"
    index.write_text("---\nnav: [setup.md]\n---\n\n# Guides\n", encoding="utf-8")

    run_fix(resolve_folder(canonical_source), _console())

    assert index.read_text(encoding="utf-8") == "---\nnav:\n- setup.md\n---\n# Guides\n"


def test_fix_without_changes(canonical_source: Path):
    console = _console()

    assert run_fix(resolve_folder(canonical_source), console) == 0
    assert "All 4 files look good!" in _output(console)


def test_tree_lists_every_page(canonical_source: Path):
    console = _console()
    console.print(build_tree(resolve_folder(canonical_source), canonical_source))

    output = _output(console)
    for label in ("Home", "Introduction", "Guides", "Setup", "guides/setup.md"):
        assert label in output


def test_tree_labels_are_not_markup(canonical_source: Path):
    (canonical_source / "intro.md").write_text("# Use [/] here\n", encoding="utf-8")
    console = _console()
    console.print(build_tree(resolve_folder(canonical_source), canonical_source))

    assert "Use [/] here" in _output(console)


def _invoke(tmp_path: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["--config", str(tmp_path / "docnav.toml"), *args])


def test_cli_check(tmp_path: Path, canonical_source: Path):
    result = _invoke(tmp_path, "check")
    assert result.exit_code == 0, result.output


def test_cli_aliases(tmp_path: Path, canonical_source: Path):
    assert _invoke(tmp_path, "c").exit_code == 0
    assert _invoke(tmp_path, "b").exit_code == 0
    assert _invoke(tmp_path, "f").exit_code == 0


def test_cli_check_reports_drift(tmp_path: Path, canonical_source: Path):
    (canonical_source / "draft.md").write_text("# Draft\n", encoding="utf-8")

    assert _invoke(tmp_path, "check").exit_code == 1
    # build still succeeds; unused files are only warned about
    assert _invoke(tmp_path, "build").exit_code == 0


def test_cli_resolution_error(tmp_path: Path, canonical_source: Path):
    (canonical_source / "intro.md").write_text("no heading\n", encoding="utf-8")

    result = _invoke(tmp_path, "check")

    assert result.exit_code == 1
    assert "h1 title" in result.output


def test_cli_missing_config(tmp_path: Path):
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.toml"), "check"])

    assert result.exit_code == 1
    assert "could not open config file" in result.output


def test_cli_version_gate(tmp_path: Path, canonical_source: Path):
    (tmp_path / "docnav.toml").write_text(CONFIG.replace(">=0.1", ">=99"), encoding="utf-8")

    result = _invoke(tmp_path, "tree")

    assert result.exit_code == 1
    assert "version mismatch" in result.output


def test_cli_rejects_unknown_log_level(tmp_path: Path, canonical_source: Path):
    result = CliRunner().invoke(
        cli, ["--config", str(tmp_path / "docnav.toml"), "check"], env={"DOCNAV_LOG": "loud"}
    )

    assert result.exit_code == 2
    assert "unknown log level" in result.output
