"""Tree command: print the resolved nav."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ..models import Category, Folder, Node, Page


def build_tree(root: Folder, base: Path) -> Tree:
    tree = Tree(_label(root, base))
    for child in root.children:
        _add(tree, child, base)
    return tree


def _label(node: Node, base: Path) -> str:
    if isinstance(node, Page):
        return f"{escape(node.name)} [dim]{_rel(node.path, base)}[/]"
    if isinstance(node, Folder):
        return f"[bold]{escape(node.name)}[/] [dim]{_rel(node.index.path, base)}[/]"
    return f"[italic]{escape(node.name)}[/]"


def _add(parent: Tree, node: Node, base: Path) -> None:
    branch = parent.add(_label(node, base))
    if isinstance(node, (Folder, Category)):
        for child in node.children:
            _add(branch, child, base)


def _rel(path: Path, base: Path) -> str:
    try:
        return escape(path.relative_to(base).as_posix())
    except ValueError:
        return escape(str(path))


def run_tree(root: Folder, base: Path, console: Console | None = None) -> int:
    console = console or Console()
    console.print(build_tree(root, base))
    return 0
