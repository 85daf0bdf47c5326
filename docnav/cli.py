"""CLI entrypoint for docnav."""

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import CONFIG_FILENAME, Config, check_version, load_config
from .errors import ConfigError, NavError

ALIASES = {"b": "build", "c": "check", "f": "fix"}


class AliasedGroup(click.Group):
    """Group that also accepts the one-letter mode names."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))

    def resolve_command(self, ctx: click.Context, args: list[str]):
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    env_level = os.environ.get("DOCNAV_LOG")
    if env_level:
        named = logging.getLevelName(env_level.upper())
        if not isinstance(named, int):
            raise click.BadParameter(f"unknown log level {env_level!r}", param_hint="DOCNAV_LOG")
        level = named
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


@click.group(cls=AliasedGroup)
@click.version_option(__version__, prog_name="docnav")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Path to the config file (defaults to ./{CONFIG_FILENAME})",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """docnav - Resolve and validate nav metadata in a markdown source tree.

    Modes:

        b, build - Resolve the tree (site output is not implemented yet)

        c, check - Check that every page matches the canonical style

        f, fix   - Rewrite pages into the canonical style (modifies the source)
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path or Path(CONFIG_FILENAME)


def _load(ctx: click.Context, console: Console):
    """Load config, gate the version, resolve the tree and check for drift."""
    from .commands.source import load_source

    try:
        config = load_config(ctx.obj["config_path"])
        check_version(config, __version__)
        logging.getLogger(__name__).debug("config: %s", _config_summary(config))
        root, drift = load_source(config, console)
    except (ConfigError, NavError) as exc:
        raise click.ClickException(str(exc)) from exc
    return config, root, drift


@cli.command()
@click.pass_context
def build(ctx: click.Context) -> None:
    """Resolve the tree and report what a build would use (no output yet)."""
    from .commands.build import run_build

    console = Console(stderr=True)
    config, root, drift = _load(ctx, console)
    sys.exit(run_build(root, drift, config, console))


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Check that every page matches the canonical style.

    Exits non-zero if a page needs fixing, a document is not in any nav, or
    a non-document file sits in the source tree.
    """
    from .commands.check import run_check

    console = Console(stderr=True)
    _, root, drift = _load(ctx, console)
    sys.exit(run_check(root, drift, console))


@cli.command()
@click.pass_context
def fix(ctx: click.Context) -> None:
    """Rewrite non-canonical pages in place (will modify the source tree)."""
    from .commands.fix import run_fix

    console = Console(stderr=True)
    _, root, _ = _load(ctx, console)
    try:
        exit_code = run_fix(root, console)
    except NavError as exc:
        raise click.ClickException(str(exc)) from exc
    sys.exit(exit_code)


@cli.command()
@click.pass_context
def tree(ctx: click.Context) -> None:
    """Print the resolved nav tree."""
    from .commands.tree import run_tree
    from .nav.paths import normalize

    config, root, _ = _load(ctx, Console(stderr=True))
    sys.exit(run_tree(root, normalize(config.build.source)))


def _config_summary(config: Config) -> str:
    return f"{config.metadata.name} ({config.path})"


if __name__ == "__main__":
    cli()
