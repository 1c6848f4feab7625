"""BlogMirror CLI main entry point."""

import sys
from pathlib import Path

import typer
from loguru import logger

from blogmirror import __version__
from blogmirror.cli import comments, config, export, posts
from blogmirror.cli import stats as stats_module
from blogmirror.cli import sync as sync_module
from blogmirror.cli.common import DB_OPTION, open_store

app = typer.Typer(
    name="blogmirror",
    help="Mirror your Blogger posts and comments into a local database.",
)

app.add_typer(posts.app, name="posts")
app.add_typer(comments.app, name="comments")
app.add_typer(export.app, name="export")
app.add_typer(config.app, name="config")
app.command(name="sync")(sync_module.sync)


@app.command()
def stats(db_path: Path | None = DB_OPTION) -> None:
    """Show statistics about the local mirror."""
    stats_module.show_stats(open_store(db_path))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and sync progress."),
) -> None:
    """BlogMirror - Mirror a Blogger blog locally."""
    if version:
        typer.echo(f"blogmirror version {__version__}")
        raise typer.Exit()
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


if __name__ == "__main__":
    app()
