"""Sync command for BlogMirror CLI."""

import asyncio
from pathlib import Path

import typer
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from blogmirror import handlers
from blogmirror.cli.common import DB_OPTION, fail, load_app_config, open_store
from blogmirror.config import resolve_credentials
from blogmirror.errors import BlogMirrorError
from blogmirror.sync.orchestrator import SyncMode


def create_sync_progress() -> Progress:
    """Create a progress bar for sync operations."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        transient=False,
    )


def sync(
    full: bool = typer.Option(
        False, "--full", help="Page through the entire post history, not just the newest page."
    ),
    db_path: Path | None = DB_OPTION,
) -> None:
    """Sync posts and comments from Blogger to local storage."""
    store = open_store(db_path)
    mode = SyncMode.FULL if full else SyncMode.INCREMENTAL

    try:
        with create_sync_progress() as progress:
            result = asyncio.run(
                handlers.refresh(
                    store,
                    resolve_credentials(),
                    mode,
                    config=load_app_config(),
                    progress=progress,
                )
            )
    except (BlogMirrorError, ValueError) as e:
        fail(f"{e}\nPreviously synced pages were kept; try again later.")

    typer.echo(
        f"Synced {result['posts_inserted']} new posts from {result['post_pages']} pages, "
        f"{result['comments_inserted']} new comments across {result['comment_posts']} posts."
    )
