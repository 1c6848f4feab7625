"""Comment commands for BlogMirror CLI."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from blogmirror import handlers
from blogmirror.cli.common import DB_OPTION, fail, load_app_config, open_store
from blogmirror.cli.sync import create_sync_progress
from blogmirror.config import resolve_credentials
from blogmirror.errors import BlogMirrorError

app = typer.Typer(
    name="comments",
    help="List comments in the local mirror.",
)

console = Console()


@app.command("list")
def list_comments(
    post_id: int | None = typer.Option(None, "--post-id", "-p", help="Only this post's comments."),
    refresh: bool = typer.Option(False, "--refresh", help="Sync from Blogger before listing."),
    as_json: bool = typer.Option(False, "--json", help="Print comments as JSON."),
    db_path: Path | None = DB_OPTION,
) -> None:
    """List comments, most recently published first."""
    store = open_store(db_path)
    try:
        if refresh:
            with create_sync_progress() as progress:
                comments = asyncio.run(
                    handlers.get_comments(
                        store,
                        refresh_requested=True,
                        post_id=post_id,
                        credentials=resolve_credentials(),
                        config=load_app_config(),
                        progress=progress,
                    )
                )
        else:
            comments = store.list_comments(post_id)
    except (BlogMirrorError, ValueError) as e:
        fail(str(e))

    if as_json:
        typer.echo(json.dumps(comments, indent=2))
        return

    table = Table(title=f"Comments ({len(comments)})")
    table.add_column("ID", justify="right")
    table.add_column("Post", justify="right")
    table.add_column("Published")
    table.add_column("Author")
    for comment in comments:
        table.add_row(
            str(comment["id"]),
            str(comment["post_id"]),
            (comment["published_at"] or "")[:10],
            comment["author"] or "",
        )
    console.print(table)
