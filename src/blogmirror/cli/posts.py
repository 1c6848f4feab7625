"""Post commands for BlogMirror CLI."""

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
    name="posts",
    help="List and edit posts in the local mirror.",
)

console = Console()


def _posts_table(posts: list[dict]) -> Table:
    table = Table(title=f"Posts ({len(posts)})")
    table.add_column("ID", justify="right")
    table.add_column("Published")
    table.add_column("Title")
    table.add_column("Remote ID")
    for post in posts:
        table.add_row(
            str(post["id"]),
            (post["published_at"] or "")[:10],
            post["title"] or "",
            post["remote_id"] or "-",
        )
    return table


@app.command("list")
def list_posts(
    refresh: bool = typer.Option(False, "--refresh", help="Sync from Blogger before listing."),
    fetch_all: bool = typer.Option(
        False, "--all", help="With --refresh, page through the entire post history."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print posts as JSON."),
    db_path: Path | None = DB_OPTION,
) -> None:
    """List posts, most recently published first."""
    store = open_store(db_path)
    try:
        if refresh:
            with create_sync_progress() as progress:
                posts = asyncio.run(
                    handlers.get_posts(
                        store,
                        refresh_requested=True,
                        fetch_all=fetch_all,
                        credentials=resolve_credentials(),
                        config=load_app_config(),
                        progress=progress,
                    )
                )
        else:
            posts = store.list_posts()
    except (BlogMirrorError, ValueError) as e:
        fail(str(e))

    if as_json:
        typer.echo(json.dumps(posts, indent=2))
    else:
        console.print(_posts_table(posts))


@app.command()
def show(
    post_id: int = typer.Argument(..., help="Local post ID."),
    db_path: Path | None = DB_OPTION,
) -> None:
    """Show a single post as JSON."""
    store = open_store(db_path)
    try:
        post = store.get_post(post_id)
    except BlogMirrorError as e:
        fail(str(e))

    typer.echo(json.dumps(post, indent=2))


@app.command()
def create(
    title: str = typer.Option(..., "--title", "-t", help="Post title."),
    content: str = typer.Option("", "--content", "-c", help="Post body (HTML)."),
    url: str | None = typer.Option(None, "--url", help="Post URL."),
    db_path: Path | None = DB_OPTION,
) -> None:
    """Create a local post."""
    store = open_store(db_path)
    try:
        post = handlers.create_post(store, {"title": title, "content": content, "url": url})
    except BlogMirrorError as e:
        fail(str(e))

    typer.echo(f"Created post {post['id']}.")


@app.command()
def update(
    post_id: int = typer.Argument(..., help="Local post ID."),
    title: str | None = typer.Option(None, "--title", "-t", help="New title."),
    content: str | None = typer.Option(None, "--content", "-c", help="New body (HTML)."),
    url: str | None = typer.Option(None, "--url", help="New URL."),
    db_path: Path | None = DB_OPTION,
) -> None:
    """Edit a post. Only the given fields change."""
    data: dict = {"id": post_id}
    for key, value in (("title", title), ("content", content), ("url", url)):
        if value is not None:
            data[key] = value
    store = open_store(db_path)
    try:
        handlers.update_post(store, data)
    except BlogMirrorError as e:
        fail(str(e))

    typer.echo(f"Updated post {post_id}.")


@app.command()
def delete(
    post_id: int = typer.Argument(..., help="Local post ID."),
    db_path: Path | None = DB_OPTION,
) -> None:
    """Delete a post."""
    store = open_store(db_path)
    try:
        handlers.delete_post(store, post_id)
    except BlogMirrorError as e:
        fail(str(e))

    typer.echo(f"Deleted post {post_id}.")
