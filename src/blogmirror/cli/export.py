"""Export commands for BlogMirror CLI."""

import json as json_lib
from pathlib import Path

import typer

from blogmirror.cli.common import DB_OPTION, open_store
from blogmirror.export.json_export import export_posts_to_json

app = typer.Typer(
    name="export",
    help="Export the local mirror.",
)


@app.command()
def json(
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file path. Prints to stdout when omitted."
    ),
    db_path: Path | None = DB_OPTION,
) -> None:
    """Export posts with their comments to JSON."""
    store = open_store(db_path)
    data = export_posts_to_json(store.list_posts(), store.list_comments())
    content = json_lib.dumps(data, indent=2, ensure_ascii=False)

    if output is None:
        typer.echo(content)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content)
    typer.echo(f"Exported {data['post_count']} posts to {output}")
