"""Config commands for BlogMirror CLI."""

import typer

from blogmirror.cli.common import load_app_config
from blogmirror.config import get_config_dir, get_data_dir, resolve_credentials

app = typer.Typer(
    name="config",
    help="Show BlogMirror configuration.",
)


@app.command()
def show() -> None:
    """Show current configuration."""
    config = load_app_config()
    credentials = resolve_credentials()
    typer.echo(f"config_dir: {get_config_dir()}")
    typer.echo(f"data_dir: {get_data_dir()}")
    typer.echo(f"base_url: {config.remote.base_url}")
    typer.echo(f"timeout_seconds: {config.remote.timeout_seconds}")
    typer.echo(f"delay_seconds: {config.sync.delay_seconds}")
    typer.echo(f"blog_id: {credentials.blog_id if credentials else '(not set)'}")
    typer.echo(f"api_key: {'(set)' if credentials else '(not set)'}")
