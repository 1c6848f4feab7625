"""Shared helpers for BlogMirror CLI commands."""

from pathlib import Path
from typing import NoReturn

import typer

from blogmirror.config import Config, get_config_dir, load_config
from blogmirror.storage.database import BlogStore, get_db_path


def open_store(db_path: Path | None = None) -> BlogStore:
    """Open the store at db_path, or at the default data-dir location."""
    path = db_path or get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    return BlogStore(path)


def load_app_config() -> Config:
    """Load config.toml from the config directory."""
    return load_config(get_config_dir() / "config.toml")


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


DB_OPTION = typer.Option(None, "--db", help="Path to the SQLite database file.")
