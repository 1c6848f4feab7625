"""Configuration management for BlogMirror."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BASE_URL = "https://www.googleapis.com/blogger/v3"


def get_config_dir() -> Path:
    """Get the XDG-compliant configuration directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config) / "blogmirror"


def get_data_dir() -> Path:
    """Get the XDG-compliant data directory."""
    xdg_data = os.environ.get("XDG_DATA_HOME", str(Path.home() / ".local" / "share"))
    return Path(xdg_data) / "blogmirror"


@dataclass
class SyncConfig:
    """Sync-related configuration."""

    delay_seconds: float = 1.0


@dataclass
class RemoteConfig:
    """Remote API configuration."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0


@dataclass
class Config:
    """Application configuration."""

    sync: SyncConfig
    remote: RemoteConfig


@dataclass
class BloggerCredentials:
    """API key and blog identifier for the Blogger API."""

    api_key: str
    blog_id: str


def load_config(path: Path) -> Config:
    """Load configuration from TOML file, with defaults for missing values."""
    if not path.exists():
        return Config(sync=SyncConfig(), remote=RemoteConfig())

    with path.open("rb") as f:
        data = tomllib.load(f)

    sync_data = data.get("sync", {})
    sync_config = SyncConfig(
        delay_seconds=float(sync_data.get("delay_seconds", 1.0)),
    )

    remote_data = data.get("remote", {})
    remote_config = RemoteConfig(
        base_url=remote_data.get("base_url", DEFAULT_BASE_URL).rstrip("/"),
        timeout_seconds=float(remote_data.get("timeout_seconds", 30.0)),
    )

    return Config(sync=sync_config, remote=remote_config)


def resolve_credentials() -> BloggerCredentials | None:
    """Read Blogger credentials from the environment.

    Returns None when either BLOGGER_API_KEY or BLOGGER_BLOG_ID is unset or empty.
    """
    api_key = os.environ.get("BLOGGER_API_KEY", "")
    blog_id = os.environ.get("BLOGGER_BLOG_ID", "")
    if not api_key or not blog_id:
        return None
    return BloggerCredentials(api_key=api_key, blog_id=blog_id)
