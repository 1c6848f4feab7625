"""Request handlers: thin entry points over the store and the sync orchestrator."""

from typing import Any

import httpx
from rich.progress import Progress

from blogmirror.client.base import BloggerClient
from blogmirror.config import BloggerCredentials, Config, RemoteConfig, SyncConfig
from blogmirror.storage.database import BlogStore
from blogmirror.sync.orchestrator import SyncMode, run_sync
from blogmirror.sync.throttle import DelayPolicy, FixedDelay


async def refresh(
    store: BlogStore,
    credentials: BloggerCredentials | None,
    mode: SyncMode = SyncMode.INCREMENTAL,
    config: Config | None = None,
    delay: DelayPolicy | None = None,
    http_client: httpx.AsyncClient | None = None,
    progress: Progress | None = None,
) -> dict[str, int]:
    """Run a sync pass with settings taken from config.

    Raises:
        ValueError: If no credentials are available.
        RemoteFetchError: If the sync pass fails.
    """
    if credentials is None:
        raise ValueError(
            "No Blogger credentials found. Set BLOGGER_API_KEY and BLOGGER_BLOG_ID."
        )
    config = config or Config(sync=SyncConfig(), remote=RemoteConfig())
    client = BloggerClient(credentials, base_url=config.remote.base_url)
    delay = delay or FixedDelay(config.sync.delay_seconds)

    if http_client is not None:
        return await run_sync(http_client, client, store, mode, delay=delay, progress=progress)

    async with httpx.AsyncClient(timeout=config.remote.timeout_seconds) as owned_client:
        return await run_sync(owned_client, client, store, mode, delay=delay, progress=progress)


async def get_posts(
    store: BlogStore,
    refresh_requested: bool = False,
    fetch_all: bool = False,
    credentials: BloggerCredentials | None = None,
    **sync_options: Any,
) -> list[dict[str, Any]]:
    """List posts, optionally running a sync pass first."""
    if refresh_requested:
        mode = SyncMode.FULL if fetch_all else SyncMode.INCREMENTAL
        await refresh(store, credentials, mode, **sync_options)
    return store.list_posts()


def create_post(store: BlogStore, data: dict[str, Any]) -> dict[str, Any]:
    return store.create_post(data)


def update_post(store: BlogStore, data: dict[str, Any]) -> dict[str, Any]:
    return store.update_post(data)


def delete_post(store: BlogStore, post_id: int) -> dict[str, Any]:
    store.delete_post(post_id)
    return {}


async def get_comments(
    store: BlogStore,
    refresh_requested: bool = False,
    post_id: int | None = None,
    credentials: BloggerCredentials | None = None,
    **sync_options: Any,
) -> list[dict[str, Any]]:
    """List comments for one post or all posts, optionally syncing first."""
    if refresh_requested:
        await refresh(store, credentials, SyncMode.INCREMENTAL, **sync_options)
    return store.list_comments(post_id)
