"""Sync orchestration: posts first, then comments for every known post."""

from enum import StrEnum

import httpx
from loguru import logger
from rich.progress import Progress

from blogmirror.client.base import BloggerClient
from blogmirror.storage.database import BlogStore
from blogmirror.sync.comments import fetch_all_comments_for_post
from blogmirror.sync.posts import sync_posts_page
from blogmirror.sync.throttle import DelayPolicy, FixedDelay


class SyncMode(StrEnum):
    """How much of the remote post history a sync pass walks."""

    INCREMENTAL = "incremental"
    FULL = "full"


async def run_sync(
    http_client: httpx.AsyncClient,
    client: BloggerClient,
    store: BlogStore,
    mode: SyncMode = SyncMode.INCREMENTAL,
    delay: DelayPolicy | None = None,
    progress: Progress | None = None,
) -> dict[str, int]:
    """Run one sync pass against the remote blog.

    Incremental mode fetches only the newest page of posts; full mode follows
    continuation cursors through the whole history. Either way, comments are
    then synced for every post the store knows a remote id for, including
    posts from earlier passes. Comment sync starts only after every post page
    of this pass is committed.

    The delay policy is applied before each follow-up page request and
    between posts during comment sync. There are no retries: the first
    failed request aborts the pass, leaving already-committed pages in place.

    Args:
        http_client: The httpx async client to use for requests.
        client: Blogger client carrying the blog id and API key.
        store: Local store to upsert into.
        mode: SyncMode.INCREMENTAL or SyncMode.FULL.
        delay: Throttle between remote calls. Defaults to FixedDelay(1.0).
        progress: Optional Rich progress bar for displaying sync progress.

    Returns:
        Dictionary with post_pages, posts_inserted, comment_posts and
        comments_inserted counts.

    Raises:
        RemoteFetchError: If any remote request fails.
    """
    mode = SyncMode(mode)
    delay = delay or FixedDelay(1.0)
    logger.info("Starting {} sync of blog {}", mode.value, client.blog_id)

    post_pages = 0
    posts_inserted = 0
    cursor: str | None = None
    posts_task = progress.add_task("Syncing posts", total=None) if progress else None

    while True:
        _, cursor, inserted = await sync_posts_page(http_client, client, store, cursor)
        post_pages += 1
        posts_inserted += inserted
        if progress and posts_task is not None:
            progress.update(posts_task, advance=1)
        if mode is SyncMode.INCREMENTAL or not cursor:
            break
        await delay.wait()

    if progress and posts_task is not None:
        progress.update(posts_task, total=post_pages, completed=post_pages)

    synced_posts = store.list_synced_posts()
    comments_before = store.count_comments()
    comments_task = (
        progress.add_task("Syncing comments", total=len(synced_posts)) if progress else None
    )

    for i, post in enumerate(synced_posts):
        await fetch_all_comments_for_post(
            http_client,
            client,
            store,
            post_remote_id=post["remote_id"],
            post_id=post["id"],
            delay=delay,
        )
        if progress and comments_task is not None:
            progress.update(comments_task, completed=i + 1)
        if i < len(synced_posts) - 1:
            await delay.wait()

    result = {
        "post_pages": post_pages,
        "posts_inserted": posts_inserted,
        "comment_posts": len(synced_posts),
        "comments_inserted": store.count_comments() - comments_before,
    }
    logger.info("Finished {} sync: {}", mode.value, result)
    return result
