"""Comment sync: page through every comment of one remote post."""

from typing import Any

import httpx
from loguru import logger

from blogmirror.client.base import BloggerClient
from blogmirror.client.comments import fetch_comments_page
from blogmirror.storage.database import BlogStore
from blogmirror.sync.throttle import DelayPolicy, NoDelay


async def fetch_all_comments_for_post(
    http_client: httpx.AsyncClient,
    client: BloggerClient,
    store: BlogStore,
    post_remote_id: str,
    post_id: int,
    delay: DelayPolicy | None = None,
) -> list[dict[str, Any]]:
    """Fetch all comment pages for a remote post, upserting each page as it arrives.

    Args:
        http_client: The httpx async client to use for requests.
        client: Blogger client carrying the blog id and API key.
        store: Local store receiving the comments.
        post_remote_id: The post's identifier on the remote platform.
        post_id: The post's local id, recorded as the owner of each comment.
        delay: Policy applied between pages when a continuation cursor is present.

    Returns:
        Every comment candidate fetched for this post, in remote order.

    Raises:
        RemoteFetchError: If any page fails. Pages before it stay committed.
    """
    delay = delay or NoDelay()
    fetched: list[dict[str, Any]] = []
    inserted = 0
    cursor: str | None = None

    while True:
        comments, cursor = await fetch_comments_page(
            http_client, client, post_remote_id, post_id, cursor
        )
        inserted += store.upsert_comments(comments)
        fetched.extend(comments)
        if not cursor:
            break
        await delay.wait()

    logger.info(
        "Post {}: {} comments fetched, {} new", post_remote_id, len(fetched), inserted
    )
    return fetched
