"""Post sync: fetch one page of remote posts and persist it."""

from typing import Any

import httpx
from loguru import logger

from blogmirror.client.base import BloggerClient
from blogmirror.client.posts import fetch_posts_page
from blogmirror.storage.database import BlogStore


async def sync_posts_page(
    http_client: httpx.AsyncClient,
    client: BloggerClient,
    store: BlogStore,
    cursor: str | None = None,
) -> tuple[list[dict[str, Any]], str | None, int]:
    """Fetch one page of posts and upsert it before returning.

    The page is committed before the caller can request the next one, so a
    later failure never loses rows from earlier pages.

    Returns:
        Tuple of (post candidates on this page, next cursor, rows inserted).

    Raises:
        RemoteFetchError: If the API request fails. Nothing from this page is stored.
    """
    posts, next_cursor = await fetch_posts_page(http_client, client, cursor)
    inserted = store.upsert_posts(posts)
    logger.info(
        "Posts page: {} fetched, {} new, more={}", len(posts), inserted, next_cursor is not None
    )
    return posts, next_cursor, inserted
