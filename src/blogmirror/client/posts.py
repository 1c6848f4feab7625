"""Blogger posts endpoint: fetching and mapping one page at a time."""

from typing import Any

import httpx

from blogmirror.client.base import BloggerClient

POSTS_FIELDS = "nextPageToken,items(id,title,content,url,published,updated)"


def build_posts_url(client: BloggerClient, cursor: str | None = None) -> str:
    """Build URL for one page of the blog's posts."""
    params = {"fields": POSTS_FIELDS}
    if cursor:
        params["pageToken"] = cursor
    return client.build_url("posts", params)


def map_post(item: dict[str, Any]) -> dict[str, Any]:
    """Map a remote post item to a local post candidate."""
    return {
        "remote_id": item["id"],
        "title": item.get("title"),
        "content": item.get("content"),
        "url": item.get("url"),
        "published_at": item.get("published"),
        "updated_at": item.get("updated"),
    }


def parse_posts_response(response: dict[str, Any]) -> tuple[list[dict[str, Any]], str | None]:
    """Parse a posts page into (post candidates, next cursor)."""
    posts = [map_post(item) for item in response.get("items") or []]
    return posts, response.get("nextPageToken") or None


async def fetch_posts_page(
    http_client: httpx.AsyncClient,
    client: BloggerClient,
    cursor: str | None = None,
) -> tuple[list[dict[str, Any]], str | None]:
    """Fetch one page of posts from the Blogger API.

    Args:
        http_client: The httpx async client to use for requests.
        client: Blogger client carrying the blog id and API key.
        cursor: Continuation token from the previous page, None for the first page.

    Returns:
        Tuple of (post candidates, next cursor or None when this was the last page).

    Raises:
        RemoteFetchError: If the API request fails.
    """
    data = await client.get_json(http_client, build_posts_url(client, cursor))
    return parse_posts_response(data)
