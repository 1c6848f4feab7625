"""Blogger comments endpoint: fetching and mapping one page at a time."""

from typing import Any

import httpx

from blogmirror.client.base import BloggerClient

COMMENTS_FIELDS = "nextPageToken,items(id,content,published,updated,author/displayName)"


def build_comments_url(
    client: BloggerClient, post_remote_id: str, cursor: str | None = None
) -> str:
    """Build URL for one page of comments on a remote post."""
    params = {"fields": COMMENTS_FIELDS}
    if cursor:
        params["pageToken"] = cursor
    return client.build_url(f"posts/{post_remote_id}/comments", params)


def map_comment(item: dict[str, Any], post_id: int) -> dict[str, Any]:
    """Map a remote comment item to a local comment candidate owned by post_id."""
    author = item.get("author") or {}
    return {
        "post_id": post_id,
        "remote_comment_id": item["id"],
        "author": author.get("displayName") or "",
        "content": item.get("content"),
        "published_at": item.get("published"),
        "updated_at": item.get("updated"),
    }


def parse_comments_response(
    response: dict[str, Any], post_id: int
) -> tuple[list[dict[str, Any]], str | None]:
    """Parse a comments page into (comment candidates, next cursor)."""
    comments = [map_comment(item, post_id) for item in response.get("items") or []]
    return comments, response.get("nextPageToken") or None


async def fetch_comments_page(
    http_client: httpx.AsyncClient,
    client: BloggerClient,
    post_remote_id: str,
    post_id: int,
    cursor: str | None = None,
) -> tuple[list[dict[str, Any]], str | None]:
    """Fetch one page of comments for a remote post.

    Raises:
        RemoteFetchError: If the API request fails.
    """
    url = build_comments_url(client, post_remote_id, cursor)
    data = await client.get_json(http_client, url)
    return parse_comments_response(data, post_id)
