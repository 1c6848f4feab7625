"""Shared test fixtures and utilities."""

import os
import re
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from blogmirror.client.base import BloggerClient
from blogmirror.config import BloggerCredentials
from blogmirror.storage.database import BlogStore

# Disable Rich color output for consistent test output across environments
os.environ["NO_COLOR"] = "1"

BASE_URL = "https://blogger.test/v3"
ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from CLI output."""
    return ANSI_ESCAPE.sub("", text)


def remote_post(
    post_id: str,
    published: str = "2025-01-01T12:00:00Z",
    title: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """Create a Blogger API post item with sensible defaults."""
    item = {
        "id": post_id,
        "title": title or f"Post {post_id}",
        "content": f"<p>Body of {post_id}</p>",
        "url": f"https://example.blogspot.com/{post_id}.html",
        "published": published,
        "updated": published,
    }
    item.update(kwargs)
    return item


def remote_comment(
    comment_id: str,
    published: str = "2025-01-02T12:00:00Z",
    author: str | None = "Reader",
) -> dict[str, Any]:
    """Create a Blogger API comment item."""
    item: dict[str, Any] = {
        "id": comment_id,
        "content": f"<p>Comment {comment_id}</p>",
        "published": published,
        "updated": published,
    }
    if author is not None:
        item["author"] = {"displayName": author}
    return item


class FakeBloggerAPI:
    """In-memory Blogger API serving canned pages keyed by continuation cursor."""

    def __init__(self) -> None:
        self.post_pages: dict[str | None, dict[str, Any]] = {}
        self.comment_pages: dict[tuple[str, str | None], dict[str, Any]] = {}
        self.failures: dict[tuple[str, str | None], int] = {}
        self.requests: list[str] = []

    def add_posts_page(
        self,
        items: list[dict[str, Any]],
        cursor: str | None = None,
        next_cursor: str | None = None,
    ) -> None:
        page: dict[str, Any] = {"items": items}
        if next_cursor:
            page["nextPageToken"] = next_cursor
        self.post_pages[cursor] = page

    def add_comments_page(
        self,
        post_remote_id: str,
        items: list[dict[str, Any]],
        cursor: str | None = None,
        next_cursor: str | None = None,
    ) -> None:
        page: dict[str, Any] = {"items": items}
        if next_cursor:
            page["nextPageToken"] = next_cursor
        self.comment_pages[(post_remote_id, cursor)] = page

    def fail(self, resource: str, cursor: str | None = None, status: int = 500) -> None:
        """Make a request fail. resource is "posts" or a post's remote id."""
        self.failures[(resource, cursor)] = status

    def get(self, url: str) -> httpx.Response:
        self.requests.append(url)
        parsed = httpx.URL(url)
        cursor = parsed.params.get("pageToken")
        parts = parsed.path.strip("/").split("/")
        request = httpx.Request("GET", url)

        if parts[-1] == "comments":
            resource = parts[-2]
            page = self.comment_pages.get((resource, cursor), {})
        else:
            resource = "posts"
            page = self.post_pages.get(cursor, {})

        status = self.failures.get((resource, cursor))
        if status is not None:
            return httpx.Response(status, json={"error": "boom"}, request=request)
        return httpx.Response(200, json=page, request=request)

    def post_requests(self) -> list[str]:
        return [u for u in self.requests if not httpx.URL(u).path.endswith("/comments")]

    def comment_requests(self) -> list[str]:
        return [u for u in self.requests if httpx.URL(u).path.endswith("/comments")]


class RecordingDelay:
    """Delay policy that counts waits instead of sleeping."""

    def __init__(self) -> None:
        self.calls = 0

    async def wait(self) -> None:
        self.calls += 1


@pytest.fixture
def store(tmp_path: Path) -> BlogStore:
    """A fresh store in a temporary database file."""
    return BlogStore(tmp_path / "test.db")


@pytest.fixture
def fake_api() -> FakeBloggerAPI:
    return FakeBloggerAPI()


@pytest.fixture
def http_client(fake_api: FakeBloggerAPI) -> MagicMock:
    """httpx.AsyncClient stand-in routing GETs to the fake API."""
    mock_client = MagicMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock(side_effect=fake_api.get)
    return mock_client


@pytest.fixture
def credentials() -> BloggerCredentials:
    return BloggerCredentials(api_key="secret-key", blog_id="blog1")


@pytest.fixture
def blogger(credentials: BloggerCredentials) -> BloggerClient:
    return BloggerClient(credentials, base_url=BASE_URL)
