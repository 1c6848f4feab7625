"""Tests for per-post comment sync."""

from unittest.mock import MagicMock

import pytest
from conftest import FakeBloggerAPI, RecordingDelay, remote_comment

from blogmirror.client.base import BloggerClient
from blogmirror.errors import RemoteFetchError
from blogmirror.storage.database import BlogStore
from blogmirror.sync.comments import fetch_all_comments_for_post


def _synced_post(store: BlogStore, remote_id: str = "r1") -> int:
    store.upsert_post({"remote_id": remote_id, "title": "t", "published_at": "2025-01-01"})
    return store.list_synced_posts()[-1]["id"]


@pytest.mark.asyncio
async def test_fetches_every_page_until_no_cursor(
    http_client: MagicMock, fake_api: FakeBloggerAPI, blogger: BloggerClient, store: BlogStore
) -> None:
    post_id = _synced_post(store)
    fake_api.add_comments_page("r1", [remote_comment("c1"), remote_comment("c2")], None, "t2")
    fake_api.add_comments_page("r1", [remote_comment("c3")], "t2", "t3")
    fake_api.add_comments_page("r1", [], "t3")
    delay = RecordingDelay()

    comments = await fetch_all_comments_for_post(
        http_client, blogger, store, "r1", post_id, delay=delay
    )

    assert [c["remote_comment_id"] for c in comments] == ["c1", "c2", "c3"]
    assert len(fake_api.comment_requests()) == 3
    assert delay.calls == 2
    assert {c["post_id"] for c in store.list_comments()} == {post_id}
    assert store.count_comments() == 3


@pytest.mark.asyncio
async def test_single_page_does_not_wait(
    http_client: MagicMock, fake_api: FakeBloggerAPI, blogger: BloggerClient, store: BlogStore
) -> None:
    post_id = _synced_post(store)
    fake_api.add_comments_page("r1", [remote_comment("c1")])
    delay = RecordingDelay()

    await fetch_all_comments_for_post(http_client, blogger, store, "r1", post_id, delay=delay)

    assert delay.calls == 0


@pytest.mark.asyncio
async def test_resync_does_not_duplicate_comments(
    http_client: MagicMock, fake_api: FakeBloggerAPI, blogger: BloggerClient, store: BlogStore
) -> None:
    post_id = _synced_post(store)
    fake_api.add_comments_page("r1", [remote_comment("c1"), remote_comment("c2")])

    await fetch_all_comments_for_post(http_client, blogger, store, "r1", post_id)
    await fetch_all_comments_for_post(http_client, blogger, store, "r1", post_id)

    assert store.count_comments() == 2


@pytest.mark.asyncio
async def test_failed_page_keeps_earlier_pages(
    http_client: MagicMock, fake_api: FakeBloggerAPI, blogger: BloggerClient, store: BlogStore
) -> None:
    """A failure on page two should leave page one's comments committed."""
    post_id = _synced_post(store)
    fake_api.add_comments_page("r1", [remote_comment("c1")], None, "t2")
    fake_api.fail("r1", cursor="t2", status=500)

    with pytest.raises(RemoteFetchError):
        await fetch_all_comments_for_post(http_client, blogger, store, "r1", post_id)

    assert [c["remote_comment_id"] for c in store.list_comments(post_id)] == ["c1"]
