"""Tests for JSON export functionality."""

from blogmirror.export.json_export import export_posts_to_json
from blogmirror.storage.database import BlogStore


def test_export_includes_exported_at_timestamp() -> None:
    result = export_posts_to_json(posts=[], comments=[])

    assert "T" in result["exported_at"]
    assert result["post_count"] == 0
    assert result["posts"] == []


def test_export_nests_comments_under_posts(store: BlogStore) -> None:
    store.upsert_posts(
        [
            {"remote_id": "r1", "title": "One", "published_at": "2025-01-01"},
            {"remote_id": "r2", "title": "Two", "published_at": "2025-01-02"},
        ]
    )
    by_remote = {p["remote_id"]: p["id"] for p in store.list_posts()}
    store.upsert_comment(
        {
            "post_id": by_remote["r1"],
            "remote_comment_id": "c1",
            "author": "Alice",
            "content": "<p>hi</p>",
            "published_at": "2025-01-03",
        }
    )

    result = export_posts_to_json(store.list_posts(), store.list_comments())

    assert result["post_count"] == 2
    assert result["comment_count"] == 1
    two, one = result["posts"]
    assert two["title"] == "Two"
    assert two["comments"] == []
    assert one["comments"][0]["remote_id"] == "c1"
    assert one["comments"][0]["author"] == "Alice"
