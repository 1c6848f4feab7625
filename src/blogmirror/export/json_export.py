"""JSON export functionality for BlogMirror."""

from datetime import UTC, datetime
from typing import Any


def _format_comment(comment: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": comment["id"],
        "remote_id": comment["remote_comment_id"],
        "author": comment["author"],
        "content": comment["content"],
        "published_at": comment["published_at"],
        "updated_at": comment["updated_at"],
    }


def _format_post(post: dict[str, Any], comments: list[dict[str, Any]]) -> dict[str, Any]:
    """Format a post for export with its comments nested."""
    return {
        "id": post["id"],
        "remote_id": post["remote_id"],
        "title": post["title"],
        "content": post["content"],
        "url": post["url"],
        "published_at": post["published_at"],
        "updated_at": post["updated_at"],
        "comments": [_format_comment(c) for c in comments],
    }


def export_posts_to_json(
    posts: list[dict[str, Any]],
    comments: list[dict[str, Any]],
) -> dict[str, Any]:
    """Export posts and their comments to a JSON-serializable dictionary."""
    by_post: dict[int, list[dict[str, Any]]] = {}
    for comment in comments:
        by_post.setdefault(comment["post_id"], []).append(comment)
    return {
        "exported_at": datetime.now(UTC).isoformat(),
        "post_count": len(posts),
        "comment_count": sum(len(by_post.get(p["id"], [])) for p in posts),
        "posts": [_format_post(p, by_post.get(p["id"], [])) for p in posts],
    }
