"""Stats CLI command for BlogMirror."""

from rich.console import Console
from rich.panel import Panel

from blogmirror.storage.database import BlogStore

console = Console()


def format_stats(store: BlogStore) -> str:
    """Build the stats panel body."""
    posts = store.list_posts()
    local_only = sum(1 for post in posts if post["remote_id"] is None)
    lines = [
        f"Database: {store.db_path}",
        f"Posts: {len(posts)} ({len(posts) - local_only} synced, {local_only} local only)",
        f"Comments: {store.count_comments()}",
    ]
    if posts and posts[0]["published_at"]:
        lines.append(f"Newest post: {posts[0]['published_at'][:10]}")
    return "\n".join(lines)


def show_stats(store: BlogStore) -> None:
    """Print statistics about the local mirror."""
    console.print(Panel(format_stats(store), title="BlogMirror"))
