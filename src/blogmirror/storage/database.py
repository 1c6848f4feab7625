"""Database management for BlogMirror."""

import sqlite3
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from blogmirror.errors import NotFoundError, StoreConstraintViolation

POSTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS posts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    remote_id TEXT UNIQUE,
    title TEXT,
    content TEXT,
    url TEXT,
    published_at TEXT,
    updated_at TEXT
)
"""

COMMENTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS comments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    post_id INTEGER NOT NULL,
    remote_comment_id TEXT UNIQUE,
    author TEXT,
    content TEXT,
    published_at TEXT,
    updated_at TEXT,
    FOREIGN KEY (post_id) REFERENCES posts(id)
)
"""

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_posts_published_at ON posts(published_at)",
    "CREATE INDEX IF NOT EXISTS idx_comments_post ON comments(post_id)",
    "CREATE INDEX IF NOT EXISTS idx_comments_published_at ON comments(published_at)",
]

# Columns a local edit may change. remote_id is owned by sync.
EDITABLE_POST_FIELDS = ("title", "content", "url", "published_at", "updated_at")


def get_db_path() -> Path:
    """Get the default database path."""
    from blogmirror.config import get_data_dir

    data_dir: Path = get_data_dir()
    return data_dir / "blogmirror.db"


def init_database(db_path: Path) -> None:
    """Initialize the SQLite database."""
    with sqlite3.connect(db_path) as conn:
        conn.execute(POSTS_SCHEMA)
        conn.execute(COMMENTS_SCHEMA)
        for index_sql in INDEXES:
            conn.execute(index_sql)
        conn.commit()


def _now() -> str:
    return datetime.now(UTC).isoformat()


class BlogStore:
    """Local mirror of posts and comments backed by a single SQLite file.

    Each method opens its own connection, so one store handle can be shared
    by the sync clients and the request handlers without holding a
    long-lived connection.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        init_database(db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # -- sync upserts -------------------------------------------------------

    def upsert_posts(self, candidates: Iterable[dict[str, Any]]) -> int:
        """Insert posts whose remote_id is not yet known, in one transaction.

        Existing rows are never updated, so local edits survive a re-sync.

        Args:
            candidates: Post dictionaries with remote_id, title, content, url,
                published_at and updated_at keys.

        Returns:
            Number of rows actually inserted.
        """
        inserted = 0
        with sqlite3.connect(self._db_path) as conn:
            for post in candidates:
                cursor = conn.execute(
                    """
                    INSERT OR IGNORE INTO posts (
                        remote_id, title, content, url, published_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        post["remote_id"],
                        post.get("title"),
                        post.get("content"),
                        post.get("url"),
                        post.get("published_at"),
                        post.get("updated_at"),
                    ),
                )
                inserted += cursor.rowcount
            conn.commit()
        return inserted

    def upsert_post(self, candidate: dict[str, Any]) -> bool:
        """Insert a single post unless its remote_id already exists."""
        return self.upsert_posts([candidate]) == 1

    def upsert_comments(self, candidates: Iterable[dict[str, Any]]) -> int:
        """Insert comments whose remote_comment_id is not yet known, in one transaction.

        Returns:
            Number of rows actually inserted.
        """
        inserted = 0
        with sqlite3.connect(self._db_path) as conn:
            for comment in candidates:
                cursor = conn.execute(
                    """
                    INSERT OR IGNORE INTO comments (
                        post_id, remote_comment_id, author, content, published_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        comment["post_id"],
                        comment["remote_comment_id"],
                        comment.get("author", ""),
                        comment.get("content"),
                        comment.get("published_at"),
                        comment.get("updated_at"),
                    ),
                )
                inserted += cursor.rowcount
            conn.commit()
        return inserted

    def upsert_comment(self, candidate: dict[str, Any]) -> bool:
        """Insert a single comment unless its remote_comment_id already exists."""
        return self.upsert_comments([candidate]) == 1

    # -- reads --------------------------------------------------------------

    def list_posts(self) -> list[dict[str, Any]]:
        """Get all posts, most recently published first.

        Timestamps carry mixed UTC offsets, so rows are ordered by julianday().
        """
        with sqlite3.connect(self._db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(
                "SELECT * FROM posts ORDER BY julianday(published_at) DESC, id DESC"
            )
            return [dict(row) for row in cursor.fetchall()]

    def list_synced_posts(self) -> list[dict[str, Any]]:
        """Get id and remote_id of every post known to the remote platform."""
        with sqlite3.connect(self._db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(
                "SELECT id, remote_id FROM posts WHERE remote_id IS NOT NULL ORDER BY id"
            )
            return [dict(row) for row in cursor.fetchall()]

    def get_post(self, post_id: int) -> dict[str, Any]:
        """Get one post by local id.

        Raises:
            NotFoundError: If no post has this id.
        """
        with sqlite3.connect(self._db_path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute("SELECT * FROM posts WHERE id = ?", (post_id,)).fetchone()
        if row is None:
            raise NotFoundError("post", post_id)
        return dict(row)

    def list_comments(self, post_id: int | None = None) -> list[dict[str, Any]]:
        """Get comments for one post, or all comments, most recent first.

        Only comments attached to an existing post are returned.
        """
        query = "SELECT c.* FROM comments c JOIN posts p ON p.id = c.post_id"
        params: tuple[Any, ...] = ()
        if post_id is not None:
            query += " WHERE c.post_id = ?"
            params = (post_id,)
        query += " ORDER BY julianday(c.published_at) DESC, c.id DESC"
        with sqlite3.connect(self._db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(query, params)
            return [dict(row) for row in cursor.fetchall()]

    def count_posts(self) -> int:
        with sqlite3.connect(self._db_path) as conn:
            count: int = conn.execute("SELECT COUNT(*) FROM posts").fetchone()[0]
        return count

    def count_comments(self) -> int:
        with sqlite3.connect(self._db_path) as conn:
            count: int = conn.execute("SELECT COUNT(*) FROM comments").fetchone()[0]
        return count

    # -- local CRUD ---------------------------------------------------------

    def create_post(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create a post locally without contacting the remote platform.

        published_at and updated_at default to the current UTC time.

        Raises:
            StoreConstraintViolation: If data carries a remote_id that already exists.
        """
        now = _now()
        post = {
            "remote_id": data.get("remote_id"),
            "title": data.get("title"),
            "content": data.get("content"),
            "url": data.get("url"),
            "published_at": data.get("published_at") or now,
            "updated_at": data.get("updated_at") or now,
        }
        try:
            with sqlite3.connect(self._db_path) as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO posts (
                        remote_id, title, content, url, published_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        post["remote_id"],
                        post["title"],
                        post["content"],
                        post["url"],
                        post["published_at"],
                        post["updated_at"],
                    ),
                )
                conn.commit()
        except sqlite3.IntegrityError as e:
            raise StoreConstraintViolation(str(e)) from e
        return {"id": cursor.lastrowid, **post}

    def update_post(self, data: dict[str, Any]) -> dict[str, Any]:
        """Apply a local edit to an existing post.

        Only the editable fields present in data are changed; updated_at is
        refreshed unless data supplies it.

        Raises:
            NotFoundError: If data["id"] does not reference an existing post.
        """
        post_id = int(data["id"])
        changes = {field: data[field] for field in EDITABLE_POST_FIELDS if field in data}
        changes.setdefault("updated_at", _now())
        assignments = ", ".join(f"{field} = ?" for field in changes)
        with sqlite3.connect(self._db_path) as conn:
            cursor = conn.execute(
                f"UPDATE posts SET {assignments} WHERE id = ?",
                (*changes.values(), post_id),
            )
            conn.commit()
        if cursor.rowcount == 0:
            raise NotFoundError("post", post_id)
        return self.get_post(post_id)

    def delete_post(self, post_id: int) -> None:
        """Delete a post. Its comments stay stored but are no longer listed.

        Raises:
            NotFoundError: If no post has this id.
        """
        with sqlite3.connect(self._db_path) as conn:
            cursor = conn.execute("DELETE FROM posts WHERE id = ?", (post_id,))
            if cursor.rowcount == 0:
                conn.rollback()
                raise NotFoundError("post", post_id)
            conn.commit()
