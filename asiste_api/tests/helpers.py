"""Test helpers shared across modules (plain functions, not fixtures)."""

from collections.abc import Mapping
from typing import Any

from asiste_api.services.auth import hash_password
from asiste_api.services.database import Database

ADMIN_PASSWORD = "admin123"
# Hashed once per session, bcrypt is slow
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)


class RecordingNotifier:
    """Stand-in for Notifier that records what would have been sent."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict[str, Any]]] = []

    async def notify(self, kind, data: Mapping[str, Any]) -> bool:
        self.sent.append((str(getattr(kind, "value", kind)), dict(data)))
        return True


async def insert_post(
    db: Database,
    author_id: int,
    slug: str,
    *,
    category: str = "salud",
    published: bool = True,
    featured: bool = False,
    created_at: str = "2026-01-01 10:00:00",
    views: int = 0,
) -> int:
    """Insert a blog post row directly, with a controlled ``createdAt``."""
    result = await db.execute(
        """
        INSERT INTO blog_posts (
            title, slug, excerpt, content, category, published, featured,
            readTime, views, authorId, createdAt, updatedAt
        ) VALUES (
            :title, :slug, 'Excerpt', '<p>Some content</p>', :category,
            :published, :featured, 1, :views, :authorId, :createdAt, :createdAt
        )
        """,
        {
            "title": slug.replace("-", " ").title(),
            "slug": slug,
            "category": category,
            "published": int(published),
            "featured": int(featured),
            "views": views,
            "authorId": author_id,
            "createdAt": created_at,
        },
    )
    return result.lastrowid


async def count_rows(db: Database, table: str) -> int:
    row = await db.fetch_one(f"SELECT COUNT(*) AS total FROM {table}")
    return row["total"]
