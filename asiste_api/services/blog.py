"""Blog post persistence: public feed, single-post reads, admin edits."""

import logging
import math
import re
from typing import Any

from sqlalchemy.exc import IntegrityError

from asiste_api.errors import NotFoundError, ValidationError
from asiste_api.models.blog import (
    BlogFeed,
    BlogPost,
    BlogPostCreate,
    BlogPostDetail,
    BlogPostUpdate,
    CategoryCount,
    RelatedPost,
)
from asiste_api.services.database import Database, build_update
from asiste_api.services.pagination import offset_envelope
from asiste_api.services.validation import require_fields, validate_slug

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["title", "slug", "excerpt", "content", "category"]
WORDS_PER_MINUTE = 200
RELATED_POSTS_LIMIT = 3
SLUG_TAKEN = "Slug already exists. Choose a different unique slug."

_TAG_RE = re.compile(r"<[^>]*>")

# Partial-update rules, keyed by model field name
_TEXT_FIELDS = (
    "title",
    "slug",
    "excerpt",
    "content",
    "category",
    "meta_title",
    "meta_description",
)  # applied only when non-empty
_NULLABLE_FIELDS = ("image", "tags")  # applied whenever sent, null clears
_FLAG_FIELDS = ("published", "featured")  # applied whenever sent non-null

_UPDATABLE_COLUMNS = frozenset(
    {
        "title",
        "slug",
        "excerpt",
        "content",
        "image",
        "category",
        "tags",
        "metaTitle",
        "metaDescription",
        "published",
        "featured",
        "readTime",
    }
)

_POST_SELECT = """
    SELECT bp.*, a.name AS authorName, a.email AS authorEmail
    FROM blog_posts bp
    JOIN admins a ON bp.authorId = a.id
"""


def read_time_minutes(content: str) -> int:
    """Minutes to read ``content`` at 200 wpm, HTML tags ignored, at least 1."""
    words = len(_TAG_RE.sub(" ", content).split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


async def slug_taken(db: Database, slug: str, exclude_id: int | None = None) -> bool:
    """True when another post (not ``exclude_id``) already uses ``slug``."""
    if exclude_id is None:
        row = await db.fetch_one(
            "SELECT id FROM blog_posts WHERE slug = :slug", {"slug": slug}
        )
    else:
        row = await db.fetch_one(
            "SELECT id FROM blog_posts WHERE slug = :slug AND id != :id",
            {"slug": slug, "id": exclude_id},
        )
    return row is not None


async def list_published_posts(
    db: Database,
    limit: int = 10,
    offset: int = 0,
    category: str | None = None,
    featured: bool = False,
) -> BlogFeed:
    """Published posts, newest first, with offset-style pagination.

    Args:
        category: Only posts in this category; ``"all"`` or None disables it.
        featured: Only featured posts when True.
    """
    conditions = ["bp.published = 1"]
    params: dict[str, Any] = {}
    if category and category != "all":
        conditions.append("bp.category = :category")
        params["category"] = category
    if featured:
        conditions.append("bp.featured = 1")
    where = " AND ".join(conditions)

    rows = await db.fetch_all(
        f"""
        SELECT bp.*, a.name AS authorName
        FROM blog_posts bp
        JOIN admins a ON bp.authorId = a.id
        WHERE {where}
        ORDER BY bp.createdAt DESC, bp.id DESC
        LIMIT :limit OFFSET :offset
        """,
        {**params, "limit": limit, "offset": offset},
    )
    count = await db.fetch_one(
        f"SELECT COUNT(*) AS total FROM blog_posts bp WHERE {where}", params
    )
    total = count["total"] if count else 0
    return BlogFeed(
        posts=[BlogPost.model_validate(row) for row in rows],
        pagination=offset_envelope(total, limit, offset),
    )


async def get_post(db: Database, post_id: int) -> BlogPost:
    """Any post by id, drafts included. Does not count as a view."""
    row = await db.fetch_one(f"{_POST_SELECT} WHERE bp.id = :id", {"id": post_id})
    if row is None:
        raise NotFoundError("Blog post not found")
    return BlogPost.model_validate(row)


async def read_published_post(db: Database, slug: str) -> BlogPostDetail:
    """Public single-post read.

    Counts one view and returns up to three other published posts from the
    same category, newest first.
    """
    row = await db.fetch_one(
        f"{_POST_SELECT} WHERE bp.slug = :slug AND bp.published = 1", {"slug": slug}
    )
    if row is None:
        raise NotFoundError("Blog post not found")
    post = BlogPost.model_validate(row)

    await db.execute(
        "UPDATE blog_posts SET views = views + 1 WHERE id = :id", {"id": post.id}
    )
    post.views += 1

    related_rows = await db.fetch_all(
        """
        SELECT bp.id, bp.title, bp.slug, bp.excerpt, bp.image, bp.category,
               bp.createdAt, a.name AS authorName
        FROM blog_posts bp
        JOIN admins a ON bp.authorId = a.id
        WHERE bp.category = :category AND bp.id != :id AND bp.published = 1
        ORDER BY bp.createdAt DESC, bp.id DESC
        LIMIT :limit
        """,
        {"category": post.category, "id": post.id, "limit": RELATED_POSTS_LIMIT},
    )
    return BlogPostDetail(
        post=post,
        related_posts=[RelatedPost.model_validate(r) for r in related_rows],
    )


async def list_categories(db: Database) -> list[CategoryCount]:
    """Categories of published posts with their post counts, largest first."""
    rows = await db.fetch_all(
        """
        SELECT category, COUNT(*) AS count
        FROM blog_posts
        WHERE published = 1
        GROUP BY category
        ORDER BY count DESC, category ASC
        """
    )
    return [CategoryCount.model_validate(row) for row in rows]


async def create_post(db: Database, data: BlogPostCreate, author_id: int) -> int:
    """Validate and insert a post authored by ``author_id``. Returns its id."""
    require_fields(data.model_dump(by_alias=True), REQUIRED_FIELDS)
    validate_slug(data.slug)
    if await slug_taken(db, data.slug):
        raise ValidationError(SLUG_TAKEN)

    params = {
        "title": data.title,
        "slug": data.slug,
        "excerpt": data.excerpt,
        "content": data.content,
        "image": data.image or None,
        "category": data.category,
        "tags": data.tags or None,
        "metaTitle": data.meta_title or data.title,
        "metaDescription": data.meta_description or data.excerpt,
        "published": int(bool(data.published)),
        "featured": int(bool(data.featured)),
        "readTime": read_time_minutes(data.content),
        "authorId": author_id,
    }
    try:
        result = await db.execute(
            """
            INSERT INTO blog_posts (
                title, slug, excerpt, content, image, category, tags,
                metaTitle, metaDescription, published, featured, readTime,
                authorId, createdAt, updatedAt
            ) VALUES (
                :title, :slug, :excerpt, :content, :image, :category, :tags,
                :metaTitle, :metaDescription, :published, :featured, :readTime,
                :authorId, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP
            )
            """,
            params,
        )
    except IntegrityError:
        # Lost a race with a concurrent insert of the same slug
        if await slug_taken(db, data.slug):
            raise ValidationError(SLUG_TAKEN) from None
        raise

    logger.info("Created blog post %s (%s)", result.lastrowid, data.slug)
    return result.lastrowid


def collect_changes(data: BlogPostUpdate) -> dict[str, Any]:
    """Turn the fields a client sent into a column → new value mapping."""
    changes: dict[str, Any] = {}
    for name in data.model_fields_set:
        value = getattr(data, name)
        column = BlogPostUpdate.model_fields[name].alias or name
        if name in _TEXT_FIELDS:
            if value is not None and value.strip():
                changes[column] = value
        elif name in _NULLABLE_FIELDS:
            changes[column] = value
        elif name in _FLAG_FIELDS:
            if value is not None:
                changes[column] = int(value)
    if "content" in changes:
        changes["readTime"] = read_time_minutes(changes["content"])
    return changes


async def update_post(db: Database, post_id: int, data: BlogPostUpdate) -> BlogPost:
    """Apply a partial update and return the post as stored afterwards."""
    changes = collect_changes(data)
    if "slug" in changes:
        validate_slug(changes["slug"])
        if await slug_taken(db, changes["slug"], exclude_id=post_id):
            raise ValidationError(SLUG_TAKEN)

    sql, params = build_update(
        "blog_posts", changes, allowed=_UPDATABLE_COLUMNS, key_value=post_id
    )
    try:
        result = await db.execute(sql, params)
    except IntegrityError:
        raise ValidationError(SLUG_TAKEN) from None
    if result.rowcount == 0:
        raise NotFoundError("Blog post not found")

    logger.info("Updated blog post %d (%s)", post_id, ", ".join(sorted(changes)))
    return await get_post(db, post_id)


async def delete_post(db: Database, post_id: int) -> None:
    result = await db.execute("DELETE FROM blog_posts WHERE id = :id", {"id": post_id})
    if result.rowcount == 0:
        raise NotFoundError("Blog post not found")
    logger.info("Deleted blog post %d", post_id)
