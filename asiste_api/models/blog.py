"""Blog post data models."""

from datetime import datetime

from pydantic import field_validator

from asiste_api.models.common import ApiModel, OffsetPagination


def _join_tags(value: object) -> object:
    """Accept tags as a list of strings and store them comma-joined."""
    if isinstance(value, list):
        return ",".join(str(tag).strip() for tag in value if str(tag).strip())
    return value


class BlogPostCreate(ApiModel):
    """New post body. Required fields are checked by the service."""

    title: str | None = None
    slug: str | None = None
    excerpt: str | None = None
    content: str | None = None
    image: str | None = None
    category: str | None = None
    tags: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    published: bool | None = None  # null counts as false
    featured: bool | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def join_tags(cls, value: object) -> object:
        return _join_tags(value)


class BlogPostUpdate(ApiModel):
    """Partial update body. Only the fields the client sends are applied."""

    title: str | None = None
    slug: str | None = None
    excerpt: str | None = None
    content: str | None = None
    image: str | None = None
    category: str | None = None
    tags: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    published: bool | None = None
    featured: bool | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def join_tags(cls, value: object) -> object:
        return _join_tags(value)


class BlogPost(ApiModel):
    """A stored post, joined with its author's display fields."""

    id: int
    title: str
    slug: str
    excerpt: str
    content: str
    image: str | None = None
    category: str
    tags: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    published: bool = False
    featured: bool = False
    read_time: int = 1
    views: int = 0
    author_id: int
    author_name: str | None = None
    author_email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RelatedPost(ApiModel):
    id: int
    title: str
    slug: str
    excerpt: str
    image: str | None = None
    category: str
    author_name: str | None = None
    created_at: datetime | None = None


class BlogFeed(ApiModel):
    posts: list[BlogPost]
    pagination: OffsetPagination


class BlogPostDetail(ApiModel):
    post: BlogPost
    related_posts: list[RelatedPost]


class BlogPostEnvelope(ApiModel):
    post: BlogPost


class BlogPostCreated(ApiModel):
    message: str
    post_id: int


class BlogPostUpdated(ApiModel):
    message: str
    post: BlogPost


class CategoryCount(ApiModel):
    category: str
    count: int


class CategoryList(ApiModel):
    categories: list[CategoryCount]
