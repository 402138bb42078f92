"""Blog post endpoints."""

from fastapi import APIRouter, Depends, Path, Query

from asiste_api.dependencies import get_database, require_admin
from asiste_api.models.admin import AdminIdentity
from asiste_api.models.blog import (
    BlogFeed,
    BlogPostCreate,
    BlogPostCreated,
    BlogPostDetail,
    BlogPostEnvelope,
    BlogPostUpdate,
    BlogPostUpdated,
    CategoryList,
)
from asiste_api.models.common import MessageResponse
from asiste_api.services import blog
from asiste_api.services.database import Database

router = APIRouter(prefix="/blog", tags=["blog"])


@router.get("", response_model=BlogFeed)
async def list_blog_posts(
    category: str | None = Query(
        default=None, description="Only this category; 'all' disables the filter"
    ),
    featured: bool = Query(default=False),
    limit: int = Query(default=10, ge=1),
    offset: int = Query(default=0, ge=0),
    db: Database = Depends(get_database),
):
    """Get published posts, newest first."""
    return await blog.list_published_posts(
        db, limit=limit, offset=offset, category=category, featured=featured
    )


@router.get("/categories/list", response_model=CategoryList)
async def list_categories(db: Database = Depends(get_database)):
    """Get the categories of published posts with their post counts."""
    return CategoryList(categories=await blog.list_categories(db))


@router.get(
    "/admin/{post_id}",
    response_model=BlogPostEnvelope,
    dependencies=[Depends(require_admin)],
)
async def get_blog_post_for_edit(
    post_id: int = Path(...),
    db: Database = Depends(get_database),
):
    """Get any post by ID, drafts included, for editing (admin only)."""
    return BlogPostEnvelope(post=await blog.get_post(db, post_id))


@router.get("/{slug}", response_model=BlogPostDetail)
async def get_blog_post_by_slug(
    slug: str = Path(..., max_length=500),
    db: Database = Depends(get_database),
):
    """Get a published post by slug. Counts a view and lists related posts."""
    return await blog.read_published_post(db, slug)


@router.post("", response_model=BlogPostCreated, status_code=201)
async def create_blog_post(
    post: BlogPostCreate,
    admin: AdminIdentity = Depends(require_admin),
    db: Database = Depends(get_database),
):
    """Create a post authored by the calling admin (admin only)."""
    post_id = await blog.create_post(db, post, author_id=admin.id)
    return BlogPostCreated(message="Blog post created successfully", post_id=post_id)


@router.put(
    "/{post_id}",
    response_model=BlogPostUpdated,
    dependencies=[Depends(require_admin)],
)
async def update_blog_post(
    changes: BlogPostUpdate,
    post_id: int = Path(...),
    db: Database = Depends(get_database),
):
    """Update only the supplied fields of a post (admin only)."""
    post = await blog.update_post(db, post_id, changes)
    return BlogPostUpdated(message="Blog post updated successfully", post=post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_blog_post(
    post_id: int = Path(...),
    db: Database = Depends(get_database),
):
    """Delete a post (admin only)."""
    await blog.delete_post(db, post_id)
    return MessageResponse(message="Blog post deleted successfully")
