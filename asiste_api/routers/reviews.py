"""Customer review endpoints — public feed, submission, moderation."""

from fastapi import APIRouter, BackgroundTasks, Depends, Path, Query

from asiste_api.dependencies import get_database, get_notifier, require_admin
from asiste_api.models.common import MessageResponse
from asiste_api.models.review import (
    ReviewApproved,
    ReviewCreated,
    ReviewFeed,
    ReviewList,
    ReviewSubmission,
)
from asiste_api.services import reviews
from asiste_api.services.database import Database
from asiste_api.services.notifications import NotificationKind, Notifier
from asiste_api.services.pagination import PageRequest

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=ReviewFeed)
async def list_approved_reviews(
    limit: int = Query(default=reviews.PUBLIC_FEED_LIMIT, ge=1),
    db: Database = Depends(get_database),
):
    """Get approved reviews, newest first (at most 50)."""
    return ReviewFeed(reviews=await reviews.list_approved_reviews(db, limit=limit))


@router.post("", response_model=ReviewCreated, status_code=201)
async def submit_review(
    submission: ReviewSubmission,
    background_tasks: BackgroundTasks,
    db: Database = Depends(get_database),
    notifier: Notifier = Depends(get_notifier),
):
    """Submit a review. It stays hidden until an admin approves it."""
    review_id = await reviews.create_review(db, submission)
    background_tasks.add_task(
        notifier.notify,
        NotificationKind.REVIEW,
        submission.model_dump(by_alias=True),
    )
    return ReviewCreated(
        message="Review submitted successfully and is pending approval",
        review_id=review_id,
    )


@router.get(
    "/admin", response_model=ReviewList, dependencies=[Depends(require_admin)]
)
async def list_all_reviews(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    status: str | None = Query(default=None, description="pending | approved"),
    db: Database = Depends(get_database),
):
    """Get every review, optionally filtered by moderation status (admin only)."""
    return await reviews.list_reviews(
        db, PageRequest(page=page, limit=limit), status=status
    )


@router.put(
    "/{review_id}/approve",
    response_model=ReviewApproved,
    dependencies=[Depends(require_admin)],
)
async def approve_review(
    review_id: int = Path(...),
    db: Database = Depends(get_database),
):
    """Approve a review (admin only). Re-approving is a no-op success."""
    review = await reviews.approve_review(db, review_id)
    return ReviewApproved(message="Review approved successfully", review=review)


@router.delete(
    "/{review_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_review(
    review_id: int = Path(...),
    db: Database = Depends(get_database),
):
    """Delete a review (admin only)."""
    await reviews.delete_review(db, review_id)
    return MessageResponse(message="Review deleted successfully")
