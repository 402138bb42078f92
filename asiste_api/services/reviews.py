"""Customer review persistence and moderation."""

import logging

from asiste_api.errors import NotFoundError
from asiste_api.models.review import Review, ReviewList, ReviewSubmission
from asiste_api.services.database import Database, build_update
from asiste_api.services.pagination import PageRequest, page_envelope
from asiste_api.services.validation import (
    parse_rating,
    require_fields,
    validate_comment,
    validate_email,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["name", "email", "rating", "comment"]
PUBLIC_FEED_LIMIT = 50

# Status filter → fixed WHERE clause; anything else lists every review
_STATUS_FILTERS = {
    "pending": "WHERE approved = 0",
    "approved": "WHERE approved = 1",
}

_UPDATABLE_COLUMNS = frozenset({"approved"})


def validate_submission(submission: ReviewSubmission) -> int:
    """Check a review body and return its rating as an int."""
    require_fields(submission.model_dump(by_alias=True), REQUIRED_FIELDS)
    validate_email(submission.email)
    rating = parse_rating(submission.rating)
    validate_comment(submission.comment)
    return rating


async def create_review(db: Database, submission: ReviewSubmission) -> int:
    """Store a review as pending approval. Returns the new id."""
    rating = validate_submission(submission)
    result = await db.execute(
        """
        INSERT INTO reviews (name, email, rating, comment, approved, createdAt, updatedAt)
        VALUES (:name, :email, :rating, :comment, 0, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """,
        {
            "name": submission.name,
            "email": submission.email,
            "rating": rating,
            "comment": submission.comment,
        },
    )
    logger.info("Stored pending review %s", result.lastrowid)
    return result.lastrowid


async def list_approved_reviews(
    db: Database, limit: int = PUBLIC_FEED_LIMIT
) -> list[Review]:
    """Public feed: approved reviews only, newest first."""
    rows = await db.fetch_all(
        """
        SELECT * FROM reviews
        WHERE approved = 1
        ORDER BY createdAt DESC, id DESC
        LIMIT :limit
        """,
        {"limit": min(limit, PUBLIC_FEED_LIMIT)},
    )
    return [Review.model_validate(row) for row in rows]


async def list_reviews(
    db: Database, page: PageRequest, status: str | None = None
) -> ReviewList:
    """Admin listing with an optional ``pending``/``approved`` filter."""
    where = _STATUS_FILTERS.get(status or "", "")
    rows = await db.fetch_all(
        f"""
        SELECT * FROM reviews {where}
        ORDER BY createdAt DESC, id DESC
        LIMIT :limit OFFSET :offset
        """,
        {"limit": page.limit, "offset": page.offset},
    )
    count = await db.fetch_one(f"SELECT COUNT(*) AS total FROM reviews {where}")
    total = count["total"] if count else 0
    return ReviewList(
        reviews=[Review.model_validate(row) for row in rows],
        pagination=page_envelope(page, total),
    )


async def get_review(db: Database, review_id: int) -> Review | None:
    row = await db.fetch_one("SELECT * FROM reviews WHERE id = :id", {"id": review_id})
    return Review.model_validate(row) if row else None


async def approve_review(db: Database, review_id: int) -> Review:
    """Mark a review approved and return its current state.

    Approving an already-approved review succeeds; nothing ever sets
    ``approved`` back to false.
    """
    sql, params = build_update(
        "reviews", {"approved": 1}, allowed=_UPDATABLE_COLUMNS, key_value=review_id
    )
    await db.execute(sql, params)
    review = await get_review(db, review_id)
    if review is None:
        raise NotFoundError("Review not found")
    logger.info("Approved review %d", review_id)
    return review


async def delete_review(db: Database, review_id: int) -> None:
    result = await db.execute("DELETE FROM reviews WHERE id = :id", {"id": review_id})
    if result.rowcount == 0:
        raise NotFoundError("Review not found")
    logger.info("Deleted review %d", review_id)
