"""Customer review models."""

from datetime import datetime

from asiste_api.models.common import ApiModel, PagePagination


class ReviewSubmission(ApiModel):
    """Review form body. ``rating`` may arrive as a number or numeric string."""

    name: str | None = None
    email: str | None = None
    rating: int | str | None = None
    comment: str | None = None


class Review(ApiModel):
    id: int
    name: str
    email: str
    rating: int
    comment: str
    approved: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewCreated(ApiModel):
    message: str
    review_id: int


class ReviewFeed(ApiModel):
    """Public feed of approved reviews."""

    reviews: list[Review]


class ReviewList(ApiModel):
    reviews: list[Review]
    pagination: PagePagination


class ReviewApproved(ApiModel):
    message: str
    review: Review
