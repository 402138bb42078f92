"""Admin endpoints — login plus the admin-panel views of contacts and reviews."""

from fastapi import APIRouter, Depends, Path, Query

from asiste_api.config import Settings
from asiste_api.dependencies import get_app_settings, get_database, require_admin
from asiste_api.models.admin import AdminIdentity, LoginRequest, LoginResponse
from asiste_api.models.common import MessageResponse
from asiste_api.models.contact import ContactList
from asiste_api.models.review import ReviewApproved, ReviewList
from asiste_api.services import contacts, reviews
from asiste_api.services.auth import authenticate
from asiste_api.services.database import Database
from asiste_api.services.pagination import PageRequest

router = APIRouter(prefix="/admin", tags=["admin"])

ADMIN_PAGE_SIZE = 20


@router.post("/auth", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
):
    """Exchange admin credentials for a 24-hour bearer token."""
    return await authenticate(
        db, settings, credentials.username, credentials.password
    )


@router.get("/me", response_model=AdminIdentity)
async def current_admin(admin: AdminIdentity = Depends(require_admin)):
    """Return the identity carried by the presented token."""
    return admin


@router.get(
    "/contacts", response_model=ContactList, dependencies=[Depends(require_admin)]
)
async def list_contacts(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ADMIN_PAGE_SIZE, ge=1),
    db: Database = Depends(get_database),
):
    return await contacts.list_contacts(db, PageRequest(page=page, limit=limit))


@router.delete(
    "/contacts/{contact_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_contact(
    contact_id: int = Path(...),
    db: Database = Depends(get_database),
):
    await contacts.delete_contact(db, contact_id)
    return MessageResponse(message="Contact deleted successfully")


@router.get(
    "/reviews", response_model=ReviewList, dependencies=[Depends(require_admin)]
)
async def list_reviews(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ADMIN_PAGE_SIZE, ge=1),
    status: str | None = Query(default=None, description="pending | approved"),
    db: Database = Depends(get_database),
):
    return await reviews.list_reviews(
        db, PageRequest(page=page, limit=limit), status=status
    )


@router.put(
    "/reviews/{review_id}/approve",
    response_model=ReviewApproved,
    dependencies=[Depends(require_admin)],
)
async def approve_review(
    review_id: int = Path(...),
    db: Database = Depends(get_database),
):
    review = await reviews.approve_review(db, review_id)
    return ReviewApproved(message="Review approved successfully", review=review)


@router.delete(
    "/reviews/{review_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_review(
    review_id: int = Path(...),
    db: Database = Depends(get_database),
):
    await reviews.delete_review(db, review_id)
    return MessageResponse(message="Review deleted successfully")
