"""Contact form endpoints."""

from fastapi import APIRouter, BackgroundTasks, Depends, Path, Query

from asiste_api.dependencies import get_database, get_notifier, require_admin
from asiste_api.models.common import MessageResponse
from asiste_api.models.contact import ContactCreated, ContactList, ContactSubmission
from asiste_api.services import contacts
from asiste_api.services.database import Database
from asiste_api.services.notifications import NotificationKind, Notifier
from asiste_api.services.pagination import PageRequest

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=ContactCreated, status_code=201)
async def submit_contact(
    submission: ContactSubmission,
    background_tasks: BackgroundTasks,
    db: Database = Depends(get_database),
    notifier: Notifier = Depends(get_notifier),
):
    """Store a contact form submission and notify the site owner."""
    contact_id = await contacts.create_contact(db, submission)
    background_tasks.add_task(
        notifier.notify,
        NotificationKind.CONTACT,
        submission.model_dump(by_alias=True),
    )
    return ContactCreated(
        message="Contact form submitted successfully", contact_id=contact_id
    )


@router.get("", response_model=ContactList, dependencies=[Depends(require_admin)])
async def list_contacts(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    db: Database = Depends(get_database),
):
    """Get contacts, newest first (admin only)."""
    return await contacts.list_contacts(db, PageRequest(page=page, limit=limit))


@router.delete(
    "/{contact_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_contact(
    contact_id: int = Path(...),
    db: Database = Depends(get_database),
):
    """Delete a contact (admin only)."""
    await contacts.delete_contact(db, contact_id)
    return MessageResponse(message="Contact deleted successfully")
