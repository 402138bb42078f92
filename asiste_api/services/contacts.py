"""Contact form persistence."""

import logging

from asiste_api.errors import NotFoundError
from asiste_api.models.contact import Contact, ContactList, ContactSubmission
from asiste_api.services.database import Database
from asiste_api.services.pagination import PageRequest, page_envelope
from asiste_api.services.validation import (
    require_fields,
    validate_email,
    validate_postal_code,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["name", "phone", "email", "postalCode"]


def validate_submission(submission: ContactSubmission) -> None:
    require_fields(submission.model_dump(by_alias=True), REQUIRED_FIELDS)
    validate_email(submission.email)
    validate_postal_code(submission.postal_code)


async def create_contact(db: Database, submission: ContactSubmission) -> int:
    """Validate and store a contact form submission. Returns the new id."""
    validate_submission(submission)
    result = await db.execute(
        """
        INSERT INTO contacts (name, phone, email, postalCode, createdAt)
        VALUES (:name, :phone, :email, :postalCode, CURRENT_TIMESTAMP)
        """,
        {
            "name": submission.name,
            "phone": submission.phone,
            "email": submission.email,
            "postalCode": submission.postal_code,
        },
    )
    logger.info("Stored contact %s", result.lastrowid)
    return result.lastrowid


async def list_contacts(db: Database, page: PageRequest) -> ContactList:
    """Return one page of contacts, newest first."""
    rows = await db.fetch_all(
        """
        SELECT * FROM contacts
        ORDER BY createdAt DESC, id DESC
        LIMIT :limit OFFSET :offset
        """,
        {"limit": page.limit, "offset": page.offset},
    )
    count = await db.fetch_one("SELECT COUNT(*) AS total FROM contacts")
    total = count["total"] if count else 0
    return ContactList(
        contacts=[Contact.model_validate(row) for row in rows],
        pagination=page_envelope(page, total),
    )


async def delete_contact(db: Database, contact_id: int) -> None:
    result = await db.execute(
        "DELETE FROM contacts WHERE id = :id", {"id": contact_id}
    )
    if result.rowcount == 0:
        raise NotFoundError("Contact not found")
    logger.info("Deleted contact %d", contact_id)
