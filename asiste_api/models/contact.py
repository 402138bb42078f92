"""Contact form models."""

from datetime import datetime

from asiste_api.models.common import ApiModel, PagePagination


class ContactSubmission(ApiModel):
    """Contact form body. Presence and shape are checked by the service."""

    name: str | None = None
    phone: str | None = None
    email: str | None = None
    postal_code: str | None = None


class Contact(ApiModel):
    id: int
    name: str
    phone: str
    email: str
    postal_code: str
    created_at: datetime | None = None


class ContactCreated(ApiModel):
    message: str
    contact_id: int


class ContactList(ApiModel):
    contacts: list[Contact]
    pagination: PagePagination
