"""Shared model base and pagination envelopes."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """snake_case in Python, camelCase on the wire and in the DB."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PagePagination(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int


class OffsetPagination(ApiModel):
    total: int
    limit: int
    offset: int
    has_more: bool


class MessageResponse(ApiModel):
    message: str
