"""Pagination helpers shared by the list endpoints.

Contacts and reviews page by ``page``/``limit``; the blog feed pages by
``offset``/``limit``. Both shapes are kept because existing clients read
them.
"""

import math
from dataclasses import dataclass

from asiste_api.models.common import OffsetPagination, PagePagination


@dataclass(frozen=True)
class PageRequest:
    """A validated ``page``/``limit`` pair (both >= 1)."""

    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def page_envelope(request: PageRequest, total: int) -> PagePagination:
    return PagePagination(
        page=request.page,
        limit=request.limit,
        total=total,
        total_pages=total_pages(total, request.limit),
    )


def offset_envelope(total: int, limit: int, offset: int) -> OffsetPagination:
    return OffsetPagination(
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + limit < total,
    )
