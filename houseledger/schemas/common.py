"""
Shared schemas: the paging contract and the audit fields every response carries.

Paging rules (never rejected, always normalised):
  - page below 1 becomes 1
  - page_size above MAX_PAGE_SIZE becomes MAX_PAGE_SIZE
  - page_size below 1 becomes 1, so total_pages never divides by zero
  - skip = (page - 1) * page_size, never negative

Request datetimes go through to_naive_utc() before they reach a model.
"""

import math
from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, field_validator

from houseledger.config import settings

T = TypeVar("T")


def to_naive_utc(value: datetime | None) -> datetime | None:
    """
    Normalise a client datetime to naive UTC, the form every DateTime column stores.

    Naive values are taken to be UTC already. An offset-aware value is
    converted first, so the same instant always lands on the same calendar
    day whatever offset the client sent it with.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class PageRequest(BaseModel):
    """Which slice of a list the caller wants."""
    page: int = 1
    page_size: int = Field(default=settings.DEFAULT_PAGE_SIZE)

    @field_validator("page")
    @classmethod
    def clamp_page(cls, value: int) -> int:
        return max(value, 1)

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, value: int) -> int:
        return min(max(value, 1), settings.MAX_PAGE_SIZE)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


class PagedResult(BaseModel, Generic[T]):
    """
    One page of results plus the numbers a client needs to render a pager.

    Build it with PagedResult.build() so the derived fields stay consistent
    with total_count and the request that produced the page.
    """
    items: list[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_previous: bool
    has_next: bool

    @classmethod
    def build(cls, items: list[T], total_count: int, request: PageRequest) -> "PagedResult[T]":
        total_pages = math.ceil(total_count / request.page_size)
        return cls(
            items=items,
            total_count=total_count,
            page=request.page,
            page_size=request.page_size,
            total_pages=total_pages,
            has_previous=request.page > 1,
            has_next=request.page < total_pages,
        )


class AuditedResponse(BaseModel):
    """Identity and audit fields present on every entity response."""
    id: int
    created_date: datetime
    last_updated_date: datetime
    is_active: bool
    note: str | None = None

    model_config = {"from_attributes": True}
