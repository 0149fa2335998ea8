"""Shared API schemas: pages, archive counts, bulk outcomes, UTC datetimes."""

from datetime import datetime
from collections.abc import Callable
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, Field

from venuehub.application.dtos.common import Page
from venuehub.shared.utils.datetime import ensure_utc

T = TypeVar("T")

# Naive datetimes from clients are taken as UTC.
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class PageResponse(BaseModel, Generic[T]):
    """One page of a list read."""

    items: list[T]
    total: int = Field(..., ge=0)
    skip: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)


class ArchiveStatsResponse(BaseModel):
    """Active vs archived counts."""

    active: int
    archived: int
    total: int


class BulkIdsRequest(BaseModel):
    """Request body for bulk archive/restore."""

    ids: list[str] = Field(..., min_length=1, max_length=100)


class BulkOutcomeResponse(BaseModel):
    """Per-id result of a bulk operation."""

    succeeded: list[str]
    failed: dict[str, str]


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


def to_page_response(page: Page[Any], convert: Callable[[Any], T]) -> PageResponse[T]:
    """Convert a service Page into its response model."""
    return PageResponse[Any](
        items=[convert(item) for item in page.items],
        total=page.total,
        skip=page.skip,
        limit=page.limit,
    )
