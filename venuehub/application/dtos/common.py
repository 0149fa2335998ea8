"""Shared DTOs for list reads (query parameters and pages)."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ListQuery:
    """Parameters of a list read.

    Archived records are excluded unless include_archived is set;
    archived_only returns the archive view instead.
    """

    include_archived: bool = False
    archived_only: bool = False
    skip: int = 0
    limit: int = 50
    search: str | None = None
    filters: dict[str, Any] = field(default_factory=dict)
    order_by: str | None = None
    descending: bool = True


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total matching count."""

    items: list[T]
    total: int
    skip: int
    limit: int


@dataclass(frozen=True)
class ArchiveCounts:
    """Active vs archived record counts for a tenant."""

    active: int
    archived: int

    @property
    def total(self) -> int:
        return self.active + self.archived
