"""List query parameters shared by list endpoints."""

from typing import Annotated

from fastapi import Depends, Query

from venuehub.application.dtos.common import ListQuery
from venuehub.core.config import get_settings
from venuehub.domain.exceptions import ValidationException


def _bounded_limit(limit: int | None) -> int:
    settings = get_settings()
    if limit is None:
        return settings.default_page_limit
    if limit > settings.max_page_limit:
        raise ValidationException(
            f"limit must not exceed {settings.max_page_limit}", field="limit"
        )
    return limit


def list_query(
    include_archived: bool = False,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int | None, Query(ge=1)] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
) -> ListQuery:
    """Default list view: active records only unless include_archived=true."""
    return ListQuery(
        include_archived=include_archived,
        skip=skip,
        limit=_bounded_limit(limit),
        search=search,
    )


def archived_query(
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int | None, Query(ge=1)] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
) -> ListQuery:
    """Archive view: archived records only."""
    return ListQuery(
        archived_only=True,
        skip=skip,
        limit=_bounded_limit(limit),
        search=search,
    )


ListQueryDep = Annotated[ListQuery, Depends(list_query)]
ArchivedQueryDep = Annotated[ListQuery, Depends(archived_query)]
