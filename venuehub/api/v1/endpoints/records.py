"""Router factory for archivable tenant records.

Partners, reminders, supplies, finance records, contracts, and invoices share
one route layout; each module gets its own router with its own request
schemas and `<module>.<action>.all` permission gates. DELETE /{id} archives.
"""

import dataclasses
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from venuehub.api.v1.dependencies import (
    ArchivedQueryDep,
    BusinessId,
    ListQueryDep,
    authorize,
    record_service_dependency,
)
from venuehub.application.dtos.user import UserResult
from venuehub.application.services import RecordService, RecordType
from venuehub.core.limiter import limit_writes
from venuehub.schemas.common import ArchiveStatsResponse, PageResponse, to_page_response
from venuehub.schemas.records import RecordResponse


def _named(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Give a factory-made endpoint a unique name (operation id and rate-limit key)."""

    def wrap(func: Callable[..., Any]) -> Callable[..., Any]:
        func.__name__ = name
        func.__qualname__ = name
        return func

    return wrap


def build_record_router(
    record_type: RecordType,
    module: str,
    create_model: type[BaseModel],
    update_model: type[BaseModel],
    *,
    permanent_delete: bool = False,
) -> APIRouter:
    """Build list/archived/stats/create/get/update/archive/restore routes for one type."""
    router = APIRouter()
    entity = record_type.entity_type
    Service = Annotated[RecordService, Depends(record_service_dependency(record_type))]
    can_read = authorize(f"{module}.read.all")
    can_create = authorize(f"{module}.create.all")
    can_update = authorize(f"{module}.update.all")
    can_delete = authorize(f"{module}.delete.all")

    @router.get("", response_model=PageResponse[RecordResponse])
    @_named(f"list_{module}")
    async def list_records(
        business_id: BusinessId,
        query: ListQueryDep,
        service: Service,
        status: str | None = None,
        _: Annotated[object, Depends(can_read)] = None,
    ):
        """List records of the business (active only unless include_archived=true)."""
        if status:
            query = dataclasses.replace(query, filters={"status": status})
        page = await service.list(business_id, query)
        return to_page_response(page, RecordResponse.from_result)

    @router.get("/archived", response_model=PageResponse[RecordResponse])
    @_named(f"list_archived_{module}")
    async def list_archived_records(
        business_id: BusinessId,
        query: ArchivedQueryDep,
        service: Service,
        _: Annotated[object, Depends(can_read)] = None,
    ):
        page = await service.list(business_id, query)
        return to_page_response(page, RecordResponse.from_result)

    @router.get("/stats", response_model=ArchiveStatsResponse)
    @_named(f"{entity}_stats")
    async def record_stats(
        business_id: BusinessId,
        service: Service,
        _: Annotated[object, Depends(can_read)] = None,
    ):
        counts = await service.stats(business_id)
        return ArchiveStatsResponse(
            active=counts.active, archived=counts.archived, total=counts.total
        )

    @router.post("", response_model=RecordResponse, status_code=201)
    @limit_writes
    @_named(f"create_{entity}")
    async def create_record(
        request: Request,
        body: create_model,
        business_id: BusinessId,
        service: Service,
        current_user: Annotated[UserResult, Depends(can_create)],
    ):
        record = await service.create(business_id, current_user.id, body.model_dump())
        return RecordResponse.from_result(record)

    @router.get("/{record_id}", response_model=RecordResponse)
    @_named(f"get_{entity}")
    async def get_record(
        record_id: str,
        business_id: BusinessId,
        service: Service,
        _: Annotated[object, Depends(can_read)] = None,
    ):
        """Get one record, archived or not."""
        return RecordResponse.from_result(await service.get(business_id, record_id))

    @router.put("/{record_id}", response_model=RecordResponse)
    @limit_writes
    @_named(f"update_{entity}")
    async def update_record(
        request: Request,
        record_id: str,
        body: update_model,
        business_id: BusinessId,
        service: Service,
        current_user: Annotated[UserResult, Depends(can_update)],
    ):
        """Update sent fields of an active record."""
        record = await service.update(
            business_id, record_id, current_user.id, body.model_dump(exclude_unset=True)
        )
        return RecordResponse.from_result(record)

    @router.delete("/{record_id}", response_model=RecordResponse)
    @limit_writes
    @_named(f"archive_{entity}")
    async def archive_record(
        request: Request,
        record_id: str,
        business_id: BusinessId,
        service: Service,
        current_user: Annotated[UserResult, Depends(can_delete)],
    ):
        """Archive the record (soft delete)."""
        record = await service.archive(business_id, record_id, current_user.id)
        return RecordResponse.from_result(record)

    @router.patch("/{record_id}/restore", response_model=RecordResponse)
    @limit_writes
    @_named(f"restore_{entity}")
    async def restore_record(
        request: Request,
        record_id: str,
        business_id: BusinessId,
        service: Service,
        current_user: Annotated[UserResult, Depends(can_update)],
    ):
        record = await service.restore(business_id, record_id, current_user.id)
        return RecordResponse.from_result(record)

    if permanent_delete:

        @router.delete("/{record_id}/permanent", status_code=204)
        @limit_writes
        @_named(f"delete_{entity}_permanently")
        async def delete_record_permanently(
            request: Request,
            record_id: str,
            business_id: BusinessId,
            service: Service,
            current_user: Annotated[UserResult, Depends(can_delete)],
        ) -> None:
            """Delete an archived record that nothing references any more."""
            await service.hard_delete(business_id, record_id, current_user.id)

    return router
