"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Record
modules share one router factory; reminder transitions are mounted before
the generic reminder routes.
"""

from fastapi import APIRouter

from venuehub.api.v1.endpoints import (
    auth,
    businesses,
    health,
    permissions,
    reminders,
    roles,
    users,
    websocket as ws_endpoint,
)
from venuehub.api.v1.endpoints.records import build_record_router
from venuehub.application.services.archive_policy import (
    CONTRACT_RECORD,
    FINANCE_RECORD,
    INVOICE_RECORD,
    PARTNER_RECORD,
    REMINDER_RECORD,
    SUPPLY_RECORD,
)
from venuehub.schemas import records as schemas

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(businesses.router, prefix="/businesses", tags=["businesses"])

api_router.include_router(
    build_record_router(
        PARTNER_RECORD,
        "partners",
        schemas.PartnerCreate,
        schemas.PartnerUpdate,
        permanent_delete=True,
    ),
    prefix="/partners",
    tags=["partners"],
)
api_router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
api_router.include_router(
    build_record_router(
        REMINDER_RECORD, "reminders", schemas.ReminderCreate, schemas.ReminderUpdate
    ),
    prefix="/reminders",
    tags=["reminders"],
)
api_router.include_router(
    build_record_router(
        SUPPLY_RECORD, "supplies", schemas.SupplyCreate, schemas.SupplyUpdate
    ),
    prefix="/supplies",
    tags=["supplies"],
)
api_router.include_router(
    build_record_router(
        FINANCE_RECORD, "finance", schemas.FinanceCreate, schemas.FinanceUpdate
    ),
    prefix="/finance",
    tags=["finance"],
)
api_router.include_router(
    build_record_router(
        CONTRACT_RECORD, "contracts", schemas.ContractCreate, schemas.ContractUpdate
    ),
    prefix="/contracts",
    tags=["contracts"],
)
api_router.include_router(
    build_record_router(
        INVOICE_RECORD, "invoices", schemas.InvoiceCreate, schemas.InvoiceUpdate
    ),
    prefix="/invoices",
    tags=["invoices"],
)
api_router.include_router(ws_endpoint.router, tags=["websocket"])
