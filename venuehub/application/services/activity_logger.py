"""Activity logger: who did what to which record.

Writes are awaited but never allowed to fail the operation being logged.
"""

from __future__ import annotations

import logging
from typing import Any

from venuehub.application.interfaces.repositories import IActivityLogRepository
from venuehub.shared.context import get_request_context
from venuehub.shared.enums import ActivityAction

logger = logging.getLogger(__name__)


class ActivityLogger:
    """Appends activity entries; errors are logged and swallowed."""

    def __init__(self, repo: IActivityLogRepository) -> None:
        self._repo = repo

    async def log(
        self,
        business_id: str | None,
        user_id: str | None,
        action: ActivityAction,
        resource_type: str,
        resource_id: str | None = None,
        details: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Record one entry; the client IP comes from the request context."""
        entry = {
            "business_id": business_id,
            "user_id": user_id,
            "action": action.value,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "details": details,
            "metadata": metadata or {},
            "ip_address": get_request_context().ip_address,
        }
        try:
            await self._repo.add(entry)
        except Exception:
            logger.warning(
                "Activity log write failed: %s %s %s",
                action.value,
                resource_type,
                resource_id,
                exc_info=True,
            )
