"""Notifier that pushes change events over WebSocket channels."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from venuehub.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class BusinessBroadcaster(Protocol):
    async def broadcast_to_business(
        self, business_id: str, message: dict[str, Any]
    ) -> None: ...


class WebSocketNotifier:
    """INotifier over a connection manager. Delivery is best effort and never raises."""

    def __init__(self, broadcaster: BusinessBroadcaster | None) -> None:
        self._broadcaster = broadcaster

    async def notify(self, business_id: str, event: str, payload: dict[str, Any]) -> None:
        if self._broadcaster is None:
            return
        message = {
            "type": event,
            "data": payload,
            "timestamp": utc_now().isoformat(),
        }
        try:
            await self._broadcaster.broadcast_to_business(business_id, message)
        except Exception:
            logger.warning("Notification %s for %s failed", event, business_id, exc_info=True)
