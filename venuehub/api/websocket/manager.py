"""WebSocket connection manager.

Holds live connections per business and pushes change notifications to
them. Use via app.state.ws_manager (set in lifespan). Businesses never see
each other's messages.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Per-business registry of WebSocket connections."""

    def __init__(self) -> None:
        self._by_business: dict[str, set[WebSocket]] = {}
        self._business_of: dict[WebSocket, str] = {}
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket, business_id: str) -> None:
        """Accept the socket and join it to the business channel."""
        await websocket.accept()
        async with self._lock:
            self._by_business.setdefault(business_id, set()).add(websocket)
            self._business_of[websocket] = business_id

    def _forget(self, websocket: WebSocket) -> None:
        # Caller holds the lock.
        business_id = self._business_of.pop(websocket, None)
        if business_id is None:
            return
        sockets = self._by_business.get(business_id)
        if sockets is not None:
            sockets.discard(websocket)
            if not sockets:
                del self._by_business[business_id]

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._forget(websocket)

    async def broadcast_to_business(self, business_id: str, message: dict[str, Any]) -> None:
        """Send a JSON message to every connection of the business; drops dead sockets."""
        async with self._lock:
            targets = list(self._by_business.get(business_id, ()))
        dead: list[WebSocket] = []
        for ws in targets:
            try:
                await ws.send_json(message)
            except Exception:
                logger.debug("Dropping dead WebSocket of business %s", business_id)
                dead.append(ws)
        if dead:
            async with self._lock:
                for ws in dead:
                    self._forget(ws)

    async def get_connection_count(self, business_id: str | None = None) -> int:
        """Live connections of one business, or of all businesses."""
        async with self._lock:
            if business_id is not None:
                return len(self._by_business.get(business_id, ()))
            return sum(len(s) for s in self._by_business.values())
