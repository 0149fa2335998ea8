"""WebSocket connection manager (per-business notification channels)."""

from venuehub.api.websocket.manager import ConnectionManager

__all__ = ["ConnectionManager"]
