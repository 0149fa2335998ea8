"""Tenant change notifications."""

from venuehub.infrastructure.notifications.websocket_notifier import WebSocketNotifier

__all__ = ["WebSocketNotifier"]
