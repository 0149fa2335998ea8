"""WebSocket endpoint: /ws joins the caller's business notification channel.

A valid JWT is required as ?token=...; super-admins pick a business with
?business_id=.... The connection manager lives on app.state.ws_manager.
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from venuehub.api.v1.dependencies import resolve_user_from_token
from venuehub.infrastructure.database import get_document_store
from venuehub.infrastructure.repositories import BusinessRepository, UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()


async def _reject_websocket(websocket: WebSocket, reason: str, code: int = 1008) -> None:
    """Accept then immediately close with code/reason so the client gets a close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Register the socket for its business; answers "ping" with "pong"."""
    manager = getattr(websocket.app.state, "ws_manager", None)
    token = websocket.query_params.get("token")
    if manager is None or not token:
        await _reject_websocket(websocket, "Missing token")
        return
    store = get_document_store()
    user = await resolve_user_from_token(token, UserRepository(store))
    if user is None:
        await _reject_websocket(websocket, "Invalid token")
        return
    business_id = user.business_id
    if user.is_super_admin:
        business_id = websocket.query_params.get("business_id")
        if not business_id or await BusinessRepository(store).get_by_id(business_id) is None:
            await _reject_websocket(websocket, "Unknown business")
            return
    if not business_id:
        await _reject_websocket(websocket, "No business")
        return

    await manager.connect(websocket, business_id)
    try:
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
    except WebSocketDisconnect:
        logger.debug("WebSocket closed for business %s", business_id)
    finally:
        await manager.disconnect(websocket)
