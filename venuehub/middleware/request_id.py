"""Request ID middleware.

Forwards a client-supplied request id when it is safe to log, otherwise
generates one. The id is echoed on the response, stored on request.state,
and bound to the logging context for the duration of the request.
Raw ASGI, so streaming responses and background tasks are unaffected.
"""

import re
import uuid
from typing import Callable

from venuehub.shared.context import reset_request_id, set_request_id

REQUEST_ID_MAX_LENGTH = 64
_ALLOWED = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def _header_value(scope: dict, name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def sanitize_request_id(raw: str | None) -> str:
    """Return raw (stripped) if it matches the safe pattern; else a new UUID4 hex."""
    candidate = (raw or "").strip()
    if _ALLOWED.match(candidate):
        return candidate
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request id header on each HTTP request and response."""
    header_key = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(_header_value(scope, header_key))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_key, request_id.encode()),
                ]
            await send(message)

        token = set_request_id(request_id)
        try:
            await app(scope, receive, send_with_id)
        finally:
            reset_request_id(token)

    return asgi_app
