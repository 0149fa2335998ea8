"""Security headers middleware (raw ASGI).

The API only serves JSON, so the content policy forbids everything except
the interactive docs page, which FastAPI renders from a CDN.
"""

from typing import Callable

API_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}

_DOCS_PATHS = ("/docs", "/redoc")


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Set security headers on HTTP responses without overriding ones already set."""
    extra = [(k.lower().encode(), v.encode()) for k, v in (headers or API_HEADERS).items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        skip_csp = scope.get("path", "").startswith(_DOCS_PATHS)

        async def send_with_headers(message: dict) -> None:
            if message["type"] == "http.response.start":
                current = list(message.get("headers", []))
                present = {k.lower() for k, _ in current}
                for key, value in extra:
                    if key in present or (skip_csp and key == b"content-security-policy"):
                        continue
                    current.append((key, value))
                message["headers"] = current
            await send(message)

        await app(scope, receive, send_with_headers)

    return asgi_app
