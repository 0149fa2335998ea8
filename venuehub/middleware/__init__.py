"""ASGI middleware: request ID and security headers.

Applied in venuehub.main; order matters (last added = outermost).
"""

from venuehub.middleware.request_id import RequestIDMiddleware
from venuehub.middleware.security_headers import SecurityHeadersMiddleware

__all__ = ["RequestIDMiddleware", "SecurityHeadersMiddleware"]
