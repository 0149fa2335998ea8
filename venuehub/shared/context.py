"""Request context management using contextvars.

Provides async-safe storage for request-scoped data (acting user, business,
client IP) so that fire-and-forget helpers such as the activity logger can
enrich records without threading request objects through every call.

Usage:
    set_request_context(user_id="user123", business_id="biz1", ip_address="1.2.3.4")
    ctx = get_request_context()
"""

from contextvars import ContextVar, Token
from dataclasses import dataclass

_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)
_current_business_id: ContextVar[str | None] = ContextVar(
    "current_business_id", default=None
)
_current_ip_address: ContextVar[str | None] = ContextVar(
    "current_ip_address", default=None
)
_current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    user_id: str | None
    business_id: str | None
    ip_address: str | None = None


def set_request_context(
    user_id: str | None,
    business_id: str | None = None,
    ip_address: str | None = None,
) -> None:
    """Set the context for this request (call after authentication).

    Context is scoped to the current async task.
    """
    _current_user_id.set(user_id)
    _current_business_id.set(business_id)
    _current_ip_address.set(ip_address)


def get_request_context() -> RequestContext:
    """Return a snapshot of the current request context."""
    return RequestContext(
        user_id=_current_user_id.get(),
        business_id=_current_business_id.get(),
        ip_address=_current_ip_address.get(),
    )


def clear_request_context() -> None:
    """Reset the context (e.g. between tests)."""
    _current_user_id.set(None)
    _current_business_id.set(None)
    _current_ip_address.set(None)
    _current_request_id.set(None)


def set_request_id(request_id: str | None) -> Token:
    """Bind the request id to this task; pass the token to reset_request_id."""
    return _current_request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _current_request_id.reset(token)


def get_request_id() -> str | None:
    return _current_request_id.get()
