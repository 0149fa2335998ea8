"""Health check endpoints for liveness and readiness probes."""

from fastapi import APIRouter, Request

from venuehub.core.config import get_settings
from venuehub.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(request: Request) -> ReadinessResponse:
    """Report the configured store backend and whether Redis is reachable."""
    settings = get_settings()
    cache = getattr(request.app.state, "cache", None)
    if not settings.redis_enabled:
        cache_state = "disabled"
    elif cache is not None and cache.is_available():
        cache_state = "connected"
    else:
        cache_state = "disconnected"
    return ReadinessResponse(database=settings.database_backend, cache=cache_state)
