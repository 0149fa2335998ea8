"""Logging and OpenTelemetry tracing setup."""

from venuehub.shared.telemetry.logging import get_logger, setup_logging
from venuehub.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    get_tracer,
    set_telemetry,
)

__all__ = [
    "TelemetryConfig",
    "get_logger",
    "get_telemetry",
    "get_tracer",
    "set_telemetry",
    "setup_logging",
]
