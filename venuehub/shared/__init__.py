"""Shared cross-cutting helpers: enums, request context, utilities, telemetry."""
