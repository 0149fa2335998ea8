"""venuehub: multi-tenant business management API (RBAC and archive lifecycle)."""
