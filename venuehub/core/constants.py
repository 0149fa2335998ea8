"""Core constants: cache key prefixes and shared literal values."""

# Cache key prefixes
CACHE_PREFIX_PERMISSION = "permission"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Tenant scope used for cache keys of users outside any business (super-admins)
PLATFORM_SCOPE = "platform"

# Document store collection names. Collections are created when the first
# document is written; use these so repositories, guards, and scripts agree.
COLLECTION_BUSINESSES = "businesses"
COLLECTION_USERS = "users"
COLLECTION_ROLES = "roles"
COLLECTION_PERMISSIONS = "permissions"
COLLECTION_PARTNERS = "partners"
COLLECTION_REMINDERS = "reminders"
COLLECTION_SUPPLIES = "supplies"
COLLECTION_FINANCE_RECORDS = "finance_records"
COLLECTION_CONTRACTS = "contracts"
COLLECTION_INVOICES = "invoices"
# Owned by the events module; read here for dependency checks only
COLLECTION_EVENTS = "events"
COLLECTION_ACTIVITY_LOGS = "activity_logs"
