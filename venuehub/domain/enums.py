"""Domain enumerations for the venuehub application.

Enums represent fixed sets of domain values: the permission vocabulary,
coarse role types, and per-entity status fields.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class PermissionModule(_ValuesMixin, str, Enum):
    """Functional area a permission applies to."""

    EVENTS = "events"
    CLIENTS = "clients"
    PARTNERS = "partners"
    FINANCE = "finance"
    PAYMENTS = "payments"
    INVOICES = "invoices"
    CONTRACTS = "contracts"
    SUPPLIES = "supplies"
    INVENTORY = "inventory"
    PORTFOLIO = "portfolio"
    TASKS = "tasks"
    REMINDERS = "reminders"
    USERS = "users"
    ROLES = "roles"
    BUSINESS = "business"
    VENUE = "venue"
    RESOURCES = "resources"
    REPORTS = "reports"
    SETTINGS = "settings"


class PermissionAction(_ValuesMixin, str, Enum):
    """Action a permission grants."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"
    EXPORT = "export"


class PermissionScope(_ValuesMixin, str, Enum):
    """Breadth of records a permission applies to."""

    OWN = "own"
    TEAM = "team"
    ALL = "all"


class RoleType(_ValuesMixin, str, Enum):
    """Coarse role hint stored on the user, used by role-type gates."""

    OWNER = "owner"
    MANAGER = "manager"
    STAFF = "staff"
    VIEWER = "viewer"
    CUSTOM = "custom"


class BusinessCategory(_ValuesMixin, str, Enum):
    """Kind of business a tenant runs."""

    VENUE = "venue"
    PHOTOGRAPHY = "photography"
    CATERING = "catering"
    DECORATION = "decoration"
    MUSIC = "music"
    PLANNING = "planning"
    OTHER = "other"


class EventStatus(_ValuesMixin, str, Enum):
    """Status of a booked event (events are owned elsewhere; read here for dependency checks)."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def non_terminal(cls) -> list[str]:
        """Statuses of events that are still going to happen."""
        return [cls.PENDING.value, cls.CONFIRMED.value, cls.IN_PROGRESS.value]


class PartnerCategory(_ValuesMixin, str, Enum):
    """Service a partner provides."""

    CATERING = "catering"
    DECORATION = "decoration"
    PHOTOGRAPHY = "photography"
    MUSIC = "music"
    SECURITY = "security"
    CLEANING = "cleaning"
    OTHER = "other"


class PartnerStatus(_ValuesMixin, str, Enum):
    """Partner working relationship status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class ReminderStatus(_ValuesMixin, str, Enum):
    """Reminder lifecycle status (archive state is tracked separately)."""

    ACTIVE = "active"
    COMPLETED = "completed"
    SNOOZED = "snoozed"
    CANCELLED = "cancelled"


class ReminderPriority(_ValuesMixin, str, Enum):
    """Reminder priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class SupplyStatus(_ValuesMixin, str, Enum):
    """Supply availability status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DISCONTINUED = "discontinued"
    OUT_OF_STOCK = "out_of_stock"


class FinanceType(_ValuesMixin, str, Enum):
    """Direction of a finance record."""

    INCOME = "income"
    EXPENSE = "expense"


class FinanceStatus(_ValuesMixin, str, Enum):
    """Settlement status of a finance record."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ContractStatus(_ValuesMixin, str, Enum):
    """Contract signing status."""

    DRAFT = "draft"
    SENT = "sent"
    SIGNED = "signed"
    CANCELLED = "cancelled"


class InvoiceStatus(_ValuesMixin, str, Enum):
    """Invoice payment status."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    PARTIAL = "partial"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"
