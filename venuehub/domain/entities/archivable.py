"""Archive state shared by every archivable record.

A record is either active or archived. Archiving and restoring are the only
transitions; each is legal from exactly one state.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from venuehub.domain.exceptions import AlreadyArchivedException, NotArchivedException

ARCHIVE_FIELDS = ("is_archived", "archived_at", "archived_by")


@dataclass(frozen=True)
class ArchiveState:
    """Immutable archive flags of one record.

    Invariant: is_archived is False implies archived_at and archived_by are None.
    """

    is_archived: bool = False
    archived_at: datetime | None = None
    archived_by: str | None = None

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "ArchiveState":
        """Read the archive flags from a stored document (missing flags mean active)."""
        if not data.get("is_archived", False):
            return cls()
        return cls(
            is_archived=True,
            archived_at=data.get("archived_at"),
            archived_by=data.get("archived_by"),
        )

    def archive(
        self,
        actor_id: str,
        at: datetime,
        *,
        resource_type: str,
        resource_id: str,
    ) -> "ArchiveState":
        """Return the archived state.

        Raises:
            AlreadyArchivedException: If the record is already archived.
        """
        if self.is_archived:
            raise AlreadyArchivedException(resource_type, resource_id)
        return ArchiveState(is_archived=True, archived_at=at, archived_by=actor_id)

    def restore(self, *, resource_type: str, resource_id: str) -> "ArchiveState":
        """Return the active state.

        Raises:
            NotArchivedException: If the record is not archived.
        """
        if not self.is_archived:
            raise NotArchivedException(resource_type, resource_id)
        return ArchiveState()

    def to_fields(self) -> dict[str, Any]:
        """Document fields for this state."""
        return {
            "is_archived": self.is_archived,
            "archived_at": self.archived_at,
            "archived_by": self.archived_by,
        }
