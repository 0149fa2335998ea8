"""Archive/restore lifecycle shared by every archivable entity.

archive: active -> archived; restore: archived -> active. The write is
conditional on the document's update time, so two concurrent transitions
of the same record cannot both succeed. A failed write re-reads the record:
if the winner changed the archive state the loser gets AlreadyArchived /
NotArchived, otherwise (an unrelated field write) the transition is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any, TypeVar

from venuehub.application.interfaces.repositories import (
    IArchivableRepository,
    IReferenceRepository,
    IStoredSnapshot,
)
from venuehub.application.interfaces.services import IActivityLogger, INotifier
from venuehub.application.services.archive_policy import ArchivePolicy
from venuehub.domain.entities.archivable import ArchiveState
from venuehub.domain.exceptions import (
    ArchiveBlockedException,
    ConcurrentModificationException,
    ConflictException,
    ResourceNotFoundException,
)
from venuehub.shared.enums import ActivityAction
from venuehub.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Re-reads allowed when unrelated writes keep landing between read and write
MAX_WRITE_ATTEMPTS = 3


class ArchiveService:
    """Runs archive and restore for any entity type described by an ArchivePolicy."""

    def __init__(
        self,
        reference_repo: IReferenceRepository,
        activity_logger: IActivityLogger | None = None,
        notifier: INotifier | None = None,
        guarded_types: Collection[str] = frozenset(),
    ) -> None:
        """Initialize the service.

        Args:
            reference_repo: Counts dependent records for guards.
            activity_logger: Optional activity log sink.
            notifier: Optional tenant notification sink.
            guarded_types: Entity types whose dependency guards are enforced.
        """
        self._references = reference_repo
        self._activity = activity_logger
        self._notifier = notifier
        self._guarded_types = frozenset(guarded_types)

    async def _load(
        self,
        policy: ArchivePolicy,
        repo: IArchivableRepository[T],
        record_id: str,
        business_id: str | None,
    ) -> IStoredSnapshot:
        snapshot = await repo.get_snapshot(record_id, business_id)
        if snapshot is None:
            raise ResourceNotFoundException(policy.entity_type, record_id)
        return snapshot

    async def check_guards(
        self,
        policy: ArchivePolicy,
        record_id: str,
        business_id: str | None,
        *,
        for_delete: bool = False,
    ) -> None:
        """Raise ArchiveBlockedException if any dependent record references record_id.

        Archive guards only run for entity types enabled in settings; delete
        guards always run.
        """
        if for_delete:
            guards = policy.delete_guards
        elif policy.entity_type in self._guarded_types:
            guards = policy.archive_guards
        else:
            guards = ()
        for guard in guards:
            count = await self._references.count_references(
                guard.collection, business_id, guard.filters(record_id)
            )
            if count > 0:
                raise ArchiveBlockedException(
                    policy.entity_type, record_id, guard.description, count
                )

    async def _ensure_unique(
        self,
        policy: ArchivePolicy,
        repo: IArchivableRepository[T],
        snapshot: IStoredSnapshot,
        business_id: str | None,
    ) -> None:
        data = snapshot.to_dict()
        for unique in policy.unique_fields:
            value = data.get(unique.field)
            scope = None
            if unique.scope == "tenant":
                scope = data.get("business_id", business_id)
            if await repo.exists_active(unique.field, value, scope, exclude_id=snapshot.id):
                raise ConflictException(policy.entity_type, unique.label, value)

    async def archive(
        self,
        policy: ArchivePolicy,
        repo: IArchivableRepository[T],
        record_id: str,
        business_id: str | None,
        actor_id: str,
    ) -> T:
        """Archive a record.

        Args:
            policy: Rules of the entity type.
            repo: Repository of the entity's collection.
            record_id: Record to archive.
            business_id: Acting business (None = any business; super-admin paths).
            actor_id: User performing the archive.

        Returns:
            The archived record.

        Raises:
            ResourceNotFoundException: Missing or in another business.
            AlreadyArchivedException: Already archived (or archived concurrently).
            ArchiveBlockedException: Dependent records still reference it.
            ConcurrentModificationException: The record kept changing between read and write.
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            snapshot = await self._load(policy, repo, record_id, business_id)
            state = ArchiveState.from_document(snapshot.to_dict())
            new_state = state.archive(
                actor_id, utc_now(), resource_type=policy.entity_type, resource_id=record_id
            )
            await self.check_guards(policy, record_id, business_id)
            updated = await repo.update_if_unchanged(
                snapshot, {**new_state.to_fields(), **policy.archive_changes()}
            )
            if updated is not None:
                logger.info("%s archived: %s by %s", policy.entity_type, record_id, actor_id)
                await self._after_transition(
                    policy, snapshot, business_id, actor_id, ActivityAction.ARCHIVED
                )
                return updated
            logger.debug(
                "%s %s changed before archive write; re-reading", policy.entity_type, record_id
            )
        raise ConcurrentModificationException(policy.entity_type, record_id)

    async def restore(
        self,
        policy: ArchivePolicy,
        repo: IArchivableRepository[T],
        record_id: str,
        business_id: str | None,
        actor_id: str,
    ) -> T:
        """Restore an archived record.

        Raises:
            ResourceNotFoundException: Missing or in another business.
            NotArchivedException: Not archived (or restored concurrently).
            ConflictException: An active record now holds one of its unique values.
            ConcurrentModificationException: The record kept changing between read and write.
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            snapshot = await self._load(policy, repo, record_id, business_id)
            state = ArchiveState.from_document(snapshot.to_dict())
            new_state = state.restore(resource_type=policy.entity_type, resource_id=record_id)
            await self._ensure_unique(policy, repo, snapshot, business_id)
            updated = await repo.update_if_unchanged(
                snapshot, {**new_state.to_fields(), **policy.restore_changes()}
            )
            if updated is not None:
                logger.info("%s restored: %s by %s", policy.entity_type, record_id, actor_id)
                await self._after_transition(
                    policy, snapshot, business_id, actor_id, ActivityAction.RESTORED
                )
                return updated
            logger.debug(
                "%s %s changed before restore write; re-reading", policy.entity_type, record_id
            )
        raise ConcurrentModificationException(policy.entity_type, record_id)

    async def _after_transition(
        self,
        policy: ArchivePolicy,
        snapshot: IStoredSnapshot,
        business_id: str | None,
        actor_id: str,
        action: ActivityAction,
    ) -> None:
        tenant = snapshot.to_dict().get("business_id") or business_id
        if self._activity is not None:
            await self._activity.log(
                tenant,
                actor_id,
                action,
                policy.entity_type,
                snapshot.id,
                details=f"{policy.entity_type} {action.value}",
            )
        if self._notifier is not None and tenant:
            payload: dict[str, Any] = {"id": snapshot.id, "actor_id": actor_id}
            await self._notifier.notify(
                tenant, f"{policy.entity_type}.{action.value}", payload
            )
