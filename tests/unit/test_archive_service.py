"""Unit tests for ArchiveService over the in-memory store."""

from unittest.mock import AsyncMock

import pytest

from venuehub.application.services.archive_policy import (
    PARTNER_POLICY,
    PARTNER_RECORD,
    ROLE_POLICY,
    SUPPLY_POLICY,
)
from venuehub.application.services.archive_service import ArchiveService
from venuehub.core.constants import (
    COLLECTION_EVENTS,
    COLLECTION_PARTNERS,
    COLLECTION_SUPPLIES,
)
from venuehub.domain.exceptions import (
    AlreadyArchivedException,
    ArchiveBlockedException,
    ConcurrentModificationException,
    ConflictException,
    NotArchivedException,
    ResourceNotFoundException,
)
from venuehub.infrastructure.memory import MemoryDocumentStore
from venuehub.infrastructure.repositories.record_repo import RecordRepository
from venuehub.infrastructure.repositories.reference_repo import ReferenceRepository
from venuehub.infrastructure.repositories.role_repo import RoleRepository
from venuehub.shared.enums import ActivityAction


@pytest.fixture
def memory() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def partners(memory: MemoryDocumentStore) -> RecordRepository:
    return RecordRepository(memory, COLLECTION_PARTNERS, "partner", PARTNER_RECORD.search_field)


@pytest.fixture
def activity() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def archiver(
    memory: MemoryDocumentStore, activity: AsyncMock, notifier: AsyncMock
) -> ArchiveService:
    return ArchiveService(
        ReferenceRepository(memory),
        activity_logger=activity,
        notifier=notifier,
        guarded_types={"partner", "role"},
    )


async def _partner(repo: RecordRepository, email: str = "bloom@example.com", business_id="b1"):
    return await repo.insert(
        {
            "business_id": business_id,
            "name": "Bloom Florist",
            "name_lower": "bloom florist",
            "email": email,
            "email_lower": email.lower(),
        }
    )


async def test_archive_then_restore(
    archiver: ArchiveService, partners: RecordRepository, activity: AsyncMock
) -> None:
    partner = await _partner(partners)

    archived = await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")
    assert archived.is_archived is True
    assert archived.archived_by == "u1"
    assert archived.archived_at is not None

    restored = await archiver.restore(PARTNER_POLICY, partners, partner.id, "b1", "u1")
    assert restored.is_archived is False
    assert restored.archived_at is None
    assert restored.archived_by is None

    actions = [c.args[2] for c in activity.log.await_args_list]
    assert actions == [ActivityAction.ARCHIVED, ActivityAction.RESTORED]


async def test_archive_notifies_tenant(
    archiver: ArchiveService, partners: RecordRepository, notifier: AsyncMock
) -> None:
    partner = await _partner(partners)
    await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")
    notifier.notify.assert_awaited_once_with(
        "b1", "partner.archived", {"id": partner.id, "actor_id": "u1"}
    )


async def test_archive_twice_raises(archiver: ArchiveService, partners: RecordRepository) -> None:
    partner = await _partner(partners)
    await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")
    with pytest.raises(AlreadyArchivedException):
        await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")


async def test_restore_active_raises(archiver: ArchiveService, partners: RecordRepository) -> None:
    partner = await _partner(partners)
    with pytest.raises(NotArchivedException):
        await archiver.restore(PARTNER_POLICY, partners, partner.id, "b1", "u1")


async def test_other_business_is_not_found(
    archiver: ArchiveService, partners: RecordRepository
) -> None:
    partner = await _partner(partners, business_id="b2")
    with pytest.raises(ResourceNotFoundException):
        await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")


async def test_restore_conflicts_with_active_duplicate(
    archiver: ArchiveService, partners: RecordRepository
) -> None:
    """Archived P frees its email; a new active partner takes it; restoring P conflicts."""
    original = await _partner(partners)
    await archiver.archive(PARTNER_POLICY, partners, original.id, "b1", "u1")
    await _partner(partners)

    with pytest.raises(ConflictException) as exc_info:
        await archiver.restore(PARTNER_POLICY, partners, original.id, "b1", "u1")
    assert exc_info.value.details["field"] == "email"
    still = await partners.get_by_id(original.id)
    assert still.is_archived is True


async def test_duplicate_in_other_business_does_not_conflict(
    archiver: ArchiveService, partners: RecordRepository
) -> None:
    original = await _partner(partners)
    await archiver.archive(PARTNER_POLICY, partners, original.id, "b1", "u1")
    await _partner(partners, business_id="b2")
    restored = await archiver.restore(PARTNER_POLICY, partners, original.id, "b1", "u1")
    assert restored.is_archived is False


async def test_active_events_block_partner_archive(
    archiver: ArchiveService, partners: RecordRepository, memory: MemoryDocumentStore
) -> None:
    partner = await _partner(partners)
    events = memory.collection(COLLECTION_EVENTS)
    await events.create(
        "e1", {"business_id": "b1", "partner_ids": [partner.id], "status": "confirmed"}
    )
    await events.create(
        "e2", {"business_id": "b1", "partner_ids": [partner.id], "status": "completed"}
    )

    with pytest.raises(ArchiveBlockedException) as exc_info:
        await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")
    assert exc_info.value.details["count"] == 1


async def test_guard_disabled_for_type(
    memory: MemoryDocumentStore, partners: RecordRepository
) -> None:
    archiver = ArchiveService(ReferenceRepository(memory), guarded_types=())
    partner = await _partner(partners)
    await memory.collection(COLLECTION_EVENTS).create(
        "e1", {"business_id": "b1", "partner_ids": [partner.id], "status": "pending"}
    )
    archived = await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")
    assert archived.is_archived is True


async def test_delete_guards_always_run(
    memory: MemoryDocumentStore, partners: RecordRepository
) -> None:
    archiver = ArchiveService(ReferenceRepository(memory), guarded_types=())
    partner = await _partner(partners)
    await memory.collection(COLLECTION_EVENTS).create(
        "e1", {"business_id": "b1", "partner_ids": [partner.id], "status": "completed"}
    )
    with pytest.raises(ArchiveBlockedException):
        await archiver.check_guards(PARTNER_POLICY, partner.id, "b1", for_delete=True)


async def test_role_held_by_active_user_cannot_be_archived(
    archiver: ArchiveService, memory: MemoryDocumentStore
) -> None:
    roles = RoleRepository(memory)
    role = await roles.create_role("b1", "Crew", level=20, created_by="u1")
    await memory.collection("users").create(
        "u2", {"business_id": "b1", "role_id": role.id, "is_archived": False}
    )
    with pytest.raises(ArchiveBlockedException, match="users"):
        await archiver.archive(ROLE_POLICY, roles, role.id, "b1", "u1")


async def test_concurrent_archive_has_one_winner(
    archiver: ArchiveService, partners: RecordRepository, memory: MemoryDocumentStore
) -> None:
    """A transition based on a stale read re-reads and reports the winner's state."""
    partner = await _partner(partners)
    stale = await partners.get_snapshot(partner.id, "b1")
    await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")

    read = partners.get_snapshot
    stale_reads = [stale]

    async def stale_then_current(record_id, business_id):
        if stale_reads:
            return stale_reads.pop()
        return await read(record_id, business_id)

    partners.get_snapshot = stale_then_current
    with pytest.raises(AlreadyArchivedException):
        await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u2")
    fresh = RecordRepository(memory, COLLECTION_PARTNERS, "partner")
    current = await fresh.get_by_id(partner.id)
    assert current.archived_by == "u1"


async def test_unrelated_write_between_read_and_archive_is_retried(
    archiver: ArchiveService, partners: RecordRepository
) -> None:
    partner = await _partner(partners)
    read = partners.get_snapshot
    reads = 0

    async def read_then_edit(record_id, business_id):
        nonlocal reads
        snapshot = await read(record_id, business_id)
        reads += 1
        if reads == 1:
            await partners.update_fields(record_id, {"notes": "called back"})
        return snapshot

    partners.get_snapshot = read_then_edit
    archived = await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")

    assert reads == 2
    assert archived.is_archived is True
    assert archived.data["notes"] == "called back"


async def test_unrelated_write_between_read_and_restore_is_retried(
    archiver: ArchiveService, partners: RecordRepository
) -> None:
    partner = await _partner(partners)
    await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")
    read = partners.get_snapshot
    edited = []

    async def read_then_edit(record_id, business_id):
        snapshot = await read(record_id, business_id)
        if not edited:
            edited.append(record_id)
            await partners.update_fields(record_id, {"rating": 4})
        return snapshot

    partners.get_snapshot = read_then_edit
    restored = await archiver.restore(PARTNER_POLICY, partners, partner.id, "b1", "u1")
    assert restored.is_archived is False
    assert restored.data["rating"] == 4


async def test_record_that_never_settles_gives_up(
    archiver: ArchiveService, partners: RecordRepository
) -> None:
    partner = await _partner(partners)
    read = partners.get_snapshot

    async def read_then_edit(record_id, business_id):
        snapshot = await read(record_id, business_id)
        await partners.update_fields(record_id, {"notes": "again"})
        return snapshot

    partners.get_snapshot = read_then_edit
    with pytest.raises(ConcurrentModificationException) as exc_info:
        await archiver.archive(PARTNER_POLICY, partners, partner.id, "b1", "u1")
    assert exc_info.value.error_code == "CONFLICT"
    current = await partners.get_by_id(partner.id)
    assert current.is_archived is False


async def test_status_field_follows_archive(
    archiver: ArchiveService, memory: MemoryDocumentStore
) -> None:
    supplies = RecordRepository(memory, COLLECTION_SUPPLIES, "supply", "name_lower")
    supply = await supplies.insert({"business_id": "b1", "name": "Chairs", "status": "active"})

    archived = await archiver.archive(SUPPLY_POLICY, supplies, supply.id, "b1", "u1")
    assert archived.data["status"] == "inactive"
    restored = await archiver.restore(SUPPLY_POLICY, supplies, supply.id, "b1", "u1")
    assert restored.data["status"] == "active"
