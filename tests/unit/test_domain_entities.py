"""Unit tests for domain entities: archive state, reminders, users, roles."""

from datetime import UTC, datetime, timedelta

import pytest

from venuehub.domain.entities.archivable import ArchiveState
from venuehub.domain.entities.reminder import ReminderEntity
from venuehub.domain.entities.role import OWNER_ROLE_NAME, RoleEntity
from venuehub.domain.entities.user import UserEntity
from venuehub.domain.enums import ReminderStatus, RoleType
from venuehub.domain.exceptions import (
    AlreadyArchivedException,
    BusinessRuleException,
    NotArchivedException,
    ValidationException,
)

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


class TestArchiveState:
    """active <-> archived transitions."""

    def test_missing_flags_mean_active(self) -> None:
        state = ArchiveState.from_document({"name": "x"})
        assert state == ArchiveState()

    def test_archive_sets_actor_and_time(self) -> None:
        state = ArchiveState().archive("u1", NOW, resource_type="partner", resource_id="p1")
        assert state.to_fields() == {
            "is_archived": True,
            "archived_at": NOW,
            "archived_by": "u1",
        }

    def test_archive_twice_raises(self) -> None:
        archived = ArchiveState(True, NOW, "u1")
        with pytest.raises(AlreadyArchivedException) as exc_info:
            archived.archive("u2", NOW, resource_type="partner", resource_id="p1")
        assert exc_info.value.error_code == "ALREADY_ARCHIVED"

    def test_restore_clears_fields(self) -> None:
        restored = ArchiveState(True, NOW, "u1").restore(
            resource_type="partner", resource_id="p1"
        )
        assert restored.to_fields() == {
            "is_archived": False,
            "archived_at": None,
            "archived_by": None,
        }

    def test_restore_active_raises(self) -> None:
        with pytest.raises(NotArchivedException):
            ArchiveState().restore(resource_type="partner", resource_id="p1")

    def test_from_document_ignores_stale_fields_when_active(self) -> None:
        state = ArchiveState.from_document(
            {"is_archived": False, "archived_at": NOW, "archived_by": "u1"}
        )
        assert state.archived_at is None
        assert state.archived_by is None


class TestReminderEntity:
    """Reminder status machine."""

    def _reminder(self, status: ReminderStatus = ReminderStatus.ACTIVE, **kw) -> ReminderEntity:
        return ReminderEntity(id="r1", status=status, **kw)

    def test_complete_from_active(self) -> None:
        reminder = self._reminder()
        reminder.complete("u1", NOW)
        assert reminder.status == ReminderStatus.COMPLETED
        assert reminder.completed_by == "u1"
        assert reminder.completed_at == NOW

    def test_complete_from_snoozed_clears_snooze(self) -> None:
        reminder = self._reminder(ReminderStatus.SNOOZED, snooze_until=NOW)
        reminder.complete("u1", NOW)
        assert reminder.snooze_until is None

    def test_cannot_complete_cancelled(self) -> None:
        reminder = self._reminder(ReminderStatus.CANCELLED)
        with pytest.raises(BusinessRuleException) as exc_info:
            reminder.complete("u1", NOW)
        assert exc_info.value.details["rule"] == "reminder_transition"

    def test_snooze_requires_future(self) -> None:
        reminder = self._reminder()
        with pytest.raises(BusinessRuleException, match="future"):
            reminder.snooze(NOW - timedelta(minutes=1), NOW)

    def test_snooze_sets_until(self) -> None:
        reminder = self._reminder()
        until = NOW + timedelta(hours=2)
        reminder.snooze(until, NOW)
        assert reminder.status == ReminderStatus.SNOOZED
        assert reminder.snooze_until == until

    def test_reactivate_completed_clears_completion(self) -> None:
        reminder = self._reminder(
            ReminderStatus.COMPLETED, completed_at=NOW, completed_by="u1"
        )
        reminder.reactivate()
        assert reminder.status == ReminderStatus.ACTIVE
        assert reminder.completed_at is None
        assert reminder.completed_by is None

    def test_reactivate_active_raises(self) -> None:
        with pytest.raises(BusinessRuleException, match="already active"):
            self._reminder().reactivate()

    def test_archived_reminder_rejects_transitions(self) -> None:
        reminder = self._reminder(is_archived=True)
        with pytest.raises(BusinessRuleException) as exc_info:
            reminder.cancel()
        assert exc_info.value.details["rule"] == "reminder_archived"


class TestUserEntity:
    """Archive and delete guards on users."""

    def test_cannot_archive_self(self) -> None:
        user = UserEntity(id="u1", business_id="b1", email="a@example.com")
        with pytest.raises(BusinessRuleException, match="your own"):
            user.ensure_can_be_archived("u1", active_owner_count=3)

    def test_cannot_archive_sole_owner(self) -> None:
        owner = UserEntity(
            id="u1", business_id="b1", email="a@example.com", role_type=RoleType.OWNER
        )
        with pytest.raises(BusinessRuleException, match="only owner"):
            owner.ensure_can_be_archived("u2", active_owner_count=1)

    def test_can_archive_one_of_two_owners(self) -> None:
        owner = UserEntity(
            id="u1", business_id="b1", email="a@example.com", role_type=RoleType.OWNER
        )
        owner.ensure_can_be_archived("u2", active_owner_count=2)

    def test_delete_requires_archive(self) -> None:
        user = UserEntity(id="u1", business_id="b1", email="a@example.com")
        with pytest.raises(BusinessRuleException) as exc_info:
            user.ensure_can_be_deleted("owner")
        assert exc_info.value.details["rule"] == "delete_requires_archive"

    def test_business_owner_cannot_be_deleted(self) -> None:
        user = UserEntity(
            id="u1",
            business_id="b1",
            email="a@example.com",
            archive=ArchiveState(True, NOW, "u2"),
        )
        with pytest.raises(BusinessRuleException, match="owner"):
            user.ensure_can_be_deleted("u1")

    def test_archived_member_can_be_deleted(self) -> None:
        user = UserEntity(
            id="u1",
            business_id="b1",
            email="a@example.com",
            archive=ArchiveState(True, NOW, "u2"),
        )
        user.ensure_can_be_deleted("someone-else")


class TestRoleEntity:
    """Role validation and system-role rules."""

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            RoleEntity(id="r1", business_id="b1", name="  ")
        assert exc_info.value.details == {"field": "name"}

    @pytest.mark.parametrize("level", [-1, 101])
    def test_level_out_of_range(self, level: int) -> None:
        with pytest.raises(ValidationException):
            RoleEntity(id="r1", business_id="b1", name="Crew", level=level)

    def test_owner_role_immutable(self) -> None:
        role = RoleEntity(id="r1", business_id="b1", name=OWNER_ROLE_NAME, is_system=True)
        with pytest.raises(BusinessRuleException):
            role.ensure_can_update(None)
        with pytest.raises(BusinessRuleException):
            role.ensure_can_archive()

    def test_system_role_cannot_be_renamed(self) -> None:
        role = RoleEntity(id="r1", business_id="b1", name="Staff", is_system=True)
        with pytest.raises(BusinessRuleException, match="renamed"):
            role.ensure_can_update("Crew")
        role.ensure_can_update("Staff")

    def test_custom_role_can_be_archived(self) -> None:
        RoleEntity(id="r1", business_id="b1", name="Crew").ensure_can_archive()
