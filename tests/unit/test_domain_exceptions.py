"""Tests for domain exceptions (error_code, message, details) and their HTTP status."""

import pytest

from venuehub.core.exception_handlers import status_for
from venuehub.domain.exceptions import (
    AlreadyArchivedException,
    ArchiveBlockedException,
    AuthenticationException,
    AuthorizationException,
    BusinessRuleException,
    ConcurrentModificationException,
    ConflictException,
    NotArchivedException,
    ResourceNotFoundException,
    ValidationException,
    VenueHubException,
)


def test_base_exception_default_error_code() -> None:
    """Base VenueHubException uses class name as error_code when not provided."""
    exc = VenueHubException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "VenueHubException"
    assert exc.details == {}


def test_to_dict_shape() -> None:
    exc = VenueHubException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication required"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_with_permission() -> None:
    """The required permission is named in message and details."""
    exc = AuthorizationException(permission="partners.create.all")
    assert exc.error_code == "PERMISSION_DENIED"
    assert "partners.create.all" in exc.message
    assert exc.details == {"permission": "partners.create.all"}


def test_authorization_exception_with_role_types() -> None:
    exc = AuthorizationException(role_types=["owner", "manager"])
    assert exc.details == {"role_types": ["owner", "manager"]}


def test_not_found_names_resource() -> None:
    exc = ResourceNotFoundException("partner", "p1")
    assert exc.message == "Partner not found: p1"
    assert exc.details == {"resource_type": "partner", "resource_id": "p1"}


def test_conflict_details() -> None:
    exc = ConflictException("partner", "email", "a@example.com")
    assert exc.error_code == "CONFLICT"
    assert exc.details["field"] == "email"


def test_archive_blocked_carries_count() -> None:
    exc = ArchiveBlockedException("partner", "p1", "active events", 2)
    assert exc.error_code == "ARCHIVE_BLOCKED"
    assert exc.details["count"] == 2
    assert "2 active events" in exc.message


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ValidationException("bad"), 400),
        (BusinessRuleException("no", rule="x"), 400),
        (AuthenticationException(), 401),
        (AuthorizationException(), 403),
        (ResourceNotFoundException("role", "r1"), 404),
        (ConflictException("role", "name", "Crew"), 409),
        (AlreadyArchivedException("role", "r1"), 409),
        (NotArchivedException("role", "r1"), 409),
        (ConcurrentModificationException("role", "r1"), 409),
        (ArchiveBlockedException("role", "r1", "users", 1), 409),
        (VenueHubException("unmapped"), 400),
    ],
)
def test_status_mapping(exc: VenueHubException, status: int) -> None:
    assert status_for(exc) == status
