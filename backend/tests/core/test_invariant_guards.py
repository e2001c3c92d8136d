"""Invariant Guards — user/team shape and access request state checks."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest

from app.core.errors import InvalidMembershipStateError, InvalidUserStateError
from app.core.invariant_guards import (
    validate_access_request_state, validate_user_team_consistency,
)


@dataclass
class FakeUser:
    id: str = "auth-1"
    team_id: UUID | None = None
    role_id: UUID | None = None
    is_master_admin: bool = False


@dataclass
class FakeRequest:
    status: str
    id: UUID = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None


def test_master_admin_without_team_is_valid():
    validate_user_team_consistency(FakeUser(is_master_admin=True))


def test_master_admin_with_team_is_invalid():
    with pytest.raises(InvalidUserStateError):
        validate_user_team_consistency(FakeUser(is_master_admin=True, team_id=uuid4()))


def test_team_user_needs_both_team_and_role():
    validate_user_team_consistency(FakeUser(team_id=uuid4(), role_id=uuid4()))
    with pytest.raises(InvalidUserStateError):
        validate_user_team_consistency(FakeUser(team_id=uuid4()))
    with pytest.raises(InvalidUserStateError):
        validate_user_team_consistency(FakeUser(role_id=uuid4()))


def test_unassigned_user_is_valid():
    validate_user_team_consistency(FakeUser())


def test_pending_request_needs_no_review_fields():
    validate_access_request_state(FakeRequest("pending", uuid4()))


def test_approved_request_needs_reviewer_and_time():
    now = datetime.now(timezone.utc)
    validate_access_request_state(FakeRequest("approved", uuid4(), "auth-admin", now))
    with pytest.raises(InvalidMembershipStateError):
        validate_access_request_state(FakeRequest("approved", uuid4(), None, now))


def test_rejected_request_needs_review_time():
    with pytest.raises(InvalidMembershipStateError):
        validate_access_request_state(FakeRequest("rejected", uuid4()))


def test_unknown_status_rejected():
    with pytest.raises(InvalidMembershipStateError):
        validate_access_request_state(FakeRequest("archived", uuid4()))
