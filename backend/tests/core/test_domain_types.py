"""Domain Types — verifies identity wrappers and enum values.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and compare equal to their stored strings
"""

from uuid import uuid4

from app.core.domain_types import (
    TeamId, RoleId, UserId, PermissionKey,
    AccessRequestStatus, AuditAction, BenchStatus, MatchType, TimesheetStatus,
)


def test_identity_types_wrap_values():
    uid = uuid4()
    assert TeamId(uid) == uid
    assert RoleId(uid) == uid
    assert UserId("auth-1") == "auth-1"
    assert PermissionKey("candidate.read") == "candidate.read"


def test_access_request_status_has_three_states():
    assert {s.value for s in AccessRequestStatus} == {"pending", "approved", "rejected"}


def test_audit_actions_are_upper_case():
    assert [a.value for a in AuditAction] == ["CREATE", "UPDATE", "DELETE"]


def test_bench_states():
    assert {s.value for s in BenchStatus} == {"on_bench", "available", "placed"}


def test_timesheet_review_states():
    assert TimesheetStatus("submitted") is TimesheetStatus.SUBMITTED
    assert TimesheetStatus.APPROVED == "approved"


def test_match_types():
    assert {m.value for m in MatchType} == {"exact", "fuzzy", "none"}
