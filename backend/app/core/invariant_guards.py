"""Invariant Guards — shape checks for user rows and access requests after writes.

Invariants:
    - Master admin: team_id is None AND role_id is None
    - Team user: team_id and role_id both set
    - Approved request: reviewed_at and reviewed_by set
    - Rejected request: reviewed_at set
    - Status always one of AccessRequestStatus

Design Decisions:
    - Guards raise 500-level errors: a failure means our own write was wrong,
      never the caller's input
    - Users with neither team nor role are "unassigned" and valid (pre-onboarding
      or removed from a team)
"""

from app.core.domain_types import AccessRequestStatus
from app.core.errors import (
    ErrorContext, InvalidMembershipStateError, InvalidUserStateError,
)
from app.core.repository_protocols import AccessRequestLike, UserLike

_VALID_STATUSES = {s.value for s in AccessRequestStatus}


def validate_user_team_consistency(user: UserLike) -> None:
    ctx = ErrorContext(user_id=str(user.id))
    if user.is_master_admin:
        if user.team_id is not None or user.role_id is not None:
            raise InvalidUserStateError(
                "Master admin must not have a team or role", ctx,
            )
        return
    if (user.team_id is None) != (user.role_id is None):
        raise InvalidUserStateError(
            "Team user must have both team and role", ctx,
        )


def validate_access_request_state(request: AccessRequestLike) -> None:
    ctx = ErrorContext(details={"request_id": str(request.id)})
    status = getattr(request.status, "value", request.status)
    if status not in _VALID_STATUSES:
        raise InvalidMembershipStateError(f"Unknown status '{status}'", ctx)
    if status == AccessRequestStatus.APPROVED.value:
        if request.reviewed_at is None or request.reviewed_by is None:
            raise InvalidMembershipStateError(
                "Approved request missing reviewer or review time", ctx,
            )
    elif status == AccessRequestStatus.REJECTED.value:
        if request.reviewed_at is None:
            raise InvalidMembershipStateError(
                "Rejected request missing review time", ctx,
            )
