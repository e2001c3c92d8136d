"""Team Context — pure tenancy rules: which team a caller acts on and may see.

Invariants:
    - A master admin acts on the requested team, or on all teams when none given
    - A regular user ALWAYS acts on their stored team_id; any requested team is ignored
    - A regular user without a team, or with an inactive team, cannot act (403)
    - Writes always resolve to exactly one team (write_team_id never returns None)

Design Decisions:
    - Pure functions over the loaded rows: services do the lookups, core decides
      (ADR: ExMA Functional Core)
    - Domain errors raised directly: callers are request handlers, never tool loops
"""

from dataclasses import dataclass
from uuid import UUID

from app.core.errors import (
    AuthenticationError, BusinessRuleError, ResourceNotFoundError,
    TeamAccessDeniedError,
)
from app.core.repository_protocols import TeamLike, UserLike


@dataclass(frozen=True)
class TeamContext:
    """Resolved tenancy for one request."""
    user_id: str
    team_id: UUID | None          # effective team; None = all teams (master admin only)
    user_team_id: UUID | None     # the user's own stored team
    role_id: UUID | None
    is_master_admin: bool
    is_local_admin: bool

    @property
    def can_access_all_teams(self) -> bool:
        return self.is_master_admin and self.team_id is None


def effective_team_id(user: UserLike, target_team_id: UUID | None) -> UUID | None:
    """Team the request should act on, before existence checks."""
    if user.is_master_admin:
        return target_team_id
    return user.team_id


def build_team_context(
    user: UserLike | None,
    team: TeamLike | None,
    target_team_id: UUID | None = None,
    require_team: bool = True,
    is_local_admin: bool = False,
) -> TeamContext:
    """Validate the loaded user/team pair and produce a TeamContext.

    `team` is the row for effective_team_id(user, target_team_id), or None
    when that id is None or the row does not exist.
    """
    if user is None:
        raise AuthenticationError("User not found")

    wanted = effective_team_id(user, target_team_id)

    if user.is_master_admin:
        if wanted is not None and team is None:
            raise ResourceNotFoundError("Team", str(wanted))
    else:
        if wanted is None:
            if require_team:
                raise TeamAccessDeniedError("User does not belong to any team")
        elif team is None:
            raise TeamAccessDeniedError("User's team no longer exists")
        elif not team.is_active:
            raise TeamAccessDeniedError("User's team is inactive")

    return TeamContext(
        user_id=user.id,
        team_id=wanted,
        user_team_id=user.team_id,
        role_id=user.role_id,
        is_master_admin=user.is_master_admin,
        is_local_admin=is_local_admin,
    )


def check_team_access(context: TeamContext, resource_team_id: UUID | None) -> None:
    """Raise unless the caller may touch a resource owned by resource_team_id."""
    if resource_team_id is None:
        raise TeamAccessDeniedError("Resource does not belong to a team")
    if context.is_master_admin:
        return
    if context.user_team_id != resource_team_id:
        raise TeamAccessDeniedError()


def apply_team_filter(
    context: TeamContext, requested_team_id: UUID | None = None,
) -> UUID | None:
    """Team id a list query must be filtered by; None means unfiltered."""
    if context.is_master_admin:
        return requested_team_id if requested_team_id is not None else context.team_id
    return context.user_team_id


def write_team_id(context: TeamContext) -> UUID:
    """Team a new record is created in. Master admins must name one."""
    if context.team_id is None:
        raise BusinessRuleError("Team ID required", "TEAM_ID_REQUIRED")
    return context.team_id
