"""Team Context Service — loads user/team rows and applies core tenancy rules.

Invariants:
    - All decisions delegated to core.team_context (this module only does lookups)
    - is_local_admin derived from the user's role.is_admin flag

Design Decisions:
    - Functions over a class: stateless, each call is one or two primary-key lookups
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import PermissionDeniedError, ResourceNotFoundError
from app.core.team_context import (
    TeamContext, build_team_context, check_team_access, effective_team_id,
)
from app.models.team import Team
from app.models.user import User

logger = logging.getLogger(__name__)


async def resolve_team_context(
    db: AsyncSession,
    user: User | None,
    target_team_id: UUID | None = None,
    require_team: bool = True,
) -> TeamContext:
    """Build a TeamContext for an already-loaded user row."""
    team = None
    if user is not None:
        wanted = effective_team_id(user, target_team_id)
        if wanted is not None:
            team = await db.get(Team, wanted)
    is_local_admin = bool(user and user.role and user.role.is_admin)
    return build_team_context(
        user, team, target_team_id, require_team, is_local_admin,
    )


async def get_team_context(
    db: AsyncSession,
    user_id: str,
    target_team_id: UUID | None = None,
    require_team: bool = True,
) -> TeamContext:
    user = await db.get(User, user_id)
    return await resolve_team_context(db, user, target_team_id, require_team)


async def validate_team_access(
    db: AsyncSession, user_id: str, resource_team_id: UUID | None,
) -> None:
    context = await get_team_context(db, user_id, require_team=False)
    check_team_access(context, resource_team_id)


async def get_team_info(db: AsyncSession, team_id: UUID) -> Team:
    team = await db.get(Team, team_id)
    if team is None:
        raise ResourceNotFoundError("Team", str(team_id))
    return team


async def list_all_teams(db: AsyncSession, context: TeamContext) -> list[dict]:
    """Every team with its member count. Master admin only."""
    if not context.is_master_admin:
        raise PermissionDeniedError(message="Only master admins can list all teams")
    member_counts = (
        select(User.team_id, func.count(User.id).label("members"))
        .where(User.team_id.is_not(None))
        .group_by(User.team_id)
        .subquery()
    )
    result = await db.execute(
        select(Team, func.coalesce(member_counts.c.members, 0))
        .outerjoin(member_counts, member_counts.c.team_id == Team.id)
        .order_by(Team.name)
    )
    return [
        {"team": team, "member_count": count}
        for team, count in result.all()
    ]
