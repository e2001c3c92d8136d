"""Team Members — the caller's own team: profile, settings and membership edits.

Invariants:
    - Operates only on the context's write team (master admin must name one)
    - A member's new role must belong to the same team (400)
    - Removing a member clears BOTH team_id and role_id; nobody removes themselves
    - last_login_at only moves through record_login
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import (
    BusinessRuleError, RequestValidationFailed, ResourceNotFoundError,
)
from app.core.invariant_guards import validate_user_team_consistency
from app.core.team_context import TeamContext, write_team_id
from app.db.base import utcnow
from app.infrastructure.database import commit_or_conflict
from app.models.role import Role
from app.models.team import Team, TeamSettings
from app.models.user import User
from app.services.team_context import get_team_info

logger = logging.getLogger(__name__)


class TeamMemberService:
    def __init__(self, db: AsyncSession, context: TeamContext):
        self.db = db
        self.context = context
        self.team_id = write_team_id(context)

    async def get_team(self) -> Team:
        return await get_team_info(self.db, self.team_id)

    async def update_team(self, changes: dict) -> Team:
        team = await self.get_team()
        for field in ("name", "company_name", "description"):
            if changes.get(field) is not None:
                setattr(team, field, changes[field])
        await commit_or_conflict(self.db, "Team name is already taken")
        return team

    async def update_settings(
        self, is_discoverable: bool | None = None, description: str | None = None,
    ) -> TeamSettings:
        team = await self.get_team()
        settings = team.settings
        if settings is None:
            settings = TeamSettings(team_id=team.id)
            self.db.add(settings)
        if is_discoverable is not None:
            settings.is_discoverable = is_discoverable
        if description is not None:
            settings.description = description
        await self.db.commit()
        logger.info(
            f"Team settings updated (discoverable={settings.is_discoverable})",
            extra={"team_id": team.id, "user_id": self.context.user_id},
        )
        return settings

    async def list_members(self) -> list[User]:
        result = await self.db.execute(
            select(User).where(User.team_id == self.team_id).order_by(User.email)
        )
        return list(result.scalars().all())

    async def _member(self, user_id: str) -> User:
        user = await self.db.get(User, user_id)
        if user is None or user.team_id != self.team_id:
            raise ResourceNotFoundError("Team member", user_id)
        return user

    async def update_member_role(self, user_id: str, role_id) -> User:
        user = await self._member(user_id)
        role = await self.db.get(Role, role_id)
        if role is None or role.team_id != self.team_id:
            raise RequestValidationFailed("Role does not belong to this team", "role_id")
        user.role_id = role.id
        validate_user_team_consistency(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(
            f"Member {user_id} now has role {role.name}",
            extra={"team_id": self.team_id, "user_id": self.context.user_id},
        )
        return user

    async def remove_member(self, user_id: str) -> None:
        if user_id == self.context.user_id:
            raise BusinessRuleError("You cannot remove yourself from the team", "SELF_REMOVAL")
        user = await self._member(user_id)
        user.team_id = None
        user.role_id = None
        validate_user_team_consistency(user)
        await self.db.commit()
        logger.info(
            f"Member {user_id} removed",
            extra={"team_id": self.team_id, "user_id": self.context.user_id},
        )


async def record_login(db: AsyncSession, user: User) -> User:
    """Stamp last_login_at; called by the client right after sign-in."""
    user.last_login_at = utcnow()
    await db.commit()
    await db.refresh(user)
    logger.info("User signed in", extra={"user_id": user.id, "team_id": user.team_id})
    return user
