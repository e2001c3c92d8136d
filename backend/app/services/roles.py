"""Role Service — team-scoped role management on top of the permission catalog.

Invariants:
    - Roles are visible/editable only inside their team (master admin: any team)
    - Role names unique per team (409 from uq_roles_team_name)
    - A role assigned to any user cannot be deleted (409)
    - Roles created through the API are always is_custom=True
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, ResourceNotFoundError
from app.core.team_context import (
    TeamContext, apply_team_filter, check_team_access, write_team_id,
)
from app.infrastructure.database import commit_or_conflict, flush_or_conflict
from app.models.role import Role
from app.models.user import User
from app.services import permissions as permission_service

logger = logging.getLogger(__name__)

_EDITABLE = {"name", "description", "is_admin"}


class RoleService:
    def __init__(self, db: AsyncSession, context: TeamContext):
        self.db = db
        self.context = context

    async def list_roles(self, team_id: UUID | None = None) -> list[Role]:
        query = select(Role).order_by(Role.name)
        scoped = apply_team_filter(self.context, team_id)
        if scoped is not None:
            query = query.where(Role.team_id == scoped)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_role(self, role_id: UUID) -> Role:
        role = await self.db.get(Role, role_id)
        if role is None:
            raise ResourceNotFoundError("Role", str(role_id))
        check_team_access(self.context, role.team_id)
        return role

    async def create_role(
        self,
        name: str,
        description: str | None = None,
        is_admin: bool = False,
        permission_keys: list[str] | None = None,
        based_on_template: str | None = None,
    ) -> Role:
        team_id = write_team_id(self.context)
        role = Role(
            team_id=team_id, name=name, description=description,
            is_admin=is_admin, is_custom=True, based_on_template=based_on_template,
            permissions=[],
        )
        self.db.add(role)
        await flush_or_conflict(self.db, f"Role '{name}' already exists in this team")
        if permission_keys:
            role = await permission_service.set_role_permissions(
                self.db, role.id, permission_keys,
            )
        else:
            await commit_or_conflict(self.db, f"Role '{name}' already exists in this team")
        logger.info(f"Role '{name}' created", extra={"team_id": team_id})
        return role

    async def update_role(self, role_id: UUID, changes: dict) -> Role:
        role = await self.get_role(role_id)
        for field, value in changes.items():
            if field in _EDITABLE and value is not None:
                setattr(role, field, value)
        await commit_or_conflict(self.db, "Role name already exists in this team")
        return role

    async def delete_role(self, role_id: UUID) -> None:
        role = await self.get_role(role_id)
        assigned = (await self.db.execute(
            select(func.count(User.id)).where(User.role_id == role.id)
        )).scalar_one()
        if assigned:
            raise ConflictError(
                f"Role is assigned to {assigned} user(s)", "ROLE_IN_USE",
            )
        await self.db.delete(role)
        await self.db.commit()
        logger.info(f"Role '{role.name}' deleted", extra={"team_id": role.team_id})

    async def set_permissions(self, role_id: UUID, keys: list[str]) -> Role:
        await self.get_role(role_id)
        return await permission_service.set_role_permissions(self.db, role_id, keys)

    async def grant_permission(self, role_id: UUID, key: str) -> Role:
        await self.get_role(role_id)
        return await permission_service.assign_permission_to_role(self.db, role_id, key)

    async def revoke_permission(self, role_id: UUID, key: str) -> Role:
        await self.get_role(role_id)
        return await permission_service.revoke_permission_from_role(self.db, role_id, key)
