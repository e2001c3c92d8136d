"""Permission Service — role/permission lookups and role permission-set edits.

Invariants:
    - Permission rows are only created by ensure_permission_catalog (provisioning)
    - assign/revoke are idempotent
    - set_role_permissions rejects unknown keys before touching the role (400)

Design Decisions:
    - Role.permissions relationship edited in place: SQLAlchemy maintains
      role_permissions rows (ADR: no hand-written association SQL)
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import RequestValidationFailed, ResourceNotFoundError
from app.core.permission_checks import (
    group_by_module, has_all_permissions, has_any_permission, has_permission,
    unknown_keys,
)
from app.models.role import Permission, Role
from app.models.user import User

logger = logging.getLogger(__name__)


async def get_role(db: AsyncSession, role_id: UUID) -> Role:
    role = await db.get(Role, role_id)
    if role is None:
        raise ResourceNotFoundError("Role", str(role_id))
    return role


async def get_role_permissions(db: AsyncSession, role_id: UUID | None) -> list[str]:
    if role_id is None:
        return []
    role = await db.get(Role, role_id)
    return sorted(role.permission_keys) if role else []


async def user_permission_keys(db: AsyncSession, user: User) -> set[str]:
    if user.role_id is None:
        return set()
    return set(await get_role_permissions(db, user.role_id))


async def check_permission(db: AsyncSession, user: User, key: str) -> bool:
    granted = await user_permission_keys(db, user)
    return has_permission(user.is_master_admin, user.role_id, granted, key)


async def check_any_permission(db: AsyncSession, user: User, keys: list[str]) -> bool:
    granted = await user_permission_keys(db, user)
    return has_any_permission(user.is_master_admin, user.role_id, granted, keys)


async def check_all_permissions(db: AsyncSession, user: User, keys: list[str]) -> bool:
    granted = await user_permission_keys(db, user)
    return has_all_permissions(user.is_master_admin, user.role_id, granted, keys)


async def _permission_by_key(db: AsyncSession, key: str) -> Permission:
    result = await db.execute(select(Permission).where(Permission.key == key))
    perm = result.scalar_one_or_none()
    if perm is None:
        raise RequestValidationFailed(f"Unknown permission '{key}'", "permission_key")
    return perm


async def assign_permission_to_role(db: AsyncSession, role_id: UUID, key: str) -> Role:
    role = await get_role(db, role_id)
    perm = await _permission_by_key(db, key)
    if perm not in role.permissions:
        role.permissions.append(perm)
        await db.commit()
    return role


async def revoke_permission_from_role(db: AsyncSession, role_id: UUID, key: str) -> Role:
    role = await get_role(db, role_id)
    perm = await _permission_by_key(db, key)
    if perm in role.permissions:
        role.permissions.remove(perm)
        await db.commit()
    return role


async def set_role_permissions(
    db: AsyncSession, role_id: UUID, keys: list[str],
) -> Role:
    """Replace the role's permission set with exactly `keys`."""
    role = await get_role(db, role_id)
    wanted = set(keys)
    result = await db.execute(select(Permission).where(Permission.key.in_(wanted)))
    perms = list(result.scalars().all())
    missing = unknown_keys(wanted, (p.key for p in perms))
    if missing:
        raise RequestValidationFailed(
            f"Unknown permissions: {', '.join(missing)}", "permission_keys",
        )
    role.permissions = perms
    await db.commit()
    logger.info(
        f"Role {role.name} now has {len(perms)} permissions",
        extra={"team_id": role.team_id},
    )
    return role


async def get_all_permissions(db: AsyncSession) -> list[Permission]:
    result = await db.execute(select(Permission).order_by(Permission.module, Permission.key))
    return list(result.scalars().all())


async def get_all_permissions_grouped(db: AsyncSession) -> dict[str, list[dict]]:
    perms = await get_all_permissions(db)
    return group_by_module(
        {"id": str(p.id), "key": p.key, "name": p.name, "module": p.module}
        for p in perms
    )
