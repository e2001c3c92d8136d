"""Provisioning — permission catalog seeding and team / master-admin onboarding.

Invariants:
    - ensure_permission_catalog is idempotent (existing keys never duplicated)
    - Every new team gets one cloned role per template, with template permissions
    - The creating user becomes the team's Local Admin in the same transaction
    - A master admin never has team_id or role_id
    - Master-admin bootstrap is impossible while setup_token is empty

Design Decisions:
    - Single commit per onboarding call: team, settings, roles and user land
      together or not at all (ADR: no half-provisioned tenants)
    - hmac.compare_digest for setup token: constant-time comparison
"""

import hmac
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import (
    BusinessRuleError, ConflictError, PermissionDeniedError,
    RequestValidationFailed,
)
from app.core.invariant_guards import validate_user_team_consistency
from app.core.permission_catalog import (
    LOCAL_ADMIN_ROLE, PERMISSIONS_BY_MODULE, ROLE_TEMPLATES,
)
from app.infrastructure.auth_tokens import AuthIdentity
from app.infrastructure.database import commit_or_conflict
from app.models.role import Permission, Role
from app.models.team import Team, TeamSettings
from app.models.user import User

logger = logging.getLogger(__name__)


async def ensure_permission_catalog(db: AsyncSession) -> dict[str, Permission]:
    """Insert missing catalog permissions. Flushes, does not commit."""
    result = await db.execute(select(Permission))
    existing = {p.key: p for p in result.scalars().all()}
    added = 0
    for module, perms in PERMISSIONS_BY_MODULE.items():
        for key, name in perms:
            if key in existing:
                continue
            perm = Permission(key=key, name=name, module=module)
            db.add(perm)
            existing[key] = perm
            added += 1
    if added:
        await db.flush()
        logger.info(f"Seeded {added} permissions")
    return existing


async def clone_role_templates(db: AsyncSession, team_id) -> dict[str, Role]:
    """Create the default role set for a team. Flushes, does not commit."""
    catalog = await ensure_permission_catalog(db)
    roles: dict[str, Role] = {}
    for template in ROLE_TEMPLATES:
        role = Role(
            team_id=team_id,
            name=template.name,
            description=template.description,
            is_admin=template.is_admin,
            is_custom=False,
            based_on_template=template.name,
            permissions=[catalog[k] for k in template.permissions],
        )
        db.add(role)
        roles[template.name] = role
    await db.flush()
    return roles


def _require_email(identity: AuthIdentity) -> str:
    if not identity.email:
        raise RequestValidationFailed("Token carries no email claim", "email")
    return identity.email


async def create_team_as_local_admin(
    db: AsyncSession,
    identity: AuthIdentity,
    team_name: str,
    first_name: str | None = None,
    last_name: str | None = None,
    company_name: str | None = None,
    description: str | None = None,
    is_discoverable: bool = False,
) -> tuple[Team, User]:
    email = _require_email(identity)
    user = await db.get(User, identity.auth_user_id)
    if user is not None and (user.team_id is not None or user.is_master_admin):
        raise BusinessRuleError("User already belongs to a team", "ALREADY_IN_TEAM")

    taken = await db.execute(select(Team.id).where(Team.name == team_name))
    if taken.scalar_one_or_none() is not None:
        raise ConflictError(f"Team name '{team_name}' is already taken")

    team = Team(
        name=team_name,
        company_name=company_name,
        description=description,
        settings=TeamSettings(is_discoverable=is_discoverable, description=description),
    )
    db.add(team)
    await db.flush()

    roles = await clone_role_templates(db, team.id)
    admin_role = roles[LOCAL_ADMIN_ROLE]

    if user is None:
        user = User(id=identity.auth_user_id, email=email)
        db.add(user)
    user.first_name = first_name or user.first_name
    user.last_name = last_name or user.last_name
    user.team_id = team.id
    user.role_id = admin_role.id
    user.is_master_admin = False
    validate_user_team_consistency(user)

    await commit_or_conflict(db, "Team name or user email already exists")
    await db.refresh(user)
    logger.info(
        f"Team '{team.name}' created",
        extra={"team_id": team.id, "user_id": user.id},
    )
    return team, user


async def create_master_admin(
    db: AsyncSession,
    identity: AuthIdentity,
    setup_token: str,
    configured_token: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    if not configured_token or not hmac.compare_digest(
        setup_token.encode(), configured_token.encode(),
    ):
        raise PermissionDeniedError(message="Invalid setup token")
    email = _require_email(identity)

    user = await db.get(User, identity.auth_user_id)
    if user is not None and user.team_id is not None:
        raise BusinessRuleError("User already belongs to a team", "ALREADY_IN_TEAM")
    if user is None:
        user = User(id=identity.auth_user_id, email=email)
        db.add(user)
    user.first_name = first_name or user.first_name
    user.last_name = last_name or user.last_name
    user.is_master_admin = True
    user.team_id = None
    user.role_id = None
    validate_user_team_consistency(user)

    await commit_or_conflict(db, "User email already exists")
    await db.refresh(user)
    logger.warning("Master admin created", extra={"user_id": user.id})
    return user


async def get_discoverable_teams(db: AsyncSession) -> list[dict]:
    """Active teams that opted into discovery, with member counts."""
    member_counts = (
        select(User.team_id, func.count(User.id).label("members"))
        .where(User.team_id.is_not(None))
        .group_by(User.team_id)
        .subquery()
    )
    result = await db.execute(
        select(Team, func.coalesce(member_counts.c.members, 0))
        .join(TeamSettings, TeamSettings.team_id == Team.id)
        .outerjoin(member_counts, member_counts.c.team_id == Team.id)
        .where(TeamSettings.is_discoverable.is_(True), Team.is_active.is_(True))
        .order_by(Team.name)
    )
    return [
        {
            "id": team.id,
            "name": team.name,
            "company_name": team.company_name,
            "description": team.settings.description if team.settings else team.description,
            "member_count": count,
        }
        for team, count in result.all()
    ]
