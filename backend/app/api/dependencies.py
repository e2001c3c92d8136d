"""Request Dependencies — bearer auth, current user, team context and permission gates.

Invariants:
    - get_identity never touches the DB (token only)
    - get_current_user requires an existing users row (401 otherwise)
    - require_permission resolves TeamContext THEN checks the key: a user with no
      team gets 403 before any permission logic runs
    - Master admins pick the team with the ?team_id= query parameter

Design Decisions:
    - Dependency factory (require_permission("candidate.create")) keeps the
      permission key next to the route it guards (ADR: explicit over decorator magic)
    - Token verifier cached per settings instance: no per-request construction
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from uuid import UUID

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.errors import AuthenticationError, PermissionDeniedError
from app.core.permission_checks import has_permission
from app.core.team_context import TeamContext
from app.infrastructure.auth_tokens import AuthIdentity, TokenVerifier
from app.infrastructure.database import get_db
from app.models.user import User
from app.services.team_context import resolve_team_context

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_token_verifier() -> TokenVerifier:
    settings = get_settings()
    return TokenVerifier(
        settings.auth_jwt_secret,
        settings.auth_jwt_algorithm,
        settings.auth_jwt_audience or None,
    )


async def get_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AuthIdentity:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return get_token_verifier().verify(credentials.credentials)


async def get_current_user(
    identity: AuthIdentity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await db.get(User, identity.auth_user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


@dataclass
class RequestContext:
    """Everything a guarded route needs about its caller."""
    user: User
    team: TeamContext
    permissions: set[str]
    db: AsyncSession


def require_permission(key: str | None = None, require_team: bool = True):
    """Build a dependency that resolves the caller's team and checks `key`."""

    async def dependency(
        team_id: UUID | None = Query(None, description="Target team (master admin only)"),
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ) -> RequestContext:
        context = await resolve_team_context(db, user, team_id, require_team)
        granted = user.role.permission_keys if user.role else set()
        if key is not None and not has_permission(
            user.is_master_admin, user.role_id, granted, key,
        ):
            logger.info(
                f"Permission {key} denied",
                extra={"user_id": user.id, "team_id": context.team_id},
            )
            raise PermissionDeniedError(key)
        return RequestContext(user=user, team=context, permissions=granted, db=db)

    return dependency


class Pagination:
    """limit/offset query parameters bounded by settings."""

    def __init__(
        self,
        limit: int | None = Query(None, ge=1),
        offset: int = Query(0, ge=0),
    ):
        settings = get_settings()
        self.limit = min(limit or settings.default_page_size, settings.max_page_size)
        self.offset = offset
