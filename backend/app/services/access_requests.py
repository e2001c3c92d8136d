"""Access Requests — ask to join a team; team admins approve or reject.

Invariants:
    - At most one pending request per (email, team)
    - Only pending requests can be reviewed (409 otherwise)
    - Reviewer must be master admin or an is_admin-role member of the requested team
    - Approval assigns a role that belongs to the requested team
    - Approved/rejected rows always carry reviewed_at (and reviewed_by when approved)

Design Decisions:
    - Single table for join requests: no separate membership rows, the user's
      team_id/role_id ARE the membership (ADR: one source of truth)
    - Default role on approval: requested role, else the team's View-Only role
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import AccessRequestStatus
from app.core.errors import (
    BusinessRuleError, ConflictError, PermissionDeniedError,
    RequestValidationFailed, ResourceNotFoundError,
)
from app.core.invariant_guards import (
    validate_access_request_state, validate_user_team_consistency,
)
from app.core.permission_catalog import DEFAULT_MEMBER_ROLE
from app.core.team_context import TeamContext, apply_team_filter
from app.db.base import utcnow
from app.infrastructure.auth_tokens import AuthIdentity
from app.infrastructure.database import commit_or_conflict
from app.models.access_request import AccessRequest
from app.models.role import Role
from app.models.team import Team
from app.models.user import User

logger = logging.getLogger(__name__)


class AccessRequestService:
    """Join-team workflow."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        identity: AuthIdentity,
        team_id: UUID,
        requested_role_id: UUID | None = None,
        message: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> AccessRequest:
        if not identity.email:
            raise RequestValidationFailed("Token carries no email claim", "email")

        team = await self.db.get(Team, team_id)
        if team is None:
            raise ResourceNotFoundError("Team", str(team_id))
        if not team.is_active:
            raise BusinessRuleError("Team is not accepting requests", "TEAM_INACTIVE")

        user = await self.db.get(User, identity.auth_user_id)
        if user is not None and (user.team_id is not None or user.is_master_admin):
            raise BusinessRuleError("User already belongs to a team", "ALREADY_IN_TEAM")

        pending = await self.db.execute(
            select(AccessRequest.id).where(
                AccessRequest.email == identity.email,
                AccessRequest.requested_team_id == team_id,
                AccessRequest.status == AccessRequestStatus.PENDING.value,
            )
        )
        if pending.first() is not None:
            raise ConflictError(
                "A pending request for this team already exists", "REQUEST_PENDING",
            )

        if requested_role_id is not None:
            await self._team_role(team_id, requested_role_id)

        request = AccessRequest(
            auth_user_id=identity.auth_user_id,
            email=identity.email,
            first_name=first_name,
            last_name=last_name,
            requested_team_id=team_id,
            requested_role_id=requested_role_id,
            message=message,
            status=AccessRequestStatus.PENDING.value,
        )
        self.db.add(request)
        await commit_or_conflict(self.db, "Access request already exists")
        logger.info(
            f"Access request created for {identity.email}",
            extra={"team_id": team_id, "user_id": identity.auth_user_id},
        )
        return request

    async def list_for_team(
        self,
        context: TeamContext,
        status: str | None = None,
        team_id: UUID | None = None,
    ) -> list[AccessRequest]:
        if not (context.is_master_admin or context.is_local_admin):
            raise PermissionDeniedError(
                message="Only team admins can view access requests",
            )
        query = select(AccessRequest).order_by(AccessRequest.created_at.desc())
        scoped = apply_team_filter(context, team_id)
        if scoped is not None:
            query = query.where(AccessRequest.requested_team_id == scoped)
        if status:
            query = query.where(AccessRequest.status == status)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_mine(self, identity: AuthIdentity) -> dict:
        result = await self.db.execute(
            select(AccessRequest)
            .where(AccessRequest.auth_user_id == identity.auth_user_id)
            .order_by(AccessRequest.created_at.desc())
        )
        requests = list(result.scalars().all())
        grouped: dict = {s.value: [] for s in AccessRequestStatus}
        for r in requests:
            grouped.setdefault(r.status, []).append(r)
        grouped["total"] = len(requests)
        return grouped

    async def approve(
        self, reviewer: User, request_id: UUID, role_id: UUID | None = None,
    ) -> AccessRequest:
        request = await self._get_pending(reviewer, request_id)
        team_id = request.requested_team_id

        if role_id is not None:
            role = await self._team_role(team_id, role_id)
        elif request.requested_role_id is not None:
            role = await self._team_role(team_id, request.requested_role_id)
        else:
            role = await self._default_role(team_id)

        user = await self.db.get(User, request.auth_user_id)
        if user is None:
            user = User(
                id=request.auth_user_id,
                email=request.email,
                first_name=request.first_name,
                last_name=request.last_name,
            )
            self.db.add(user)
        elif user.is_master_admin or (
            user.team_id is not None and user.team_id != team_id
        ):
            raise BusinessRuleError(
                "User already belongs to another team", "ALREADY_IN_TEAM",
            )
        user.team_id = team_id
        user.role_id = role.id

        request.status = AccessRequestStatus.APPROVED.value
        request.reviewed_by = reviewer.id
        request.reviewed_at = utcnow()

        validate_user_team_consistency(user)
        validate_access_request_state(request)
        await commit_or_conflict(self.db, "User email already exists")
        logger.info(
            f"Access request {request.id} approved with role {role.name}",
            extra={"team_id": team_id, "user_id": reviewer.id},
        )
        return request

    async def reject(
        self, reviewer: User, request_id: UUID, reason: str | None = None,
    ) -> AccessRequest:
        request = await self._get_pending(reviewer, request_id)
        request.status = AccessRequestStatus.REJECTED.value
        request.reviewed_by = reviewer.id
        request.reviewed_at = utcnow()
        request.rejection_reason = reason
        validate_access_request_state(request)
        await self.db.commit()
        logger.info(
            f"Access request {request.id} rejected",
            extra={"team_id": request.requested_team_id, "user_id": reviewer.id},
        )
        return request

    # ─── helpers ─────────────────────────────────────────────────

    async def _get_pending(self, reviewer: User, request_id: UUID) -> AccessRequest:
        request = await self.db.get(AccessRequest, request_id)
        if request is None:
            raise ResourceNotFoundError("Access request", str(request_id))
        self._authorize_reviewer(reviewer, request.requested_team_id)
        if request.status != AccessRequestStatus.PENDING.value:
            raise ConflictError(
                f"Access request is already {request.status}", "REQUEST_NOT_PENDING",
            )
        return request

    @staticmethod
    def _authorize_reviewer(reviewer: User, team_id: UUID) -> None:
        if reviewer.is_master_admin:
            return
        if (
            reviewer.team_id == team_id
            and reviewer.role is not None
            and reviewer.role.is_admin
        ):
            return
        raise PermissionDeniedError(
            message="Only admins of this team can review access requests",
        )

    async def _team_role(self, team_id: UUID, role_id: UUID) -> Role:
        role = await self.db.get(Role, role_id)
        if role is None or role.team_id != team_id:
            raise RequestValidationFailed("Role does not belong to this team", "role_id")
        return role

    async def _default_role(self, team_id: UUID) -> Role:
        result = await self.db.execute(
            select(Role).where(Role.team_id == team_id, Role.name == DEFAULT_MEMBER_ROLE)
        )
        role = result.scalar_one_or_none()
        if role is None:
            raise BusinessRuleError(
                "Team has no default role; pass role_id explicitly", "NO_DEFAULT_ROLE",
            )
        return role
