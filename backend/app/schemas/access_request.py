"""Access Request Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.core.domain_types import AccessRequestStatus
from app.schemas.common import InputModel, ORMModel


class AccessRequestCreate(InputModel):
    team_id: UUID
    requested_role_id: UUID | None = None
    message: str | None = Field(None, max_length=2000)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class AccessRequestResponse(ORMModel):
    id: UUID
    auth_user_id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    requested_team_id: UUID
    requested_role_id: UUID | None = None
    message: str | None = None
    status: AccessRequestStatus
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime


class ApproveAccessRequest(InputModel):
    role_id: UUID | None = None


class RejectAccessRequest(InputModel):
    reason: str | None = Field(None, max_length=2000)
