"""Team & Onboarding Schemas — team creation, settings, members and /me.

Invariants:
    - team_name: 2-200 chars after stripping
    - MeResponse.permissions is sorted and empty for users without a role
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas.common import InputModel, ORMModel


class TeamCreate(InputModel):
    """Create a team and become its Local Admin."""
    team_name: str = Field(min_length=2, max_length=200)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    company_name: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=2000)
    is_discoverable: bool = False


class MasterAdminCreate(InputModel):
    setup_token: str = Field(min_length=1)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class TeamUpdate(InputModel):
    name: str | None = Field(None, min_length=2, max_length=200)
    company_name: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=2000)


class TeamSettingsUpdate(InputModel):
    is_discoverable: bool | None = None
    description: str | None = Field(None, max_length=2000)


class TeamSettingsResponse(ORMModel):
    team_id: UUID
    is_discoverable: bool
    description: str | None = None


class TeamResponse(ORMModel):
    id: UUID
    name: str
    company_name: str | None = None
    description: str | None = None
    is_active: bool
    created_at: datetime


class DiscoverableTeam(ORMModel):
    id: UUID
    name: str
    company_name: str | None = None
    description: str | None = None
    member_count: int = 0


class RoleSummary(ORMModel):
    id: UUID
    name: str
    is_admin: bool


class MemberResponse(ORMModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    team_id: UUID | None = None
    role_id: UUID | None = None
    role: RoleSummary | None = None
    is_master_admin: bool = False
    last_login_at: datetime | None = None
    created_at: datetime


class MemberRoleUpdate(InputModel):
    role_id: UUID


class MeResponse(ORMModel):
    user: MemberResponse
    team: TeamResponse | None = None
    role: RoleSummary | None = None
    permissions: list[str] = []
