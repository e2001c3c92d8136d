"""Note & Audit Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.core.domain_types import AuditAction
from app.schemas.common import InputModel, ORMModel


class NoteCreate(InputModel):
    entity_type: str = Field(min_length=1, max_length=50)
    entity_id: UUID
    content: str = Field(min_length=1, max_length=20_000)


class NoteUpdate(InputModel):
    content: str = Field(min_length=1, max_length=20_000)


class NoteResponse(ORMModel):
    id: UUID
    team_id: UUID
    entity_type: str
    entity_id: UUID
    content: str
    created_by: str | None = None
    created_at: datetime


class AuditLogResponse(ORMModel):
    id: UUID
    entity_name: str
    entity_id: str
    action: AuditAction
    old_value: dict | None = None
    new_value: dict | None = None
    changed_fields: list[str] | None = None
    performed_by: str | None = None
    team_id: UUID | None = None
    performed_at: datetime
