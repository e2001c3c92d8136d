"""Tenant Records — generic team-scoped CRUD with audit logging.

Invariants:
    - Every read is team filtered; every single-row access passes check_team_access
    - team_id on create comes from the TeamContext, never from the request body
    - team_id and created_by are immutable after create
    - Referenced rows (candidate_id, client_id, ...) must exist in the SAME team (400)
    - Each create/update/delete writes one audit_log row in the same transaction

Design Decisions:
    - One base class, one thin subclass per resource: routes stay identical in
      shape across twelve resources (ADR: DRY over per-resource copies)
    - Hooks (after_create/after_update) for resource-specific activities
"""

import logging
from typing import Any, ClassVar
from uuid import UUID

from sqlalchemy import func, inspect, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import AuditAction
from app.core.errors import RequestValidationFailed, ResourceNotFoundError
from app.core.team_context import (
    TeamContext, apply_team_filter, check_team_access, write_team_id,
)
from app.infrastructure.database import commit_or_conflict, flush_or_conflict
from app.services.audit import create_audit_log

logger = logging.getLogger(__name__)

_IMMUTABLE = {"id", "team_id", "created_by", "created_at", "updated_at"}


def escape_like(term: str) -> str:
    """Make %, _ and backslash match literally in an ILIKE pattern."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TenantRecordService:
    """Base CRUD service; subclasses set model, entity_name and friends."""

    model: ClassVar[Any] = None
    entity_name: ClassVar[str] = ""
    search_fields: ClassVar[tuple[str, ...]] = ()
    filter_fields: ClassVar[tuple[str, ...]] = ("status",)
    # field -> (model, label) that must live in the caller's team
    references: ClassVar[dict[str, tuple[Any, str]]] = {}

    def __init__(self, db: AsyncSession, context: TeamContext):
        self.db = db
        self.context = context

    # ─── reads ───────────────────────────────────────────────────

    def base_query(self, team_id: UUID | None = None):
        query = select(self.model)
        scoped = apply_team_filter(self.context, team_id)
        if scoped is not None:
            query = query.where(self.model.team_id == scoped)
        return query

    async def list(
        self,
        filters: dict | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
        team_id: UUID | None = None,
    ) -> tuple[list, int]:
        query = self.base_query(team_id)
        for field, value in (filters or {}).items():
            if value is None:
                continue
            if field not in self.filter_fields:
                raise RequestValidationFailed(f"Cannot filter by '{field}'", field)
            query = query.where(getattr(self.model, field) == value)
        if search and self.search_fields:
            pattern = f"%{escape_like(search.strip())}%"
            query = query.where(or_(
                *(
                    getattr(self.model, f).ilike(pattern, escape="\\")
                    for f in self.search_fields
                )
            ))

        total = (await self.db.execute(
            select(func.count()).select_from(query.subquery())
        )).scalar_one()
        result = await self.db.execute(
            query.order_by(self.model.created_at.desc()).limit(limit).offset(offset)
        )
        return list(result.scalars().all()), total

    async def get(self, record_id: UUID):
        record = await self.db.get(self.model, record_id)
        if record is None:
            raise ResourceNotFoundError(self.entity_name.capitalize(), str(record_id))
        check_team_access(self.context, record.team_id)
        return record

    # ─── writes ──────────────────────────────────────────────────

    async def create(self, data: dict):
        team_id = write_team_id(self.context)
        values = {k: v for k, v in data.items() if k not in _IMMUTABLE}
        await self.validate_references(values, team_id)

        record = self.model(**values, team_id=team_id, created_by=self.context.user_id)
        self.db.add(record)
        await flush_or_conflict(
            self.db, f"{self.entity_name} conflicts with an existing record",
        )
        create_audit_log(
            self.db, self.entity_name, record.id, AuditAction.CREATE,
            new_value=self.snapshot(record),
            user_id=self.context.user_id, team_id=team_id,
        )
        await self.after_create(record)
        await self._commit(record)
        logger.info(
            f"{self.entity_name} created",
            extra={"entity": self.entity_name, "entity_id": record.id, "team_id": team_id},
        )
        return record

    async def update(self, record_id: UUID, changes: dict):
        record = await self.get(record_id)
        values = {k: v for k, v in changes.items() if k not in _IMMUTABLE}
        await self.validate_references(values, record.team_id)

        old = self.snapshot(record)
        for field, value in values.items():
            setattr(record, field, value)
        await flush_or_conflict(
            self.db, f"{self.entity_name} conflicts with an existing record",
        )
        create_audit_log(
            self.db, self.entity_name, record.id, AuditAction.UPDATE,
            old_value=old, new_value=self.snapshot(record),
            user_id=self.context.user_id, team_id=record.team_id,
        )
        await self.after_update(record, old)
        await self._commit(record)
        return record

    async def delete(self, record_id: UUID) -> None:
        record = await self.get(record_id)
        create_audit_log(
            self.db, self.entity_name, record.id, AuditAction.DELETE,
            old_value=self.snapshot(record),
            user_id=self.context.user_id, team_id=record.team_id,
        )
        await self.db.delete(record)
        await commit_or_conflict(self.db, f"{self.entity_name} is still referenced")
        logger.info(
            f"{self.entity_name} deleted",
            extra={"entity": self.entity_name, "entity_id": record_id},
        )

    # ─── helpers / hooks ─────────────────────────────────────────

    async def validate_references(self, values: dict, team_id: UUID) -> None:
        for field, (ref_model, label) in self.references.items():
            ref_id = values.get(field)
            if ref_id is None:
                continue
            ref = await self.db.get(ref_model, ref_id)
            if ref is None or ref.team_id != team_id:
                raise RequestValidationFailed(f"{label} not found in this team", field)

    def snapshot(self, record) -> dict:
        return {
            attr.key: getattr(record, attr.key)
            for attr in inspect(self.model).column_attrs
        }

    async def after_create(self, record) -> None:
        pass

    async def after_update(self, record, old: dict) -> None:
        pass

    async def _commit(self, record) -> None:
        await commit_or_conflict(
            self.db, f"{self.entity_name} conflicts with an existing record",
        )
        await self.db.refresh(record)
