"""Audit & Timeline Service — writes audit/activity rows, reads filtered logs and timelines.

Invariants:
    - create_audit_log / create_activity only add to the session; the caller's
      commit makes them durable together with the change they describe
    - Reads are always team filtered (core.team_context.apply_team_filter)
    - Timeline is audit + activities + notes for one entity, newest first
"""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.audit_diff import changed_fields, to_json_safe
from app.core.domain_types import AuditAction
from app.core.team_context import TeamContext, apply_team_filter
from app.core.timeline import merge_timeline
from app.models.audit_log import Activity, AuditLog
from app.models.note import Note

logger = logging.getLogger(__name__)


def create_audit_log(
    db: AsyncSession,
    entity_name: str,
    entity_id,
    action: AuditAction,
    old_value: dict | None = None,
    new_value: dict | None = None,
    user_id: str | None = None,
    team_id=None,
) -> AuditLog:
    old_safe = to_json_safe(old_value) if old_value else None
    new_safe = to_json_safe(new_value) if new_value else None
    log = AuditLog(
        entity_name=entity_name,
        entity_id=str(entity_id),
        action=action.value,
        old_value=old_safe,
        new_value=new_safe,
        changed_fields=changed_fields(old_safe, new_safe),
        performed_by=user_id,
        team_id=team_id,
    )
    db.add(log)
    return log


def create_activity(
    db: AsyncSession,
    entity_type: str,
    entity_id,
    activity_type: str,
    title: str,
    description: str | None = None,
    metadata: dict | None = None,
    user_id: str | None = None,
    team_id=None,
) -> Activity:
    activity = Activity(
        entity_type=entity_type,
        entity_id=str(entity_id),
        activity_type=activity_type,
        title=title,
        description=description,
        metadata_json=to_json_safe(metadata) if metadata else None,
        created_by=user_id,
        team_id=team_id,
    )
    db.add(activity)
    return activity


async def get_filtered_audit_logs(
    db: AsyncSession,
    context: TeamContext,
    entity_name: str | None = None,
    action: str | None = None,
    user_id: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    limit: int = 50,
    team_id=None,
) -> list[AuditLog]:
    query = select(AuditLog).order_by(AuditLog.performed_at.desc())
    scoped = apply_team_filter(context, team_id)
    if scoped is not None:
        query = query.where(AuditLog.team_id == scoped)
    if entity_name:
        query = query.where(AuditLog.entity_name == entity_name)
    if action:
        query = query.where(AuditLog.action == action)
    if user_id:
        query = query.where(AuditLog.performed_by == user_id)
    if start:
        query = query.where(AuditLog.performed_at >= start)
    if end:
        query = query.where(AuditLog.performed_at <= end)
    result = await db.execute(query.limit(limit))
    return list(result.scalars().all())


async def get_entity_timeline(
    db: AsyncSession, context: TeamContext, entity_type: str, entity_id,
) -> list[dict]:
    scoped = apply_team_filter(context)
    key = str(entity_id)

    audit_q = select(AuditLog).where(
        AuditLog.entity_name == entity_type, AuditLog.entity_id == key,
    )
    activity_q = select(Activity).where(
        Activity.entity_type == entity_type, Activity.entity_id == key,
    )
    note_q = select(Note).where(
        Note.entity_type == entity_type, Note.entity_id == entity_id,
    )
    if scoped is not None:
        audit_q = audit_q.where(AuditLog.team_id == scoped)
        activity_q = activity_q.where(Activity.team_id == scoped)
        note_q = note_q.where(Note.team_id == scoped)

    audits = (await db.execute(audit_q)).scalars().all()
    activities = (await db.execute(activity_q)).scalars().all()
    notes = (await db.execute(note_q)).scalars().all()
    return merge_timeline(audits, activities, notes)
