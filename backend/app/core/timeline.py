"""Timeline — pure merge of audit rows, activities and notes into one feed.

Invariants:
    - Output sorted newest first; ties keep source order (audit, activity, note)
    - Every item has id, type, title, description, timestamp, user_id, metadata
"""

from datetime import datetime, timezone
from typing import Iterable

from app.core.audit_diff import to_json_safe


def audit_item(log) -> dict:
    return {
        "id": str(log.id),
        "type": "audit",
        "title": f"{log.action} Action",
        "description": f"{log.action} {log.entity_name} record",
        "timestamp": log.performed_at,
        "user_id": log.performed_by,
        "metadata": {"changed_fields": log.changed_fields},
    }


def activity_item(activity) -> dict:
    return {
        "id": str(activity.id),
        "type": "activity",
        "title": activity.title,
        "description": activity.description or "",
        "timestamp": activity.created_at,
        "user_id": activity.created_by,
        "metadata": activity.metadata_json,
    }


def note_item(note) -> dict:
    return {
        "id": str(note.id),
        "type": "note",
        "title": "Note",
        "description": note.content,
        "timestamp": note.created_at,
        "user_id": note.created_by,
        "metadata": None,
    }


def _sort_key(item: dict) -> float:
    ts = item["timestamp"]
    if isinstance(ts, datetime):
        # sqlite hands back naive datetimes
        return (ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)).timestamp()
    return 0.0


def merge_timeline(
    audit_logs: Iterable, activities: Iterable, notes: Iterable,
) -> list[dict]:
    items = (
        [audit_item(a) for a in audit_logs]
        + [activity_item(a) for a in activities]
        + [note_item(n) for n in notes]
    )
    items.sort(key=_sort_key, reverse=True)
    return [to_json_safe(i) for i in items]
