"""Audit Diff — pure change detection and JSON snapshots for audit_log rows.

Invariants:
    - changed_fields is None unless BOTH old and new snapshots exist
    - Only keys present in the new snapshot are compared
    - Snapshots are JSON-safe (UUID, date, Decimal converted to str/float)
"""

import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID


def to_json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json_safe(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def changed_fields(old: dict | None, new: dict | None) -> list[str] | None:
    if not old or not new:
        return None
    changed = [
        key for key in new
        if json.dumps(to_json_safe(old.get(key)), sort_keys=True)
        != json.dumps(to_json_safe(new.get(key)), sort_keys=True)
    ]
    return changed or None
