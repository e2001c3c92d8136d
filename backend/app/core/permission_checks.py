"""Permission Checks — pure membership tests of permission keys against a role.

Invariants:
    - Master admin passes every check
    - A caller with no role (role_id None) fails every check
    - Check is exact key membership; no wildcards, no hierarchy

Design Decisions:
    - Granted keys passed in as a set: one DB round-trip per request, many checks
    - is_local_admin does NOT bypass: the Local Admin template already carries
      every team key, and custom admin roles stay explicit (ADR: least privilege)
"""

from typing import Iterable

from app.core.permission_catalog import module_for_key


def has_permission(
    is_master_admin: bool, role_id: object, granted: set[str], key: str,
) -> bool:
    if is_master_admin:
        return True
    if role_id is None:
        return False
    return key in granted


def has_any_permission(
    is_master_admin: bool, role_id: object, granted: set[str], keys: Iterable[str],
) -> bool:
    return any(has_permission(is_master_admin, role_id, granted, k) for k in keys)


def has_all_permissions(
    is_master_admin: bool, role_id: object, granted: set[str], keys: Iterable[str],
) -> bool:
    return all(has_permission(is_master_admin, role_id, granted, k) for k in keys)


def group_by_module(permissions: Iterable[dict]) -> dict[str, list[dict]]:
    """Group permission dicts by their "module" field (falls back to catalog)."""
    grouped: dict[str, list[dict]] = {}
    for perm in permissions:
        module = perm.get("module") or module_for_key(perm["key"]) or "Other"
        grouped.setdefault(module, []).append(perm)
    for perms in grouped.values():
        perms.sort(key=lambda p: p["key"])
    return grouped


def unknown_keys(keys: Iterable[str], known: Iterable[str]) -> list[str]:
    known_set = set(known)
    return sorted({k for k in keys if k not in known_set})
