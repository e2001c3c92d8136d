"""Permission Catalog — structural guarantees of keys and role templates."""

import re

from app.core.permission_catalog import (
    ALL_PERMISSION_KEYS, DEFAULT_MEMBER_ROLE, LOCAL_ADMIN_ROLE,
    PERMISSIONS_BY_MODULE, ROLE_TEMPLATES, module_for_key,
)


def test_keys_are_module_dot_action():
    for key in ALL_PERMISSION_KEYS:
        assert re.match(r"^[a-z_]+\.[a-z_]+$", key), key


def test_keys_are_unique():
    assert len(ALL_PERMISSION_KEYS) == len(set(ALL_PERMISSION_KEYS))


def test_every_template_key_exists():
    known = set(ALL_PERMISSION_KEYS)
    for template in ROLE_TEMPLATES:
        assert set(template.permissions) <= known, template.name


def test_exactly_one_admin_template_and_it_has_everything():
    admins = [t for t in ROLE_TEMPLATES if t.is_admin]
    assert [t.name for t in admins] == [LOCAL_ADMIN_ROLE]
    assert set(admins[0].permissions) == set(ALL_PERMISSION_KEYS)


def test_view_only_template_is_read_only():
    view_only = next(t for t in ROLE_TEMPLATES if t.name == DEFAULT_MEMBER_ROLE)
    assert all(k.endswith((".read", ".view")) for k in view_only.permissions)


def test_timesheets_approve_instead_of_delete():
    keys = {k for k, _ in PERMISSIONS_BY_MODULE["Timesheets"]}
    assert "timesheet.approve" in keys
    assert "timesheet.delete" not in keys


def test_immigration_has_no_delete():
    keys = {k for k, _ in PERMISSIONS_BY_MODULE["Immigration"]}
    assert "immigration.delete" not in keys


def test_module_for_key():
    assert module_for_key("invoice.read") == "Invoices"
    assert module_for_key("roles.manage") == "Users & Roles"
    assert module_for_key("nope.nope") is None
