"""Permission Catalog — the fixed set of permission keys and per-team role templates.

Invariants:
    - Every key is "<module>.<action>" and appears in exactly one module
    - Every template key exists in PERMISSIONS_BY_MODULE
    - Exactly one template is marked is_admin (LOCAL_ADMIN_ROLE)
    - Timesheets have "approve" instead of "delete"; Immigration has no delete

Design Decisions:
    - Catalog as code constants, seeded to DB on startup: migrations and tests
      share one source of truth (ADR: data-as-code for reference tables)
    - Templates cloned per team: teams customise their copies without
      affecting other tenants
"""

from dataclasses import dataclass


PERMISSIONS_BY_MODULE: dict[str, list[tuple[str, str]]] = {
    "Candidates": [
        ("candidate.create", "Create new candidates"),
        ("candidate.read", "View candidates"),
        ("candidate.update", "Edit candidate information"),
        ("candidate.delete", "Delete candidates"),
    ],
    "Vendors": [
        ("vendor.create", "Create new vendors"),
        ("vendor.read", "View vendors"),
        ("vendor.update", "Edit vendor information"),
        ("vendor.delete", "Delete vendors"),
    ],
    "Clients": [
        ("client.create", "Create new clients"),
        ("client.read", "View clients"),
        ("client.update", "Edit client information"),
        ("client.delete", "Delete clients"),
    ],
    "Jobs": [
        ("job.create", "Create job requirements"),
        ("job.read", "View job requirements"),
        ("job.update", "Edit job requirements"),
        ("job.delete", "Delete job requirements"),
    ],
    "Submissions": [
        ("submission.create", "Submit candidates for jobs"),
        ("submission.read", "View submissions"),
        ("submission.update", "Edit submissions"),
        ("submission.delete", "Delete submissions"),
    ],
    "Interviews": [
        ("interview.create", "Schedule interviews"),
        ("interview.read", "View interviews"),
        ("interview.update", "Update interview details"),
        ("interview.delete", "Delete interviews"),
    ],
    "Projects": [
        ("project.create", "Create new projects"),
        ("project.read", "View projects"),
        ("project.update", "Edit project details"),
        ("project.delete", "Delete projects"),
    ],
    "Timesheets": [
        ("timesheet.create", "Create timesheets"),
        ("timesheet.read", "View timesheets"),
        ("timesheet.update", "Edit timesheets"),
        ("timesheet.approve", "Approve timesheets"),
    ],
    "Invoices": [
        ("invoice.create", "Create invoices"),
        ("invoice.read", "View invoices"),
        ("invoice.update", "Edit invoices"),
        ("invoice.delete", "Delete invoices"),
    ],
    "Immigration": [
        ("immigration.create", "Create immigration records"),
        ("immigration.read", "View immigration records"),
        ("immigration.update", "Update immigration records"),
    ],
    "Users & Roles": [
        ("user.create", "Create new users"),
        ("user.read", "View users"),
        ("user.update", "Edit user information"),
        ("user.delete", "Delete users"),
        ("roles.manage", "Create and configure roles"),
    ],
    "Settings": [
        ("settings.manage", "Manage team settings"),
        ("audit.view", "View audit logs"),
        ("reports.view", "View reports"),
    ],
}

ALL_PERMISSION_KEYS: tuple[str, ...] = tuple(
    key for perms in PERMISSIONS_BY_MODULE.values() for key, _ in perms
)

LOCAL_ADMIN_ROLE = "Local Admin"
DEFAULT_MEMBER_ROLE = "View-Only"


@dataclass(frozen=True)
class RoleTemplate:
    name: str
    description: str
    permissions: tuple[str, ...]
    is_admin: bool = False


ROLE_TEMPLATES: tuple[RoleTemplate, ...] = (
    RoleTemplate(
        LOCAL_ADMIN_ROLE,
        "Admin for their team with full team-scoped access",
        ALL_PERMISSION_KEYS,
        is_admin=True,
    ),
    RoleTemplate(
        "Sales Manager",
        "Manage candidates, vendors, clients, and job placements",
        (
            "candidate.create", "candidate.read", "candidate.update",
            "vendor.read", "vendor.update",
            "client.read", "client.update",
            "job.read",
            "submission.create", "submission.read", "submission.update",
            "interview.read", "interview.update",
            "project.read",
            "reports.view",
        ),
    ),
    RoleTemplate(
        "Manager",
        "General access to candidates, vendors, clients and projects",
        (
            "candidate.create", "candidate.read", "candidate.update",
            "vendor.read", "client.read", "job.read",
            "submission.read", "interview.read", "project.read",
            "timesheet.read", "reports.view",
        ),
    ),
    RoleTemplate(
        "Recruiter",
        "Manage candidates and submissions",
        (
            "candidate.create", "candidate.read", "candidate.update",
            "job.read",
            "submission.create", "submission.read", "submission.update",
            "interview.create", "interview.read", "interview.update",
        ),
    ),
    RoleTemplate(
        "Finance",
        "Manage invoices, timesheets, and financial reports",
        (
            "timesheet.read", "timesheet.approve",
            "invoice.create", "invoice.read", "invoice.update",
            "project.read", "reports.view",
        ),
    ),
    RoleTemplate(
        DEFAULT_MEMBER_ROLE,
        "Read-only access to all core modules",
        (
            "candidate.read", "vendor.read", "client.read", "job.read",
            "submission.read", "interview.read", "project.read",
            "timesheet.read", "invoice.read", "immigration.read",
            "reports.view",
        ),
    ),
)


def module_for_key(key: str) -> str | None:
    for module, perms in PERMISSIONS_BY_MODULE.items():
        if any(k == key for k, _ in perms):
            return module
    return None
