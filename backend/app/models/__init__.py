"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Team is the tenant root; business entities scoped by team_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from app.models.team import Team, TeamSettings  # noqa: F401
from app.models.role import Permission, Role, role_permissions  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.access_request import AccessRequest  # noqa: F401
from app.models.candidate import Candidate, BenchHistory  # noqa: F401
from app.models.vendor import Vendor  # noqa: F401
from app.models.client import Client  # noqa: F401
from app.models.job_requirement import JobRequirement  # noqa: F401
from app.models.submission import Submission  # noqa: F401
from app.models.interview import Interview  # noqa: F401
from app.models.project import Project  # noqa: F401
from app.models.timesheet import Timesheet  # noqa: F401
from app.models.invoice import Invoice  # noqa: F401
from app.models.immigration_case import ImmigrationCase  # noqa: F401
from app.models.note import Note  # noqa: F401
from app.models.audit_log import AuditLog, Activity  # noqa: F401
