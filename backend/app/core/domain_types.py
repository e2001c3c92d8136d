"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TeamId, RoleId wrap UUIDs; UserId wraps the auth provider's text id
    - PermissionKey is always "<module>.<action>" (e.g. "candidate.create")
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

TeamId = NewType("TeamId", UUID)
RoleId = NewType("RoleId", UUID)
UserId = NewType("UserId", str)            # auth provider id (text)
PermissionKey = NewType("PermissionKey", str)


# ─── Enums ───────────────────────────────────────────────────────

class AccessRequestStatus(str, Enum):
    """Lifecycle of a request to join a team."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CandidateStatus(str, Enum):
    NEW = "new"
    SCREENING = "screening"
    INTERVIEWING = "interviewing"
    OFFERED = "offered"
    HIRED = "hired"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class BenchStatus(str, Enum):
    ON_BENCH = "on_bench"
    AVAILABLE = "available"
    PLACED = "placed"


class RequirementStatus(str, Enum):
    OPEN = "open"
    ON_HOLD = "on_hold"
    CLOSED = "closed"
    FILLED = "filled"


class InterviewStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class TimesheetStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class AuditAction(str, Enum):
    """Mutations recorded in audit_log."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class MatchType(str, Enum):
    """Outcome of a duplicate lookup."""
    EXACT = "exact"
    FUZZY = "fuzzy"
    NONE = "none"
