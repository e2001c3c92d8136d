"""Boundary Protocols — structural contracts between core and shell.

Invariants:
    - Core NEVER imports from models/ — ORM rows are passed in as these Protocols
    - Attributes only; core functions never trigger IO through them

Design Decisions:
    - Protocol over ABC: ORM models satisfy them structurally, tests can pass
      SimpleNamespace or dataclasses (ADR: ExMA anti-pattern)
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID


class UserLike(Protocol):
    """What core needs from a users row."""
    id: str
    team_id: UUID | None
    role_id: UUID | None
    is_master_admin: bool


class TeamLike(Protocol):
    id: UUID
    is_active: bool


class AccessRequestLike(Protocol):
    """What core needs from a team_access_requests row."""
    id: UUID
    status: str
    reviewed_by: str | None
    reviewed_at: datetime | None
