"""Duplicate Finder — exact-then-fuzzy lookup of candidates, vendors and clients in one team.

Invariants:
    - Exact match on any provided unique-ish field wins over fuzzy matching
    - Fuzzy match only on names, scored by core.deduplication (distance < threshold)
    - Lookups never cross team boundaries (team_id None = master admin, all teams)
    - Empty inputs never match (no "email = ''" queries)

Design Decisions:
    - Fuzzy scan capped at scan_limit most recent rows: bounded memory per request
      (ADR: dedup is advisory, not exhaustive)
"""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import inspect, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deduplication import FUZZY_THRESHOLD, fuzzy_search
from app.core.domain_types import MatchType
from app.models.candidate import Candidate
from app.models.client import Client
from app.models.vendor import Vendor

logger = logging.getLogger(__name__)


@dataclass
class DuplicateResult:
    match_type: MatchType = MatchType.NONE
    matches: list = field(default_factory=list)
    confidence: float | None = None

    @property
    def found(self) -> bool:
        return self.match_type != MatchType.NONE


def _as_dict(row) -> dict:
    return {a.key: getattr(row, a.key) for a in inspect(row).mapper.column_attrs}


class DuplicateFinder:
    def __init__(
        self,
        db: AsyncSession,
        team_id: UUID | None,
        threshold: float = FUZZY_THRESHOLD,
        scan_limit: int = 1000,
    ):
        self.db = db
        self.team_id = team_id
        self.threshold = threshold
        self.scan_limit = scan_limit

    def _scoped(self, model):
        query = select(model)
        if self.team_id is not None:
            query = query.where(model.team_id == self.team_id)
        return query

    async def _exact(self, model, criteria: dict) -> list:
        conditions = [
            getattr(model, col) == value
            for col, value in criteria.items()
            if value not in (None, "")
        ]
        if not conditions:
            return []
        result = await self.db.execute(self._scoped(model).where(or_(*conditions)))
        return list(result.scalars().all())

    async def _fuzzy(self, model, query: str, keys: tuple[str, ...]) -> DuplicateResult:
        if not query or not query.strip():
            return DuplicateResult()
        result = await self.db.execute(
            self._scoped(model).order_by(model.created_at.desc()).limit(self.scan_limit)
        )
        rows = list(result.scalars().all())
        by_id = {row.id: row for row in rows}
        hits = fuzzy_search([_as_dict(r) for r in rows], query, keys, self.threshold)
        if not hits:
            return DuplicateResult()
        return DuplicateResult(
            match_type=MatchType.FUZZY,
            matches=[by_id[record["id"]] for record, _ in hits],
            confidence=round(1 - hits[0][1], 4),
        )

    async def _find(self, model, criteria: dict, name_query: str | None, keys) -> DuplicateResult:
        exact = await self._exact(model, criteria)
        if exact:
            return DuplicateResult(match_type=MatchType.EXACT, matches=exact, confidence=1.0)
        result = await self._fuzzy(model, name_query or "", keys)
        if result.found:
            logger.info(
                f"Fuzzy duplicate for '{name_query}' (confidence {result.confidence})",
                extra={"entity": model.__tablename__, "team_id": self.team_id},
            )
        return result

    async def candidates(
        self,
        email: str | None = None,
        phone: str | None = None,
        passport_number: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> DuplicateResult:
        name = f"{first_name} {last_name}" if first_name and last_name else None
        return await self._find(
            Candidate,
            {"email": email, "phone": phone, "passport_number": passport_number},
            name,
            ("first_name", "last_name"),
        )

    async def vendors(
        self, name: str | None = None, email: str | None = None, phone: str | None = None,
    ) -> DuplicateResult:
        return await self._find(Vendor, {"email": email, "phone": phone}, name, ("name",))

    async def clients(
        self,
        name: str | None = None,
        contact_email: str | None = None,
        contact_phone: str | None = None,
    ) -> DuplicateResult:
        return await self._find(
            Client,
            {"contact_email": contact_email, "contact_phone": contact_phone},
            name,
            ("name",),
        )
