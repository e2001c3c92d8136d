"""Candidate Service — CRUD with deduplication, merge, bench tracking and skill search.

Invariants:
    - Create is blocked by DuplicateRecordError (409) unless skip_duplicate_check
    - Merge never blanks an existing field (core.deduplication.merge_candidate_data)
    - At most one open bench_history row per candidate (bench_removed_date IS NULL)
    - Status and bench_status changes always produce an activity row
    - bench_status is read-only for update(); only the bench operations move it

Design Decisions:
    - Bench transitions as explicit operations, not plain field edits: they own
      the bench_history bookkeeping
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import String, cast, func, or_, select

from app.core.deduplication import merge_candidate_data
from app.core.domain_types import AuditAction, BenchStatus
from app.core.errors import BusinessRuleError, DuplicateRecordError
from app.core.team_context import write_team_id
from app.models.candidate import BenchHistory, Candidate
from app.services.audit import create_activity, create_audit_log
from app.services.duplicate_finder import DuplicateFinder
from app.services.tenant_records import TenantRecordService

logger = logging.getLogger(__name__)


def candidate_summary(candidate: Candidate) -> dict:
    return {
        "id": str(candidate.id),
        "first_name": candidate.first_name,
        "last_name": candidate.last_name,
        "email": candidate.email,
        "phone": candidate.phone,
        "status": candidate.status,
    }


class CandidateService(TenantRecordService):
    model = Candidate
    entity_name = "candidate"
    search_fields = ("first_name", "last_name", "email")
    filter_fields = ("status", "bench_status")

    def __init__(self, db, context, fuzzy_threshold: float = 0.4, scan_limit: int = 1000):
        super().__init__(db, context)
        self.fuzzy_threshold = fuzzy_threshold
        self.scan_limit = scan_limit

    async def create(self, data: dict, skip_duplicate_check: bool = False) -> Candidate:
        if not skip_duplicate_check:
            finder = DuplicateFinder(
                self.db, write_team_id(self.context),
                self.fuzzy_threshold, self.scan_limit,
            )
            result = await finder.candidates(
                email=data.get("email"),
                phone=data.get("phone"),
                passport_number=data.get("passport_number"),
                first_name=data.get("first_name"),
                last_name=data.get("last_name"),
            )
            if result.found:
                raise DuplicateRecordError(
                    self.entity_name,
                    [candidate_summary(m) for m in result.matches],
                    result.match_type.value,
                    result.confidence,
                )
        return await super().create(data)

    async def after_create(self, record: Candidate) -> None:
        create_activity(
            self.db, self.entity_name, record.id, "created", "Candidate Created",
            f"{record.first_name} {record.last_name} added",
            user_id=self.context.user_id, team_id=record.team_id,
        )

    async def update(self, record_id: UUID, changes: dict) -> Candidate:
        if any(field in changes for field in ("bench_status", "bench_added_date")):
            raise BusinessRuleError(
                "Bench status changes go through add_to_bench/remove_from_bench",
                "BENCH_STATUS_READ_ONLY",
            )
        return await super().update(record_id, changes)

    async def after_update(self, record: Candidate, old: dict) -> None:
        if old.get("status") != record.status:
            create_activity(
                self.db, self.entity_name, record.id, "status_change", "Status Updated",
                f"Status changed from {old.get('status')} to {record.status}",
                metadata={"field": "status", "from": old.get("status"), "to": record.status},
                user_id=self.context.user_id, team_id=record.team_id,
            )

    async def merge(self, record_id: UUID, data: dict) -> Candidate:
        """Fold new data into an existing candidate instead of creating a duplicate."""
        record = await self.get(record_id)
        old = self.snapshot(record)
        merged = merge_candidate_data(old, data)
        changes = {
            k: v for k, v in merged.items()
            if k in data and old.get(k) != v
        }
        updated = await self.update(record_id, changes) if changes else record
        create_activity(
            self.db, self.entity_name, record_id, "merged", "Candidate Merged",
            f"Merged fields: {', '.join(sorted(changes)) or 'none'}",
            user_id=self.context.user_id, team_id=record.team_id,
        )
        await self._commit(updated)
        return updated

    async def add_to_bench(self, record_id: UUID, notes: str | None = None) -> Candidate:
        record = await self.get(record_id)
        if record.bench_status == BenchStatus.ON_BENCH.value:
            raise BusinessRuleError("Candidate is already on the bench", "ALREADY_ON_BENCH")
        old = self.snapshot(record)
        today = date.today()
        record.bench_status = BenchStatus.ON_BENCH.value
        record.bench_added_date = today
        self.db.add(BenchHistory(
            candidate_id=record.id, team_id=record.team_id,
            bench_added_date=today, notes=notes, created_by=self.context.user_id,
        ))
        self._audit_bench(record, old)
        create_activity(
            self.db, self.entity_name, record.id, "bench", "Added to Bench",
            notes or "Candidate added to bench",
            user_id=self.context.user_id, team_id=record.team_id,
        )
        await self._commit(record)
        return record

    async def remove_from_bench(
        self,
        record_id: UUID,
        reason: str | None = None,
        new_status: BenchStatus = BenchStatus.PLACED,
    ) -> Candidate:
        record = await self.get(record_id)
        if record.bench_status != BenchStatus.ON_BENCH.value:
            raise BusinessRuleError("Candidate is not on the bench", "NOT_ON_BENCH")
        old = self.snapshot(record)
        record.bench_status = new_status.value

        result = await self.db.execute(
            select(BenchHistory)
            .where(
                BenchHistory.candidate_id == record.id,
                BenchHistory.bench_removed_date.is_(None),
            )
            .order_by(BenchHistory.bench_added_date.desc())
        )
        for stint in result.scalars().all():
            stint.bench_removed_date = date.today()
            stint.reason_bench_out = reason

        self._audit_bench(record, old)
        create_activity(
            self.db, self.entity_name, record.id, "bench", "Removed from Bench",
            reason or "Candidate removed from bench",
            user_id=self.context.user_id, team_id=record.team_id,
        )
        await self._commit(record)
        return record

    async def bench_history(self, record_id: UUID) -> list[BenchHistory]:
        record = await self.get(record_id)
        result = await self.db.execute(
            select(BenchHistory)
            .where(BenchHistory.candidate_id == record.id)
            .order_by(BenchHistory.bench_added_date.desc())
        )
        return list(result.scalars().all())

    async def search_by_skills(self, skills: list[str], limit: int = 50) -> list[Candidate]:
        terms = [s.strip().lower() for s in skills if s and s.strip()]
        if not terms:
            return []
        haystack = func.lower(cast(Candidate.skills, String))
        query = self.base_query().where(
            or_(*(haystack.like(f"%{t}%") for t in terms))
        ).order_by(Candidate.created_at.desc()).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    def _audit_bench(self, record: Candidate, old: dict) -> None:
        create_audit_log(
            self.db, self.entity_name, record.id, AuditAction.UPDATE,
            old_value=old, new_value=self.snapshot(record),
            user_id=self.context.user_id, team_id=record.team_id,
        )
