"""Engagement Services — projects, timesheets, invoices and immigration cases.

Invariants:
    - Parent references (client, candidate, project) resolve inside the caller's team
    - Only submitted timesheets can be approved or rejected
    - Approved or rejected timesheets are locked against edits (400 TIMESHEET_LOCKED)
    - Invoice numbers unique per team; violation surfaces as 409 from the DB constraint
"""

import logging
from uuid import UUID

from app.core.domain_types import AuditAction, TimesheetStatus
from app.core.errors import BusinessRuleError
from app.db.base import utcnow
from app.models.candidate import Candidate
from app.models.client import Client
from app.models.immigration_case import ImmigrationCase
from app.models.invoice import Invoice
from app.models.project import Project
from app.models.timesheet import Timesheet
from app.services.audit import create_audit_log
from app.services.tenant_records import TenantRecordService

logger = logging.getLogger(__name__)

_REVIEWED = (TimesheetStatus.APPROVED.value, TimesheetStatus.REJECTED.value)


class ProjectService(TenantRecordService):
    model = Project
    entity_name = "project"
    search_fields = ("name",)
    filter_fields = ("status", "client_id", "candidate_id")
    references = {
        "client_id": (Client, "Client"),
        "candidate_id": (Candidate, "Candidate"),
    }


class TimesheetService(TenantRecordService):
    model = Timesheet
    entity_name = "timesheet"
    filter_fields = ("status", "project_id", "candidate_id")
    references = {
        "project_id": (Project, "Project"),
        "candidate_id": (Candidate, "Candidate"),
    }

    async def update(self, record_id: UUID, changes: dict) -> Timesheet:
        record = await self.get(record_id)
        if record.status in _REVIEWED:
            raise BusinessRuleError(
                f"Timesheet is {record.status} and can no longer be edited",
                "TIMESHEET_LOCKED",
            )
        return await super().update(record_id, changes)

    async def review(self, record_id: UUID, approve: bool) -> Timesheet:
        record = await self.get(record_id)
        if record.status != TimesheetStatus.SUBMITTED.value:
            raise BusinessRuleError(
                f"Only submitted timesheets can be reviewed (status: {record.status})",
                "TIMESHEET_NOT_SUBMITTED",
            )
        old = self.snapshot(record)
        if approve:
            record.status = TimesheetStatus.APPROVED.value
            record.approved_by = self.context.user_id
            record.approved_at = utcnow()
        else:
            record.status = TimesheetStatus.REJECTED.value
        create_audit_log(
            self.db, self.entity_name, record.id, AuditAction.UPDATE,
            old_value=old, new_value=self.snapshot(record),
            user_id=self.context.user_id, team_id=record.team_id,
        )
        await self._commit(record)
        logger.info(
            f"Timesheet {record.id} {record.status}",
            extra={"entity": self.entity_name, "user_id": self.context.user_id},
        )
        return record


class InvoiceService(TenantRecordService):
    model = Invoice
    entity_name = "invoice"
    search_fields = ("number",)
    filter_fields = ("status", "client_id")
    references = {"client_id": (Client, "Client")}


class ImmigrationService(TenantRecordService):
    model = ImmigrationCase
    entity_name = "immigration_case"
    search_fields = ("visa_type",)
    filter_fields = ("status", "candidate_id", "visa_type")
    references = {"candidate_id": (Candidate, "Candidate")}
