"""Note Service — free-text notes attached to any team-owned entity."""

from uuid import UUID

from app.core.errors import RequestValidationFailed
from app.models.candidate import Candidate
from app.models.client import Client
from app.models.immigration_case import ImmigrationCase
from app.models.interview import Interview
from app.models.invoice import Invoice
from app.models.job_requirement import JobRequirement
from app.models.note import Note
from app.models.project import Project
from app.models.submission import Submission
from app.models.timesheet import Timesheet
from app.models.vendor import Vendor
from app.services.tenant_records import TenantRecordService

NOTABLE_ENTITIES = {
    "candidate": Candidate,
    "vendor": Vendor,
    "client": Client,
    "job_requirement": JobRequirement,
    "submission": Submission,
    "interview": Interview,
    "project": Project,
    "timesheet": Timesheet,
    "invoice": Invoice,
    "immigration_case": ImmigrationCase,
}


class NoteService(TenantRecordService):
    model = Note
    entity_name = "note"
    search_fields = ("content",)
    filter_fields = ("entity_type", "entity_id")

    async def validate_references(self, values: dict, team_id: UUID) -> None:
        entity_type = values.get("entity_type")
        if entity_type is None:
            return
        target_model = NOTABLE_ENTITIES.get(entity_type)
        if target_model is None:
            raise RequestValidationFailed(
                f"Notes cannot be attached to '{entity_type}'", "entity_type",
            )
        target = await self.db.get(target_model, values.get("entity_id"))
        if target is None or target.team_id != team_id:
            raise RequestValidationFailed(
                f"{entity_type} not found in this team", "entity_id",
            )
