"""Note Routes — notes on any team-owned entity; any team member may read and write."""

from app.api.routes.crud_router import build_crud_router
from app.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from app.services.notes import NoteService

router = build_crud_router(
    prefix="/api/v1/notes",
    tags=["notes"],
    service_cls=NoteService,
    permission_prefix=None,
    create_schema=NoteCreate,
    update_schema=NoteUpdate,
    response_schema=NoteResponse,
)
