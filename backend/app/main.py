"""ATS API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map AtsError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - Permission catalog seeded on startup (idempotent) unless disabled

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
      (ADR: FastAPI 0.128)
    - Error handlers live in api/error_handlers.py (ADR: ExMA import fan-out < 10)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app.infrastructure.database as database
from app.api.error_handlers import register_error_handlers
from app.api.routes import (
    access_requests, audit_logs, candidates, clients, engagements, health,
    notes, onboarding, pipeline, roles, teams, vendors,
)
from app.config import get_settings
from app.infrastructure.observability import setup_logging
from app.services.provisioning import ensure_permission_catalog

logger = logging.getLogger(__name__)


async def _seed_permissions() -> None:
    async with database.db_manager.session() as db:
        await ensure_permission_catalog(db)
        await db.commit()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.seed_permissions_on_startup:
        await _seed_permissions()
    logger.info("ATS API started")
    yield
    await database.db_manager.engine.dispose()
    logger.info("ATS API shutting down")


app = FastAPI(title="ATS API", version="1.0.0", lifespan=lifespan)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(onboarding.router)
app.include_router(teams.router)
app.include_router(access_requests.router)
app.include_router(roles.router)
app.include_router(candidates.router)
app.include_router(vendors.router)
app.include_router(clients.router)
app.include_router(pipeline.requirements_router)
app.include_router(pipeline.submissions_router)
app.include_router(pipeline.interviews_router)
app.include_router(engagements.projects_router)
app.include_router(engagements.timesheets_router)
app.include_router(engagements.invoices_router)
app.include_router(engagements.immigration_router)
app.include_router(notes.router)
app.include_router(audit_logs.router)

register_error_handlers(app)
