from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from travel_events.api.errors import add_error_handlers
from travel_events.api.v1.events import router as events_router
from travel_events.api.v1.health import router as health_router
from travel_events.config import settings
from travel_events.db.base import create_db_and_tables

logging.basicConfig(level=settings.LOG_LEVEL)
log = logging.getLogger(__name__)

description = """
Browse events by time-relative filter, create events with an optional QR code
image, look them up by id and accept or decline them.
"""
tags_metadata = [
    {"name": "Events", "description": "Event lifecycle: list, create, get, accept/decline."},
    {"name": "Health", "description": "Liveness and database connectivity."},
]

app = FastAPI(
    title="Travel Events API",
    description=description,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
add_error_handlers(app)

app.include_router(events_router)
app.include_router(health_router)

# Stored QR codes are publicly readable under their generated name.
app.mount(
    settings.QR_CODE_URL_PREFIX,
    StaticFiles(directory=settings.QR_CODE_DIR, check_dir=False),
    name="qr-codes",
)

log.info("FastAPI application configured. Environment: %s", settings.ENVIRONMENT)


@app.on_event("startup")
async def startup_event() -> None:
    if settings.ATTACHMENT_STORE == "local":
        Path(settings.QR_CODE_DIR).mkdir(parents=True, exist_ok=True)
    if settings.ENVIRONMENT in ("dev", "test"):
        await create_db_and_tables()
    log.info("FastAPI application startup complete.")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    log.info("FastAPI application shutdown.")
