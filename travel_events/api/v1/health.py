from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from travel_events.config import settings
from travel_events.db.base import engine

router = APIRouter(tags=["Health"])
log = logging.getLogger(__name__)


@router.get("/healthz", status_code=status.HTTP_200_OK)
async def healthz() -> dict[str, str]:
    out: dict[str, str] = {"status": "ok", "environment": settings.ENVIRONMENT}

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        out["db"] = "ok"
    except (SQLAlchemyError, OSError) as exc:
        log.exception("DB health check failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="db error") from exc

    return out
