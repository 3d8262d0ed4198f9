"""Dashboard API: job table with workflow step and summary counters."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.db import crud
from app.db.engine import get_db
from app.dependencies import get_settings_dep
from app.schemas import JobRead
from app.services.job_status import get_dashboard_step, get_next_action

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

VALID_FILTERS = ("all", "open", "closed")


def _limit_value(raw: str | None, default: int, maximum: int) -> int:
    try:
        parsed = int(raw) if raw else 0
    except ValueError:
        parsed = 0
    if parsed <= 0:
        return default
    return min(parsed, maximum)


@router.get("/jobs")
async def dashboard_jobs(
    filter: str = Query(default="all"),
    limit: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    if filter not in VALID_FILTERS:
        filter = "all"
    n = _limit_value(limit, settings.dashboard.default_limit, settings.dashboard.max_limit)
    jobs = await crud.list_dashboard_jobs(db, filter=filter, limit=n)

    items = []
    for job in jobs:
        data = JobRead.model_validate(job).model_dump(mode="json")
        data["step"] = get_dashboard_step(job)
        data["next_action"] = get_next_action(job)
        items.append(data)
    return {"ok": True, "jobs": items}


@router.get("/summary")
async def dashboard_summary(db: AsyncSession = Depends(get_db)):
    counts = await crud.dashboard_summary(db)
    logger.debug(f"Dashboard summary counts: {counts}")
    return {"ok": True, **counts}
