"""FastAPI dependency providers for settings, DB sessions and job lookup."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.db import crud
from app.db.engine import get_db
from app.models import OutageJob

JOB_NOT_FOUND = "ไม่พบข้อมูลงานที่ต้องการ"


@lru_cache
def get_settings_dep() -> Settings:
    return get_settings()


async def get_job_or_404(
    job_id: str,
    db: AsyncSession = Depends(get_db),
) -> OutageJob:
    job = await crud.get_job(db, job_id)
    if not job:
        raise HTTPException(404, JOB_NOT_FOUND)
    return job


def ensure_open(job: OutageJob) -> None:
    """Closed jobs accept no further workflow actions."""
    if job.is_closed:
        raise HTTPException(409, "Job is closed")
