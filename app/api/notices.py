"""Notice delivery scheduling API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.db.engine import get_db
from app.dependencies import ensure_open, get_job_or_404
from app.models import OutageJob
from app.schemas import NoticeSchedule

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["notices"])


@router.post("/{job_id}/notice-schedule")
async def schedule_notice(
    body: dict,
    job: OutageJob = Depends(get_job_or_404),
    db: AsyncSession = Depends(get_db),
):
    try:
        req = NoticeSchedule.model_validate(body)
    except ValidationError as e:
        failed = {err["loc"][0] for err in e.errors() if err["loc"]}
        if failed == {"mymaps_url"} and str(body.get("mymaps_url") or "").strip():
            raise HTTPException(400, "invalid mymaps_url")
        raise HTTPException(400, "missing required fields")

    ensure_open(job)
    if job.social_status != "POSTED":
        raise HTTPException(400, "ต้องโพสต์ Social ก่อนตั้งเวลาแจ้งหนังสือ")

    job = await crud.schedule_notice(db, job, req.notice_date, req.notice_by, req.mymaps_url)
    logger.info(f"Notice scheduled for job {job.id} on {job.notice_date}")
    return {"ok": True, "notice_scheduled_at": job.notice_scheduled_at.isoformat()}
