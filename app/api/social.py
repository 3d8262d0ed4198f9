"""Social announcement API: preview, approval request, post."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.db.engine import get_db
from app.dependencies import ensure_open, get_job_or_404
from app.models import OutageJob
from app.services.social_post import get_social_post_preview

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["social"])


def _social_fields(job: OutageJob) -> dict:
    return {
        "social_status": job.social_status,
        "social_post_text": job.social_post_text,
        "social_posted_at": job.social_posted_at.isoformat() if job.social_posted_at else None,
        "notice_status": job.notice_status,
        "notice_date": job.notice_date.isoformat() if job.notice_date else None,
        "notice_by": job.notice_by,
        "mymaps_url": job.mymaps_url,
        "notice_scheduled_at": job.notice_scheduled_at.isoformat() if job.notice_scheduled_at else None,
    }


@router.get("/{job_id}/social-post")
async def preview_social_post(job: OutageJob = Depends(get_job_or_404)):
    return {"ok": True, "preview_text": get_social_post_preview(job)}


@router.post("/{job_id}/social-pending")
async def request_social_approval(
    job: OutageJob = Depends(get_job_or_404),
    db: AsyncSession = Depends(get_db),
):
    ensure_open(job)
    job = await crud.mark_social_pending(db, job)
    return {"ok": True, "social_status": job.social_status}


@router.post("/{job_id}/social-post")
async def post_social(
    job: OutageJob = Depends(get_job_or_404),
    db: AsyncSession = Depends(get_db),
):
    preview_text = get_social_post_preview(job)

    # Re-posting returns the stored text untouched
    if job.social_status == "POSTED" and job.social_post_text:
        return {"ok": True, "preview_text": preview_text, "job": _social_fields(job)}

    ensure_open(job)
    if job.doc_status != "GENERATED":
        raise HTTPException(400, "ต้องสร้างเอกสารก่อนโพสต์")

    job = await crud.post_social(db, job, preview_text)
    logger.info(f"Social post recorded for job {job.id}")
    return {"ok": True, "preview_text": job.social_post_text, "job": _social_fields(job)}
