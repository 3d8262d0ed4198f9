"""Outage job API: CRUD, calendar, nakhon notification, close."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.db.engine import get_db
from app.dependencies import ensure_open, get_job_or_404
from app.models import OutageJob
from app.schemas import JobCreate, JobRead, JobUpdate, NakhonNotify
from app.services.job_status import NEXT_BUTTON_LABELS, get_calendar_status, get_next_button_action
from app.services.urgency import get_job_urgency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])

_COLOR_FILTERS = {"all", "green", "yellow", "red"}


def job_to_dict(job: OutageJob) -> dict:
    """Serialize a job with its urgency and primary action button."""
    data = JobRead.model_validate(job).model_dump(mode="json")
    urgency = get_job_urgency(job.outage_date, job.nakhon_status)
    action = get_next_button_action(job)
    data["urgency"] = urgency.as_dict()
    data["next_button"] = {"action": action, "label": NEXT_BUTTON_LABELS[action]}
    return data


@router.get("")
async def list_jobs(
    tab: str = Query(default="active"),
    color: str = Query(default="all"),
    q: str = Query(default=""),
    db: AsyncSession = Depends(get_db),
):
    if color not in _COLOR_FILTERS:
        color = "all"
    jobs = await crud.list_jobs(db, closed=(tab == "closed"), query=q)
    items = [job_to_dict(j) for j in jobs]
    if color != "all":
        items = [i for i in items if i["urgency"]["color"] == color.upper()]
    return items


@router.post("", status_code=201)
async def create_job(body: JobCreate, db: AsyncSession = Depends(get_db)):
    job = await crud.create_job(db, body.outage_date, body.equipment_code, body.note)
    logger.info(f"Created job {job.id} ({job.equipment_code} on {job.outage_date})")
    return job_to_dict(job)


@router.get("/calendar")
async def jobs_by_date(
    date_str: str = Query(default="", alias="date"),
    db: AsyncSession = Depends(get_db),
):
    """Jobs on one outage date, for the calendar view."""
    try:
        day = date.fromisoformat(date_str)
    except ValueError:
        raise HTTPException(400, "Invalid or missing date")
    # fromisoformat also accepts compact forms like 20250305
    if len(date_str) != 10:
        raise HTTPException(400, "Invalid or missing date")

    jobs = await crud.list_jobs_by_date(db, day)
    return [
        {
            "id": j.id,
            "outage_date": j.outage_date.isoformat(),
            "time_start": j.doc_time_start,
            "time_end": j.doc_time_end,
            "area_title": j.doc_area_title,
            "status": get_calendar_status(j),
        }
        for j in jobs
    ]


@router.get("/{job_id}")
async def get_job(job: OutageJob = Depends(get_job_or_404)):
    return job_to_dict(job)


@router.put("/{job_id}")
async def update_job(
    body: JobUpdate,
    job: OutageJob = Depends(get_job_or_404),
    db: AsyncSession = Depends(get_db),
):
    ensure_open(job)
    job = await crud.update_job(db, job, **body.model_dump())
    return job_to_dict(job)


@router.delete("/{job_id}")
async def delete_job(
    job: OutageJob = Depends(get_job_or_404),
    db: AsyncSession = Depends(get_db),
):
    job_id = job.id
    await crud.delete_job(db, job)
    logger.info(f"Deleted job {job_id}")
    return {"ok": True, "jobId": job_id}


# ── Nakhon notification ──────────────────────────────────

@router.post("/{job_id}/nakhon")
async def notify_nakhon(
    body: NakhonNotify,
    job: OutageJob = Depends(get_job_or_404),
    db: AsyncSession = Depends(get_db),
):
    ensure_open(job)
    job = await crud.set_nakhon_notified(db, job, body.notified_date, body.memo_no)
    return job_to_dict(job)


@router.post("/{job_id}/nakhon/not-required")
async def nakhon_not_required(
    job: OutageJob = Depends(get_job_or_404),
    db: AsyncSession = Depends(get_db),
):
    ensure_open(job)
    job = await crud.set_nakhon_not_required(db, job)
    return job_to_dict(job)


# ── Close ────────────────────────────────────────────────

@router.post("/{job_id}/close")
async def close_job(
    job: OutageJob = Depends(get_job_or_404),
    db: AsyncSession = Depends(get_db),
):
    if job.is_closed:
        return {
            "ok": True,
            "jobId": job.id,
            "is_closed": True,
            "closed_at": job.closed_at.isoformat() if job.closed_at else None,
            "message": "already closed",
        }
    if job.notice_status != "SCHEDULED":
        raise HTTPException(400, "สถานะงานยังไม่พร้อมสำหรับการปิดงาน")

    job = await crud.close_job(db, job)
    logger.info(f"Closed job {job.id}")
    return {
        "ok": True,
        "jobId": job.id,
        "is_closed": job.is_closed,
        "closed_at": job.closed_at.isoformat(),
    }
