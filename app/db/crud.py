"""CRUD operations for outage jobs."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import OutageJob


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def _save(db: AsyncSession, job: OutageJob) -> OutageJob:
    await db.commit()
    await db.refresh(job)
    return job


# ── Jobs ─────────────────────────────────────────────────

async def create_job(
    db: AsyncSession, outage_date: date, equipment_code: str, note: str | None = None,
) -> OutageJob:
    job = OutageJob(outage_date=outage_date, equipment_code=equipment_code, note=note)
    db.add(job)
    return await _save(db, job)


async def get_job(db: AsyncSession, job_id: str) -> OutageJob | None:
    return await db.get(OutageJob, job_id)


async def list_jobs(
    db: AsyncSession, closed: bool | None = None, query: str = "",
) -> list[OutageJob]:
    """Jobs ordered by outage date (soonest first)."""
    stmt = select(OutageJob)
    if closed is True:
        stmt = stmt.where(OutageJob.is_closed == True)
    elif closed is False:
        stmt = stmt.where(or_(OutageJob.is_closed == False, OutageJob.is_closed.is_(None)))
    if query.strip():
        pattern = f"%{query.strip()}%"
        stmt = stmt.where(or_(
            OutageJob.equipment_code.ilike(pattern),
            OutageJob.note.ilike(pattern),
            OutageJob.doc_area_title.ilike(pattern),
        ))
    stmt = stmt.order_by(OutageJob.outage_date, OutageJob.created_at)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_jobs_by_date(db: AsyncSession, outage_date: date) -> list[OutageJob]:
    result = await db.execute(
        select(OutageJob)
        .where(OutageJob.outage_date == outage_date)
        .order_by(OutageJob.doc_time_start.asc().nulls_first(), OutageJob.created_at)
    )
    return list(result.scalars().all())


async def list_dashboard_jobs(db: AsyncSession, filter: str = "all", limit: int = 50) -> list[OutageJob]:
    """Most recent outage dates first; filter is all | open | closed."""
    stmt = select(OutageJob)
    if filter == "closed":
        stmt = stmt.where(OutageJob.is_closed == True)
    elif filter == "open":
        stmt = stmt.where(or_(OutageJob.is_closed == False, OutageJob.is_closed.is_(None)))
    stmt = stmt.order_by(OutageJob.outage_date.desc(), OutageJob.created_at.desc()).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_job(db: AsyncSession, job: OutageJob, **kwargs: Any) -> OutageJob:
    for k, v in kwargs.items():
        if v is not None:
            setattr(job, k, v)
    return await _save(db, job)


async def delete_job(db: AsyncSession, job: OutageJob) -> None:
    await db.delete(job)
    await db.commit()


# ── Workflow transitions ─────────────────────────────────

async def set_nakhon_notified(
    db: AsyncSession, job: OutageJob, notified_date: date, memo_no: str,
) -> OutageJob:
    job.nakhon_status = "NOTIFIED"
    job.nakhon_notified_date = notified_date
    job.nakhon_memo_no = memo_no
    return await _save(db, job)


async def set_nakhon_not_required(db: AsyncSession, job: OutageJob) -> OutageJob:
    job.nakhon_status = "NOT_REQUIRED"
    job.nakhon_notified_date = None
    job.nakhon_memo_no = None
    return await _save(db, job)


async def mark_doc_generating(db: AsyncSession, job: OutageJob, payload: dict[str, Any]) -> OutageJob:
    """Store the document fields and reset any previous result."""
    for k, v in payload.items():
        setattr(job, k, v)
    job.doc_status = "GENERATING"
    job.doc_url = None
    job.doc_generated_at = None
    return await _save(db, job)


async def mark_doc_generated(
    db: AsyncSession, job: OutageJob, doc_url: str, payload: dict[str, Any] | None = None,
) -> OutageJob:
    for k, v in (payload or {}).items():
        setattr(job, k, v)
    job.doc_status = "GENERATED"
    job.doc_url = doc_url
    job.doc_generated_at = _now()
    return await _save(db, job)


async def mark_doc_error(db: AsyncSession, job: OutageJob) -> OutageJob:
    job.doc_status = "ERROR"
    return await _save(db, job)


async def mark_social_pending(db: AsyncSession, job: OutageJob) -> OutageJob:
    if (job.social_status or "DRAFT") == "DRAFT":
        job.social_status = "PENDING_APPROVAL"
        return await _save(db, job)
    return job


async def post_social(db: AsyncSession, job: OutageJob, text: str) -> OutageJob:
    job.social_status = "POSTED"
    job.social_post_text = text
    job.social_posted_at = job.social_posted_at or _now()
    return await _save(db, job)


async def schedule_notice(
    db: AsyncSession, job: OutageJob, notice_date: date, notice_by: str, mymaps_url: str,
) -> OutageJob:
    job.notice_status = "SCHEDULED"
    job.notice_date = notice_date
    job.notice_by = notice_by
    job.mymaps_url = mymaps_url
    job.notice_scheduled_at = _now()
    return await _save(db, job)


async def close_job(db: AsyncSession, job: OutageJob) -> OutageJob:
    job.is_closed = True
    job.closed_at = _now()
    return await _save(db, job)


# ── Dashboard ────────────────────────────────────────────

async def _count(db: AsyncSession, *conditions) -> int:
    result = await db.execute(select(func.count()).select_from(OutageJob).where(*conditions))
    return int(result.scalar_one())


async def dashboard_summary(db: AsyncSession) -> dict[str, int]:
    active = await _count(db, or_(OutageJob.is_closed == False, OutageJob.is_closed.is_(None)))
    pending_approval = await _count(db, OutageJob.social_status == "PENDING_APPROVAL")
    scheduled = await _count(db, OutageJob.notice_status == "SCHEDULED")
    # Legacy rows: notice date set without a status
    scheduled += await _count(db, OutageJob.notice_status.is_(None), OutageJob.notice_date.is_not(None))
    return {
        "activeJobs": active,
        "pendingApproval": pending_approval,
        "scheduledNotices": scheduled,
    }
