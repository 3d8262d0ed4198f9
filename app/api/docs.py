"""Outage notice document API: generate and download the DOCX."""

from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.db import crud
from app.db.engine import get_db
from app.dependencies import JOB_NOT_FOUND, ensure_open, get_job_or_404, get_settings_dep
from app.models import OutageJob
from app.schemas import DocCreateRequest
from app.services.doc_store import read_doc, save_doc
from app.services.outage_docx import DOCX_MEDIA_TYPE, build_docx_filename, generate_outage_docx

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/docs", tags=["docs"])

GENERATION_FAILED = "ไม่สามารถสร้างเอกสารได้ กรุณาลองใหม่"


def _attachment_headers(job: OutageJob) -> dict[str, str]:
    filename = build_docx_filename(job)
    return {
        "Content-Disposition": (
            f"attachment; filename=\"outage-{job.id}.docx\"; "
            f"filename*=UTF-8''{quote(filename)}"
        )
    }


@router.post("/create")
async def create_doc(
    body: dict,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    try:
        req = DocCreateRequest.model_validate(body)
    except ValidationError:
        raise HTTPException(400, "กรุณากรอกข้อมูลให้ครบถ้วน")

    job = await crud.get_job(db, req.jobId)
    if not job:
        raise HTTPException(404, JOB_NOT_FOUND)
    ensure_open(job)

    payload = req.payload.model_dump()
    # A generated document stays GENERATED (with its url) until a replacement is saved
    regenerating = job.doc_status == "GENERATED"
    if not regenerating:
        job = await crud.mark_doc_generating(db, job, payload)

    try:
        docx = await generate_outage_docx(payload, job, settings.document)
        await save_doc(docx, job.id, settings.document.output_dir)
    except Exception:
        logger.exception(f"Doc generation failed for job {job.id}")
        if not regenerating:
            try:
                await crud.mark_doc_error(db, job)
            except Exception:
                logger.exception(f"Failed to set doc_status=ERROR for job {job.id}")
        raise HTTPException(500, GENERATION_FAILED)

    job = await crud.mark_doc_generated(
        db, job, doc_url=f"/api/docs/{job.id}/download", payload=payload,
    )
    logger.info(f"Generated document for job {job.id} ({len(docx)} bytes)")
    return Response(content=docx, media_type=DOCX_MEDIA_TYPE, headers=_attachment_headers(job))


@router.get("/{job_id}/download")
async def download_doc(
    job: OutageJob = Depends(get_job_or_404),
    settings: Settings = Depends(get_settings_dep),
):
    if job.doc_status != "GENERATED":
        raise HTTPException(404, "Document not generated")
    try:
        docx = await read_doc(job.id, settings.document.output_dir)
    except FileNotFoundError:
        raise HTTPException(404, "Document not found")
    return Response(content=docx, media_type=DOCX_MEDIA_TYPE, headers=_attachment_headers(job))
