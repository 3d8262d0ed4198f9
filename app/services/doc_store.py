"""Generated document storage: one DOCX per job under the configured output dir."""

from __future__ import annotations

import asyncio
from pathlib import Path

from app.config import get_settings


def _base(output_dir: str | None = None) -> Path:
    return Path(output_dir or get_settings().document.output_dir)


def get_doc_path(job_id: str, output_dir: str | None = None) -> Path:
    return _base(output_dir) / f"{job_id}.docx"


def _save_sync(data: bytes, job_id: str, output_dir: str | None) -> str:
    path = get_doc_path(job_id, output_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    # Write aside then swap, so a failed write never clobbers the previous document
    tmp = path.with_suffix(".docx.tmp")
    tmp.write_bytes(data)
    tmp.replace(path)
    return str(path)


async def save_doc(data: bytes, job_id: str, output_dir: str | None = None) -> str:
    """Write the DOCX, replacing any earlier one for the job. Returns the path."""
    return await asyncio.to_thread(_save_sync, data, job_id, output_dir)


async def read_doc(job_id: str, output_dir: str | None = None) -> bytes:
    path = get_doc_path(job_id, output_dir)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    return await asyncio.to_thread(path.read_bytes)
