"""Pydantic request/response schemas."""

from app.schemas.job import (
    JobCreate, JobUpdate, JobRead,
    NakhonNotify, DocPayload, DocCreateRequest, NoticeSchedule,
)

__all__ = [
    "JobCreate", "JobUpdate", "JobRead",
    "NakhonNotify", "DocPayload", "DocCreateRequest", "NoticeSchedule",
]
