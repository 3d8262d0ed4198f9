"""Outage job model: one scheduled power cut tracked through the notice workflow."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ULIDMixin

# Status columns are nullable: rows written before a workflow step existed keep
# NULL there, and every reader treats NULL as the column default.


class OutageJob(Base, ULIDMixin):
    __tablename__ = "outage_jobs"

    outage_date: Mapped[date] = mapped_column(Date, index=True)
    equipment_code: Mapped[str] = mapped_column(String(100))
    note: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    # Regional center (nakhon) notification
    nakhon_status: Mapped[str | None] = mapped_column(String(20), nullable=True, default="PENDING")  # PENDING | NOTIFIED | NOT_REQUIRED
    nakhon_notified_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)
    nakhon_memo_no: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)

    # Outage notice document
    doc_status: Mapped[str | None] = mapped_column(String(20), nullable=True, default="PENDING")  # PENDING | GENERATING | GENERATED | ERROR
    doc_issue_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)
    doc_purpose: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    doc_area_title: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    doc_time_start: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)
    doc_time_end: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)
    doc_area_detail: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    map_link: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    doc_generated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)
    doc_url: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    # Social announcement
    social_status: Mapped[str | None] = mapped_column(String(20), nullable=True, default="DRAFT")  # DRAFT | PENDING_APPROVAL | POSTED
    social_post_text: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    social_posted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)

    # Physical notice delivery
    notice_status: Mapped[str | None] = mapped_column(String(20), nullable=True, default="NONE")  # NONE | SCHEDULED (legacy SENT)
    notice_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)
    notice_by: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    mymaps_url: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    notice_scheduled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)

    is_closed: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)
