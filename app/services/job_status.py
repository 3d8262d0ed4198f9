"""Workflow status derivations for outage jobs.

Each job tracks five status dimensions independently (nakhon, doc, social,
notice, closed). Different screens summarise them with different priority
orders, so each derivation below is kept separate:

* ``get_dashboard_step``     coarse lifecycle step for the dashboard table
* ``get_next_action``        dashboard "next action" text
* ``get_next_button_action`` primary action button on the jobs list
* ``get_calendar_status``    short status chip on the calendar view

All of them accept a mapping or an ORM row, never raise, and treat missing or
unknown values as the documented defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

DashboardStep = Literal["DRAFT", "DOC_READY", "SOCIAL_POSTED", "NOTICE_SCHEDULED", "CLOSED"]
ButtonAction = Literal[
    "notify_nakhon", "create_doc", "wait_approval", "notify_outage_letter", "close_job",
]
CalendarStatus = Literal["Done", "Notice", "Posted", "Doc", "Draft"]

DASHBOARD_STEPS: tuple[DashboardStep, ...] = (
    "DRAFT", "DOC_READY", "SOCIAL_POSTED", "NOTICE_SCHEDULED", "CLOSED",
)

# Enumerations and their defaults
NAKHON_STATUSES = ("PENDING", "NOTIFIED", "NOT_REQUIRED")
DOC_STATUSES = ("PENDING", "GENERATING", "GENERATED", "ERROR")
SOCIAL_STATUSES = ("DRAFT", "PENDING_APPROVAL", "POSTED")
NOTICE_STATUSES = ("NONE", "SCHEDULED", "SENT")

_DEFAULTS = {
    "nakhon_status": "PENDING",
    "doc_status": "PENDING",
    "social_status": "DRAFT",
    "notice_status": "NONE",
}
_ALLOWED = {
    "nakhon_status": NAKHON_STATUSES,
    "doc_status": DOC_STATUSES,
    "social_status": SOCIAL_STATUSES,
    "notice_status": NOTICE_STATUSES,
}

NEXT_ACTION_LABELS = {
    "create_doc": "สร้างเอกสาร",
    "post_social": "โพสต์ลง Social",
    "schedule_notice": "ตั้งเวลาแจ้งหนังสือ",
    "notify_nakhon": "แจ้งศูนย์นคร",
    "close_job": "ปิดงาน",
    "complete": "ครบแล้ว",
}

NEXT_BUTTON_LABELS: dict[str, str] = {
    "notify_nakhon": "แจ้งศูนย์นคร",
    "create_doc": "สร้างเอกสารดับไฟ",
    "wait_approval": "รออนุมัติ",
    "notify_outage_letter": "แจ้งหนังสือดับไฟ",
    "close_job": "ปิดงาน",
}


@dataclass(frozen=True)
class JobStatusFields:
    nakhon_status: str
    nakhon_notified_date: Any
    doc_status: str
    doc_generated_at: Any
    social_status: str
    notice_status: str
    notice_date: Any
    is_closed: bool


def _get(job: Any, name: str) -> Any:
    if job is None:
        return None
    if isinstance(job, Mapping):
        return job.get(name)
    return getattr(job, name, None)


def _status(job: Any, name: str) -> str:
    value = _get(job, name)
    if isinstance(value, str) and value in _ALLOWED[name]:
        return value
    return _DEFAULTS[name]


def normalize_status_fields(job: Any) -> JobStatusFields:
    """Apply defaults to the status subset of a job (mapping or ORM object)."""
    return JobStatusFields(
        nakhon_status=_status(job, "nakhon_status"),
        nakhon_notified_date=_get(job, "nakhon_notified_date"),
        doc_status=_status(job, "doc_status"),
        doc_generated_at=_get(job, "doc_generated_at"),
        social_status=_status(job, "social_status"),
        notice_status=_status(job, "notice_status"),
        notice_date=_get(job, "notice_date"),
        is_closed=bool(_get(job, "is_closed")),
    )


def get_dashboard_step(job: Any) -> DashboardStep:
    s = normalize_status_fields(job)
    if s.is_closed:
        return "CLOSED"
    if s.doc_status != "GENERATED":
        return "DRAFT"
    if s.social_status != "POSTED":
        return "DOC_READY"
    if s.notice_status not in ("SCHEDULED", "SENT"):
        return "SOCIAL_POSTED"
    return "NOTICE_SCHEDULED"


def get_next_action(job: Any) -> str:
    # Nakhon is checked after the notice here, and closing is not short-circuited.
    s = normalize_status_fields(job)
    if s.doc_status != "GENERATED":
        return NEXT_ACTION_LABELS["create_doc"]
    if s.social_status != "POSTED":
        return NEXT_ACTION_LABELS["post_social"]
    if s.notice_status != "SCHEDULED" and not s.notice_date:
        return NEXT_ACTION_LABELS["schedule_notice"]
    if s.nakhon_status != "NOT_REQUIRED" and not s.nakhon_notified_date:
        return NEXT_ACTION_LABELS["notify_nakhon"]
    if not s.is_closed:
        return NEXT_ACTION_LABELS["close_job"]
    return NEXT_ACTION_LABELS["complete"]


def get_next_button_action(job: Any) -> ButtonAction:
    s = normalize_status_fields(job)
    if s.nakhon_status == "PENDING":
        return "notify_nakhon"
    if not (s.doc_status == "GENERATED" or s.doc_generated_at):
        return "create_doc"
    if s.social_status == "PENDING_APPROVAL":
        return "wait_approval"
    if s.social_status == "POSTED" and s.notice_status != "SCHEDULED":
        return "notify_outage_letter"
    return "close_job"


def get_calendar_status(job: Any) -> CalendarStatus:
    s = normalize_status_fields(job)
    if s.is_closed:
        return "Done"
    if s.notice_status == "SCHEDULED":
        return "Notice"
    if s.social_status == "POSTED":
        return "Posted"
    if s.doc_status in ("GENERATED", "GENERATING"):
        return "Doc"
    return "Draft"
