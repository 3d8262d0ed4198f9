from __future__ import annotations
from datetime import date, datetime
from pydantic import BaseModel, field_validator


def _required_text(value: object) -> str:
    if value is None or not str(value).strip():
        raise ValueError("must not be blank")
    return str(value).strip()


_STATUS_DEFAULTS = {
    "nakhon_status": "PENDING",
    "doc_status": "PENDING",
    "social_status": "DRAFT",
    "notice_status": "NONE",
    "is_closed": False,
}


class JobCreate(BaseModel):
    outage_date: date
    equipment_code: str
    note: str | None = None

    @field_validator("equipment_code", mode="before")
    @classmethod
    def _equipment_required(cls, v):
        return _required_text(v)


class JobUpdate(BaseModel):
    outage_date: date | None = None
    equipment_code: str | None = None
    note: str | None = None


class JobRead(BaseModel):
    id: str
    outage_date: date
    equipment_code: str
    note: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    nakhon_status: str = "PENDING"
    nakhon_notified_date: date | None = None
    nakhon_memo_no: str | None = None

    doc_status: str = "PENDING"
    doc_issue_date: date | None = None
    doc_purpose: str | None = None
    doc_area_title: str | None = None
    doc_time_start: str | None = None
    doc_time_end: str | None = None
    doc_area_detail: str | None = None
    map_link: str | None = None
    doc_generated_at: datetime | None = None
    doc_url: str | None = None

    social_status: str = "DRAFT"
    social_post_text: str | None = None
    social_posted_at: datetime | None = None

    notice_status: str = "NONE"
    notice_date: date | None = None
    notice_by: str | None = None
    mymaps_url: str | None = None
    notice_scheduled_at: datetime | None = None

    is_closed: bool = False
    closed_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("nakhon_status", "doc_status", "social_status", "notice_status", "is_closed", mode="before")
    @classmethod
    def _legacy_null(cls, v, info):
        if v is None:
            return _STATUS_DEFAULTS[info.field_name]
        return v


class NakhonNotify(BaseModel):
    notified_date: date
    memo_no: str

    @field_validator("memo_no", mode="before")
    @classmethod
    def _memo_required(cls, v):
        return _required_text(v)


class DocPayload(BaseModel):
    """Document fields; all of them are required together."""

    doc_issue_date: date
    doc_purpose: str
    doc_area_title: str
    doc_time_start: str
    doc_time_end: str
    doc_area_detail: str
    map_link: str

    @field_validator(
        "doc_purpose", "doc_area_title", "doc_time_start", "doc_time_end",
        "doc_area_detail", "map_link",
        mode="before",
    )
    @classmethod
    def _not_blank(cls, v):
        return _required_text(v)


class DocCreateRequest(BaseModel):
    jobId: str
    payload: DocPayload


class NoticeSchedule(BaseModel):
    notice_date: date
    notice_by: str
    mymaps_url: str

    @field_validator("notice_by", mode="before")
    @classmethod
    def _by_required(cls, v):
        return _required_text(v)

    @field_validator("mymaps_url", mode="before")
    @classmethod
    def _http_url(cls, v):
        url = _required_text(v)
        if not url.lower().startswith(("http://", "https://")):
            raise ValueError("invalid mymaps_url")
        return url
