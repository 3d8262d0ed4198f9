from datetime import date

import pytest
from pydantic import ValidationError

from app.schemas import DocCreateRequest, DocPayload, JobCreate, NakhonNotify, NoticeSchedule
from tests.docx_helpers import PAYLOAD


def test_job_create_requires_equipment_code():
    job = JobCreate(outage_date="2025-03-20", equipment_code="  KKA-1 ")
    assert job.equipment_code == "KKA-1"
    assert job.outage_date == date(2025, 3, 20)

    with pytest.raises(ValidationError):
        JobCreate(outage_date="2025-03-20", equipment_code="   ")
    with pytest.raises(ValidationError):
        JobCreate(outage_date="not-a-date", equipment_code="KKA-1")


def test_doc_payload_all_fields_required():
    payload = DocPayload(**PAYLOAD)
    assert payload.doc_issue_date == date(2025, 3, 5)

    for field in PAYLOAD:
        broken = {**PAYLOAD, field: ""}
        with pytest.raises(ValidationError):
            DocPayload(**broken)


def test_doc_create_request():
    req = DocCreateRequest(jobId="01ABC", payload=PAYLOAD)
    assert req.payload.map_link == PAYLOAD["map_link"]
    with pytest.raises(ValidationError):
        DocCreateRequest(payload=PAYLOAD)


def test_nakhon_notify_requires_memo():
    with pytest.raises(ValidationError):
        NakhonNotify(notified_date="2025-02-01", memo_no="")
    assert NakhonNotify(notified_date="2025-02-01", memo_no="123/2568").memo_no == "123/2568"


@pytest.mark.parametrize("url", ["https://www.google.com/maps/d/x", "HTTP://maps.example.com"])
def test_notice_schedule_accepts_http_urls(url):
    assert NoticeSchedule(notice_date="2025-03-10", notice_by="สมชาย", mymaps_url=url).mymaps_url == url


@pytest.mark.parametrize("url", ["ftp://maps.example.com", "maps.example.com", "javascript:alert(1)", ""])
def test_notice_schedule_rejects_other_urls(url):
    with pytest.raises(ValidationError):
        NoticeSchedule(notice_date="2025-03-10", notice_by="สมชาย", mymaps_url=url)
