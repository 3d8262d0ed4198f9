import itertools
from datetime import date
from types import SimpleNamespace

import pytest

from app.services.job_status import (
    DASHBOARD_STEPS,
    DOC_STATUSES,
    NAKHON_STATUSES,
    NEXT_ACTION_LABELS,
    NEXT_BUTTON_LABELS,
    NOTICE_STATUSES,
    SOCIAL_STATUSES,
    get_calendar_status,
    get_dashboard_step,
    get_next_action,
    get_next_button_action,
    normalize_status_fields,
)


def _job(**kwargs):
    base = {
        "nakhon_status": "NOTIFIED",
        "nakhon_notified_date": date(2025, 2, 1),
        "doc_status": "GENERATED",
        "social_status": "POSTED",
        "notice_status": "SCHEDULED",
        "notice_date": date(2025, 2, 20),
        "is_closed": False,
    }
    base.update(kwargs)
    return base


def _all_combinations():
    for nakhon, doc, social, notice, closed in itertools.product(
        NAKHON_STATUSES + (None, "junk"),
        DOC_STATUSES + (None,),
        SOCIAL_STATUSES + (None,),
        NOTICE_STATUSES + (None,),
        (True, False, None),
    ):
        yield {
            "nakhon_status": nakhon,
            "doc_status": doc,
            "social_status": social,
            "notice_status": notice,
            "is_closed": closed,
        }


def test_derivations_are_total():
    for job in _all_combinations():
        assert get_dashboard_step(job) in DASHBOARD_STEPS
        assert get_next_action(job) in NEXT_ACTION_LABELS.values()
        assert get_next_button_action(job) in NEXT_BUTTON_LABELS
        assert get_calendar_status(job) in ("Done", "Notice", "Posted", "Doc", "Draft")


def test_closed_job_is_always_closed_step():
    for job in _all_combinations():
        if job["is_closed"]:
            assert get_dashboard_step(job) == "CLOSED"
            assert get_calendar_status(job) == "Done"


def test_defaults_applied_for_missing_fields():
    s = normalize_status_fields({})
    assert (s.nakhon_status, s.doc_status, s.social_status, s.notice_status) == (
        "PENDING", "PENDING", "DRAFT", "NONE",
    )
    assert s.is_closed is False
    assert normalize_status_fields(None).doc_status == "PENDING"


def test_accepts_objects():
    job = SimpleNamespace(doc_status="GENERATED", social_status="DRAFT")
    assert get_dashboard_step(job) == "DOC_READY"


# ── dashboard step ───────────────────────────────────────

@pytest.mark.parametrize("overrides,expected", [
    ({"doc_status": "PENDING"}, "DRAFT"),
    ({"doc_status": "ERROR"}, "DRAFT"),
    ({"social_status": "PENDING_APPROVAL"}, "DOC_READY"),
    ({"notice_status": "NONE"}, "SOCIAL_POSTED"),
    ({"notice_status": "SENT"}, "NOTICE_SCHEDULED"),
    ({}, "NOTICE_SCHEDULED"),
    ({"is_closed": True, "doc_status": "PENDING"}, "CLOSED"),
])
def test_dashboard_step(overrides, expected):
    assert get_dashboard_step(_job(**overrides)) == expected


# ── next action text ─────────────────────────────────────

def test_next_action_order():
    labels = NEXT_ACTION_LABELS
    assert get_next_action(_job(doc_status="GENERATING")) == labels["create_doc"]
    assert get_next_action(_job(social_status="DRAFT")) == labels["post_social"]
    assert get_next_action(_job(notice_status="NONE", notice_date=None)) == labels["schedule_notice"]
    assert get_next_action(
        _job(nakhon_status="PENDING", nakhon_notified_date=None)
    ) == labels["notify_nakhon"]
    assert get_next_action(_job()) == labels["close_job"]
    assert get_next_action(_job(is_closed=True)) == labels["complete"]


def test_next_action_notice_date_counts_as_scheduled():
    job = _job(notice_status="NONE", notice_date=date(2025, 2, 20))
    assert get_next_action(job) == NEXT_ACTION_LABELS["close_job"]


def test_next_action_not_required_skips_nakhon():
    job = _job(nakhon_status="NOT_REQUIRED", nakhon_notified_date=None)
    assert get_next_action(job) == NEXT_ACTION_LABELS["close_job"]


def test_next_action_does_not_short_circuit_closed():
    job = _job(is_closed=True, doc_status="PENDING")
    assert get_next_action(job) == NEXT_ACTION_LABELS["create_doc"]


# ── next button ──────────────────────────────────────────

@pytest.mark.parametrize("overrides,expected", [
    ({"nakhon_status": "PENDING"}, "notify_nakhon"),
    ({"nakhon_status": None}, "notify_nakhon"),
    ({"doc_status": "PENDING"}, "create_doc"),
    ({"doc_status": "ERROR", "doc_generated_at": "2025-02-03T10:00:00", "social_status": "PENDING_APPROVAL"}, "wait_approval"),
    ({"social_status": "PENDING_APPROVAL"}, "wait_approval"),
    ({"notice_status": "NONE"}, "notify_outage_letter"),
    ({"social_status": "DRAFT", "notice_status": "NONE"}, "close_job"),
    ({}, "close_job"),
])
def test_next_button_action(overrides, expected):
    assert get_next_button_action(_job(**overrides)) == expected


def test_next_button_generated_at_counts_as_generated():
    job = _job(doc_status="PENDING", doc_generated_at="2025-02-03T10:00:00", notice_status="NONE")
    assert get_next_button_action(job) == "notify_outage_letter"


# ── calendar chip ────────────────────────────────────────

@pytest.mark.parametrize("overrides,expected", [
    ({"is_closed": True}, "Done"),
    ({}, "Notice"),
    ({"notice_status": "SENT"}, "Posted"),
    ({"notice_status": "NONE", "social_status": "PENDING_APPROVAL"}, "Doc"),
    ({"notice_status": "NONE", "social_status": "DRAFT", "doc_status": "GENERATING"}, "Doc"),
    ({"notice_status": "NONE", "social_status": "DRAFT", "doc_status": "ERROR"}, "Draft"),
])
def test_calendar_status(overrides, expected):
    assert get_calendar_status(_job(**overrides)) == expected
