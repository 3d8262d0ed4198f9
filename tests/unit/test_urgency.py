from datetime import date, timedelta

import pytest

from app.services.thai_date import format_thai_full_date, parse_local_date
from app.services.urgency import get_job_urgency, get_status_label, get_urgency_color

TODAY = date(2025, 3, 1)


def _in(days: int) -> str:
    return (TODAY + timedelta(days=days)).isoformat()


@pytest.mark.parametrize("days,expected", [
    (-1, "RED"), (0, "RED"), (13, "RED"),
    (14, "YELLOW"), (28, "YELLOW"),
    (29, "GREEN"), (120, "GREEN"),
])
def test_pending_thresholds(days, expected):
    assert get_job_urgency(_in(days), "PENDING", today=TODAY).color == expected


@pytest.mark.parametrize("status", ["NOTIFIED", "NOT_REQUIRED"])
@pytest.mark.parametrize("days,expected", [
    (-5, "RED"), (2, "RED"), (3, "YELLOW"), (6, "YELLOW"), (7, "GREEN"),
])
def test_cleared_thresholds(status, days, expected):
    assert get_job_urgency(_in(days), status, today=TODAY).color == expected


@pytest.mark.parametrize("status", [None, "", "bogus"])
def test_unknown_status_treated_as_pending(status):
    assert get_urgency_color(20, status) == "YELLOW"
    assert get_urgency_color(10, status) == "RED"


def test_overdue_is_always_red():
    for status in ("PENDING", "NOTIFIED", "NOT_REQUIRED"):
        assert get_urgency_color(-1, status) == "RED"


def test_days_left_and_label():
    urgency = get_job_urgency(_in(5), "NOTIFIED", today=TODAY)
    assert urgency.days_left == 5
    assert urgency.label == "เหลือ 5 วัน"
    assert urgency.as_dict() == {"daysLeft": 5, "color": "YELLOW", "label": "เหลือ 5 วัน"}


def test_status_labels():
    assert get_status_label(0) == "วันนี้"
    assert get_status_label(1) == "พรุ่งนี้"
    assert get_status_label(-3) == "เลยกำหนด 3 วัน"
    assert get_status_label(10) == "เหลือ 10 วัน"


def test_outage_today_defaults_to_system_date():
    urgency = get_job_urgency(date.today().isoformat(), "NOTIFIED")
    assert urgency.days_left == 0
    assert urgency.label == "วันนี้"


def test_date_objects_accepted():
    assert get_job_urgency(TODAY + timedelta(days=30), today=TODAY).color == "GREEN"


def test_parse_local_date_ignores_time_part():
    assert parse_local_date("2025-03-05T23:59:00") == date(2025, 3, 5)


def test_thai_full_date():
    assert format_thai_full_date("2025-03-05") == "5 มีนาคม 2568"
    assert format_thai_full_date(date(2024, 12, 31)) == "31 ธันวาคม 2567"
    assert format_thai_full_date(None) == ""
    assert format_thai_full_date("") == ""
