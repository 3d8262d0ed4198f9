"""Local calendar-date helpers and Thai long-form date formatting."""

from __future__ import annotations

from datetime import date, datetime

THAI_MONTHS = (
    "มกราคม",
    "กุมภาพันธ์",
    "มีนาคม",
    "เมษายน",
    "พฤษภาคม",
    "มิถุนายน",
    "กรกฎาคม",
    "สิงหาคม",
    "กันยายน",
    "ตุลาคม",
    "พฤศจิกายน",
    "ธันวาคม",
)

BUDDHIST_ERA_OFFSET = 543


def parse_local_date(value: str | date) -> date:
    """Parse a YYYY-MM-DD string as a local calendar date (no timezone)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end."""
    return (end - start).days


def format_thai_full_date(value: str | date | None) -> str:
    """Format as '{day} {Thai month} {Buddhist-era year}', e.g. '5 มีนาคม 2568'."""
    if not value:
        return ""
    d = parse_local_date(value)
    month = THAI_MONTHS[d.month - 1]
    return f"{d.day} {month} {d.year + BUDDHIST_ERA_OFFSET}".strip()
