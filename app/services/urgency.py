"""Traffic-light urgency for outage jobs.

Jobs still waiting on the regional-center (nakhon) notification need a much
longer lead time, so their thresholds are in weeks; once notified (or marked
not required) the thresholds drop to days.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

from app.services.thai_date import days_between, parse_local_date

UrgencyColor = Literal["GREEN", "YELLOW", "RED"]

GREEN: UrgencyColor = "GREEN"
YELLOW: UrgencyColor = "YELLOW"
RED: UrgencyColor = "RED"

NAKHON_PENDING = "PENDING"
NAKHON_STATUSES = ("PENDING", "NOTIFIED", "NOT_REQUIRED")

# (red_below, yellow_max) in days
_PENDING_THRESHOLDS = (14, 28)
_CLEARED_THRESHOLDS = (3, 6)


@dataclass(frozen=True)
class Urgency:
    days_left: int
    color: UrgencyColor
    label: str

    def as_dict(self) -> dict:
        return {"daysLeft": self.days_left, "color": self.color, "label": self.label}


def _normalize_nakhon_status(status: str | None) -> str:
    if status in NAKHON_STATUSES:
        return status
    return NAKHON_PENDING


def get_status_label(days_left: int) -> str:
    if days_left < 0:
        return f"เลยกำหนด {abs(days_left)} วัน"
    if days_left == 0:
        return "วันนี้"
    if days_left == 1:
        return "พรุ่งนี้"
    return f"เหลือ {days_left} วัน"


def get_urgency_color(days_left: int, nakhon_status: str | None = None) -> UrgencyColor:
    if days_left < 0:
        return RED
    if _normalize_nakhon_status(nakhon_status) == NAKHON_PENDING:
        red_below, yellow_max = _PENDING_THRESHOLDS
    else:
        red_below, yellow_max = _CLEARED_THRESHOLDS
    if days_left < red_below:
        return RED
    if days_left <= yellow_max:
        return YELLOW
    return GREEN


def get_job_urgency(
    outage_date: str | date,
    nakhon_status: str | None = None,
    today: date | None = None,
) -> Urgency:
    """Classify how soon a job needs attention.

    Both dates are compared as local calendar days, so any time of day on the
    outage date itself yields ``days_left == 0``.
    """
    today = today or date.today()
    days_left = days_between(today, parse_local_date(outage_date))
    return Urgency(
        days_left=days_left,
        color=get_urgency_color(days_left, nakhon_status),
        label=get_status_label(days_left),
    )
