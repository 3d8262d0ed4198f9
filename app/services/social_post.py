"""Social-media announcement text for an outage job."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.services.thai_date import format_thai_full_date


def _text(job: Any, name: str) -> str:
    value = job.get(name) if isinstance(job, Mapping) else getattr(job, name, None)
    if value is None:
        return ""
    return str(value)


def build_social_post_text(job: Any) -> str:
    """Build the five-line announcement from the job's document fields."""
    purpose = _text(job, "doc_purpose")
    area_title = _text(job, "doc_area_title")
    time_start = _text(job, "doc_time_start")
    time_end = _text(job, "doc_time_end")
    area_detail = _text(job, "doc_area_detail")
    map_link = _text(job, "map_link")
    outage_date = job.get("outage_date") if isinstance(job, Mapping) else getattr(job, "outage_date", None)
    outage_date_th = format_thai_full_date(outage_date)

    return "\n".join([
        f"เพื่อ{purpose} บริเวณ {area_title}",
        f"📅{outage_date_th}",
        f"☣️โซนสีเหลือง แสดงพื้นที่ไฟดับ ตั้งแต่เวลา {time_start} .- {time_end} น.",
        f"🌏บริเวณพื้นที่ผู้ใช้ไฟได้รับผลกระทบ {area_detail}",
        f"📌กดลิ้งค์ 👇 เพื่อตรวจสอบพื้นที่ไฟดับ {map_link}",
    ])


def get_social_post_preview(job: Any) -> str:
    """Return the stored post text if one exists, otherwise build it fresh.

    Once a post has been published its wording must not drift when the job's
    document fields are edited later.
    """
    stored = _text(job, "social_post_text")
    if stored.strip():
        return stored
    return build_social_post_text(job)
