"""Outage notice DOCX generation.

Pipeline:
    read template → pass 1 (docxtpl text render) → QR encode
        → pass 2 (overwrite placeholder picture) → sanity check

Only the template read and pass 1 are fatal. The QR code is layered on top of
the pass-1 document; whenever a later step fails the pass-1 bytes are returned
unchanged.
"""

from __future__ import annotations

import asyncio
import io
import logging
import re
import zipfile
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Optional

import qrcode
from docxtpl import DocxTemplate
from jinja2 import Environment, StrictUndefined
from PIL import Image

from app.config import DocumentConfig, get_settings
from app.services.thai_date import format_thai_full_date
from app.services.template_inspect import scan_template

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOCUMENT_XML = "word/document.xml"
MEDIA_DIR = "word/media/"

PAYLOAD_FIELDS = (
    "doc_issue_date",
    "doc_purpose",
    "doc_area_title",
    "doc_time_start",
    "doc_time_end",
    "doc_area_detail",
    "map_link",
)

_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")


class TemplateMissingError(RuntimeError):
    """The DOCX template could not be read from the configured path."""


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def build_template_data(payload: Mapping[str, Any], job: Any) -> dict[str, str]:
    """Flat token → text mapping for the ``{{TOKEN}}`` placeholders."""
    outage_date = _get(job, "outage_date")
    equipment_code = _get(job, "equipment_code")
    return {
        "DOC_ISSUE_DATE": format_thai_full_date(payload["doc_issue_date"]),
        "DOC_ISSUE_DATE_RAW": str(payload["doc_issue_date"]),
        "DOC_PURPOSE": payload["doc_purpose"],
        "DOC_AREA_TITLE": payload["doc_area_title"],
        "DOC_TIME_START": payload["doc_time_start"],
        "DOC_TIME_END": payload["doc_time_end"],
        "DOC_AREA_DETAIL": payload["doc_area_detail"],
        "MAP_LINK": payload["map_link"],
        "OUTAGE_DATE": str(outage_date) if outage_date else "-",
        "EQUIPMENT_CODE": str(equipment_code) if equipment_code else "-",
        # A textual QR marker left in the template renders as nothing
        "MAP_QR": "",
    }


def build_docx_filename(job: Any) -> str:
    equipment = _get(job, "equipment_code") or "JOB"
    outage_date = _get(job, "outage_date") or ""
    return f"เอกสารดับไฟ-{equipment}-{outage_date}.docx"


def list_media_entries(buffer: bytes) -> list[str]:
    with zipfile.ZipFile(io.BytesIO(buffer)) as zf:
        return [n for n in zf.namelist() if n.startswith(MEDIA_DIR)]


# ── Pass 1: text ─────────────────────────────────────────

def _log_render_error(error: Exception) -> None:
    logger.error(f"DOCX text render failed: {type(error).__name__}: {error}")
    lineno = getattr(error, "lineno", None)
    if lineno is not None:
        logger.error(f"  template line: {lineno}")
    # Some template errors aggregate several underlying failures
    sub_errors = getattr(error, "errors", None)
    if isinstance(sub_errors, (list, tuple)) and sub_errors:
        logger.error(f"  sub-errors ({len(sub_errors)}):")
        for i, sub in enumerate(sub_errors, start=1):
            logger.error(f"  [{i}] {type(sub).__name__}: {sub}")
            props = getattr(sub, "__dict__", None)
            if props:
                logger.error(f"  [{i}] properties: {props}")


def render_text_pass(template_bytes: bytes, data: Mapping[str, str]) -> bytes:
    """Render ``{{TOKEN}}`` placeholders; unknown tokens fail loudly."""
    env = Environment(undefined=StrictUndefined)
    try:
        tpl = DocxTemplate(io.BytesIO(template_bytes))
        tpl.render(dict(data), jinja_env=env, autoescape=True)
    except Exception as e:
        _log_render_error(e)
        raise
    out = io.BytesIO()
    tpl.save(out)
    return out.getvalue()


# ── QR ───────────────────────────────────────────────────

def encode_qr_png(text: str, width: int = 120, margin: int = 1) -> bytes:
    """Encode text as a square PNG QR code of exactly ``width`` pixels."""
    qr = qrcode.QRCode(border=margin, box_size=10)
    qr.add_data(text)
    qr.make(fit=True)
    raw = io.BytesIO()
    qr.make_image().save(raw, format="PNG")
    raw.seek(0)

    with Image.open(raw) as img:
        resized = img.convert("L").resize((width, width), Image.Resampling.NEAREST)
    out = io.BytesIO()
    resized.save(out, format="PNG")
    return out.getvalue()


# ── Pass 2: placeholder picture ──────────────────────────

PlaceholderResolver = Callable[[zipfile.ZipFile, DocumentConfig], Optional[str]]


def resolve_fixed_path(zf: zipfile.ZipFile, config: DocumentConfig) -> str | None:
    name = config.qr_placeholder_path
    if name and name in zf.namelist():
        return name
    return None


def resolve_configured_name(zf: zipfile.ZipFile, config: DocumentConfig) -> str | None:
    name = config.qr_placeholder_name.strip()
    if not name:
        return None
    if not name.startswith(MEDIA_DIR):
        name = MEDIA_DIR + name.lstrip("/")
    if name in zf.namelist():
        return name
    logger.warning(f"Configured QR placeholder {name} not found in template")
    return None


def resolve_largest_png(zf: zipfile.ZipFile, config: DocumentConfig) -> str | None:
    # Stand-in pictures are richer than icons, so the biggest PNG is the best guess
    pngs = [
        info for info in zf.infolist()
        if info.filename.startswith(MEDIA_DIR) and info.filename.lower().endswith(".png")
    ]
    if not pngs:
        return None
    return max(pngs, key=lambda info: info.file_size).filename


PLACEHOLDER_RESOLVERS: tuple[PlaceholderResolver, ...] = (
    resolve_fixed_path,
    resolve_configured_name,
    resolve_largest_png,
)


def resolve_placeholder(buffer: bytes, config: DocumentConfig) -> str | None:
    with zipfile.ZipFile(io.BytesIO(buffer)) as zf:
        for resolver in PLACEHOLDER_RESOLVERS:
            name = resolver(zf, config)
            if name:
                logger.debug(f"QR placeholder resolved by {resolver.__name__}: {name}")
                return name
    return None


def splice_entry(buffer: bytes, name: str, data: bytes) -> bytes:
    """Return a copy of the archive with entry ``name`` replaced by ``data``."""
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(buffer)) as zin, zipfile.ZipFile(out, "w") as zout:
        if name not in zin.namelist():
            raise KeyError(name)
        for item in zin.infolist():
            content = data if item.filename == name else zin.read(item.filename)
            zout.writestr(item, content)
    return out.getvalue()


def is_document_xml_sane(buffer: bytes) -> bool:
    try:
        with zipfile.ZipFile(io.BytesIO(buffer)) as zf:
            if DOCUMENT_XML not in zf.namelist():
                logger.warning("Sanity check failed: word/document.xml missing")
                return False
            xml = zf.read(DOCUMENT_XML).decode("utf-8", errors="replace")
    except zipfile.BadZipFile as e:
        logger.warning(f"Sanity check failed while reading document.xml: {e}")
        return False

    if _INVALID_XML_CHARS.search(xml) or "\ufffd" in xml:
        logger.warning("Sanity check failed: document.xml contains invalid XML characters")
        return False
    return True


def embed_qr_image(pass1: bytes, qr_png: bytes, config: DocumentConfig) -> bytes:
    """Overwrite the placeholder picture with the QR code, or return pass1 as-is."""
    try:
        placeholder = resolve_placeholder(pass1, config)
    except zipfile.BadZipFile as e:
        logger.warning(f"Could not open rendered DOCX for QR insertion: {e}")
        return pass1
    if not placeholder:
        logger.warning("No QR placeholder image found in template; returning document without QR")
        return pass1

    try:
        rendered = splice_entry(pass1, placeholder, qr_png)
    except (zipfile.BadZipFile, KeyError, OSError) as e:
        logger.warning(f"Failed to replace QR placeholder {placeholder}: {e}")
        return pass1

    if not is_document_xml_sane(rendered):
        logger.warning("DOCX failed sanity check after QR insertion; falling back to text-only output")
        return pass1
    logger.info(f"QR image written to {placeholder} ({len(qr_png)} bytes)")
    return rendered


# ── Entry point ──────────────────────────────────────────

def _log_template_scan(template_bytes: bytes) -> None:
    # Diagnostics only: a template that cannot be scanned fails in pass 1 instead
    try:
        scan = scan_template(template_bytes)
    except Exception as e:
        logger.debug(f"Template scan skipped: {type(e).__name__}: {e}")
        return
    for issue in scan.issues:
        logger.debug(f"Template: {issue}")


async def generate_outage_docx(
    payload: Mapping[str, Any],
    job: Any,
    config: DocumentConfig | None = None,
) -> bytes:
    """Generate the outage notice DOCX for a job. Returns DOCX bytes."""
    config = config or get_settings().document
    template_path = Path(config.template_path)

    try:
        template_bytes = await asyncio.to_thread(template_path.read_bytes)
    except OSError as e:
        logger.error(f"DOCX template missing at: {template_path}")
        raise TemplateMissingError(
            f"Missing DOCX template at {template_path}. Check document.template_path."
        ) from e

    if logger.isEnabledFor(logging.DEBUG):
        _log_template_scan(template_bytes)

    pass1 = render_text_pass(template_bytes, build_template_data(payload, job))
    logger.debug("Text pass rendered")

    qr_png: bytes | None = None
    try:
        qr_png = await asyncio.to_thread(
            encode_qr_png, str(payload["map_link"]), config.qr_width, config.qr_margin,
        )
    except Exception as e:
        logger.warning(f"Failed to generate QR code, continuing without it: {e}")

    if qr_png is None:
        return pass1
    return embed_qr_image(pass1, qr_png, config)
