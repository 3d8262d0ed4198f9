"""Diagnostics for the outage DOCX template.

Word frequently splits a typed placeholder across several ``<w:t>`` runs or
moves it into a text box, header or footer. ``scan_template`` reports those
cases for the ``MAP_QR`` marker and lists the media entries available as QR
placeholder pictures.
"""

from __future__ import annotations

import io
import re
import zipfile
from dataclasses import dataclass, field

MAP_QR_TAG = "MAP_QR"
MAP_QR_EXACT = "{{MAP_QR}}"
_MAP_QR_REGEX = re.compile(r"\{\{\s*MAP_QR\s*\}\}")
_TEXT_NODE_REGEX = re.compile(r"<w:t[^>]*>([\s\S]*?)</w:t>")
_WORD_PART_REGEX = re.compile(r"^word/.+\.xml$", re.IGNORECASE)
_HEADER_FOOTER_REGEX = re.compile(r"^word/(header|footer)\d*\.xml$", re.IGNORECASE)
TEXTBOX_MARKERS = ("w:txbxContent", "v:textbox", "wps:")


@dataclass
class TemplateScan:
    media_entries: list[str] = field(default_factory=list)
    found_in_document: bool = False
    found_any_tag: bool = False
    split_across_runs: bool = False
    in_textbox: bool = False
    in_header_footer: bool = False
    spaced_tag: bool = False
    wrong_delimiter: bool = False
    issues: list[str] = field(default_factory=list)

    @property
    def marker_ok(self) -> bool:
        return (
            self.found_in_document
            and not self.split_across_runs
            and not self.in_textbox
            and not self.in_header_footer
            and not self.spaced_tag
            and not self.wrong_delimiter
        )


def is_split_across_runs(xml: str, tag: str) -> bool:
    """True when ``tag`` only appears once the run texts are concatenated."""
    nodes = _TEXT_NODE_REGEX.findall(xml)
    if any(tag in text for text in nodes) or tag in xml:
        return False
    return tag in "".join(nodes)


def extract_snippets(xml: str, search: str, window: int = 120) -> list[str]:
    snippets = []
    index = xml.find(search)
    while index != -1:
        start = max(0, index - window)
        end = min(len(xml), index + len(search) + window)
        snippets.append(re.sub(r"\s+", " ", xml[start:end]).strip())
        index = xml.find(search, index + len(search))
    return snippets


def scan_template(buffer: bytes) -> TemplateScan:
    scan = TemplateScan()
    with zipfile.ZipFile(io.BytesIO(buffer)) as zf:
        names = zf.namelist()
        scan.media_entries = [n for n in names if n.startswith("word/media/")]
        parts = {n: zf.read(n).decode("utf-8", errors="replace") for n in names if _WORD_PART_REGEX.match(n)}

    for name, xml in parts.items():
        if is_split_across_runs(xml, MAP_QR_EXACT):
            scan.split_across_runs = True
        if MAP_QR_TAG not in xml:
            continue

        scan.found_any_tag = True
        has_tag = bool(_MAP_QR_REGEX.search(xml))
        if name == "word/document.xml" and has_tag:
            scan.found_in_document = True
        if _HEADER_FOOTER_REGEX.match(name) and has_tag:
            scan.in_header_footer = True
        if has_tag and any(marker in xml for marker in TEXTBOX_MARKERS):
            scan.in_textbox = True
        if has_tag and MAP_QR_EXACT not in xml:
            scan.spaced_tag = True
        if not has_tag:
            scan.wrong_delimiter = True
        for snippet in extract_snippets(xml, MAP_QR_TAG):
            scan.issues.append(f"Snippet in {name}: {snippet}")

    if not scan.media_entries:
        scan.issues.append("No media entries under word/media/; there is no picture to replace with the QR code.")
    if not scan.found_any_tag:
        scan.issues.append("MAP_QR marker not found in any XML part.")
    if scan.split_across_runs:
        scan.issues.append(
            "MAP_QR is split across multiple <w:t> runs. Re-type it in a single run with no formatting changes."
        )
    if scan.in_textbox:
        scan.issues.append("MAP_QR appears inside a textbox/shape. Move it to the main document body.")
    if scan.in_header_footer:
        scan.issues.append("MAP_QR appears in a header/footer. Move it into word/document.xml.")
    if scan.spaced_tag:
        scan.issues.append("MAP_QR tag has spaces. Use the exact {{MAP_QR}} tag.")
    if scan.wrong_delimiter:
        scan.issues.append("MAP_QR appears without {{ }} delimiters.")
    return scan
