"""Write a starter outage notice template to the configured template path.

The template carries every ``{{TOKEN}}`` the generator fills in and one PNG
picture (word/media/image1.png) that is replaced with the map QR code.
Replace it with the real letterhead document once one is available.
"""

import io
import sys
from pathlib import Path

from docx import Document
from docx.shared import Inches, Pt
from PIL import Image, ImageDraw

from app.config import get_settings

LINES = [
    "ที่ออกหนังสือ วันที่ {{DOC_ISSUE_DATE}}",
    "เรื่อง แจ้งดับกระแสไฟฟ้า",
    "เพื่อ{{DOC_PURPOSE}} บริเวณ {{DOC_AREA_TITLE}}",
    "ในวันที่ {{OUTAGE_DATE}} ตั้งแต่เวลา {{DOC_TIME_START}} - {{DOC_TIME_END}} น.",
    "พื้นที่ผู้ใช้ไฟได้รับผลกระทบ {{DOC_AREA_DETAIL}}",
    "อุปกรณ์ {{EQUIPMENT_CODE}}",
    "ตรวจสอบพื้นที่ไฟดับ {{MAP_LINK}}",
]


def _placeholder_png() -> bytes:
    img = Image.new("RGB", (240, 240), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((8, 8, 231, 231), outline="black", width=4)
    draw.text((90, 112), "QR", fill="black")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def main():
    path = Path(sys.argv[1] if len(sys.argv) > 1 else get_settings().document.template_path)
    if path.exists():
        print(f"Template already exists: {path}")
        sys.exit(1)

    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "TH SarabunPSK"
    style.font.size = Pt(16)

    for line in LINES:
        doc.add_paragraph(line)
    doc.add_picture(io.BytesIO(_placeholder_png()), width=Inches(1.2))

    path.parent.mkdir(parents=True, exist_ok=True)
    doc.save(str(path))
    print(f"Wrote {path}")


if __name__ == "__main__":
    main()
