"""CLI for the outage job tracker: database setup and DOCX template tooling."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path


async def cmd_init_db(args):
    """Create the database tables."""
    from app.config import get_settings
    from app.db.engine import create_tables

    await create_tables()
    print(f"Database ready: {get_settings().database_url}")


async def cmd_inspect_template(args):
    """Report media entries and MAP_QR marker problems in a DOCX template."""
    from app.config import get_settings
    from app.services.template_inspect import scan_template

    path = Path(args.path or get_settings().document.template_path)
    if not path.exists():
        print(f"Template not found: {path}")
        sys.exit(1)

    scan = scan_template(path.read_bytes())
    print(f"Template: {path}")
    print("Media entries:")
    for name in scan.media_entries:
        print(f"  {name}")
    if not scan.media_entries:
        print("  (none)")
    print(f"MAP_QR in word/document.xml: {'yes' if scan.found_in_document else 'no'}")
    if scan.issues:
        print("Issues:")
        for issue in scan.issues:
            print(f"  - {issue}")


async def cmd_render_doc(args):
    """Render the outage DOCX for a stored job using its saved document fields."""
    from app.db import crud
    from app.db.engine import async_session_factory
    from app.services.outage_docx import PAYLOAD_FIELDS, build_docx_filename, generate_outage_docx

    async with async_session_factory() as db:
        job = await crud.get_job(db, args.job_id)
    if not job:
        print(f"Job not found: {args.job_id}")
        sys.exit(1)

    payload = {field: getattr(job, field) for field in PAYLOAD_FIELDS}
    missing = [k for k, v in payload.items() if not v]
    if missing:
        print(f"Job has no document fields yet: {', '.join(missing)}")
        sys.exit(1)

    docx = await generate_outage_docx(payload, job)
    out = Path(args.out or build_docx_filename(job))
    out.write_bytes(docx)
    print(f"Wrote {out} ({len(docx)} bytes)")


def main():
    parser = argparse.ArgumentParser(description="Outage job tracker CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("init-db", help="Create database tables")

    p_inspect = sub.add_parser("inspect-template", help="Inspect the DOCX template")
    p_inspect.add_argument("path", nargs="?", default="", help="Template path (default: configured)")

    p_render = sub.add_parser("render-doc", help="Render a job's outage DOCX to a file")
    p_render.add_argument("job_id", help="Job ID")
    p_render.add_argument("--out", default="", help="Output file")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "inspect-template":
        asyncio.run(cmd_inspect_template(args))
    elif args.command == "render-doc":
        asyncio.run(cmd_render_doc(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
