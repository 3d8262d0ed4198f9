"""Seed the database with demo outage jobs at different workflow stages."""

import asyncio
from datetime import date, timedelta

from app.db.engine import engine, async_session_factory
from app.models import Base
from app.db import crud


async def seed():
    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as db:
        # Check if demo jobs already exist
        existing = await crud.list_jobs(db)
        if any(j.equipment_code.startswith("DEMO-") for j in existing):
            print("Demo jobs already exist, skipping seed.")
            return

        today = date.today()

        fresh = await crud.create_job(db, today + timedelta(days=35), "DEMO-KKA-01", "เปลี่ยนเสาไฟฟ้า")
        print(f"Created job: {fresh.equipment_code} (id: {fresh.id})")

        notified = await crud.create_job(db, today + timedelta(days=12), "DEMO-KKA-02", "ย้ายหม้อแปลง")
        await crud.set_nakhon_notified(db, notified, today - timedelta(days=3), "กฟภ 101/2568")
        print(f"Created job: {notified.equipment_code} (id: {notified.id}) - nakhon notified")

        urgent = await crud.create_job(db, today + timedelta(days=2), "DEMO-KKA-03")
        await crud.set_nakhon_not_required(db, urgent)
        await crud.mark_social_pending(db, urgent)
        print(f"Created job: {urgent.equipment_code} (id: {urgent.id}) - waiting for social approval")

    print("\nSeed complete. Start the server with: uvicorn app.main:app --reload")
    print("Generate documents with a template at templates/outage_template.docx")
    print("(python scripts/make_sample_template.py writes a starter one).")


if __name__ == "__main__":
    asyncio.run(seed())
