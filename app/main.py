"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from app.config import get_settings
from app.db.engine import create_tables, engine
from app.api.router import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()

    # Ensure the generated-documents directory exists
    Path(get_settings().document.output_dir).mkdir(parents=True, exist_ok=True)

    yield
    await engine.dispose()


app = FastAPI(
    title="Outage Job Tracker",
    description="Scheduled power-outage jobs: regional notification, notice document, social post, notice delivery, close.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(api_router)


@app.get("/api/health")
async def health():
    return {"ok": True}
