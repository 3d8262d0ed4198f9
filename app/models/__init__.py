"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.outage_job import OutageJob

__all__ = ["Base", "OutageJob"]
