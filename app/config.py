"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class DocumentConfig(BaseSettings):
    template_path: str = "templates/outage_template.docx"
    output_dir: str = "data/docs"
    qr_width: int = 120
    qr_margin: int = 1
    # Fixed location of the placeholder picture inside the template archive
    qr_placeholder_path: str = "word/media/image1.png"
    # Operator override, read from QR_PLACEHOLDER_NAME (file name under word/media/)
    qr_placeholder_name: str = ""


class DashboardConfig(BaseSettings):
    default_limit: int = 50
    max_limit: int = 200


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/outage_jobs.db"
    document: DocumentConfig = Field(default_factory=DocumentConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _yaml
    doc = DocumentConfig(**y.get("document", {}))
    dash = DashboardConfig(**y.get("dashboard", {}))
    db_url = y.get("database", {}).get("url", "sqlite+aiosqlite:///data/outage_jobs.db")
    return Settings(
        database_url=db_url,
        document=doc,
        dashboard=dash,
    )
