# File: backend/app/core/config.py
# Version: v0.1.0
"""
Centralized application settings using Pydantic Settings.

Controls:
- App metadata and API prefix
- CORS origins
- Output dir for CLI/API exports
- Database URL (SQLAlchemy)
- Default scoring thread count
"""
from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- App ---
    API_PREFIX: str = "/api"
    APP_NAME: str = "LambdaGuide"
    APP_VERSION: str = "0.1.0"

    # --- CORS ---
    CORS_ORIGINS: str = "*"  # comma-separated or '*' for all

    # --- Output ---
    OUTPUT_DIR: Path = Path("backend/data/out")

    # --- DB ---
    DB_URL: str = "sqlite:///backend/app/data/lambdaguide.db"

    # --- Scoring ---
    SCAN_WORKERS: int = 1

    # extra="allow": unrelated env vars won't crash startup
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")

    @property
    def cors_origins_list(self) -> list[str]:
        raw = self.CORS_ORIGINS.strip()
        if raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


settings = Settings()
