# File: backend/app/main.py
# Version: v0.1.0
"""
FastAPI app entry.

- Keeps all route assembly in backend/app/api/v1/api.py.
- Mounts /api/* via `api_router`.
- Optional SQLite auto-heal is guarded by SCHEMA_AUTOHEAL.
"""
from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.v1.api import api_router
from backend.app.core.config import settings
from backend.app.db.maintenance import ensure_schema_sqlite
from backend.app.db.session import engine

logger = logging.getLogger(__name__)

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


app.include_router(api_router, prefix=settings.API_PREFIX)


def _env_true(name: str, default: str = "false") -> bool:
    val = os.getenv(name, default).strip().lower()
    return val in ("1", "true", "yes")


@app.on_event("startup")
def _startup_autoheal() -> None:
    # Only try auto-heal if explicitly enabled AND using SQLite
    if engine.url.get_backend_name() == "sqlite" and _env_true("SCHEMA_AUTOHEAL", "false"):
        actions = ensure_schema_sqlite(engine)
        logger.info("[schema-autoheal] %s", ", ".join(actions))
