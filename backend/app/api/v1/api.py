# File: backend/app/api/v1/api.py
# Version: v0.1.0
"""
v1 API aggregator.

Routers included under /api:
- health
- crispr (candidate discovery, scoring, scan runs) at /api/v1/crispr
"""
from __future__ import annotations

from fastapi import APIRouter

from . import health as health_router
from .crispr import router as crispr_router

api_router = APIRouter()
api_router.include_router(health_router.router)
api_router.include_router(crispr_router.router)
