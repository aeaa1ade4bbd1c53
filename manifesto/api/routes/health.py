"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter

from manifesto.config import settings

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint. Also advertises the re-scan debounce window hosts should use."""
    return {
        "status": "ok",
        "version": "1.0.0",
        "engine": "manifesto-enforcer",
        "debounce_ms": settings.diagnostics_debounce_ms,
    }
