"""Health check — reports whether the analysis service can take requests."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from src.api.registry import registry

router = APIRouter(prefix="/api/v1", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    ready: bool


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Ready means configured; the UI keeps its analyze control disabled otherwise."""
    ready = registry.service is not None and registry.service.is_ready
    return HealthResponse(
        status="ok" if ready else "degraded",
        version="0.1.0",
        ready=ready,
    )
