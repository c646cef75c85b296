"""FastAPI dependency injection — analysis service."""

from __future__ import annotations

from fastapi import HTTPException, status

from src.api.registry import registry
from src.services.analysis_service import TokenSafetyService


def get_service() -> TokenSafetyService:
    """Return the registered analysis service."""
    if registry.service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return registry.service
