"""Holds the runtime analysis service shared by API requests.

Populated once in the app lifespan. Everything runs in a single asyncio
event loop, so endpoints read the reference directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.services.analysis_service import TokenSafetyService


class ServiceRegistry:
    """References to runtime objects for API access."""

    service: TokenSafetyService | None = None


registry = ServiceRegistry()
