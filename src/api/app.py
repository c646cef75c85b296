"""FastAPI application factory for the token analysis API."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.cors import CORSMiddleware

from config.settings import settings
from src.api.middleware import SecurityHeadersMiddleware
from src.api.registry import registry
from src.parsers.exceptions import AnalysisError, ErrorKind

# Rate limiter (shared instance)
limiter = Limiter(key_func=get_remote_address)

ERROR_STATUS = {
    ErrorKind.INVALID_ADDRESS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFIGURATION: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.CONTRACT_READ: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.AGENT_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.AGENT_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
}


async def _analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    logger.warning(f"[API] {request.url.path} failed: {exc.kind.value}: {exc.message}")
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        content={"error": exc.kind.value, "detail": exc.message},
    )


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    from src.services.analysis_service import TokenSafetyService

    owns_service = registry.service is None
    if owns_service:
        registry.service = TokenSafetyService(settings)
    if not registry.service.is_ready:
        logger.warning("[API] Analysis service not ready: configuration incomplete")
    try:
        yield
    finally:
        if owns_service and registry.service is not None:
            await registry.service.close()
            registry.service = None


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(
        title="Memecoin Guard API",
        version="0.1.0",
        docs_url="/api/docs" if settings.api_debug else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.api_debug else None,
        lifespan=_lifespan,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(AnalysisError, _analysis_error_handler)

    # Security headers
    app.add_middleware(SecurityHeadersMiddleware)

    # CORS — only needed for a dev frontend on another port
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    from src.api.routers.analysis import router as analysis_router
    from src.api.routers.health import router as health_router

    app.include_router(health_router)
    app.include_router(analysis_router)

    return app
