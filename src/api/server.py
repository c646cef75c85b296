"""API server — owns the analysis service for the lifetime of uvicorn."""

from __future__ import annotations

import uvicorn
from loguru import logger

from config.settings import Settings, settings
from src.api.registry import registry
from src.services.analysis_service import TokenSafetyService

# uvicorn only knows lowercase level names and has no SUCCESS level
_UVICORN_LEVELS = {
    "TRACE": "trace",
    "DEBUG": "debug",
    "INFO": "info",
    "SUCCESS": "info",
    "WARNING": "warning",
    "ERROR": "error",
    "CRITICAL": "critical",
}


def build_server_config(app, cfg: Settings) -> uvicorn.Config:
    return uvicorn.Config(
        app=app,
        host=cfg.api_host,
        port=cfg.api_port,
        log_level=_UVICORN_LEVELS.get(cfg.log_level.upper(), "warning"),
        access_log=cfg.api_debug,
        loop="none",  # use the existing event loop
    )


async def run_api_server(
    service: TokenSafetyService | None = None,
    cfg: Settings = settings,
) -> None:
    """Serve the analysis API until uvicorn exits.

    The service is registered before the first request so health reports
    readiness immediately, and its HTTP clients are closed once serving stops.
    """
    from src.api.app import create_app

    service = service or TokenSafetyService(cfg)
    registry.service = service

    server = uvicorn.Server(build_server_config(create_app(), cfg))
    logger.info(
        f"[API] Listening on http://{cfg.api_host}:{cfg.api_port} (ready={service.is_ready})"
    )
    try:
        await server.serve()
    finally:
        registry.service = None
        await service.close()
        logger.info("[API] Analysis service closed")
