"""Entry point for the memecoin-guard analysis API."""

import asyncio
import signal

from loguru import logger

from config.settings import settings
from src.api.server import run_api_server
from src.utils.logger import setup_logger


async def main() -> None:
    setup_logger(
        json_logs=settings.json_logs,
        level=settings.log_level,
        secrets=(settings.agent_api_key, settings.llm_api_key),
    )
    logger.info("Starting memecoin-guard...")

    # Graceful shutdown on SIGINT/SIGTERM
    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("Shutdown signal received")
        shutdown_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    server_task = asyncio.create_task(run_api_server())

    # Wait for either the server to exit or a shutdown signal
    done, pending = await asyncio.wait(
        [server_task, asyncio.create_task(shutdown_event.wait())],
        return_when=asyncio.FIRST_COMPLETED,
    )

    for task in pending:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    logger.info("Shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
