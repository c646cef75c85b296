import os
import sys
from collections.abc import Callable, Iterable

from loguru import logger

REDACTED = "***"


def make_redactor(secrets: Iterable[str]) -> Callable[[dict], None]:
    """Build a loguru patcher that masks every secret value in a record.

    Covers the message and string values in ``extra``. Empty secrets are
    ignored so an unset key never blanks out unrelated text.
    """
    values = sorted({s for s in secrets if s}, key=len, reverse=True)

    def _mask(text: str) -> str:
        for value in values:
            text = text.replace(value, REDACTED)
        return text

    def _patch(record: dict) -> None:
        if not values:
            return
        record["message"] = _mask(record["message"])
        for key, val in record["extra"].items():
            if isinstance(val, str):
                record["extra"][key] = _mask(val)

    return _patch


def setup_logger(
    *,
    json_logs: bool = False,
    level: str = "INFO",
    secrets: Iterable[str] = (),
) -> None:
    """Configure loguru for the analysis service.

    Console level controlled by LOG_LEVEL env (falls back to ``level``).
    File always captures DEBUG so a failed analysis can be traced afterwards.
    Values in ``secrets`` (API keys) are masked in every sink.
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()
    logger.configure(patcher=make_redactor(secrets))

    if json_logs:
        logger.add(sys.stdout, serialize=True, level=console_level)
    else:
        logger.add(
            sys.stdout,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
                "<level>{message}</level>"
            ),
            level=console_level,
            colorize=True,
        )

    logger.add(
        "logs/guard_{time:YYYY-MM-DD}.log",
        rotation="20 MB",
        retention="7 days",
        compression="gz",
        level="DEBUG",
        serialize=json_logs,
    )
