"""Analyze a single token contract from the command line.

Prints the safety analysis as JSON. Exit code 1 on failure, with the
error message on stderr.

Usage:
    python scripts/analyze_token.py 0x0123...abc
    python scripts/analyze_token.py 0x0123...abc --timeout 60 --verbose
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402

from config.settings import settings  # noqa: E402
from src.parsers.scoring import triggered_penalties  # noqa: E402
from src.services.analysis_service import TokenSafetyService  # noqa: E402


async def main() -> int:
    parser = argparse.ArgumentParser(description="Token safety analysis")
    parser.add_argument("contract_address", help="Token contract address (0x...)")
    parser.add_argument("--timeout", type=float, default=None, help="Agent timeout in seconds")
    parser.add_argument("--verbose", action="store_true", help="Log pipeline progress")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    cfg = settings
    if args.timeout is not None:
        cfg = settings.model_copy(update={"request_timeout_sec": args.timeout})

    service = TokenSafetyService(cfg)
    try:
        outcome = await service.analyze(args.contract_address)
    finally:
        await service.close()

    if not outcome.ok:
        print(f"Error ({outcome.error_kind.value}): {outcome.message}", file=sys.stderr)
        return 1

    data = outcome.result.to_dict()
    data["penalties"] = [
        rule.name for rule in triggered_penalties(outcome.result.token_metrics, service.penalties)
    ]
    print(json.dumps(data, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
