"""Risk assessor — asks the AI agent for a free-text risk analysis.

Owns one piece of long-lived state: the agent client, created on first use
and reused for the life of the assessor.
"""

from __future__ import annotations

import asyncio
import inspect
import json
from collections.abc import Awaitable, Callable

from loguru import logger

from src.models.token import TokenMetrics
from src.parsers.exceptions import AgentTimeoutError
from src.parsers.llm_agent.client import AgentClient

PROMPT_TEMPLATE = """Analyze the following memecoin contract for security risks:
Contract Address: {address}
Token Metrics: {metrics}

Evaluate:
1. Liquidity configuration and locks
2. Ownership structure and privileges
3. Supply distribution
4. Anti-bot measures
5. Potential backdoors or malicious code
6. Historical pattern matching with known rug pulls"""


def build_prompt(contract_address: str, metrics: TokenMetrics) -> str:
    return PROMPT_TEMPLATE.format(
        address=contract_address,
        metrics=json.dumps(metrics.to_dict(), indent=2),
    )


class RiskAssessor:
    """Boundary to the agent service. Stateless apart from the cached client."""

    def __init__(
        self,
        client_factory: Callable[[], AgentClient | Awaitable[AgentClient]],
        *,
        timeout_sec: float = 30.0,
    ) -> None:
        self._client_factory = client_factory
        self._timeout_sec = timeout_sec
        self._client: AgentClient | None = None
        self._init_lock = asyncio.Lock()

    async def get_client(self) -> AgentClient:
        """Return the agent client, creating it exactly once.

        Concurrent first callers wait on the lock and receive the same handle.
        """
        if self._client is not None:
            return self._client
        async with self._init_lock:
            if self._client is None:
                logger.info("[AGENT] Initializing agent client...")
                client = self._client_factory()
                if inspect.isawaitable(client):
                    client = await client
                self._client = client
                logger.info("[AGENT] Agent client initialized")
        return self._client

    async def assess(self, contract_address: str, metrics: TokenMetrics) -> str:
        """Return the agent's analysis text for the contract.

        Raises AgentUnavailableError, or AgentTimeoutError when the call
        exceeds the assessor deadline.
        """
        client = await self.get_client()
        prompt = build_prompt(contract_address, metrics)
        try:
            return await asyncio.wait_for(client.invoke(prompt), timeout=self._timeout_sec)
        except asyncio.TimeoutError as e:
            logger.warning(f"[AGENT] No answer within {self._timeout_sec:.0f}s for {contract_address[:14]}")
            raise AgentTimeoutError(
                f"AI agent did not respond within {self._timeout_sec:.0f} seconds"
            ) from e

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
