"""AI agent client — OpenAI-compatible chat completions.

The agent receives a natural-language prompt and answers with free text.
No retries here: a failed call surfaces to the caller, who decides
whether to try again.
"""

import httpx
from loguru import logger

from src.parsers.exceptions import AgentTimeoutError, AgentUnavailableError

AGENT_INSTRUCTIONS = (
    "Analyze memecoin contracts for security risks and compliance with Unruggable standards.\n"
    "Focus on: liquidity locks, ownership structure, supply distribution, and potential backdoors.\n"
    "Prefix every risk with 'Risk:' and every recommendation with 'Recommendation:'."
)

# Auth and quota failures; any 5xx is treated the same way
UNAVAILABLE_STATUSES = frozenset({401, 402, 403, 429})


class AgentClient:
    """Async HTTP client for the analysis agent."""

    def __init__(
        self,
        agent_api_key: str,
        llm_api_key: str,
        *,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4",
        temperature: float = 0.0,
        timeout: float = 30.0,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {llm_api_key}",
                "X-Agent-Api-Key": agent_api_key,
                "Content-Type": "application/json",
            },
        )

    async def invoke(self, prompt: str) -> str:
        """Send ``prompt`` to the agent and return its text answer."""
        try:
            resp = await self._client.post(
                "/chat/completions",
                json={
                    "model": self._model,
                    "messages": [
                        {"role": "system", "content": AGENT_INSTRUCTIONS},
                        {"role": "user", "content": prompt},
                    ],
                    "temperature": self._temperature,
                },
            )
        except httpx.TimeoutException as e:
            logger.warning("[AGENT] Request timed out")
            raise AgentTimeoutError("AI agent did not respond in time") from e
        except httpx.HTTPError as e:
            logger.warning(f"[AGENT] {type(e).__name__}: {e}")
            raise AgentUnavailableError(f"AI agent unreachable: {e}") from e

        if resp.status_code in UNAVAILABLE_STATUSES or resp.status_code >= 500:
            logger.warning(f"[AGENT] API error: HTTP {resp.status_code}")
            raise AgentUnavailableError(f"AI agent unavailable (HTTP {resp.status_code})")
        if resp.status_code != 200:
            logger.warning(f"[AGENT] Rejected request: HTTP {resp.status_code}")
            raise AgentUnavailableError(f"AI agent rejected the request (HTTP {resp.status_code})")

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"[AGENT] Malformed response: {resp.text[:200]}")
            raise AgentUnavailableError("AI agent returned a malformed response") from e

        if content is None:
            return ""
        if not isinstance(content, str):
            logger.warning(f"[AGENT] Non-text content: {type(content).__name__}")
            raise AgentUnavailableError("AI agent returned a malformed response")
        return content

    async def close(self) -> None:
        await self._client.aclose()
