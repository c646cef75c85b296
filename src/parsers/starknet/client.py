"""Starknet JSON-RPC client — read-only contract calls via starknet_call."""

from collections.abc import Sequence
from typing import Any

import httpx
from eth_utils import keccak
from loguru import logger

from src.parsers.exceptions import ContractReadError

# starknet_keccak keeps the low 250 bits of keccak-256
_MASK_250 = (1 << 250) - 1


def get_selector(entry_point: str) -> str:
    """Entry point selector for a Cairo function name."""
    digest = int.from_bytes(keccak(text=entry_point), "big") & _MASK_250
    return hex(digest)


def to_felt(value: int | str) -> str:
    """Normalize an int or hex string to a 0x-prefixed felt."""
    if isinstance(value, str):
        value = int(value, 16)
    return hex(value)


class StarknetRpcClient:
    """Async HTTP client for a Starknet RPC node."""

    def __init__(self, rpc_url: str, timeout: float = 15.0) -> None:
        self._rpc_url = rpc_url
        self._client = httpx.AsyncClient(timeout=timeout)
        self._request_id = 0

    async def close(self) -> None:
        await self._client.aclose()

    async def call(
        self,
        contract_address: str,
        entry_point: str,
        calldata: Sequence[int | str] = (),
        *,
        block_id: str = "latest",
    ) -> list[str]:
        """Call a view function and return the raw felts it produced.

        Raises ContractReadError on any transport, HTTP or RPC failure.
        """
        self._request_id += 1
        payload: dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": "starknet_call",
            "params": {
                "request": {
                    "contract_address": contract_address,
                    "entry_point_selector": get_selector(entry_point),
                    "calldata": [to_felt(c) for c in calldata],
                },
                "block_id": block_id,
            },
        }

        try:
            resp = await self._client.post(self._rpc_url, json=payload)
        except httpx.TimeoutException as e:
            logger.warning(f"[RPC] {entry_point} timed out for {contract_address[:14]}")
            raise ContractReadError(f"Contract call '{entry_point}' timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"[RPC] {entry_point} failed for {contract_address[:14]}: {e}")
            raise ContractReadError(f"Contract call '{entry_point}' failed: {e}") from e

        if resp.status_code != 200:
            logger.debug(f"[RPC] HTTP {resp.status_code} for {entry_point}")
            raise ContractReadError(
                f"Contract call '{entry_point}' failed: HTTP {resp.status_code}"
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise ContractReadError(f"Contract call '{entry_point}' returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ContractReadError(f"Contract call '{entry_point}' returned a malformed response")

        if "error" in data:
            error = data["error"] or {}
            message = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
            logger.debug(f"[RPC] {entry_point} RPC error: {error}")
            raise ContractReadError(f"Contract call '{entry_point}' failed: {message}")

        result = data.get("result")
        if not isinstance(result, list):
            raise ContractReadError(f"Contract call '{entry_point}' returned no result")
        return result
