"""Tests for the Starknet RPC client and Cairo return value decoders."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.parsers.exceptions import ContractReadError
from src.parsers.starknet.client import StarknetRpcClient, get_selector, to_felt
from src.parsers.starknet.decoder import decode_address, decode_string, decode_uint


def _resp(status_code: int = 200, body: dict | None = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body if body is not None else {}
    return resp


class TestSelector:
    def test_known_selector(self) -> None:
        assert get_selector("transfer") == (
            "0x83afd3f4caedc6eebf44246fe54e38c95e3179a5ec9ea81740eca5b482d12e"
        )

    def test_selector_fits_250_bits(self) -> None:
        for name in ("totalSupply", "owner", "balanceOf", "circulatingSupply"):
            assert int(get_selector(name), 16) < 2**250

    def test_to_felt(self) -> None:
        assert to_felt(255) == "0xff"
        assert to_felt("0x00ff") == "0xff"


class TestDecoders:
    def test_u256(self) -> None:
        assert decode_uint(["0x1", "0x1"]) == 1 + 2**128
        assert decode_uint(["0x3e8", "0x0"]) == 1000

    def test_single_felt_uint(self) -> None:
        assert decode_uint(["0x2a"]) == 42

    def test_uint_wrong_length(self) -> None:
        with pytest.raises(ContractReadError):
            decode_uint([])

    def test_address(self) -> None:
        assert decode_address(["0x0000abc"]) == "0xabc"
        with pytest.raises(ContractReadError):
            decode_address(["0x1", "0x2"])

    def test_short_string(self) -> None:
        assert decode_string(["0x455448"]) == "ETH"
        assert decode_string([]) == ""

    def test_byte_array_pending_only(self) -> None:
        assert decode_string(["0x0", hex(int.from_bytes(b"hello", "big")), "0x5"]) == "hello"

    def test_byte_array_full_word(self) -> None:
        word = b"a" * 31
        felts = ["0x1", hex(int.from_bytes(word, "big")), hex(int.from_bytes(b"bc", "big")), "0x2"]
        assert decode_string(felts) == "a" * 31 + "bc"

    def test_malformed_byte_array(self) -> None:
        with pytest.raises(ContractReadError):
            decode_string(["0x5", "0x1"])

    def test_pending_word_longer_than_declared(self) -> None:
        with pytest.raises(ContractReadError, match="2 bytes"):
            decode_string(["0x0", hex(int.from_bytes(b"hello", "big")), "0x2"])


class TestStarknetRpcClient:
    @pytest.mark.asyncio
    async def test_call_returns_result(self) -> None:
        client = StarknetRpcClient("https://rpc.example")
        client._client = AsyncMock()
        client._client.post = AsyncMock(
            return_value=_resp(body={"jsonrpc": "2.0", "id": 1, "result": ["0x3e8", "0x0"]})
        )

        result = await client.call("0xabc", "totalSupply")

        assert result == ["0x3e8", "0x0"]
        payload = client._client.post.call_args.kwargs["json"]
        assert payload["method"] == "starknet_call"
        assert payload["params"]["block_id"] == "latest"
        request = payload["params"]["request"]
        assert request["contract_address"] == "0xabc"
        assert request["entry_point_selector"] == get_selector("totalSupply")
        assert request["calldata"] == []

    @pytest.mark.asyncio
    async def test_calldata_normalized(self) -> None:
        client = StarknetRpcClient("https://rpc.example")
        client._client = AsyncMock()
        client._client.post = AsyncMock(return_value=_resp(body={"result": ["0x1"]}))

        await client.call("0xabc", "balanceOf", ["0x00beef"])

        request = client._client.post.call_args.kwargs["json"]["params"]["request"]
        assert request["calldata"] == ["0xbeef"]

    @pytest.mark.asyncio
    async def test_rpc_error(self) -> None:
        client = StarknetRpcClient("https://rpc.example")
        client._client = AsyncMock()
        client._client.post = AsyncMock(
            return_value=_resp(body={"error": {"code": 21, "message": "Invalid message selector"}})
        )

        with pytest.raises(ContractReadError, match="Invalid message selector"):
            await client.call("0xabc", "circulatingSupply")

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        client = StarknetRpcClient("https://rpc.example")
        client._client = AsyncMock()
        client._client.post = AsyncMock(return_value=_resp(status_code=502))

        with pytest.raises(ContractReadError, match="HTTP 502"):
            await client.call("0xabc", "owner")

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        client = StarknetRpcClient("https://rpc.example")
        client._client = AsyncMock()
        client._client.post = AsyncMock(side_effect=httpx.ReadTimeout("timeout"))

        with pytest.raises(ContractReadError, match="timed out"):
            await client.call("0xabc", "owner")
        assert client._client.post.await_count == 1  # no retries

    @pytest.mark.asyncio
    async def test_connect_error(self) -> None:
        client = StarknetRpcClient("https://rpc.example")
        client._client = AsyncMock()
        client._client.post = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(ContractReadError):
            await client.call("0xabc", "owner")

    @pytest.mark.asyncio
    async def test_missing_result(self) -> None:
        client = StarknetRpcClient("https://rpc.example")
        client._client = AsyncMock()
        client._client.post = AsyncMock(return_value=_resp(body={"jsonrpc": "2.0", "id": 1}))

        with pytest.raises(ContractReadError):
            await client.call("0xabc", "owner")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [None, ["0x1"], "ok"])
    async def test_non_object_body(self, body) -> None:
        resp = MagicMock()
        resp.status_code = 200
        resp.json.return_value = body
        client = StarknetRpcClient("https://rpc.example")
        client._client = AsyncMock()
        client._client.post = AsyncMock(return_value=resp)

        with pytest.raises(ContractReadError, match="malformed"):
            await client.call("0xabc", "owner")
