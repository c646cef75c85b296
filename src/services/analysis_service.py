"""Token safety analysis service.

Runs the pipeline for one contract address, strictly in sequence:
collect metrics -> agent assessment -> extract risks/recommendations ->
score. The first failing stage aborts the request; a collector failure
means the agent is never called.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from loguru import logger

from config.settings import Settings
from src.models.token import SafetyAnalysisResult
from src.parsers.exceptions import (
    AnalysisError,
    ConfigurationError,
    ErrorKind,
    InvalidAddressError,
)
from src.parsers.llm_agent.client import AgentClient
from src.parsers.metrics_collector import ContractHandle, collect_metrics
from src.parsers.risk_assessor import RiskAssessor
from src.parsers.scoring import DEFAULT_PENALTIES, PenaltyRule, compute_score
from src.parsers.starknet.client import StarknetRpcClient
from src.parsers.text_parser import MarkerTextParser, TextAnalysisParser

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{1,64}$")


@dataclass(frozen=True)
class AnalysisOutcome:
    """Typed result of ``TokenSafetyService.analyze``: a result or an error kind."""

    result: SafetyAnalysisResult | None = None
    error_kind: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def failure(cls, error: AnalysisError) -> AnalysisOutcome:
        return cls(error_kind=error.kind, message=error.message)


def validate_address(contract_address: str) -> str:
    address = (contract_address or "").strip()
    if not address:
        raise InvalidAddressError("Please enter a contract address")
    if not _ADDRESS_RE.match(address):
        raise InvalidAddressError(f"Invalid contract address: {address!r}")
    return address


class TokenSafetyService:
    """Produces a SafetyAnalysisResult for a token contract address."""

    def __init__(
        self,
        settings: Settings,
        *,
        rpc: StarknetRpcClient | None = None,
        assessor: RiskAssessor | None = None,
        parser: TextAnalysisParser | None = None,
        penalties: tuple[PenaltyRule, ...] = DEFAULT_PENALTIES,
    ) -> None:
        self._settings = settings
        self._rpc = rpc
        self._assessor = assessor or RiskAssessor(
            self._create_agent_client,
            timeout_sec=settings.request_timeout_sec,
        )
        self._parser = parser or MarkerTextParser()
        self._penalties = penalties

    @property
    def penalties(self) -> tuple[PenaltyRule, ...]:
        return self._penalties

    @property
    def is_ready(self) -> bool:
        try:
            self.ensure_ready()
        except ConfigurationError:
            return False
        return True

    def ensure_ready(self) -> None:
        """Fail fast on missing configuration, before any network call."""
        if not self._settings.agent_api_key:
            raise ConfigurationError("AI agent API key not found (AGENT_API_KEY)")
        if not self._settings.llm_api_key:
            raise ConfigurationError("LLM provider API key not found (LLM_API_KEY)")
        if not self._settings.starknet_rpc_url and self._rpc is None:
            raise ConfigurationError("Starknet RPC URL not configured (STARKNET_RPC_URL)")

    def _create_agent_client(self) -> AgentClient:
        s = self._settings
        return AgentClient(
            s.agent_api_key,
            s.llm_api_key,
            base_url=s.agent_base_url,
            model=s.agent_model,
            temperature=s.agent_temperature,
            timeout=s.request_timeout_sec,
        )

    def _get_rpc(self) -> StarknetRpcClient:
        if self._rpc is None:
            self._rpc = StarknetRpcClient(
                self._settings.starknet_rpc_url,
                timeout=self._settings.rpc_timeout_sec,
            )
        return self._rpc

    async def analyze_token(self, contract_address: str) -> SafetyAnalysisResult:
        """Analyze a token contract. Raises the AnalysisError of the failing stage."""
        self.ensure_ready()
        address = validate_address(contract_address)

        logger.info(f"[ANALYZE] Analyzing token {address}")
        metrics = await collect_metrics(ContractHandle(address=address, rpc=self._get_rpc()))
        analysis = await self._assessor.assess(address, metrics)

        risks = self._parser.extract_risks(analysis)
        recommendations = self._parser.extract_recommendations(analysis)
        score = compute_score(metrics, self._penalties)

        logger.info(
            f"[ANALYZE] {address[:14]} score={score} "
            f"risks={len(risks)} recommendations={len(recommendations)}"
        )
        return SafetyAnalysisResult(
            contract_address=address,
            token_name=metrics.name,
            token_symbol=metrics.symbol,
            safety_score=score,
            risks=tuple(risks),
            recommendations=tuple(recommendations),
            token_metrics=metrics,
        )

    async def analyze(self, contract_address: str) -> AnalysisOutcome:
        """Like ``analyze_token`` but reports pipeline failures as a value.

        Cancellation is not a pipeline failure and still propagates.
        """
        try:
            result = await self.analyze_token(contract_address)
        except AnalysisError as e:
            logger.warning(f"[ANALYZE] {e.kind.value}: {e.message}")
            return AnalysisOutcome.failure(e)
        return AnalysisOutcome(result=result)

    async def close(self) -> None:
        await self._assessor.close()
        if self._rpc is not None:
            await self._rpc.close()
