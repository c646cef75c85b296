"""Error taxonomy for the token safety pipeline.

Every failure aborts the analysis and reaches the caller with a readable
message. Missing risk/recommendation markers are not an error.
"""

from enum import Enum


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    INVALID_ADDRESS = "invalid_address"
    CONTRACT_READ = "contract_read"
    AGENT_UNAVAILABLE = "agent_unavailable"
    AGENT_TIMEOUT = "agent_timeout"


class AnalysisError(Exception):
    kind: ErrorKind

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationError(AnalysisError):
    """Required key or URL missing. Raised before any network call."""

    kind = ErrorKind.CONFIGURATION


class InvalidAddressError(AnalysisError):
    kind = ErrorKind.INVALID_ADDRESS


class ContractReadError(AnalysisError):
    """A read-only contract call failed or timed out."""

    kind = ErrorKind.CONTRACT_READ


class AgentUnavailableError(AnalysisError):
    """Agent unreachable, rejected the key, or is out of quota."""

    kind = ErrorKind.AGENT_UNAVAILABLE


class AgentTimeoutError(AnalysisError):
    kind = ErrorKind.AGENT_TIMEOUT
