"""Extraction of risk and recommendation statements from agent free text.

The agent's output format is not under our control, so parsing sits behind
TextAnalysisParser: a new output format gets a new implementation, callers
stay unchanged.
"""

import re
from abc import ABC, abstractmethod

RISK_MARKER = "Risk:"
RECOMMENDATION_MARKER = "Recommendation:"


class TextAnalysisParser(ABC):
    """Turns analysis text into ordered risk and recommendation statements."""

    @abstractmethod
    def extract_risks(self, text: str) -> list[str]: ...

    @abstractmethod
    def extract_recommendations(self, text: str) -> list[str]: ...


def _marker_pattern(marker: str) -> re.Pattern[str]:
    escaped = re.escape(marker)
    return re.compile(rf"{escaped}.*?(?={escaped}|\Z)", re.DOTALL)


class MarkerTextParser(TextAnalysisParser):
    """Statements start at a literal marker and run to the next occurrence
    of the same marker or the end of the text.

    Order is preserved and duplicates are kept. Text without markers gives
    an empty list.
    """

    def __init__(
        self,
        risk_marker: str = RISK_MARKER,
        recommendation_marker: str = RECOMMENDATION_MARKER,
    ) -> None:
        self._risk_pattern = _marker_pattern(risk_marker)
        self._recommendation_pattern = _marker_pattern(recommendation_marker)

    @staticmethod
    def _extract(pattern: re.Pattern[str], text: str) -> list[str]:
        if not text:
            return []
        return [m.group(0).strip() for m in pattern.finditer(text)]

    def extract_risks(self, text: str) -> list[str]:
        return self._extract(self._risk_pattern, text)

    def extract_recommendations(self, text: str) -> list[str]:
        return self._extract(self._recommendation_pattern, text)


default_parser = MarkerTextParser()


def extract_risks(text: str) -> list[str]:
    return default_parser.extract_risks(text)


def extract_recommendations(text: str) -> list[str]:
    return default_parser.extract_recommendations(text)
