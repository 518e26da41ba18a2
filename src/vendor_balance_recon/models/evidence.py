"""Data models for vendor evidence extracted from report texts."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Verdict(Enum):
    """Outcome of comparing balances pooled across sources."""

    INSUFFICIENT_DATA = "insufficient_data"
    BALANCES_EQUAL = "balances_equal"
    BALANCES_DIFFERENT = "balances_different"


VERDICT_DESCRIPTIONS = {
    Verdict.INSUFFICIENT_DATA: (
        "Balances could not be compared automatically with confidence."
    ),
    Verdict.BALANCES_EQUAL: (
        "Balances found automatically across the reports are practically "
        "the same for this vendor."
    ),
    Verdict.BALANCES_DIFFERENT: (
        "Different numeric balances were found across the reports for this vendor."
    ),
}


@dataclass
class LineMatch:
    """
    A report line in which the vendor was found.

    The last monetary value on the line is kept apart because in tabular
    layouts the rightmost column holds the running or ending balance.
    """

    original_line: str
    normalized_line: str
    score: float
    monetary_values: list[str] = field(default_factory=list)
    last_value: Optional[str] = None

    def __post_init__(self) -> None:
        """Derive the last value from the captured values."""
        if self.last_value is None and self.monetary_values:
            self.last_value = self.monetary_values[-1]

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_line": self.original_line,
            "normalized_line": self.normalized_line,
            "score": self.score,
            "monetary_values": list(self.monetary_values),
            "last_value": self.last_value,
        }


@dataclass
class ParsedBalance:
    """A balance candidate parsed from a matched line."""

    raw: str
    numeric: float
    original_line: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "raw": self.raw,
            "numeric": self.numeric,
            "original_line": self.original_line,
        }


@dataclass
class SourceIndicator:
    """Vendor evidence collected from one report source."""

    source: str
    line_matches: list[LineMatch] = field(default_factory=list)
    parsed_balances: list[ParsedBalance] = field(default_factory=list)

    @property
    def balances(self) -> list[float]:
        """Numeric balance candidates in line order."""
        return [b.numeric for b in self.parsed_balances]

    @property
    def has_balance(self) -> bool:
        return bool(self.parsed_balances)

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_matches": [m.to_dict() for m in self.line_matches],
            "parsed_balances": [b.to_dict() for b in self.parsed_balances],
        }


@dataclass
class BalanceAssessment:
    """Deterministic cross-source balance verdict."""

    verdict: Verdict
    description: str = ""
    reference_value: Optional[float] = None
    sources_compared: list[str] = field(default_factory=list)
    spread: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.description:
            self.description = VERDICT_DESCRIPTIONS[self.verdict]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": self.verdict.value,
            "description": self.description,
            "sources_compared": list(self.sources_compared),
        }
        if self.spread is not None:
            data["spread"] = self.spread
        if self.reference_value is not None:
            data["approximate_reference_value"] = self.reference_value
        return data


@dataclass
class VendorIndicators:
    """Per-source vendor evidence plus the aggregate balance verdict."""

    vendor: str
    indicators_by_source: dict[str, SourceIndicator]
    assessment: BalanceAssessment

    @property
    def verdict(self) -> Verdict:
        return self.assessment.verdict

    @property
    def total_line_matches(self) -> int:
        return sum(len(i.line_matches) for i in self.indicators_by_source.values())

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form handed to the reasoning step."""
        return {
            "vendor": self.vendor,
            "vendor_indicators": {
                source: indicator.to_dict()
                for source, indicator in self.indicators_by_source.items()
            },
            "automatic_balance_assessment": self.assessment.to_dict(),
        }
