"""
Indicator aggregation across report sources.
Builds per-source balance candidates and the cross-source balance verdict.
"""

from typing import Mapping, Optional
import logging

from ..config import ReconConfig
from ..models.evidence import (
    BalanceAssessment,
    ParsedBalance,
    SourceIndicator,
    Verdict,
    VendorIndicators,
)
from ..parsers.amount_parser import parse_amount
from .line_extractor import LineExtractor

logger = logging.getLogger(__name__)

# Equality from a single report would be meaningless
MIN_SOURCES_FOR_COMPARISON = 2

# Amounts carry two decimals; float noise below this is ignored in the spread
SPREAD_PRECISION = 6


class IndicatorAggregator:
    """
    Orchestrates line extraction and amount parsing over the canonical
    report sources and produces the deterministic balance verdict.

    The verdict is the guardrail for the downstream reasoning step: a
    balances_equal verdict rules out any "balance differs" finding and an
    insufficient_data verdict rules out claiming that a source balance is
    zero.
    """

    def __init__(self, config: Optional[ReconConfig] = None):
        """
        Initialize the aggregator.

        Args:
            config: Application configuration (defaults when omitted)
        """
        self.config = config or ReconConfig()
        self.source_keys = list(self.config.sources.keys)
        self.extractor = LineExtractor(self.config.matching)

    def build_indicators(
        self,
        vendor_name: Optional[str],
        texts_by_source: Optional[Mapping[str, Optional[str]]] = None,
    ) -> VendorIndicators:
        """
        Build vendor indicators for every canonical source.

        Args:
            vendor_name: Vendor being reconciled
            texts_by_source: Source key to full extracted text; missing keys
                count as empty text and unknown keys are ignored

        Returns:
            Per-source indicators plus the balance assessment
        """
        texts = dict(texts_by_source or {})

        unknown = sorted(set(texts) - set(self.source_keys))
        if unknown:
            logger.debug(f"Ignoring unknown source keys: {unknown}")

        indicators: dict[str, SourceIndicator] = {}
        for key in self.source_keys:
            indicators[key] = self._build_source_indicator(
                key, vendor_name, texts.get(key) or ""
            )

        assessment = self.assess_balances(indicators)
        logger.info(
            f"Vendor '{vendor_name}': "
            + ", ".join(
                f"{key}={len(ind.line_matches)} line(s)/{len(ind.parsed_balances)} balance(s)"
                for key, ind in indicators.items()
            )
            + f" -> {assessment.verdict.value}"
        )

        return VendorIndicators(
            vendor=vendor_name or "",
            indicators_by_source=indicators,
            assessment=assessment,
        )

    def _build_source_indicator(
        self, source: str, vendor_name: Optional[str], text: str
    ) -> SourceIndicator:
        """Extract vendor lines from one source and parse their balances."""
        line_matches = self.extractor.extract(text, vendor_name)

        parsed_balances: list[ParsedBalance] = []
        for match in line_matches:
            if not match.last_value:
                continue
            value = parse_amount(match.last_value)
            if value is None:
                logger.debug(f"{source}: unparsable amount '{match.last_value}'")
                continue
            parsed_balances.append(
                ParsedBalance(
                    raw=match.last_value,
                    numeric=value,
                    original_line=match.original_line,
                )
            )

        return SourceIndicator(
            source=source,
            line_matches=line_matches,
            parsed_balances=parsed_balances,
        )

    def assess_balances(
        self, indicators: Mapping[str, SourceIndicator]
    ) -> BalanceAssessment:
        """
        Compare balances pooled across sources.

        Args:
            indicators: Per-source indicators

        Returns:
            Balance assessment with the verdict
        """
        present = [key for key, ind in indicators.items() if ind.has_balance]

        if len(present) < MIN_SOURCES_FOR_COMPARISON:
            return BalanceAssessment(
                verdict=Verdict.INSUFFICIENT_DATA,
                sources_compared=present,
            )

        pooled = [value for key in present for value in indicators[key].balances]
        low, high = min(pooled), max(pooled)
        spread = round(high - low, SPREAD_PRECISION)

        balance_settings = self.config.balance
        if spread <= balance_settings.equality_tolerance:
            return BalanceAssessment(
                verdict=Verdict.BALANCES_EQUAL,
                reference_value=round(
                    (low + high) / 2, balance_settings.reference_precision
                ),
                sources_compared=present,
                spread=spread,
            )

        return BalanceAssessment(
            verdict=Verdict.BALANCES_DIFFERENT,
            sources_compared=present,
            spread=spread,
        )


def build_indicators(
    vendor_name: Optional[str],
    texts_by_source: Optional[Mapping[str, Optional[str]]] = None,
    config: Optional[ReconConfig] = None,
) -> VendorIndicators:
    """Shortcut for IndicatorAggregator(config).build_indicators()."""
    return IndicatorAggregator(config).build_indicators(vendor_name, texts_by_source)
