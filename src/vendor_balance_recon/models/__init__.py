"""Data models for vendor evidence."""

from .evidence import (
    Verdict,
    LineMatch,
    ParsedBalance,
    SourceIndicator,
    BalanceAssessment,
    VendorIndicators,
)
from .source import SourceDocument

__all__ = [
    "Verdict",
    "LineMatch",
    "ParsedBalance",
    "SourceIndicator",
    "BalanceAssessment",
    "VendorIndicators",
    "SourceDocument",
]
