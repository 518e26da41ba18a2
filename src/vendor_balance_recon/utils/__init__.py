"""Utility modules."""

from .exceptions import (
    ReconciliationError,
    ConfigurationError,
    SourceReadError,
    AnalysisError,
    ReportGenerationError,
)
from .logging_config import setup_logging

__all__ = [
    "ReconciliationError",
    "ConfigurationError",
    "SourceReadError",
    "AnalysisError",
    "ReportGenerationError",
    "setup_logging",
]
