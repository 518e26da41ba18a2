"""Custom exceptions for the reconciliation application."""


class ReconciliationError(Exception):
    """Base exception for reconciliation errors."""

    pass


class ConfigurationError(ReconciliationError):
    """Error in configuration."""

    pass


class SourceReadError(ReconciliationError):
    """Error reading an extracted report text."""

    pass


class AnalysisError(ReconciliationError):
    """Error calling the reasoning service."""

    pass


class ReportGenerationError(ReconciliationError):
    """Error generating Excel report."""

    pass
