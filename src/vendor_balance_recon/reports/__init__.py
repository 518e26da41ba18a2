"""Report generation."""

from .excel_generator import EvidenceReportGenerator

__all__ = ["EvidenceReportGenerator"]
