"""Reasoning step that turns vendor indicators into a diagnosis."""

from .ai_client import AIClient, build_ai_client
from .service import (
    AnalysisStatus,
    DiagnosisClient,
    ReconciliationOutcome,
    ReconciliationService,
)

__all__ = [
    "AIClient",
    "build_ai_client",
    "AnalysisStatus",
    "DiagnosisClient",
    "ReconciliationOutcome",
    "ReconciliationService",
]
