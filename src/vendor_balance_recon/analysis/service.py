"""
Reconciliation service: gates on vendor presence, builds the deterministic
indicators and asks the reasoning service for a diagnosis.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Protocol
import json
import logging

from ..config import ReconConfig
from ..matching.engine import IndicatorAggregator
from ..matching.vendor_matcher import VendorMatcher
from ..models.evidence import VendorIndicators
from ..models.source import SourceDocument
from ..utils.exceptions import AnalysisError
from .prompts import SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)

LOCAL_RULE_MODEL = "local_rule"


class DiagnosisClient(Protocol):
    """Anything able to answer a system + user prompt pair."""

    model: str

    def complete(self, system_prompt: str, user_prompt: str) -> str: ...


class AnalysisStatus(Enum):
    """Outcome of a reconciliation run."""

    DIAGNOSIS_GENERATED = "diagnosis_generated"
    DIAGNOSIS_TEXT = "diagnosis_text"
    ANALYSIS_UNAVAILABLE = "analysis_unavailable"
    ANALYSIS_FAILED = "analysis_failed"


@dataclass
class ReconciliationOutcome:
    """Result of reconciling one vendor."""

    vendor: str
    status: AnalysisStatus
    indicators: VendorIndicators
    vendor_found: bool = True
    model: Optional[str] = None
    payload: Optional[dict[str, Any]] = None
    diagnosis: Optional[dict[str, Any]] = None
    raw_response: Optional[str] = None
    message: str = ""
    detail: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "vendor": self.vendor,
            "status": self.status.value,
            "vendor_found": self.vendor_found,
            "model": self.model,
            "message": self.message,
            "detail": self.detail,
            "payload": self.payload,
            "diagnosis": self.diagnosis,
            "raw_response": self.raw_response,
            "indicators": self.indicators.to_dict(),
        }


class ReconciliationService:
    """
    Runs one vendor reconciliation over the extracted report texts.

    The reasoning client is injected by the caller; without one the
    deterministic indicators are still produced.
    """

    def __init__(
        self,
        config: Optional[ReconConfig] = None,
        client: Optional[DiagnosisClient] = None,
    ):
        self.config = config or ReconConfig()
        self.client = client
        self.matcher = VendorMatcher(self.config.matching)
        self.aggregator = IndicatorAggregator(self.config)

    def reconcile(
        self, vendor: str, documents: Mapping[str, SourceDocument]
    ) -> ReconciliationOutcome:
        """
        Reconcile a vendor across the given report documents.

        Args:
            vendor: Vendor name
            documents: Source key to extracted document

        Returns:
            Reconciliation outcome
        """
        texts = {key: doc.text for key, doc in documents.items()}
        indicators = self.aggregator.build_indicators(vendor, texts)

        presence_key = self.config.sources.presence_source
        if not self.matcher.is_present(vendor, texts.get(presence_key, "")):
            logger.info(f"Vendor '{vendor}' not found in {presence_key}; skipping analysis")
            return self._vendor_not_found(vendor, indicators)

        payload = self.build_payload(vendor, documents, indicators)

        if self.client is None:
            return ReconciliationOutcome(
                vendor=vendor,
                status=AnalysisStatus.ANALYSIS_UNAVAILABLE,
                indicators=indicators,
                payload=payload,
                message=(
                    f"No reasoning client configured (set {self.config.analysis.api_key_env}); "
                    "only automatic indicators were produced."
                ),
            )

        model = getattr(self.client, "model", None)
        try:
            raw = self.client.complete(SYSTEM_PROMPT, build_user_prompt(vendor, payload))
        except AnalysisError as e:
            logger.error(f"Reasoning service call failed for '{vendor}': {e}")
            return ReconciliationOutcome(
                vendor=vendor,
                status=AnalysisStatus.ANALYSIS_FAILED,
                indicators=indicators,
                model=model,
                payload=payload,
                message="Failed to generate the reconciliation diagnosis.",
                detail=str(e),
            )

        diagnosis = self._parse_diagnosis(raw)
        return ReconciliationOutcome(
            vendor=vendor,
            status=(
                AnalysisStatus.DIAGNOSIS_GENERATED
                if diagnosis is not None
                else AnalysisStatus.DIAGNOSIS_TEXT
            ),
            indicators=indicators,
            model=model,
            payload=payload,
            diagnosis=diagnosis,
            raw_response=raw,
        )

    def build_payload(
        self,
        vendor: str,
        documents: Mapping[str, SourceDocument],
        indicators: VendorIndicators,
    ) -> dict[str, Any]:
        """Reports summary plus indicators, with texts cut to sample size."""
        analysis = self.config.analysis
        reports = {
            key: {
                "original_name": doc.original_name,
                "kind": doc.kind,
                "text_size": doc.size,
                "preview": doc.preview(analysis.preview_chars),
                "excerpt": doc.excerpt(analysis.excerpt_chars),
            }
            for key, doc in documents.items()
        }
        indicator_data = indicators.to_dict()
        return {
            "vendor": vendor,
            "reports": reports,
            "vendor_indicators": indicator_data["vendor_indicators"],
            "automatic_balance_assessment": indicator_data["automatic_balance_assessment"],
        }

    def _parse_diagnosis(self, raw: str) -> Optional[dict[str, Any]]:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Diagnosis is not valid JSON, keeping raw text: {e}")
            return None
        if not isinstance(parsed, dict):
            logger.warning("Diagnosis JSON is not an object, keeping raw text")
            return None
        return parsed

    def _vendor_not_found(
        self, vendor: str, indicators: VendorIndicators
    ) -> ReconciliationOutcome:
        """Diagnosis produced locally when the ledger has no vendor entries."""
        presence_key = self.config.sources.presence_source
        label = self.config.sources.label_for(presence_key)

        diagnosis = {
            "executive_summary": (
                f'No entries for vendor "{vendor}" were found in the {label} provided.'
            ),
            "balance_composition": [
                {
                    "source": presence_key,
                    "description": (
                        f"{label} analysed, but the vendor does not appear in any entry."
                    ),
                    "estimated_value": 0,
                    "notes": (
                        f"Check whether the {label} is filtered for the right period "
                        "and company, or whether the vendor name is misspelled."
                    ),
                }
            ],
            "discrepancies": [
                {
                    "description": f"Vendor does not appear in any entry of the {label}.",
                    "type": "vendor_without_entries",
                    "references": [f"Vendor: {vendor}", f"Report: {label}"],
                    "severity": "high",
                }
            ],
            "orphan_payments": [],
            "open_items_without_counterpart": [],
            "recommended_steps": [
                "Check that the vendor name matches the one registered in the accounting system.",
                f"Confirm the {label} was issued for the right company and period.",
                f"If the vendor should have entries, request a correctly filtered {label}.",
            ],
            "general_notes": (
                "Detailed reconciliation cannot proceed until the reports are consistent."
            ),
        }

        return ReconciliationOutcome(
            vendor=vendor,
            status=AnalysisStatus.DIAGNOSIS_GENERATED,
            indicators=indicators,
            vendor_found=False,
            model=LOCAL_RULE_MODEL,
            diagnosis=diagnosis,
            message=f"Vendor not found in the {label}; diagnosis generated without the reasoning service.",
        )
