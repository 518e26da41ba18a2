"""
Vendor presence detection in noisy, PDF/OCR-derived report text.
"""

from typing import Optional
import logging

from ..config import MatchingSettings
from .normalizer import normalize, split_lines, token_overlap_score, tokenize

logger = logging.getLogger(__name__)


class VendorMatcher:
    """
    Decides whether a vendor appears in a document.

    An exact match on the whole normalized text is tried first. When it
    fails, each line is scored by the share of the vendor's significant
    tokens it contains, and the vendor counts as present when one line
    reaches the presence threshold.
    """

    def __init__(self, settings: Optional[MatchingSettings] = None):
        """
        Initialize the matcher.

        Args:
            settings: Matching settings (defaults when omitted)
        """
        self.settings = settings or MatchingSettings()

    def is_present(self, vendor_name: Optional[str], document_text: Optional[str]) -> bool:
        """
        Check whether the vendor is present in the document.

        Args:
            vendor_name: Vendor name as typed by the user
            document_text: Full extracted report text

        Returns:
            True when the vendor was found
        """
        if not vendor_name or not document_text:
            return False

        target = normalize(vendor_name)
        if not target:
            return False

        if target in normalize(document_text):
            logger.debug(f"Exact match for vendor '{vendor_name}'")
            return True

        tokens = tokenize(target, self.settings.token_length_cutoff)
        if not tokens:
            return False

        for line in split_lines(document_text):
            normalized_line = normalize(line)
            if not normalized_line:
                continue

            score = token_overlap_score(tokens, normalized_line)
            if score >= self.settings.presence_threshold:
                logger.debug(
                    f"Token match for vendor '{vendor_name}' (score {score:.2f}): "
                    f"{normalized_line[:80]}"
                )
                return True

        return False


def vendor_present(
    vendor_name: Optional[str],
    document_text: Optional[str],
    settings: Optional[MatchingSettings] = None,
) -> bool:
    """Shortcut for VendorMatcher(settings).is_present()."""
    return VendorMatcher(settings).is_present(vendor_name, document_text)
