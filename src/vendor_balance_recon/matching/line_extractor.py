"""
Extraction of vendor lines and their monetary values from report text.
"""

from typing import Optional
import logging
import re

from ..config import MatchingSettings
from ..models.evidence import LineMatch
from .normalizer import normalize, split_lines, token_overlap_score, tokenize

logger = logging.getLogger(__name__)


class LineExtractor:
    """
    Collects every line that mentions the vendor.

    Uses the same token score as VendorMatcher but accepts lines at the
    lower extraction threshold, since document conversion often wraps a
    vendor name across lines.
    """

    def __init__(self, settings: Optional[MatchingSettings] = None):
        """
        Initialize the extractor.

        Args:
            settings: Matching settings (defaults when omitted)
        """
        self.settings = settings or MatchingSettings()
        self.amount_regex = re.compile(self.settings.amount_pattern, re.ASCII)

    def extract(
        self, document_text: Optional[str], vendor_name: Optional[str]
    ) -> list[LineMatch]:
        """
        Extract the vendor's lines in document order.

        Args:
            document_text: Full extracted report text
            vendor_name: Vendor name as typed by the user

        Returns:
            One LineMatch per accepted line
        """
        if not document_text or not vendor_name:
            return []

        tokens = tokenize(vendor_name, self.settings.token_length_cutoff)
        if not tokens:
            return []

        matches: list[LineMatch] = []

        for raw_line in split_lines(document_text):
            normalized_line = normalize(raw_line)
            if not normalized_line:
                continue

            score = token_overlap_score(tokens, normalized_line)
            if score < self.settings.extraction_threshold:
                continue

            values = self.find_amounts(raw_line)
            matches.append(
                LineMatch(
                    original_line=raw_line.strip(),
                    normalized_line=normalized_line,
                    score=score,
                    monetary_values=values,
                    last_value=values[-1] if values else None,
                )
            )

        logger.debug(f"Extracted {len(matches)} line(s) for vendor '{vendor_name}'")
        return matches

    def find_amounts(self, line: str) -> list[str]:
        """All non-overlapping currency figures in a raw line, left to right."""
        return [m.group(0) for m in self.amount_regex.finditer(line)]


def extract_vendor_lines(
    document_text: Optional[str],
    vendor_name: Optional[str],
    settings: Optional[MatchingSettings] = None,
) -> list[LineMatch]:
    """Shortcut for LineExtractor(settings).extract()."""
    return LineExtractor(settings).extract(document_text, vendor_name)
