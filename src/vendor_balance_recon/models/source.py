"""Extracted report text handed in by the document-to-text step."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SourceDocument:
    """Full plain text of one report, line breaks preserved."""

    key: str
    text: str = ""
    original_name: Optional[str] = None
    kind: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.text)

    def preview(self, max_chars: int) -> str:
        """Leading slice of the text for display."""
        return self.text[:max_chars]

    def excerpt(self, max_chars: int) -> Optional[str]:
        """Leading slice sent to the reasoning step, None when empty."""
        return self.text[:max_chars] if self.text else None
