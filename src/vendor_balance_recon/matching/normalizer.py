"""
Text normalization and token scoring shared by vendor matching and
line extraction.
"""

from typing import Optional
import re
import unicodedata

NON_WORD_PATTERN = re.compile(r"[^\w\s]")
WHITESPACE_PATTERN = re.compile(r"\s+")
LINE_SPLIT_PATTERN = re.compile(r"\r?\n")


def normalize(text: Optional[str]) -> str:
    """
    Canonicalize text for comparison only, never for display.

    Lowercases, strips accents, replaces punctuation with spaces and
    collapses every whitespace run (line breaks included) to a single
    space. Returns "" for None or empty input.
    """
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFD", str(text).lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    stripped = NON_WORD_PATTERN.sub(" ", stripped)
    return WHITESPACE_PATTERN.sub(" ", stripped).strip()


def tokenize(name: Optional[str], length_cutoff: int = 2) -> list[str]:
    """
    Split a name into its significant tokens.

    Args:
        name: Raw or normalized name
        length_cutoff: Tokens must be strictly longer than this

    Returns:
        Tokens in order of appearance
    """
    return [t for t in normalize(name).split(" ") if len(t) > length_cutoff]


def token_overlap_score(tokens: list[str], normalized_line: str) -> float:
    """Fraction of tokens found as substrings of a normalized line."""
    if not tokens:
        return 0.0
    found = sum(1 for token in tokens if token in normalized_line)
    return found / len(tokens)


def split_lines(text: Optional[str]) -> list[str]:
    """Split raw text on line terminators, keeping empty lines."""
    if not text:
        return []
    return LINE_SPLIT_PATTERN.split(str(text))
