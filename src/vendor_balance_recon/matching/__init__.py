"""Vendor matching, line extraction and indicator aggregation."""

from .normalizer import normalize, tokenize, token_overlap_score, split_lines
from .vendor_matcher import VendorMatcher, vendor_present
from .line_extractor import LineExtractor, extract_vendor_lines
from .engine import IndicatorAggregator, build_indicators

__all__ = [
    "normalize",
    "tokenize",
    "token_overlap_score",
    "split_lines",
    "VendorMatcher",
    "vendor_present",
    "LineExtractor",
    "extract_vendor_lines",
    "IndicatorAggregator",
    "build_indicators",
]
