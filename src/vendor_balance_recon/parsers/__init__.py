"""Parsers for amounts and extracted report texts."""

from .amount_parser import parse_amount
from .source_reader import SourceReader

__all__ = ["parse_amount", "SourceReader"]
