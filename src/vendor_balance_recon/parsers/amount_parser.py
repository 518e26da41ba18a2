"""
Parser for Brazilian-locale currency figures ("42.151,99").
"""

from typing import Optional
import math
import re

_DISALLOWED_CHARS = re.compile(r"[^\d,-]", re.ASCII)
# Longest leading float literal, mirroring a lenient number parse
_LEADING_FLOAT = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


def parse_amount(raw: Optional[str]) -> Optional[float]:
    """
    Convert a locale formatted amount to a float.

    Dots are thousands separators and the comma is the decimal separator.
    Text that does not yield a finite number returns None instead of
    raising.

    Args:
        raw: Amount text such as "1.234.567,00"

    Returns:
        Parsed value or None
    """
    if not raw:
        return None

    cleaned = _DISALLOWED_CHARS.sub("", str(raw).replace(".", ""))
    cleaned = cleaned.replace(",", ".", 1)

    match = _LEADING_FLOAT.match(cleaned)
    if not match:
        return None

    value = float(match.group(0))
    return value if math.isfinite(value) else None
