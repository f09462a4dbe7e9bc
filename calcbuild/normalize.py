"""
Input normalization for estimator fields.

Every numeric field read from a form, a request body or a stored project
passes through here. Nothing in this module raises: unparseable text becomes
0, negative and non-finite values become 0.
"""

import math
import re

# Longest leading number, the way a browser's parseFloat reads "12.5m" or "2,5"
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value, default: float = 0.0) -> float:
    """Parse a number from user input. None gives the default, junk gives 0."""
    if value is None:
        return default
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return 0.0
    text = str(value).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        pass
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0


def clamp_non_negative(value: float) -> float:
    """NaN, infinities and negatives all collapse to 0."""
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def normalize_number(value, default: float = 0.0) -> float:
    return clamp_non_negative(parse_number(value, default))


def normalize_label(value, fallback: str) -> str:
    """Trim a free-text label, falling back when nothing is left."""
    if value is None:
        return fallback
    return str(value).strip() or fallback
