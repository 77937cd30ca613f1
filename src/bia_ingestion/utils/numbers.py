# ============================================================================
# src/bia_ingestion/utils/numbers.py
# ============================================================================
"""
Numeric helpers shared by extraction and validation.
"""

import math
import re
from typing import Optional


def parse_number(value_str: Optional[str]) -> float:
    """
    Convert a captured numeric string to float.

    Handles OCR spacing inside signed values ("+ 0", "- 1.4").
    Anything unparseable becomes 0.0.
    """
    if not value_str:
        return 0.0
    cleaned = re.sub(r'\s+', '', value_str)
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def round_half_up(value: float, digits: int = 1) -> float:
    """Round half away from zero for positives (12.25 -> 12.3), like the printed report."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def relative_change(parsed: float, previous: float) -> float:
    """(parsed - previous) / previous; caller guarantees previous != 0."""
    return (parsed - previous) / previous
