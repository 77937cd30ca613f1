# ============================================================================
# src/bia_ingestion/constants/categories.py
# ============================================================================
"""
Category threshold tables.

Each table is an ordered list of (upper_bound_exclusive, label). The first
row whose bound exceeds the value wins; a bound of None closes the table.
"""

from typing import List, Optional, Tuple

CategoryTable = List[Tuple[Optional[float], str]]

BMI_CATEGORIES: CategoryTable = [
    (18.5, "Under"),
    (25.0, "Normal"),
    (30.0, "Over"),
    (None, "Over excessively"),
]

# The first two rows share a label; both are kept so the table matches the
# printed report's bands.
PBF_CATEGORIES: CategoryTable = [
    (10.0, "Normal"),
    (20.0, "Normal"),
    (25.0, "Mild obesity"),
    (None, "Obesity"),
]

# Longer labels first so "Skinny Fat" is not read as "Skinny"
BODY_SHAPES = [
    "Very Muscular",
    "Under Exercised",
    "Skinny Fat",
    "Overweight",
    "Muscular",
    "Skinny",
    "Normal",
    "Heavy",
    "Fit",
]


def categorize(value: float, table: CategoryTable) -> str:
    """Label of the first band whose bound exceeds value (0 lands in the first band)."""
    for bound, label in table:
        if bound is None or value < bound:
            return label
    return ""


def bmi_category(bmi: float) -> str:
    return categorize(bmi, BMI_CATEGORIES)


def pbf_category(body_fat_percentage: float) -> str:
    return categorize(body_fat_percentage, PBF_CATEGORIES)
