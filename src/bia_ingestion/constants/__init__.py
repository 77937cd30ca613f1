# ============================================================================
# src/bia_ingestion/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from .categories import (
    BMI_CATEGORIES,
    PBF_CATEGORIES,
    BODY_SHAPES,
    categorize,
    bmi_category,
    pbf_category,
)
from .metrics import (
    MetricDefinition,
    METRIC_DEFINITIONS,
    TRACKED_SCALAR_METRICS,
    SEGMENTAL_METRICS,
    DERIVED_MASS_FIELDS,
    get_metric_label,
)
