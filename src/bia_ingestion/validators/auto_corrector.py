# ============================================================================
# src/bia_ingestion/validators/auto_corrector.py
# ============================================================================
"""
Auto-Correction

Repairs OCR failure modes that history makes obvious:
- Dropped decimal point (9.1 read as 91) on scalar and segmental values
- BMI misread while weight held steady
- Segmental value missing where the previous record had one

The last one is an estimate, not a recovery. Filled values carry the
'estimated' provenance marker so callers can tell them from parsed ones.

Returns a new record when anything changed, otherwise None. The input record
is never modified. Re-run validation on the result: correction reduces
issues, it does not guarantee there are none left.
"""

import logging
from typing import Any, Dict, Optional

from ..config import correction_settings
from ..constants import (
    SEGMENTAL_METRICS,
    TRACKED_SCALAR_METRICS,
    bmi_category,
    pbf_category,
)
from ..core.context import MeasurementRecord, Provenance, SegmentalValue
from ..utils.numbers import relative_change, round_half_up

logger = logging.getLogger(__name__)


class AutoCorrector:
    """
    Deterministic record repair against the previous record.

    Steps run in order on a working set of overrides:
    1. Decimal shift (scalars, then segmental pounds)
    2. BMI anomaly
    3. Segmental fill-forward
    """

    def __init__(self, settings=None):
        self.settings = settings or correction_settings

    def correct(
        self,
        record: MeasurementRecord,
        previous: Optional[MeasurementRecord]
    ) -> Optional[MeasurementRecord]:
        """
        Propose a corrected copy of record.

        Args:
            record: Extracted record (left untouched)
            previous: Prior record; without one there is nothing to compare against

        Returns:
            New MeasurementRecord if any field changed, else None
        """
        if previous is None:
            return None

        overrides: Dict[str, Any] = {}
        provenance: Dict[str, Provenance] = {}

        # 1. Decimal point dropped (e.g. visceral fat 91 -> 9.1)
        for metric in TRACKED_SCALAR_METRICS:
            value = float(getattr(record, metric) or 0)
            fixed = self.fix_decimal_shift(value, float(getattr(previous, metric) or 0))
            if fixed is not None:
                overrides[metric] = fixed
                provenance[metric] = Provenance.CORRECTED
                logger.info(f"Auto-corrected {metric}: {value} -> {fixed}")

        for metric in SEGMENTAL_METRICS:
            segment: SegmentalValue = getattr(record, metric)
            fixed = self.fix_decimal_shift(segment.pounds, getattr(previous, metric).pounds)
            if fixed is not None:
                overrides[metric] = SegmentalValue(pounds=fixed, percent=segment.percent)
                provenance[metric] = Provenance.CORRECTED
                logger.info(f"Auto-corrected {metric}: {segment.pounds} lb -> {fixed} lb")

        # 2. BMI jumped while weight stayed put
        weight = overrides.get("weight", record.weight)
        bmi = overrides.get("bmi", record.bmi)
        fixed_bmi = self.fix_bmi(bmi, weight, previous.bmi, previous.weight)
        if fixed_bmi is not None and fixed_bmi != bmi:
            overrides["bmi"] = fixed_bmi
            provenance["bmi"] = Provenance.CORRECTED
            logger.info(f"Auto-corrected bmi: {bmi} -> {fixed_bmi}")

        # 3. Segment missing now but present last time
        if self.settings.ENABLE_FILL_FORWARD:
            for metric in SEGMENTAL_METRICS:
                current = overrides.get(metric, getattr(record, metric))
                prior: SegmentalValue = getattr(previous, metric)
                if current.pounds == 0 and prior.pounds > 0:
                    estimate = SegmentalValue(
                        pounds=prior.pounds * self.settings.FILL_FORWARD_GROWTH,
                        percent=prior.percent,
                    )
                    overrides[metric] = estimate
                    provenance[metric] = Provenance.ESTIMATED
                    logger.info(f"Auto-estimated {metric}: {estimate.pounds:.1f} lb")

        if not overrides:
            return None

        # Categories follow the values they are computed from
        if "bmi" in overrides:
            overrides["bmi_category"] = bmi_category(overrides["bmi"])
        if "body_fat_percentage" in overrides:
            overrides["pbf_category"] = pbf_category(overrides["body_fat_percentage"])

        return record.clone(provenance=provenance, **overrides)

    def fix_decimal_shift(self, value: float, previous: float) -> Optional[float]:
        """
        Undo a dropped decimal point.

        Returns:
            value / 10 when value is ~10x previous and the shifted value lands
            within tolerance of previous, else None
        """
        if value <= 0 or previous <= 0:
            return None

        ratio = value / previous
        if not (self.settings.DECIMAL_SHIFT_RATIO_MIN < ratio < self.settings.DECIMAL_SHIFT_RATIO_MAX):
            return None

        shifted = value / 10
        if abs(relative_change(shifted, previous)) < self.settings.DECIMAL_SHIFT_TOLERANCE:
            return shifted
        return None

    def fix_bmi(
        self,
        bmi: float,
        weight: float,
        previous_bmi: float,
        previous_weight: float
    ) -> Optional[float]:
        """
        Re-estimate BMI when it moved far more than weight did.

        Stable weight implies stable BMI, so the previous BMI is nudged up by a
        share of the (small) weight change magnitude instead of trusting the reading.
        """
        if weight <= 0 or bmi <= 0 or previous_bmi <= 0 or previous_weight <= 0:
            return None

        bmi_change = abs(relative_change(bmi, previous_bmi))
        weight_change = abs(relative_change(weight, previous_weight))

        if bmi_change > self.settings.BMI_ANOMALY_CHANGE and weight_change < self.settings.BMI_STABLE_WEIGHT_CHANGE:
            estimated = previous_bmi + weight_change * previous_bmi * self.settings.BMI_INTERPOLATION_FACTOR
            return round_half_up(estimated, 1)
        return None


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def auto_correct(
    record: MeasurementRecord,
    previous: Optional[MeasurementRecord]
) -> Optional[MeasurementRecord]:
    """
    Quick correction with the configured settings.

    Returns:
        Corrected copy, or None when there is nothing to fix
    """
    return AutoCorrector().correct(record, previous)
