# ============================================================================
# src/bia_ingestion/validators/history_validator.py
# ============================================================================
"""
History Validation

Flags metrics that moved too far since the previous record.

Example (defaults):
- Weight 170 → 172        PASS (1.2%)
- Weight 170 → 195        WARNING (14.7%)
- Visceral fat 9 → 91     ERROR (911%)
- Weight 170 → 0          ERROR (value disappeared)
"""

import logging
from typing import List, Optional

from ..config import threshold_settings
from ..constants import SEGMENTAL_METRICS, TRACKED_SCALAR_METRICS, get_metric_label
from ..core.context import MeasurementRecord, Severity, ValidationIssue
from ..utils.numbers import relative_change

logger = logging.getLogger(__name__)


class HistoryValidator:
    """
    Compare a parsed record with the chronologically previous one.

    A metric disappearing (previous > 0, parsed 0) is always an error.
    Otherwise comparisons involving a zero are skipped. Segmental values are
    compared on pounds only, and a segment appearing for the first time is
    never flagged.
    """

    def __init__(
        self,
        warning_threshold: Optional[float] = None,
        error_threshold: Optional[float] = None
    ):
        self.warning_threshold = (
            threshold_settings.WARNING_CHANGE_THRESHOLD
            if warning_threshold is None else warning_threshold
        )
        self.error_threshold = (
            threshold_settings.ERROR_CHANGE_THRESHOLD
            if error_threshold is None else error_threshold
        )

    def validate(
        self,
        parsed: MeasurementRecord,
        previous: Optional[MeasurementRecord] = None
    ) -> List[ValidationIssue]:
        """
        Check all tracked metrics.

        Args:
            parsed: Freshly extracted (or corrected) record
            previous: User's most recent prior record, None for a first entry

        Returns:
            Issues in metric order, empty when nothing drifted
        """
        if previous is None:
            return []

        issues: List[ValidationIssue] = []

        for metric in TRACKED_SCALAR_METRICS:
            issue = self._check_scalar(
                metric,
                float(getattr(parsed, metric) or 0),
                float(getattr(previous, metric) or 0),
            )
            if issue:
                issues.append(issue)

        for metric in SEGMENTAL_METRICS:
            issue = self._check_segment(
                metric,
                getattr(parsed, metric).pounds,
                getattr(previous, metric).pounds,
            )
            if issue:
                issues.append(issue)

        for issue in issues:
            logger.warning(
                f"{issue.metric}: {issue.previous_value} → {issue.parsed_value} "
                f"({issue.percent_change:+.1f}%, {issue.severity.value})"
            )
        return issues

    def _check_scalar(self, metric: str, parsed: float, previous: float) -> Optional[ValidationIssue]:
        if parsed == 0 or previous == 0:
            if previous > 0 and parsed == 0:
                return self._disappeared(metric, previous)
            return None
        return self._compare(metric, parsed, previous)

    def _check_segment(self, metric: str, parsed: float, previous: float) -> Optional[ValidationIssue]:
        if parsed == 0 and previous == 0:
            return None
        if previous > 0 and parsed == 0:
            return self._disappeared(metric, previous)
        # New segment data appearing is expected
        if previous == 0:
            return None
        return self._compare(metric, parsed, previous)

    def _compare(self, metric: str, parsed: float, previous: float) -> Optional[ValidationIssue]:
        change = relative_change(parsed, previous)
        magnitude = abs(change)
        if magnitude <= self.warning_threshold:
            return None
        severity = Severity.ERROR if magnitude > self.error_threshold else Severity.WARNING
        return ValidationIssue(
            metric=metric,
            parsed_value=parsed,
            previous_value=previous,
            percent_change=change * 100,
            severity=severity,
            label=get_metric_label(metric),
        )

    @staticmethod
    def _disappeared(metric: str, previous: float) -> ValidationIssue:
        return ValidationIssue(
            metric=metric,
            parsed_value=0.0,
            previous_value=previous,
            percent_change=-100.0,
            severity=Severity.ERROR,
            label=get_metric_label(metric),
        )


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def validate_against_previous(
    parsed: MeasurementRecord,
    previous: Optional[MeasurementRecord]
) -> List[ValidationIssue]:
    """
    Quick validation with the configured thresholds.

    Returns:
        List of ValidationIssue, empty without a previous record
    """
    return HistoryValidator().validate(parsed, previous)
