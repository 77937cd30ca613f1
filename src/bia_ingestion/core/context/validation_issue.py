# ============================================================================
# src/bia_ingestion/core/context/validation_issue.py
# ============================================================================
"""
Single drift finding between a parsed record and the previous one
"""

from dataclasses import dataclass
from typing import Any, Dict

from .enums import Severity

@dataclass(frozen=True)
class ValidationIssue:
    metric: str
    parsed_value: float
    previous_value: float
    percent_change: float  # in percent, -100 when the value disappeared
    severity: Severity
    label: str = ""

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "label": self.label or self.metric,
            "parsed_value": self.parsed_value,
            "previous_value": self.previous_value,
            "percent_change": round(self.percent_change, 2),
            "severity": self.severity.value,
        }
