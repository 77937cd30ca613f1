# ============================================================================
# src/bia_ingestion/config/thresholds_config.py
# ============================================================================
"""
Drift Thresholds
- Relative change that raises a warning
- Relative change that raises an error
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

class ThresholdSettings(BaseSettings):
    WARNING_CHANGE_THRESHOLD: float = Field(
        default=0.10,
        ge=0.0, le=1.0,
        description="Relative change (fraction of previous value) above which a metric is flagged as a warning"
    )
    ERROR_CHANGE_THRESHOLD: float = Field(
        default=0.50,
        ge=0.0, le=10.0,
        description="Relative change above which a metric is flagged as an error"
    )

    @model_validator(mode="after")
    def check_ordering(self) -> "ThresholdSettings":
        if self.WARNING_CHANGE_THRESHOLD >= self.ERROR_CHANGE_THRESHOLD:
            raise ValueError(
                "WARNING_CHANGE_THRESHOLD must be lower than ERROR_CHANGE_THRESHOLD"
            )
        return self

threshold_settings = ThresholdSettings()
