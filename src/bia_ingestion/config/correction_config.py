# ============================================================================
# src/bia_ingestion/config/correction_config.py
# ============================================================================
"""
Auto-Correction Settings
- Decimal-shift detection window
- BMI anomaly repair
- Segmental fill-forward estimate
"""

from pydantic import Field
from pydantic_settings import BaseSettings

class CorrectionSettings(BaseSettings):
    DECIMAL_SHIFT_RATIO_MIN: float = Field(
        default=9.0,
        gt=1.0,
        description="Lower (exclusive) bound of parsed/previous ratio treated as a dropped decimal point"
    )
    DECIMAL_SHIFT_RATIO_MAX: float = Field(
        default=11.0,
        gt=1.0,
        description="Upper (exclusive) bound of parsed/previous ratio treated as a dropped decimal point"
    )
    DECIMAL_SHIFT_TOLERANCE: float = Field(
        default=0.10,
        ge=0.0, le=1.0,
        description="parsed/10 must land within this fraction of the previous value"
    )
    BMI_ANOMALY_CHANGE: float = Field(
        default=0.50,
        ge=0.0,
        description="BMI relative change considered a misread when weight is stable"
    )
    BMI_STABLE_WEIGHT_CHANGE: float = Field(
        default=0.05,
        ge=0.0, le=1.0,
        description="Weight relative change below which weight counts as stable"
    )
    BMI_INTERPOLATION_FACTOR: float = Field(
        default=0.5,
        ge=0.0, le=1.0,
        description="Share of the weight change carried over to the repaired BMI"
    )
    FILL_FORWARD_GROWTH: float = Field(
        default=1.05,
        gt=0.0,
        description="Multiplier applied to the previous segmental pounds when estimating a missing value"
    )
    ENABLE_FILL_FORWARD: bool = Field(
        default=True,
        description="Estimate missing segmental values from the previous record (marked as estimated)"
    )

correction_settings = CorrectionSettings()
