# ============================================================================
# src/bia_ingestion/config/pipeline_config.py
# ============================================================================
"""
Pipeline Settings
- Auto-correction toggle
- Maximum gap between records compared against each other
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

class PipelineSettings(BaseSettings):
    ENABLE_AUTO_CORRECTION: bool = Field(
        default=True,
        description="Attempt OCR repair when validation finds issues"
    )
    MAX_PAIR_GAP_DAYS: Optional[int] = Field(
        default=30,
        ge=0,
        description="Skip validation between records further apart than this many days. None disables the check."
    )

pipeline_settings = PipelineSettings()
