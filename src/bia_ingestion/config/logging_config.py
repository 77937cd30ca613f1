# ============================================================================
# src/bia_ingestion/config/logging_config.py
# ============================================================================
"""
Logging Settings
- Log level
- JSON output
- Extraction tracing
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

class LoggingSettings(BaseSettings):
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Emit log records as JSON lines"
    )
    LOG_FILE: Optional[Path] = Field(
        default=None,
        description="Optional file that receives a copy of all log output"
    )
    TRACE_EXTRACTION: bool = Field(
        default=False,
        description="Log which pattern resolved each field (DEBUG level)"
    )

logging_settings = LoggingSettings()
