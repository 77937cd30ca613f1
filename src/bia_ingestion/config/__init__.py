# ============================================================================
# src/bia_ingestion/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .thresholds_config import threshold_settings, ThresholdSettings
from .correction_config import correction_settings, CorrectionSettings
from .pipeline_config import pipeline_settings, PipelineSettings
from .logging_config import logging_settings, LoggingSettings
