# ============================================================================
# src/bia_ingestion/__init__.py
# ============================================================================
"""
BIA Report Ingestion

Turns OCR transcripts of bioelectrical-impedance scale reports into
structured measurement records, then checks and repairs them against the
previous record.
"""

from .core.context import MeasurementRecord, SegmentalValue, ValidationIssue
from .extractors import FieldExtractor, extract_measurements
from .validators import (
    AutoCorrector,
    HistoryValidator,
    auto_correct,
    validate_against_previous,
)
from .core.pipeline import IngestionPipeline, IngestionResult

__version__ = "0.1.0"

__all__ = [
    "MeasurementRecord",
    "SegmentalValue",
    "ValidationIssue",
    "FieldExtractor",
    "extract_measurements",
    "HistoryValidator",
    "AutoCorrector",
    "validate_against_previous",
    "auto_correct",
    "IngestionPipeline",
    "IngestionResult",
]
