# src/bia_ingestion/core/__init__.py

from .context import (
    MeasurementRecord,
    SegmentalValue,
    ValidationIssue,
    Provenance,
    Severity,
)

__all__ = [
    "MeasurementRecord",
    "SegmentalValue",
    "ValidationIssue",
    "Provenance",
    "Severity",
]
