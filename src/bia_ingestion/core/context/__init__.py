# src/bia_ingestion/core/context/__init__.py

from .enums import Provenance, Severity
from .measurement_record import MeasurementRecord, SegmentalValue
from .validation_issue import ValidationIssue

__all__ = [
    "MeasurementRecord",
    "SegmentalValue",
    "ValidationIssue",
    "Provenance",
    "Severity",
]
