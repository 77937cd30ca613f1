# ============================================================================
# src/bia_ingestion/extractors/__init__.py
# ============================================================================
"""
Extractors Package

Turns OCR text of a BIA report into a MeasurementRecord:
- Field cascade extraction (labels, unit glyphs, fallbacks)
- Segmental section parsing (positional two-column tables)
"""

from .field_extractor import (
    FieldExtractor,
    FieldRule,
    TraceEvent,
    TraceCallback,
    extract_measurements,
    logging_tracer,
)
from .segmental_parser import (
    SegmentalLayout,
    SegmentalSection,
    assign_by_position,
    detect_segmental_layout,
    parse_segmental_section,
)

__all__ = [
    'FieldExtractor',
    'FieldRule',
    'TraceEvent',
    'TraceCallback',
    'extract_measurements',
    'logging_tracer',
    'SegmentalLayout',
    'SegmentalSection',
    'assign_by_position',
    'detect_segmental_layout',
    'parse_segmental_section',
]
