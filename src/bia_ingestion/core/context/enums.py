# ============================================================================
# src/bia_ingestion/core/context/enums.py
# ============================================================================
"""
Record Enums
- Issue severity
- Field provenance
"""

from enum import Enum

class Severity(str, Enum):
    WARNING = "warning"   # 10% - 50% change
    ERROR = "error"       # > 50% change, or value disappeared

class Provenance(str, Enum):
    DERIVED = "derived"       # computed from other parsed fields
    CORRECTED = "corrected"   # OCR error repaired against history
    ESTIMATED = "estimated"   # filled forward from history, not read from text
