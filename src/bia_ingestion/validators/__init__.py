# ============================================================================
# src/bia_ingestion/validators/__init__.py
# ============================================================================
"""
Validators Package

Checks a freshly extracted record against the user's previous one:
- History validation (drift beyond stability thresholds)
- Auto-correction (known OCR failure modes, deterministic)
"""

from .history_validator import (
    HistoryValidator,
    validate_against_previous,
)
from .auto_corrector import (
    AutoCorrector,
    auto_correct,
)

__all__ = [
    'HistoryValidator',
    'validate_against_previous',
    'AutoCorrector',
    'auto_correct',
]
