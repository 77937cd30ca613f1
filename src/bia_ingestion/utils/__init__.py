# ============================================================================
# src/bia_ingestion/utils/__init__.py
# ============================================================================
"""
Utility modules for BIA ingestion.
"""

from .exceptions import (
    BIAIngestionError,
    ConfigurationError,
    RecordFormatError,
)

from .logging import (
    setup_logging,
    get_logger,
    JsonFormatter,
    log_performance,
)

from .numbers import (
    parse_number,
    round_half_up,
    relative_change,
)

__all__ = [
    # Exceptions
    'BIAIngestionError',
    'ConfigurationError',
    'RecordFormatError',
    # Logging
    'setup_logging',
    'get_logger',
    'JsonFormatter',
    'log_performance',
    # Numbers
    'parse_number',
    'round_half_up',
    'relative_change',
]
