# ============================================================================
# src/bia_ingestion/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for BIA ingestion.

Parsing and validation never raise; these cover the outer surfaces
(configuration, record interchange, command line).
"""


class BIAIngestionError(Exception):
    """Base exception for all BIA ingestion errors."""
    pass


class ConfigurationError(BIAIngestionError):
    """Invalid configuration."""
    pass


class RecordFormatError(BIAIngestionError):
    """Serialized measurement record cannot be loaded."""
    pass
