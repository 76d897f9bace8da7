"""
Utility helpers used by the migration tool.

This subpackage exposes the structured event reports, the exception types,
the name-based category join and the category map CSV writer.
"""

from .errors import (
    ERRORS,
    APIError,
    FatalPayloadError,
    MigrationError,
    PreFlightCheckError,
    RecordFormatError,
    TransportError,
    report_error,
    report_ok,
    report_warning,
)
from .mapping_report import write_category_map_csv

__all__ = [
    "ERRORS",
    "APIError",
    "FatalPayloadError",
    "MigrationError",
    "PreFlightCheckError",
    "RecordFormatError",
    "TransportError",
    "report_error",
    "report_ok",
    "report_warning",
    "write_category_map_csv",
]
