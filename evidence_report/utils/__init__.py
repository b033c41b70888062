"""
Utility modules for evidence report generation.

This package contains the exception hierarchy and the export audit log
shared across the report engine.
"""

from evidence_report.utils.audit import ExportAuditLogger
from evidence_report.utils.exceptions import (
    ConfigError,
    EmptyEvidenceError,
    EvidenceReportError,
    ImageDecodeError,
    TemplateValidationError,
    UnsupportedFormatError,
)

__all__ = [
    # Exceptions
    "EvidenceReportError",
    "ConfigError",
    "TemplateValidationError",
    "EmptyEvidenceError",
    "UnsupportedFormatError",
    "ImageDecodeError",
    # Audit Logging
    "ExportAuditLogger",
]
