"""
Custom exception classes for evidence report generation.

This module defines the exception hierarchy for the error conditions that
can surface from report composition. Most rendering failures (unreadable
images, unknown blocks) are absorbed into the visual output and never
reach the caller; the exceptions below cover what cannot be absorbed.
"""


class EvidenceReportError(Exception):
    """
    Base exception class for all evidence report errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the base exception.

        Args:
            message: Error message describing what went wrong
            details: Optional dictionary with additional context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return a string representation of the exception."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigError(EvidenceReportError):
    """
    Raised when a report configuration or manifest cannot be built.

    Attributes:
        source: Optional path of the file that was being loaded
        cause: Optional underlying exception (validation or parse error)
    """

    def __init__(self, message: str, source: str = None, cause: Exception = None):
        self.source = source
        self.cause = cause

        details = {}
        if source:
            details["source"] = source
        if cause:
            details["cause"] = str(cause)
            details["cause_type"] = type(cause).__name__

        super().__init__(f"Invalid configuration: {message}", details)


class TemplateValidationError(EvidenceReportError):
    """
    Raised when the selected template cannot be rendered.

    The main case is a configuration that selects the ``custom`` template
    without attaching a custom template model.
    """

    def __init__(self, template_id: str, reason: str = None):
        self.template_id = template_id
        self.reason = reason or "Template is not renderable"

        super().__init__(
            f"Template '{template_id}' rejected. {self.reason}",
            {"template_id": template_id, "reason": self.reason},
        )


class EmptyEvidenceError(EvidenceReportError):
    """Raised when a report is requested for an empty evidence list."""

    def __init__(self, output_format: str = None):
        self.output_format = output_format
        details = {"format": output_format} if output_format else {}
        super().__init__("No evidence items to report", details)


class UnsupportedFormatError(EvidenceReportError):
    """
    Raised when an output encoding other than PDF or DOCX is requested.

    Attributes:
        output_format: The format string that was requested
        supported: The list of supported format strings
    """

    def __init__(self, output_format: str, supported: list = None):
        self.output_format = output_format
        self.supported = supported or ["pdf", "docx"]

        super().__init__(
            f"Unsupported output format: {output_format}",
            {"format": output_format, "supported": "/".join(self.supported)},
        )


class ImageDecodeError(EvidenceReportError):
    """
    Describes an image that could not be read or decoded.

    Image failures never abort a report. The loader captures this error
    in its result object so callers can log it and draw a placeholder.

    Attributes:
        source: Short description of the image source
        reason: Specific reason for the failure
        cause: Optional underlying exception
    """

    def __init__(self, source: str, reason: str = None, cause: Exception = None):
        self.source = source
        self.reason = reason or "Image could not be decoded"
        self.cause = cause

        details = {"source": source, "reason": self.reason}
        if cause:
            details["cause_type"] = type(cause).__name__

        super().__init__(f"Image unavailable: {self.reason}", details)
