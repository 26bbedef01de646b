"""
Custom exceptions for the roll repair application.

All application-specific exceptions inherit from EcrollError. The repair
and extraction core never raises for malformed input; these are raised
by the surrounding shell (configuration, rule files, input and export).
"""

from __future__ import annotations

from typing import Optional, Any


class EcrollError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (for debugging)
        recoverable: Whether the error can potentially be recovered from
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(EcrollError):
    """
    Invalid or missing configuration.

    Examples:
        - Non-positive worker count
        - Rules file path that does not exist
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details=details, recoverable=False)


class RuleSetError(EcrollError):
    """
    A glyph rule file could not be loaded.

    Examples:
        - Malformed JSON
        - Anomaly key longer than one code point
        - Regular expression that does not compile
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        pattern: Optional[str] = None
    ):
        details = {}
        if source:
            details["source"] = source
        if pattern:
            details["pattern"] = pattern
        super().__init__(message, details=details, recoverable=False)


class InputReadError(EcrollError):
    """Failed to read pasted roll text from a file."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        details = {"file_path": file_path} if file_path else None
        super().__init__(message, details=details, recoverable=False)


class ExportError(EcrollError):
    """
    Failed to write review output.

    Examples:
        - File write permission denied
        - Disk full
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        export_format: Optional[str] = None
    ):
        details = {}
        if file_path:
            details["file_path"] = file_path
        if export_format:
            details["format"] = export_format
        super().__init__(message, details=details, recoverable=True)
