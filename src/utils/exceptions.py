"""
Custom exception hierarchy for the HTTP dialect converter.

This module defines the exceptions raised inside the converter. Problems with
the remote conversion service are caught at the HTTP client boundary and never
reach callers of ``convert_sql``; configuration problems surface at load time.
"""

from __future__ import annotations


class DialectConverterError(Exception):
    """Base exception for all dialect converter errors."""

    pass


class ConfigurationError(DialectConverterError):
    """Raised when configuration is invalid or missing."""

    pass


class ConversionServiceError(DialectConverterError):
    """Raised when the conversion service answers without a usable result."""

    def __init__(self, message: str, code: int | None = None):
        self.code = code
        super().__init__(message)


class ValidationError(DialectConverterError):
    """Raised when input validation fails."""

    pass
