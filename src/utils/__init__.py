"""
Utility modules for the HTTP dialect converter.

This package provides exceptions, constants, metrics and logging
configuration used throughout the application.
"""

from __future__ import annotations

from .constants import (
    CONVERT_API_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TARGET_DIALECT,
    ENDPOINT_SEPARATOR,
    LOG_FORMAT,
    PROTOCOL_VERSION,
    SOURCE_FORMAT_TEXT,
    SUCCESS_CODE,
)
from .exceptions import (
    ConfigurationError,
    ConversionServiceError,
    DialectConverterError,
    ValidationError,
)
from .logging_config import RequestIDFilter, setup_logging

__all__ = [
    "CONVERT_API_PATH",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_TARGET_DIALECT",
    "ENDPOINT_SEPARATOR",
    "LOG_FORMAT",
    "PROTOCOL_VERSION",
    "SOURCE_FORMAT_TEXT",
    "SUCCESS_CODE",
    "ConfigurationError",
    "ConversionServiceError",
    "DialectConverterError",
    "ValidationError",
    "RequestIDFilter",
    "setup_logging",
]
