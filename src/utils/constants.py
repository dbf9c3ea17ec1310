"""
Application constants for the HTTP dialect converter.

This module contains default values and wire-protocol constants used
throughout the application.
"""

from __future__ import annotations

# Wire protocol
PROTOCOL_VERSION = "v1"
SOURCE_FORMAT_TEXT = "text"
CONVERT_API_PATH = "/api/v1/convert"
SUCCESS_CODE = 0

# Endpoint pool configuration
ENDPOINT_SEPARATOR = ";"

# API configuration
DEFAULT_REQUEST_TIMEOUT = 5.0  # seconds

# Engine configuration
DEFAULT_TARGET_DIALECT = "doris"

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"
