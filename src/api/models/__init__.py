"""API request and response models."""

from __future__ import annotations

from .dialect_converter import (
    ConverterStatusResponse,
    ConvertSqlRequest,
    ConvertSqlResponse,
    ErrorResponse,
    PluginInfoResponse,
    ServiceUrlUpdate,
)

__all__ = [
    "ConverterStatusResponse",
    "ConvertSqlRequest",
    "ConvertSqlResponse",
    "ErrorResponse",
    "PluginInfoResponse",
    "ServiceUrlUpdate",
]
