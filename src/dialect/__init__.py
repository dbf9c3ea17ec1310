"""
HTTP dialect conversion.

Forwards foreign-dialect SQL to external conversion services and returns the
translated text, falling back to the original text when no service helps.
"""

from __future__ import annotations

from .base import DialectConverter, PluginInfo
from .converter import ConvertCall, HttpDialectConverter
from .endpoints import (
    EndpointSelection,
    FixedEndpoint,
    NoEndpoint,
    PoolEndpoints,
    RotationCursor,
    parse_endpoint_pool,
    pool_endpoint_url,
    resolve_selection,
)
from .http_client import HttpDialectClient
from .models import ConversionRequest, SessionContext

__all__ = [
    "ConversionRequest",
    "ConvertCall",
    "DialectConverter",
    "EndpointSelection",
    "FixedEndpoint",
    "HttpDialectClient",
    "HttpDialectConverter",
    "NoEndpoint",
    "PluginInfo",
    "PoolEndpoints",
    "RotationCursor",
    "SessionContext",
    "parse_endpoint_pool",
    "pool_endpoint_url",
    "resolve_selection",
]
