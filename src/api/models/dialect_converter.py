"""API models for the dialect converter endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard API error response."""

    error: str = Field(..., description="Error code or type")
    message: str = Field(..., description="Human-readable error message")
    request_id: Optional[str] = Field(None, description="Request ID for tracing")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Additional error context"
    )


class PluginInfoResponse(BaseModel):
    name: str
    type: str
    description: str
    version: str


class ConverterStatusResponse(BaseModel):
    """Current converter configuration as seen by the next request."""

    plugin: PluginInfoResponse
    dialects: List[str] = Field(..., description="Accepted source dialect ids")
    mode: str = Field(..., description="Endpoint mode: fixed, pool or none")
    service_url: str = Field("", description="Runtime override URL")
    endpoints: List[str] = Field(default_factory=list, description="Service pool")
    target_dialect: str = Field(..., description="Native dialect sent as 'to'")


class ServiceUrlUpdate(BaseModel):
    service_url: str = Field("", description="Override URL; empty string clears it")


class ConvertSqlRequest(BaseModel):
    """SQL conversion request with an explicit session context."""

    sql: str = Field(..., description="SQL text in the source dialect")
    dialect: str = Field(..., description="Source dialect id (e.g., presto)")
    case_sensitive: bool = Field(False, description="Identifier case sensitivity")
    enable_multi_dialect_convert_service: Optional[bool] = Field(
        None, description="Allow the service pool; defaults to the feature flag"
    )


class ConvertSqlResponse(BaseModel):
    sql: str = Field(..., description="Translated SQL, or the original on fallback")
    converted: bool = Field(..., description="Whether the text was changed")
    configured: bool = Field(..., description="Whether any conversion service is set")
