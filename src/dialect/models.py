"""Data models for dialect conversion requests and the service wire protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.config.feature_flags import FeatureFlags
from src.utils.constants import PROTOCOL_VERSION, SOURCE_FORMAT_TEXT


@dataclass(frozen=True)
class ConversionRequest:
    """A single conversion request; immutable for the duration of a call."""

    sql: str
    source_dialect: str
    case_sensitive: bool = False


@dataclass
class SessionContext:
    """Per-session values the host engine passes with each query."""

    sql_dialect: str
    case_sensitive: bool = False
    enable_multi_dialect_convert_service: bool = field(
        default_factory=lambda: FeatureFlags.ENABLE_MULTI_DIALECT_CONVERT_SERVICE
    )


class ConvertRequestBody(BaseModel):
    """JSON body posted to a conversion service."""

    version: str = PROTOCOL_VERSION
    sql: str
    from_: str = Field(..., alias="from")
    to: str
    source: str = SOURCE_FORMAT_TEXT
    case_sensitive: Literal["0", "1"] = "0"

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_request(
        cls,
        request: ConversionRequest,
        target_dialect: str,
        version: str = PROTOCOL_VERSION,
    ) -> "ConvertRequestBody":
        return cls(
            version=version,
            sql=request.sql,
            from_=request.source_dialect,
            to=target_dialect,
            case_sensitive="1" if request.case_sensitive else "0",
        )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class ConvertResponseBody(BaseModel):
    """JSON body returned by a conversion service."""

    version: Optional[str] = None
    data: Optional[str] = None
    code: int
    message: Optional[str] = None
