"""Dialect converter endpoints: status, runtime override and ad-hoc conversion."""

from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from src.config.global_variables import GlobalVariables
from src.config.sql_dialects import resolve_dialect
from src.dialect.converter import HttpDialectConverter
from src.dialect.endpoints import FixedEndpoint, NoEndpoint, resolve_selection
from src.dialect.models import SessionContext
from src.utils import metrics
from src.utils.exceptions import ValidationError
from ..models.dialect_converter import (
    ConverterStatusResponse,
    ConvertSqlRequest,
    ConvertSqlResponse,
    PluginInfoResponse,
    ServiceUrlUpdate,
)

router = APIRouter(prefix="/api/v1/dialect-converter", tags=["dialect-converter"])


def get_converter(request: Request) -> HttpDialectConverter:
    """Converter instance created at application startup."""
    return request.app.state.converter


def _status(converter: HttpDialectConverter) -> ConverterStatusResponse:
    service_url = GlobalVariables.get_sql_converter_service_url()
    selection = resolve_selection(service_url, converter.endpoints)
    if isinstance(selection, NoEndpoint):
        mode = "none"
    elif isinstance(selection, FixedEndpoint):
        mode = "fixed"
    else:
        mode = "pool"

    info = converter.plugin_info
    return ConverterStatusResponse(
        plugin=PluginInfoResponse(
            name=info.name,
            type=info.type,
            description=info.description,
            version=info.version,
        ),
        dialects=sorted(d.value for d in converter.accept_dialects()),
        mode=mode,
        service_url=service_url,
        endpoints=list(converter.endpoints),
        target_dialect=converter.settings.target_dialect,
    )


@router.get("", response_model=ConverterStatusResponse)
def get_converter_status(
    converter: HttpDialectConverter = Depends(get_converter),
) -> ConverterStatusResponse:
    """Return plugin info, accepted dialects and the active endpoint mode."""
    return _status(converter)


@router.get("/dialects", response_model=List[str])
def get_dialects(
    converter: HttpDialectConverter = Depends(get_converter),
) -> List[str]:
    return sorted(d.value for d in converter.accept_dialects())


@router.put("/service-url", response_model=ConverterStatusResponse)
def set_service_url(
    payload: ServiceUrlUpdate,
    converter: HttpDialectConverter = Depends(get_converter),
) -> ConverterStatusResponse:
    """Set or clear the runtime override URL.

    The next conversion request uses the new value. An empty string switches
    back to the service pool.
    """
    GlobalVariables.set_sql_converter_service_url(payload.service_url)
    return _status(converter)


@router.post("/convert", response_model=ConvertSqlResponse)
def convert_sql(
    payload: ConvertSqlRequest,
    converter: HttpDialectConverter = Depends(get_converter),
) -> ConvertSqlResponse:
    """Convert SQL the same way the engine would for a session.

    Raises:
        ValidationError: If the dialect is not accepted by the converter.
    """
    try:
        dialect = resolve_dialect(payload.dialect)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    session = SessionContext(
        sql_dialect=dialect.value, case_sensitive=payload.case_sensitive
    )
    if payload.enable_multi_dialect_convert_service is not None:
        session.enable_multi_dialect_convert_service = (
            payload.enable_multi_dialect_convert_service
        )

    result = converter.convert_sql(payload.sql, session)
    if result is None:
        return ConvertSqlResponse(sql=payload.sql, converted=False, configured=False)
    return ConvertSqlResponse(
        sql=result, converted=result != payload.sql, configured=True
    )


@router.get("/metrics", response_class=PlainTextResponse)
def get_metrics() -> str:
    """Conversion metrics in Prometheus text format."""
    return metrics.get_registry().export_prometheus()
