"""HTTP-backed SQL dialect converter.

Many SQL dialect translators are not written in Python or cannot run inside
the engine process. This converter forwards the query text to such a
translator wrapped as an HTTP service (see ``http_client`` for the protocol)
and hands back the translated text.

Endpoint modes:
- override: a single runtime-settable URL, one attempt, no failover
- pool: round-robin across ``host:port`` services, trying each at most once

The converter never raises for conversion-service problems. A request with
nothing configured returns None; every other failure returns the original SQL.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, FrozenSet, Optional

from src.config.global_variables import GlobalVariables
from src.config.feature_flags import FeatureFlags
from src.config.settings import DialectConverterSettings, get_settings
from src.config.sql_dialects import SUPPORTED_DIALECTS, Dialect
from src.dialect.base import DialectConverter, PluginInfo
from src.dialect.endpoints import (
    FixedEndpoint,
    NoEndpoint,
    PoolEndpoints,
    RotationCursor,
    parse_endpoint_pool,
    pool_endpoint_url,
    resolve_selection,
)
from src.dialect.http_client import HttpDialectClient
from src.dialect.models import ConversionRequest, SessionContext
from src.utils import metrics

logger = logging.getLogger(__name__)

# (url, request) -> translated sql, or None when nothing usable came back
ConvertCall = Callable[[str, ConversionRequest], Optional[str]]


class HttpDialectConverter(DialectConverter):
    """Converts foreign-dialect SQL through external HTTP conversion services.

    Example:
        >>> converter = HttpDialectConverter()
        >>> session = SessionContext(sql_dialect="presto")
        >>> converter.convert_sql("select * from t limit 10", session)
    """

    def __init__(
        self,
        settings: Optional[DialectConverterSettings] = None,
        convert_call: Optional[ConvertCall] = None,
        override_url_provider: Optional[Callable[[], str]] = None,
    ):
        """Initialize the converter.

        Args:
            settings: Converter settings (defaults to the cached application settings)
            convert_call: HTTP call used for each attempt (defaults to HttpDialectClient)
            override_url_provider: Returns the current override URL; read on every request
        """
        self.settings = settings or get_settings().dialect_converter
        self.plugin_info = PluginInfo(
            name="__builtin_SqlDialectConverter",
            type="DIALECT",
            description="builtin sql dialect converter",
            version="2.1.0",
            class_name=f"{type(self).__module__}.{type(self).__name__}",
        )
        self._accept_dialects: FrozenSet[Dialect] = SUPPORTED_DIALECTS
        self._client: Optional[HttpDialectClient] = None
        if convert_call is None:
            self._client = HttpDialectClient(
                target_dialect=self.settings.target_dialect,
                timeout=self.settings.timeout_seconds,
                version=self.settings.protocol_version,
            )
            convert_call = self._client
        self._convert_call = convert_call
        self._override_url_provider = (
            override_url_provider or GlobalVariables.get_sql_converter_service_url
        )
        self._cursor = RotationCursor()
        self._endpoints: tuple[str, ...] = ()
        self.refresh_endpoints(self.settings.services)

    @property
    def endpoints(self) -> tuple[str, ...]:
        return self._endpoints

    @property
    def cursor(self) -> RotationCursor:
        return self._cursor

    def refresh_endpoints(self, services: Optional[str]) -> None:
        """Replace the endpoint pool from a semicolon-delimited host:port list."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("configured dialect converter services value: %s", services)
        # Rebind the whole tuple; readers never see a partially built pool
        self._endpoints = parse_endpoint_pool(services)

    def accept_dialects(self) -> FrozenSet[Dialect]:
        return self._accept_dialects

    def convert_sql(self, sql: str, session: SessionContext) -> Optional[str]:
        return self.convert(
            sql,
            session.sql_dialect,
            session.case_sensitive,
            enable_pool=session.enable_multi_dialect_convert_service,
        )

    def parse_sql_with_dialect(self, sql: str, session: SessionContext) -> None:
        # Text-to-text conversion only; no parse tree is offered
        return None

    def convert(
        self,
        sql: str,
        source_dialect: str,
        case_sensitive: bool = False,
        enable_pool: bool = True,
    ) -> Optional[str]:
        """Convert sql from source_dialect to the engine's native dialect.

        Args:
            sql: Original SQL text
            source_dialect: Dialect identifier of sql
            case_sensitive: Whether identifiers are case sensitive
            enable_pool: Session switch allowing use of the service pool

        Returns:
            Translated SQL; the original sql when conversion failed; None when
            no conversion service is configured at all
        """
        selection = resolve_selection(self._override_url_provider(), self._endpoints)
        if isinstance(selection, NoEndpoint):
            return None

        request = ConversionRequest(
            sql=sql, source_dialect=source_dialect, case_sensitive=case_sensitive
        )
        start = time.perf_counter()
        if isinstance(selection, FixedEndpoint):
            mode = "fixed"
            result = self._convert_fixed(selection, request)
        else:
            mode = "pool"
            result = self._convert_pool(selection, request, enable_pool)

        if FeatureFlags.ENABLE_METRICS:
            metrics.CONVERSION_LATENCY_SECONDS.observe(time.perf_counter() - start)
            metrics.record_conversion(mode, "converted" if result else "fallback")

        return result if result else sql

    def _convert_fixed(
        self, selection: FixedEndpoint, request: ConversionRequest
    ) -> Optional[str]:
        result = self._convert_call(selection.url, request)
        self._record_attempt("override", result)
        return result

    def _convert_pool(
        self,
        selection: PoolEndpoints,
        request: ConversionRequest,
        enable_pool: bool,
    ) -> Optional[str]:
        if not enable_pool:
            return None

        endpoints = selection.endpoints
        for _ in range(len(endpoints)):
            endpoint = endpoints[self._cursor.next_index(len(endpoints))]
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("convert sql server is: %s", endpoint)

            result = self._convert_call(pool_endpoint_url(endpoint), request)
            self._record_attempt(endpoint, result)
            if result:
                return result

        logger.info(
            "All %d dialect conversion services failed for dialect %s; "
            "using original SQL",
            len(endpoints),
            request.source_dialect,
        )
        return None

    def _record_attempt(self, endpoint: str, result: Optional[str]) -> None:
        if FeatureFlags.ENABLE_METRICS:
            metrics.record_attempt(endpoint, "converted" if result else "empty")

    def close(self) -> None:
        """Release the HTTP connection pool owned by this converter."""
        if self._client is not None:
            self._client.close()
