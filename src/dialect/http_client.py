"""HTTP client for external SQL dialect conversion services.

Protocol (JSON over a single POST):

Request body::

    {"version": "v1", "sql": "select * from t", "from": "presto",
     "to": "doris", "source": "text", "case_sensitive": "0"}

Response body::

    {"version": "v1", "data": "select * from t", "code": 0, "message": ""}

Only ``code == 0`` with non-empty ``data`` counts as a translation. Every
other outcome, including transport errors and timeouts, is logged and
reported as ``None``.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from src.config.feature_flags import FeatureFlags
from src.dialect.models import (
    ConversionRequest,
    ConvertRequestBody,
    ConvertResponseBody,
)
from src.utils import metrics
from src.utils.constants import DEFAULT_REQUEST_TIMEOUT, PROTOCOL_VERSION, SUCCESS_CODE
from src.utils.exceptions import ConversionServiceError

logger = logging.getLogger(__name__)


class HttpDialectClient:
    """Blocking client for the dialect conversion protocol.

    Example:
        >>> client = HttpDialectClient(target_dialect="doris")
        >>> client("http://127.0.0.1:5001/api/v1/convert",
        ...        ConversionRequest("select 1", "presto"))
    """

    def __init__(
        self,
        target_dialect: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        version: str = PROTOCOL_VERSION,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the client.

        Args:
            target_dialect: Engine's native dialect, sent as the ``to`` field
            timeout: Request timeout in seconds
            version: Protocol version sent with every request
            client: Optional preconfigured httpx.Client (e.g. with a mock transport)
        """
        self.target_dialect = target_dialect
        self.timeout = timeout
        self.version = version
        self.client = client or httpx.Client(timeout=timeout)

    def __call__(self, url: str, request: ConversionRequest) -> Optional[str]:
        return self.convert_sql(url, request)

    def convert_sql(self, url: str, request: ConversionRequest) -> Optional[str]:
        """Send one conversion request.

        Args:
            url: Full conversion endpoint URL
            request: SQL text, source dialect and case-sensitivity flag

        Returns:
            Translated SQL, or None when the service produced nothing usable
        """
        try:
            result = self._post(url, request)
        except httpx.TimeoutException as e:
            logger.warning("Dialect conversion timed out (url: %s): %s", url, e)
            self._record("timeout")
            return None
        except httpx.HTTPError as e:
            logger.warning("Dialect conversion request failed (url: %s): %s", url, e)
            self._record("transport_error")
            return None
        except ConversionServiceError as e:
            logger.warning(
                "Dialect conversion service returned no result (url: %s, code: %s): %s",
                url,
                e.code,
                e,
            )
            self._record("service_error")
            return None
        except ValueError as e:
            # Invalid JSON or a body that does not match the protocol
            logger.warning("Malformed dialect conversion response (url: %s): %s", url, e)
            self._record("malformed_response")
            return None

        self._record("success")
        return result

    def _post(self, url: str, request: ConversionRequest) -> str:
        body = ConvertRequestBody.from_request(
            request, target_dialect=self.target_dialect, version=self.version
        )
        response = self.client.post(url, json=body.to_wire(), timeout=self.timeout)
        response.raise_for_status()

        parsed = ConvertResponseBody.model_validate(response.json())
        if parsed.code != SUCCESS_CODE:
            raise ConversionServiceError(
                parsed.message or "non-success response code", code=parsed.code
            )
        if not parsed.data:
            raise ConversionServiceError("empty conversion result", code=parsed.code)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Converted SQL via %s: %s", url, parsed.data)
        return parsed.data

    def _record(self, outcome: str) -> None:
        if FeatureFlags.ENABLE_METRICS:
            metrics.record_call(outcome)

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.client.close()
