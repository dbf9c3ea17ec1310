"""
Process-wide runtime variables for the dialect converter.

The override URL can be changed at any time (for example through the admin
API) and is read fresh on every conversion request. Readers may observe the
previous value while a change is in flight.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.config.settings import get_settings

logger = logging.getLogger(__name__)


class GlobalVariables:
    """Mutable, process-wide settings seeded from configuration on first read."""

    # None until seeded from settings or set explicitly
    sql_converter_service_url: Optional[str] = None

    @classmethod
    def set_sql_converter_service_url(cls, url: Optional[str]) -> None:
        """Set or clear (with None or "") the conversion service override URL."""
        value = (url or "").strip()
        previous = cls.sql_converter_service_url
        cls.sql_converter_service_url = value
        if value != (previous or ""):
            logger.info(
                "sql_converter_service_url changed: %r -> %r", previous, value
            )

    @classmethod
    def get_sql_converter_service_url(cls) -> str:
        url = cls.sql_converter_service_url
        if url is None:
            url = get_settings().dialect_converter.service_url
            cls.sql_converter_service_url = url
        return url
