"""Base classes for SQL dialect converter plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, FrozenSet, List, Optional

from src.config.sql_dialects import Dialect
from src.dialect.models import SessionContext


@dataclass(frozen=True)
class PluginInfo:
    """Descriptive metadata reported by a converter plugin."""

    name: str
    type: str
    description: str
    version: str
    class_name: str


class DialectConverter(ABC):
    """Abstract base class for SQL dialect converters."""

    @abstractmethod
    def accept_dialects(self) -> FrozenSet[Dialect]:
        """Source dialects this converter accepts."""
        raise NotImplementedError

    @abstractmethod
    def convert_sql(self, sql: str, session: SessionContext) -> Optional[str]:
        """Convert sql to the native dialect; None means leave it unchanged."""
        raise NotImplementedError

    def parse_sql_with_dialect(
        self, sql: str, session: SessionContext
    ) -> Optional[List[Any]]:
        """Parse sql into statements; None when the converter does not parse."""
        return None
