"""
SQL Dialect Configuration and Registry

Defines the dialect identifiers known to the engine and the fixed set of
foreign dialects the HTTP dialect converter accepts.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Optional


class Dialect(str, Enum):
    """SQL dialect identifiers, valued by their wire name."""

    DORIS = "doris"
    PRESTO = "presto"
    TRINO = "trino"
    HIVE = "hive"
    SPARK = "spark"
    POSTGRES = "postgres"
    CLICKHOUSE = "clickhouse"
    MYSQL = "mysql"
    SQLSERVER = "sqlserver"
    ORACLE = "oracle"
    SQLITE = "sqlite"

    @classmethod
    def get_by_name(cls, name: Optional[str]) -> Optional["Dialect"]:
        """Case-insensitive lookup; None for empty or unknown names."""
        if not name:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


# Foreign dialects the HTTP converter forwards to a conversion service
SUPPORTED_DIALECTS: FrozenSet[Dialect] = frozenset(
    {
        Dialect.PRESTO,
        Dialect.TRINO,
        Dialect.HIVE,
        Dialect.SPARK,
        Dialect.POSTGRES,
        Dialect.CLICKHOUSE,
    }
)


def get_supported_dialect_ids() -> list[str]:
    """Get supported dialect IDs in a stable order."""
    return sorted(dialect.value for dialect in SUPPORTED_DIALECTS)


def resolve_dialect(name: str) -> Dialect:
    """
    Resolve a dialect name to a supported Dialect.

    Args:
        name: Dialect identifier (e.g., 'presto', 'HIVE')

    Returns:
        The matching Dialect member

    Raises:
        ValueError: If the dialect is unknown or not supported
    """
    dialect = Dialect.get_by_name(name)
    if dialect is None:
        raise ValueError(f"Unknown SQL dialect: {name}")

    if dialect not in SUPPORTED_DIALECTS:
        raise ValueError(format_dialect_error(name))

    return dialect


def format_dialect_error(dialect_id: str) -> str:
    """Build a consistent error message for unsupported dialects."""
    available = ", ".join(get_supported_dialect_ids()) or "none"
    return (
        f"Unsupported SQL dialect: {dialect_id}. "
        f"Available dialects: {available}. "
        "See /api/v1/dialect-converter/dialects"
    )
